"""Mapping of atmospheric state onto a normalised interpolation grid."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from harp.constants import ICX, IPR, ITM


@dataclass
class AtmToStandardGridOptions:
    """Sizes of the reference profile and of the anomaly grids."""

    npres: int = 1
    ntemp: int = 1
    ncomp: int = 1


def _profile(log_refp: np.ndarray, values: np.ndarray, logp: np.ndarray) -> np.ndarray:
    order = np.argsort(log_refp)
    return np.interp(logp, log_refp[order], values[order])


def _rescale(values, grid: np.ndarray):
    low, high = grid.min(), grid.max()
    return 2.0 * (values - low) / (high - low) - 1.0


class AtmToStandardGrid:
    """Scale pressure, temperature anomaly and composition into ``[-1, 1]``.

    ``refatm`` holds the reference atmosphere: row ``ITM`` the temperature,
    row ``IPR`` the pressure and row ``ICX`` the mole fraction, one column per
    level. ``tgrid`` and ``xgrid`` are the temperature-anomaly and
    composition-scale grids whose ranges map to ``[-1, 1]``.
    """

    def __init__(self, options: AtmToStandardGridOptions | None = None) -> None:
        self.options = options if options is not None else AtmToStandardGridOptions()
        self.xgrid = np.zeros(0)
        self.tgrid = np.zeros(0)
        self.refatm = np.zeros((3, 0))
        self.reset()

    def reset(self) -> None:
        """Allocate zeroed grids and reference atmosphere."""
        self.xgrid = np.zeros(self.options.ncomp)
        self.tgrid = np.zeros(self.options.ntemp)
        self.refatm = np.zeros((3, self.options.npres))

    def forward(self, var_x, ix: int) -> np.ndarray:
        """Return the standard coordinates, shape ``var_x[0].shape + (3,)``.

        ``var_x[ITM]`` is temperature, ``var_x[IPR]`` pressure and ``var_x[ix]``
        the mole fraction of the species of interest. The reference profile is
        interpolated linearly in log pressure and held constant beyond its ends.
        """
        var_x = np.asarray(var_x, dtype=np.float64)
        if var_x.ndim < 1 or not 0 <= ix < var_x.shape[0]:
            raise IndexError(f"variable index {ix} out of range")
        if var_x.shape[0] <= max(ITM, IPR):
            raise IndexError("var_x must hold temperature and pressure")

        out = np.zeros(var_x[0].shape + (3,), dtype=np.float64)

        with np.errstate(divide="ignore", invalid="ignore"):
            log_refp = np.log(self.refatm[IPR])
            logp = np.log(var_x[IPR])

            out[..., IPR] = _rescale(logp, log_refp)

            tem = _profile(log_refp, self.refatm[ITM], logp)
            out[..., ITM] = _rescale(var_x[ITM] - tem, self.tgrid)

            com = _profile(log_refp, self.refatm[ICX], logp)
            comx = var_x[ix] / (com + 1.0e-10)  # prevent divide by zero
            out[..., ICX] = _rescale(comx, self.xgrid)

        return out