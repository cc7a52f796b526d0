"""Correlated-k absorption tables in NetCDF format produced by line-by-line models."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import ClassVar

import numpy as np
from scipy.io import netcdf_file

from harp.interpolation import interp1, interpn
from harp.opacity import AttenuatorOptions
from harp.resources import find_resource


@contextmanager
def _open_dataset(path: str | Path) -> Iterator[netcdf_file]:
    try:
        dataset = netcdf_file(path, "r", mmap=False)
    except (OSError, TypeError, ValueError) as exc:
        raise ValueError(f"cannot read NetCDF file {path}: {exc}") from exc
    try:
        yield dataset
    finally:
        dataset.close()


def _variable(dataset: netcdf_file, name: str) -> np.ndarray:
    if name not in dataset.variables:
        raise KeyError(f"variable '{name}' not found")
    return np.array(dataset.variables[name].data, dtype=np.float64, copy=True)


def _dimension(dataset: netcdf_file, name: str) -> int:
    if name not in dataset.dimensions:
        raise KeyError(f"dimension '{name}' not found")
    length = dataset.dimensions[name]
    if length is None:
        # record dimension: take the length from the coordinate variable
        return len(_variable(dataset, name))
    return int(length)


def _checked(values: np.ndarray, size: int, name: str) -> np.ndarray:
    flat = values.ravel()
    if flat.size != size:
        raise ValueError(f"variable '{name}' has {flat.size} values, expected {size}")
    return flat


def get_reftemp(lnp, klnp, ktemp) -> np.ndarray:
    """Interpolate the reference temperature ``ktemp`` tabulated at ``klnp`` to ``lnp``.

    Log pressures outside the table take the temperature at the nearest edge.
    The result has the shape of ``lnp``.
    """
    lnp = np.asarray(lnp, dtype=np.float64)
    klnp = np.asarray(klnp, dtype=np.float64).ravel()
    ktemp = np.asarray(ktemp, dtype=np.float64).ravel()
    if klnp.size != ktemp.size:
        raise ValueError("get_reftemp: pressure and temperature tables differ in size")
    values = [interp1(x, ktemp, klnp) for x in lnp.ravel()]
    return np.array(values, dtype=np.float64).reshape(lnp.shape)


class RFM:
    """Absorber whose cross sections are tabulated over wavenumber, pressure and temperature anomaly.

    ``kaxis`` holds the wavenumber, log-pressure and temperature-anomaly grids
    one after another, ``kdata`` the log cross sections [ln(m^2/kmol)] of
    shape ``kshape`` and ``krefatm`` the reference profile: row ``IPR`` the
    log pressure and row ``ITM`` the temperature.
    """

    IPR: ClassVar[int] = 0
    ITM: ClassVar[int] = 1
    kind: ClassVar[str] = "rfm"

    def __init__(self, options: AttenuatorOptions) -> None:
        if len(options.opacity_files) != 1:
            raise ValueError("Only one opacity file is allowed")
        if len(options.species_ids) != 1:
            raise ValueError("Only one species is allowed")
        if options.species_ids[0] < 0:
            raise ValueError(f"Invalid species_id: {options.species_ids[0]}")
        if options.type not in ("", self.kind):
            raise ValueError(f"Mismatch type: {options.type}")

        self.options = options
        self.kshape: tuple[int, int, int] = (0, 0, 0)
        self.kaxis = np.zeros(0)
        self.kdata = np.zeros((0, 0, 0))
        self.krefatm = np.zeros((2, 0))
        self.reset()

    def reset(self) -> None:
        """Load the table named in the options."""
        full_path = find_resource(self.options.opacity_files[0])
        species = self.options.species_ids[0]
        if species >= len(self.options.species_names):
            raise ValueError(f"Invalid species_id: {species}")
        name = self.options.species_names[species]

        with _open_dataset(full_path) as dataset:
            nwave = _dimension(dataset, "Wavenumber")
            npres = _dimension(dataset, "Pressure")
            ntemp = _dimension(dataset, "TempGrid")

            wave = _checked(_variable(dataset, "Wavenumber"), nwave, "Wavenumber")
            pres = _checked(_variable(dataset, "Pressure"), npres, "Pressure")
            tgrid = _checked(_variable(dataset, "TempGrid"), ntemp, "TempGrid")
            temp = _checked(_variable(dataset, "Temperature"), npres, "Temperature")
            data = _checked(_variable(dataset, name), nwave * npres * ntemp, name)

        self.kshape = (nwave, npres, ntemp)
        lnp = np.log(pres)
        self.kaxis = np.concatenate([wave, lnp, tgrid])
        self.krefatm = np.empty((2, npres), dtype=np.float64)
        self.krefatm[self.IPR] = lnp
        self.krefatm[self.ITM] = temp
        self.kdata = data.reshape(self.kshape)

    def forward(self, conc, kwargs: Mapping[str, object]) -> np.ndarray:
        """Return the attenuation [1/m] of shape ``(nwave, ncol, nlyr, 1)``.

        ``conc`` is the mole concentration [mol/m^3], ``(ncol, nlyr, nspecies)``.
        ``kwargs`` must hold "pres" [Pa] and "temp" [K], each ``(ncol, nlyr)``.
        """
        if "pres" not in kwargs:
            raise KeyError("pres is required in kwargs")
        if "temp" not in kwargs:
            raise KeyError("temp is required in kwargs")

        conc = np.asarray(conc, dtype=np.float64)
        ncol, nlyr = conc.shape[0], conc.shape[1]
        nwave = self.kshape[0]

        pres = np.broadcast_to(np.asarray(kwargs["pres"], dtype=np.float64), (ncol, nlyr))
        temp = np.broadcast_to(np.asarray(kwargs["temp"], dtype=np.float64), (ncol, nlyr))

        lnp = np.log(pres)
        tempa = temp - get_reftemp(lnp, self.krefatm[self.IPR], self.krefatm[self.ITM])

        coord = np.empty((nwave, ncol, nlyr, 3), dtype=np.float64)
        coord[..., 0] = self.kaxis[:nwave, None, None]
        coord[..., 1] = lnp
        coord[..., 2] = tempa

        lens = list(self.kshape)
        values = [
            interpn(point, self.kdata, self.kaxis, lens, 1)[0]
            for point in coord.reshape(-1, 3)
        ]
        out = np.array(values, dtype=np.float64).reshape(nwave, ncol, nlyr, 1)

        # ln(m^2/kmol) -> 1/m
        amount = conc[:, :, self.options.species_ids[0]]
        return 1.0e-3 * np.exp(out) * amount[None, :, :, None]


def read_weights_rfm(filename: str) -> np.ndarray:
    """Read the "weights" variable from a NetCDF file found on the resource path."""
    full_path = find_resource(filename)
    with _open_dataset(full_path) as dataset:
        length = _dimension(dataset, "weights")
        return _checked(_variable(dataset, "weights"), length, "weights")