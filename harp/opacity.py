"""Aerosol attenuators read from tabulated extinction and albedo files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from harp.fileio import decomment_file
from harp.interpolation import interpn
from harp.resources import find_resource


@dataclass
class AttenuatorOptions:
    """Settings shared by all attenuators."""

    type: str = ""
    opacity_files: list[str] = field(default_factory=list)
    species_ids: list[int] = field(default_factory=lambda: [0])
    species_names: list[str] = field(default_factory=list)
    species_weights: list[float] = field(default_factory=list)  # [kg/mol]


def _count_columns(line: str, sep: str = " ") -> int:
    if not line:
        return 0
    cols = 0 if line[0] == sep else 1
    cols += sum(1 for prev, cur in zip(line, line[1:]) if prev == sep and cur != sep)
    return cols


class TabulatedAerosol:
    """Attenuator interpolating a table of wavelength, extinction and albedo.

    ``kwave`` holds wavelengths [um], ``kdata`` the extinction cross section
    [m^2/mol] and the single scattering albedo, shape ``(nwave, 2)``.
    """

    kind: ClassVar[str] = ""
    nprop: ClassVar[int] = 2

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
        self.kwave = np.zeros(0)
        self.kdata = np.zeros((0, self.nprop))
        self.reset()

    def reset(self) -> None:
        """Load the table named in the options."""
        full_path = find_resource(self.options.opacity_files[0])
        text = decomment_file(full_path)
        lines = [line for line in text.splitlines() if line.strip()]

        rows = len(lines)
        cols = _count_columns(lines[0]) if lines else 0
        if rows == 0:
            raise ValueError(f"Empty file: {full_path}")
        if cols != 3:
            raise ValueError(f"Invalid file: {full_path}")

        tokens = text.split()
        if len(tokens) < rows * cols:
            raise ValueError(f"Invalid file: {full_path}")
        table = np.array([float(t) for t in tokens[:rows * cols]]).reshape(rows, cols)

        self.kwave = table[:, 0].copy()
        self.kdata = table[:, 1:].copy()

        # extinction x-section [m^2/kg] -> [m^2/mol]
        species = self.options.species_ids[0]
        self.kdata[:, 0] *= self.options.species_weights[species]

    def forward(self, conc, kwargs: Mapping[str, object]) -> np.ndarray:
        """Return optical properties of shape ``(nwave, ncol, nlyr, 2)``.

        ``conc`` is the mole concentration [mol/m^3], ``(ncol, nlyr, nspecies)``.
        ``kwargs`` must hold "wavelength" [um] or "wavenumber" [cm^-1].
        The first property is attenuation [1/m], the second attenuation
        weighted single scattering albedo [1/m].
        """
        conc = np.asarray(conc, dtype=float)
        if "wavelength" in kwargs:
            coord = np.asarray(kwargs["wavelength"], dtype=float).ravel()
        elif "wavenumber" in kwargs:
            coord = 1.0e4 / np.asarray(kwargs["wavenumber"], dtype=float).ravel()
        else:
            raise KeyError("wavelength or wavenumber is required in kwargs")

        ncol, nlyr = conc.shape[0], conc.shape[1]
        lens = [len(self.kwave)]
        values = np.array(
            [interpn([w], self.kdata, self.kwave, lens, self.nprop) for w in coord]
        ).reshape(len(coord), self.nprop)

        out = np.broadcast_to(
            values[:, None, None, :], (len(coord), ncol, nlyr, self.nprop)
        ).copy()

        out[..., 0] *= conc[:, :, self.options.species_ids[0]][None, ...]
        out[..., 1] *= out[..., 0]
        return out


class S8Fuller(TabulatedAerosol):
    """S8 aerosol optical properties."""

    kind = "s8_fuller"


class H2SO4Simple(TabulatedAerosol):
    """Sulfuric acid aerosol optical properties."""

    kind = "h2so4_simple"