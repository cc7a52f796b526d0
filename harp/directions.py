"""Parsing of radiation directions and grids of distinct directions."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

import numpy as np

from harp.fileio import vectorize

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_DIRECTION = re.compile(rf"\(\s*(?P<first>{_NUMBER})(?:,\s*(?P<second>{_NUMBER}))?")


def deg2rad(phi):
    """Convert degrees to radians."""
    return phi * math.pi / 180.0


def rad2deg(phi):
    """Convert radians to degrees."""
    return phi * 180.0 / math.pi


def parse_radiation_direction(text: str) -> np.ndarray:
    """Parse ``"(zenith,azimuth)"`` in degrees into ``[mu, phi]``.

    ``mu`` is the cosine of the zenith angle and ``phi`` the azimuth in
    radians. Missing angles count as zero.
    """
    zenith = 0.0
    azimuth = 0.0
    match = _DIRECTION.match(text)
    if match:
        zenith = float(match["first"])
        if match["second"] is not None:
            azimuth = float(match["second"])
    return np.array([math.cos(deg2rad(zenith)), deg2rad(azimuth)], dtype=np.float32)


def parse_radiation_directions(text: str) -> np.ndarray:
    """Parse space-separated directions into an array of shape ``(nray, 2)``."""
    rays = [parse_radiation_direction(piece) for piece in vectorize(text)]
    if not rays:
        return np.zeros((0, 2), dtype=np.float32)
    return np.stack(rays)


def real_close(num1: float, num2: float, tolerance: float) -> bool:
    """Return True if the numbers differ by at most ``tolerance``."""
    return abs(num1 - num2) <= tolerance


def _distinct(values, tolerance: float = 1.0e-3) -> list[float]:
    unique: list[float] = []
    for value in values:
        if not any(real_close(u, value, tolerance) for u in unique):
            unique.append(value)
    return sorted(unique)


def get_direction_grids(
    dirs: Sequence[Sequence[float]] | np.ndarray,
) -> tuple[list[float], list[float]]:
    """Return the sorted distinct values of the first and second columns of ``dirs``."""
    table = np.asarray(dirs, dtype=float).reshape(-1, 2)
    uphi = _distinct(float(v) for v in table[:, 0])
    umu = _distinct(float(v) for v in table[:, 1])
    return uphi, umu