"""Bracketing search and multidimensional linear interpolation on tabulated data."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def locate(xx: Sequence[float], x: float) -> int:
    """Return ``j`` such that ``x`` lies between ``xx[j]`` and ``xx[j + 1]``.

    ``xx`` must be monotonic, either increasing or decreasing. A value below
    the table gives -1; a value equal to or beyond the last entry gives
    ``len(xx) - 1``.
    """
    n = len(xx)
    if n == 0:
        raise ValueError("locate: empty table")

    ascending = xx[n - 1] >= xx[0]
    lower, upper = 0, n + 1
    while upper - lower > 1:
        middle = (upper + lower) >> 1
        if (x >= xx[middle - 1]) == ascending:
            lower = middle
        else:
            upper = middle

    if x == xx[0]:
        j = 1
    elif x == xx[n - 1]:
        j = n
    else:
        j = lower
    return j - 1


def _bracket(axis: np.ndarray, x: float) -> tuple[int, int]:
    n = len(axis)
    i1 = locate(axis, x)
    if i1 == -1:
        return 0, 0
    if i1 == n - 1:
        return n - 1, n - 1
    return i1, i1 + 1


def _interpn(
    coor: list[float],
    data: np.ndarray,
    axis: np.ndarray,
    lens: list[int],
    nval: int,
) -> np.ndarray:
    n = lens[0]
    x = coor[0]
    i1, i2 = _bracket(axis[:n], x)
    x1, x2 = axis[i1], axis[i2]

    if len(lens) == 1:
        v1 = data[i1 * nval:(i1 + 1) * nval]
        v2 = data[i2 * nval:(i2 + 1) * nval]
    else:
        stride = nval * math.prod(lens[1:])
        rest_coor, rest_axis, rest_lens = coor[1:], axis[n:], lens[1:]
        v1 = _interpn(rest_coor, data[i1 * stride:(i1 + 1) * stride],
                      rest_axis, rest_lens, nval)
        v2 = _interpn(rest_coor, data[i2 * stride:(i2 + 1) * stride],
                      rest_axis, rest_lens, nval)

    if x2 != x1:
        return ((x - x1) * v2 + (x2 - x) * v1) / (x2 - x1)
    return (v1 + v2) / 2.0


def interpn(
    coor: Sequence[float],
    data: Sequence[float] | np.ndarray,
    axis: Sequence[float] | np.ndarray,
    lens: Sequence[int],
    nval: int = 1,
) -> np.ndarray:
    """Multilinear interpolation of a row-major table at one point.

    ``data`` holds ``prod(lens) * nval`` values, the ``nval`` values of each
    grid point being contiguous. ``axis`` holds the coordinates of every
    dimension one after another. Points outside the table take the value
    at the nearest edge. Returns an array of ``nval`` values.
    """
    lens = [int(length) for length in lens]
    coor = [float(c) for c in coor]
    if not lens:
        raise ValueError("interpn: at least one dimension is required")
    if any(length < 1 for length in lens):
        raise ValueError("interpn: every dimension needs at least one point")
    if len(coor) < len(lens):
        raise ValueError("interpn: fewer coordinates than dimensions")
    if nval < 1:
        raise ValueError("interpn: nval must be positive")

    flat_data = np.asarray(data, dtype=float).ravel()
    flat_axis = np.asarray(axis, dtype=float).ravel()
    if flat_data.size != nval * math.prod(lens):
        raise ValueError("interpn: data size does not match dimensions")
    if flat_axis.size < sum(lens):
        raise ValueError("interpn: axis is shorter than the dimensions")

    return _interpn(coor, flat_data, flat_axis, lens, nval)


def interp1(
    x: float,
    data: Sequence[float] | np.ndarray,
    axis: Sequence[float] | np.ndarray,
) -> float:
    """One-dimensional linear interpolation of ``data`` sampled at ``axis``."""
    return float(interpn([x], data, axis, [len(axis)], 1)[0])