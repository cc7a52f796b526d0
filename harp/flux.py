"""Spherical-geometry correction of plane-parallel fluxes."""

from __future__ import annotations

import numpy as np


def spherical_flux_correction(flx, x1f, area, vol) -> np.ndarray:
    """Rescale fluxes so that heating rates match the plane-parallel scheme.

    The flux divergence of each cell times its volume over its thickness is
    kept, solving ``F[i+1] * S[i+1] - F[i] * S[i] = volheating`` from the top
    down. The topmost flux is left unchanged. Returns a new array.
    """
    out = np.array(flx, dtype=float, copy=True)
    x1f = np.asarray(x1f, dtype=float)
    area = np.asarray(area, dtype=float)
    vol = np.asarray(vol, dtype=float)

    nx1 = x1f.shape[0]
    if out.ndim == 0 or out.shape[-1] < nx1:
        raise ValueError("spherical_flux_correction: flux has fewer levels than x1f")

    for i in reversed(range(nx1 - 1)):
        dx1f = x1f[i + 1] - x1f[i]
        volh = (out[..., i + 1] - out[..., i]) / dx1f * vol[..., i]
        out[..., i] = (out[..., i + 1] * area[..., i + 1] - volh) / area[..., i]

    return out