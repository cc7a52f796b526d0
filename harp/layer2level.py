"""Conversion of cell-centred layer values to cell-interface level values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

_CENTER4_WEIGHTS = np.array([-1.0 / 12.0, 7.0 / 12.0, 7.0 / 12.0, -1.0 / 12.0])


class InterpOrder(IntEnum):
    """Order of the interior interpolation."""

    SECOND = 2
    FOURTH = 4


class Boundary(IntEnum):
    """Treatment of the outermost levels."""

    EXTRAPOLATE = 0
    CONSTANT = 1


@dataclass
class Layer2LevelOptions:
    """Settings for :func:`layer2level`."""

    order: InterpOrder = InterpOrder.FOURTH
    logx: bool = False
    logy: bool = False
    blower: Boundary = Boundary.EXTRAPOLATE
    bupper: Boundary = Boundary.CONSTANT
    check_positivity: bool = True

    def __post_init__(self) -> None:
        try:
            self.order = InterpOrder(self.order)
        except ValueError as exc:
            raise ValueError(f"Unsupported interpolation order: {self.order}") from exc
        try:
            self.blower = Boundary(self.blower)
            self.bupper = Boundary(self.bupper)
        except ValueError as exc:
            raise ValueError("Unsupported boundary condition") from exc


def center4_interp(w) -> np.ndarray:
    """Fourth-order centred interpolation of the last axis, which must hold 4 values."""
    return np.asarray(w, dtype=float) @ _CENTER4_WEIGHTS


def _boundary_value(edge: np.ndarray, inner: np.ndarray, boundary: Boundary) -> np.ndarray:
    if boundary == Boundary.EXTRAPOLATE:
        return (3.0 * edge - inner) / 2.0
    if boundary == Boundary.CONSTANT:
        return edge
    raise ValueError("Unsupported boundary condition")


def layer2level(var, options: Layer2LevelOptions | None = None) -> np.ndarray:
    """Interpolate layer values of shape ``(..., nlyr)`` to levels ``(..., nlyr + 1)``."""
    if options is None:
        options = Layer2LevelOptions()
    var = np.asarray(var, dtype=float)
    if var.ndim == 0 or var.shape[-1] == 0:
        raise ValueError("layer2level: at least one layer is required")

    nlyr = var.shape[-1]
    out = np.zeros(var.shape[:-1] + (nlyr + 1,), dtype=float)

    if nlyr == 1:
        out[..., 0] = var[..., 0]
    else:
        out[..., 0] = _boundary_value(var[..., 0], var[..., 1], options.blower)

    if options.order == InterpOrder.FOURTH:
        if nlyr > 1:
            out[..., 1] = (var[..., 0] + var[..., 1]) / 2.0
        if nlyr > 2:
            out[..., nlyr - 1] = (var[..., nlyr - 1] + var[..., nlyr - 2]) / 2.0
        if nlyr > 3:
            windows = np.lib.stride_tricks.sliding_window_view(var, 4, axis=-1)
            out[..., 2:nlyr - 1] = center4_interp(windows)
    elif options.order == InterpOrder.SECOND:
        if nlyr > 1:
            out[..., 1:nlyr] = (var[..., :-1] + var[..., 1:]) / 2.0
    else:
        raise ValueError("Unsupported interpolation order")

    if nlyr == 1:
        out[..., nlyr] = var[..., 0]
    else:
        out[..., nlyr] = _boundary_value(
            var[..., nlyr - 1], var[..., nlyr - 2], options.bupper
        )

    if options.check_positivity:
        negative = np.argwhere(out < 0)
        if negative.size:
            raise ValueError(
                "layer2level check failed: negative values found at cell "
                f"interface, indices = {negative.tolist()}"
            )

    return out