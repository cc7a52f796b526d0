"""Opacity tables, layer-to-level interpolation, flux correction and file helpers for atmospheric radiative transfer."""

__version__ = "0.1.0"