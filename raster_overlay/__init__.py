"""Raster overlay engine: colour a scalar grid for a web map and query it by click."""

__version__ = "0.1.0"
