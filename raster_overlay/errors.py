# errors.py


class RasterOverlayError(Exception):
    """Base class for every error raised by raster_overlay."""


class InvalidCoordinate(RasterOverlayError, ValueError):
    """Latitude outside (-90, 90) or a non-finite coordinate."""


class EmptyDataError(RasterOverlayError, ValueError):
    """No grid sample passed the layer's validity predicate."""


class FetchError(RasterOverlayError, RuntimeError):
    """The data backend could not deliver a raster or vector table."""


class UnknownLayerError(RasterOverlayError, KeyError):
    def __str__(self):
        return f"unknown layer: {self.args[0]}" if self.args else "unknown layer"
