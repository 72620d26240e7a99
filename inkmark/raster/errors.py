"""Raster conversion errors."""


class ConversionError(Exception):
    """Raised when a bitmap cannot be converted.

    Always surfaced to the caller: a skipped conversion would look exactly
    like a successful one.
    """

    pass


class PixelBufferLayoutError(ConversionError):
    """Raised when caller bytes cannot be read as an RGBA8 pixel grid."""

    pass
