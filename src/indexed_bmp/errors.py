"""Exception hierarchy shared by the bitmap codec modules."""

from __future__ import annotations


class BitmapError(Exception):
    """Base class for every error raised by the codec."""


class BitmapFormatError(BitmapError):
    """Raised when the byte stream is not a well-formed bitmap."""


class UnsupportedFormatError(BitmapFormatError):
    """Raised for valid bitmaps this codec does not decode (bit depth, compression)."""


class TruncatedDataError(BitmapFormatError):
    """Raised when a fixed-size read runs past the end of the buffer."""


class PaletteError(BitmapError):
    """Raised for malformed palette files or palette values."""


class PixelOutOfRangeError(BitmapError, IndexError):
    """Raised when a pixel coordinate lies outside the image."""
