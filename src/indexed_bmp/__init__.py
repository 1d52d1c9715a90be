"""Reader and writer for 8-bit and 24-bit uncompressed BMP images.

Every image is held as 8-bit palette indices stored top-down. 24-bit pixels
and foreign colour tables are mapped onto a 256-entry target palette by
nearest colour. Images are always written as 8-bit, bottom-up BMP files.
"""

from .bitmap import IndexedBitmap
from .buffer import ByteBuffer
from .decoder import DecodedBitmap, decode_bitmap
from .encoder import encode_bitmap
from .errors import (
    BitmapError,
    BitmapFormatError,
    PaletteError,
    PixelOutOfRangeError,
    TruncatedDataError,
    UnsupportedFormatError,
)
from .header import BitmapHeader
from .palette import (
    Color,
    default_palette,
    format_jasc_palette,
    load_jasc_palette,
    parse_jasc_palette,
    save_jasc_palette,
)
from .quantize import nearest_index

__all__ = [
    "BitmapError",
    "BitmapFormatError",
    "BitmapHeader",
    "ByteBuffer",
    "Color",
    "DecodedBitmap",
    "IndexedBitmap",
    "PaletteError",
    "PixelOutOfRangeError",
    "TruncatedDataError",
    "UnsupportedFormatError",
    "decode_bitmap",
    "default_palette",
    "encode_bitmap",
    "format_jasc_palette",
    "load_jasc_palette",
    "nearest_index",
    "parse_jasc_palette",
    "save_jasc_palette",
]
