"""Encode palette indices as an 8-bit, bottom-up, uncompressed BMP."""

from __future__ import annotations

from dataclasses import fields
from typing import Sequence

from .buffer import ByteBuffer
from .errors import BitmapError
from .header import BitmapHeader
from .palette import Color, write_color_table


def encode_pixel_rows(width: int, height: int, pixels: bytes | bytearray) -> bytes:
    """Return the stored pixel block: rows bottom-up, each zero padded to four bytes."""

    if len(pixels) != width * height:
        raise BitmapError(
            f"Pixel array has {len(pixels)} entries, expected {width}x{height}={width * height}"
        )
    stride = (width + 3) // 4 * 4
    padding = bytes(stride - width)
    data = bytearray()
    for y in range(height - 1, -1, -1):
        data.extend(pixels[y * width : (y + 1) * width])
        data.extend(padding)
    return bytes(data)


def encode_bitmap(
    header: BitmapHeader,
    palette: Sequence[Color],
    pixels: bytes | bytearray,
    file_header: bool = True,
) -> bytes:
    """Serialise ``pixels`` using the dimensions from ``header``.

    Every other header field is recomputed and written back into ``header``.
    """

    width = header.width
    height = header.abs_height
    data = encode_pixel_rows(width, height, pixels)

    fresh = BitmapHeader.for_indexed_image(width, height, len(data))
    buffer = ByteBuffer()
    fresh.write(buffer, file_header=file_header)
    write_color_table(buffer, palette)
    buffer.write_bytes(data)

    # Only a completed encode updates the caller's header.
    for item in fields(fresh):
        setattr(header, item.name, getattr(fresh, item.name))
    return buffer.getvalue()
