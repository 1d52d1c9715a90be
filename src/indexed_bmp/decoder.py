"""Decode 8-bit and 24-bit uncompressed BMP data into top-down palette indices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .buffer import ByteBuffer
from .errors import BitmapFormatError, UnsupportedFormatError
from .header import (
    BITMAP_TYPE,
    COMPRESSION_RGB,
    INFO_HEADER_SIZE,
    SUPPORTED_BIT_DEPTHS,
    BitmapHeader,
)
from .palette import (
    Color,
    default_palette,
    normalize_palette,
    palettes_equal,
    read_color_table,
    resolve_target_palette,
)
from .quantize import ColorMapper, build_index_map


@dataclass
class DecodedBitmap:
    header: BitmapHeader
    palette: List[Color]
    pixels: bytearray


def row_stride(width: int, bits_per_pixel: int) -> int:
    """Bytes per stored row, padded to a multiple of four."""

    return (width * (bits_per_pixel // 8) + 3) // 4 * 4


def _validate_header(header: BitmapHeader, file_header: bool) -> None:
    if file_header and header.type != BITMAP_TYPE:
        raise BitmapFormatError(f"Not a BMP file (type tag 0x{header.type:04X})")
    if header.bits_per_pixel not in SUPPORTED_BIT_DEPTHS:
        raise UnsupportedFormatError(
            f"Unsupported bit depth: {header.bits_per_pixel} (only 8 and 24 are supported)"
        )
    if header.compression != COMPRESSION_RGB:
        raise UnsupportedFormatError(
            f"Compressed bitmaps are not supported (compression={header.compression})"
        )
    if header.width < 0:
        raise BitmapFormatError(f"Negative bitmap width: {header.width}")
    if header.image_header_size < INFO_HEADER_SIZE:
        raise BitmapFormatError(f"Info header too small: {header.image_header_size} bytes")


def _decode_8bit(
    buffer: ByteBuffer,
    header: BitmapHeader,
    index_map: List[int] | None,
) -> bytearray:
    width = header.width
    height = header.abs_height
    stride = row_stride(width, 8)
    raw = buffer.read_bytes(stride * height)
    pixels = bytearray(width * height)

    for y in range(height):
        row = raw[y * stride : y * stride + width]
        if index_map is not None:
            row = bytes(index_map[value] for value in row)
        target_y = y if header.top_down else height - 1 - y
        pixels[target_y * width : (target_y + 1) * width] = row
    return pixels


def _decode_24bit(buffer: ByteBuffer, header: BitmapHeader, target: List[Color]) -> bytearray:
    width = header.width
    height = header.abs_height
    stride = row_stride(width, 24)
    padding = stride - width * 3
    # The last row may omit its padding.
    raw = buffer.read_bytes(stride * height - padding) if height else b""
    if height and buffer.remaining >= padding:
        buffer.skip(padding)

    mapper = ColorMapper(target)
    pixels = bytearray(width * height)
    for y in range(height):
        row_start = y * stride
        target_y = y if header.top_down else height - 1 - y
        offset = target_y * width
        for x in range(width):
            b, g, r = raw[row_start + x * 3 : row_start + x * 3 + 3]
            pixels[offset + x] = mapper((r, g, b))
    return pixels


def decode_bitmap(
    source: bytes | bytearray | ByteBuffer,
    palette: Sequence[Color] | None = None,
    file_header: bool = True,
) -> DecodedBitmap:
    """Decode ``source`` into a top-down, unpadded array of palette indices.

    ``palette`` is the target palette. When it has exactly 256 entries and an
    8-bit source uses the same colour table, indices are copied unchanged;
    otherwise every colour is mapped onto the target (or onto the built-in
    default palette when no usable target is given). 24-bit sources are always
    mapped.
    """

    buffer = source if isinstance(source, ByteBuffer) else ByteBuffer(source)
    header = BitmapHeader.read(buffer, file_header=file_header)
    _validate_header(header, file_header)
    if header.image_header_size > INFO_HEADER_SIZE:
        buffer.skip(header.image_header_size - INFO_HEADER_SIZE)

    target = resolve_target_palette(palette)

    source_palette: List[Color] | None = None
    if header.palette_size > 0:
        source_palette = read_color_table(buffer, header.palette_size)

    if header.bits_per_pixel == 8:
        source_table = normalize_palette(source_palette or [])
        if target is not None and palettes_equal(source_table, target):
            pixels = _decode_8bit(buffer, header, None)
            return DecodedBitmap(header=header, palette=target, pixels=pixels)

        result_palette = target if target is not None else default_palette()
        index_map = build_index_map(source_table, result_palette)
        pixels = _decode_8bit(buffer, header, index_map)
        return DecodedBitmap(header=header, palette=result_palette, pixels=pixels)

    result_palette = target if target is not None else default_palette()
    pixels = _decode_24bit(buffer, header, result_palette)
    return DecodedBitmap(header=header, palette=result_palette, pixels=pixels)
