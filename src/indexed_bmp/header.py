"""BITMAPFILEHEADER / BITMAPINFOHEADER model."""

# Layout (little endian)
# Offset | Size | Field
# -------|------|---------------------------------------------------------
# 0      | 2    | type, "BM"                                   (file header)
# 2      | 4    | file size                                    (file header)
# 6      | 4    | reserved                                     (file header)
# 10     | 4    | pixel data offset                            (file header)
# 14     | 4    | info header size (40)
# 18     | 4    | width, signed
# 22     | 4    | height, signed; > 0 bottom-up rows, < 0 top-down rows
# 26     | 2    | planes (1)
# 28     | 2    | bits per pixel (8 or 24 supported)
# 30     | 4    | compression (0 = BI_RGB)
# 34     | 4    | image data size
# 38     | 4    | horizontal resolution, signed
# 42     | 4    | vertical resolution, signed
# 46     | 4    | colors used (0 = 2^bpp for <= 8 bpp)
# 50     | 4    | important colors

from __future__ import annotations

from dataclasses import dataclass

from .buffer import ByteBuffer
from .palette import PALETTE_SIZE

BITMAP_TYPE = 0x4D42  # b"BM" read as little-endian u16
FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
RAW_DATA_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE
COMPRESSION_RGB = 0
SUPPORTED_BIT_DEPTHS = (8, 24)

# Written offsets keep the historical 44-byte header base of this format.
ENCODED_HEADER_BASE = 44
ENCODED_PALETTE_BYTES = PALETTE_SIZE * 4


@dataclass
class BitmapHeader:
    """Field-for-field mirror of the two BMP headers."""

    type: int = BITMAP_TYPE
    file_size: int = 0
    reserved: int = 0
    data_offset: int = RAW_DATA_OFFSET
    image_header_size: int = INFO_HEADER_SIZE
    width: int = 0
    height: int = 0
    planes: int = 1
    bits_per_pixel: int = 8
    compression: int = COMPRESSION_RGB
    image_size: int = 0
    x_dpi: int = 0
    y_dpi: int = 0
    color_count: int = 0
    important_colors: int = 0

    @property
    def abs_height(self) -> int:
        return abs(self.height)

    @property
    def top_down(self) -> bool:
        return self.height < 0

    @property
    def has_implicit_palette(self) -> bool:
        return self.color_count == 0 and self.bits_per_pixel == 8

    @property
    def palette_size(self) -> int:
        return PALETTE_SIZE if self.has_implicit_palette else self.color_count

    @classmethod
    def read(cls, buffer: ByteBuffer, file_header: bool = True) -> "BitmapHeader":
        header = cls()
        if file_header:
            header.type = buffer.read_u16()
            header.file_size = buffer.read_u32()
            header.reserved = buffer.read_u32()
            header.data_offset = buffer.read_u32()
        header.image_header_size = buffer.read_u32()
        header.width = buffer.read_i32()
        header.height = buffer.read_i32()
        header.planes = buffer.read_u16()
        header.bits_per_pixel = buffer.read_u16()
        header.compression = buffer.read_u32()
        header.image_size = buffer.read_u32()
        header.x_dpi = buffer.read_i32()
        header.y_dpi = buffer.read_i32()
        header.color_count = buffer.read_u32()
        header.important_colors = buffer.read_u32()
        return header

    def write(self, buffer: ByteBuffer, file_header: bool = True) -> None:
        if file_header:
            buffer.write_u16(self.type)
            buffer.write_u32(self.file_size)
            buffer.write_u32(self.reserved)
            buffer.write_u32(self.data_offset)
        buffer.write_u32(self.image_header_size)
        buffer.write_i32(self.width)
        buffer.write_i32(self.height)
        buffer.write_u16(self.planes)
        buffer.write_u16(self.bits_per_pixel)
        buffer.write_u32(self.compression)
        buffer.write_u32(self.image_size)
        buffer.write_i32(self.x_dpi)
        buffer.write_i32(self.y_dpi)
        buffer.write_u32(self.color_count)
        buffer.write_u32(self.important_colors)

    @classmethod
    def for_indexed_image(cls, width: int, height: int, data_size: int) -> "BitmapHeader":
        """Header for an 8-bit, bottom-up, uncompressed image with a 256-entry table."""

        return cls(
            type=BITMAP_TYPE,
            file_size=ENCODED_HEADER_BASE + ENCODED_PALETTE_BYTES + data_size,
            reserved=0,
            data_offset=ENCODED_HEADER_BASE + ENCODED_PALETTE_BYTES,
            image_header_size=INFO_HEADER_SIZE,
            width=width,
            height=height,
            planes=1,
            bits_per_pixel=8,
            compression=COMPRESSION_RGB,
            image_size=width * height,
            x_dpi=0,
            y_dpi=0,
            color_count=0,
            important_colors=0,
        )
