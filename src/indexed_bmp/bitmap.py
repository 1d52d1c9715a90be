"""In-memory 8-bit indexed bitmap: header, palette and top-down pixel indices."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

from .buffer import ByteBuffer
from .decoder import decode_bitmap
from .encoder import encode_bitmap
from .errors import PixelOutOfRangeError
from .header import BitmapHeader
from .palette import Color, default_palette, resolve_target_palette


class IndexedBitmap:
    """Bitmap whose pixels are palette indices stored top-down without row padding.

    Instances are written as 8-bit, bottom-up BMP files regardless of the
    bit depth they were loaded from.
    """

    def __init__(self, width: int, height: int, palette: Sequence[Color] | None = None):
        self.header = BitmapHeader(width=abs(width), height=abs(height))
        target = resolve_target_palette(palette)
        self._palette = target if target is not None else default_palette()
        self._pixels = bytearray(self.header.width * self.header.height)

    @classmethod
    def _from_parts(
        cls, header: BitmapHeader, palette: List[Color], pixels: bytearray
    ) -> "IndexedBitmap":
        bitmap = cls.__new__(cls)
        bitmap.header = header
        bitmap._palette = palette
        bitmap._pixels = pixels
        return bitmap

    @classmethod
    def from_bytes(
        cls,
        data: bytes | bytearray | ByteBuffer,
        palette: Sequence[Color] | None = None,
        file_header: bool = True,
    ) -> "IndexedBitmap":
        decoded = decode_bitmap(data, palette=palette, file_header=file_header)
        return cls._from_parts(decoded.header, decoded.palette, decoded.pixels)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        palette: Sequence[Color] | None = None,
        file_header: bool = True,
    ) -> "IndexedBitmap":
        return cls.from_bytes(ByteBuffer.from_file(path), palette=palette, file_header=file_header)

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.abs_height

    @property
    def palette(self) -> List[Color]:
        return list(self._palette)

    @property
    def pixels(self) -> bytes:
        return bytes(self._pixels)

    def _offset(self, x: int, y: int) -> int:
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            raise PixelOutOfRangeError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} image"
            )
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> int:
        return self._pixels[self._offset(x, y)]

    def set_pixel(self, x: int, y: int, index: int) -> None:
        offset = self._offset(x, y)
        if not 0 <= index <= 255:
            raise ValueError(f"Palette index must be between 0 and 255, got {index}")
        self._pixels[offset] = index

    def __getitem__(self, position: Tuple[int, int]) -> int:
        x, y = position
        return self.get_pixel(x, y)

    def __setitem__(self, position: Tuple[int, int], index: int) -> None:
        x, y = position
        self.set_pixel(x, y, index)

    def color_at(self, x: int, y: int) -> Color:
        return self._palette[self.get_pixel(x, y)]

    def to_bytes(self, file_header: bool = True) -> bytes:
        return encode_bitmap(self.header, self._palette, self._pixels, file_header=file_header)

    def save(self, path: str | Path, file_header: bool = True) -> Path:
        buffer = ByteBuffer(self.to_bytes(file_header=file_header))
        return buffer.save(path)

    def __repr__(self) -> str:
        return f"IndexedBitmap(width={self.width}, height={self.height})"
