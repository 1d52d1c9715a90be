"""Pillow interop: previews of indexed bitmaps and quantized imports."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from PIL import Image

from .bitmap import IndexedBitmap
from .errors import BitmapError
from .palette import Color, default_palette, resolve_target_palette
from .quantize import ColorMapper


def to_pil_image(bitmap: IndexedBitmap) -> Image.Image:
    image = Image.frombytes("P", (bitmap.width, bitmap.height), bitmap.pixels)
    flat = [component for color in bitmap.palette for component in color]
    image.putpalette(flat)
    return image


def from_pil_image(image: Image.Image, palette: Sequence[Color] | None = None) -> IndexedBitmap:
    """Map every pixel of ``image`` onto ``palette`` by nearest colour."""

    target = resolve_target_palette(palette)
    if target is None:
        target = default_palette()
    rgb = image.convert("RGB")
    width, height = rgb.size
    bitmap = IndexedBitmap(width, height, target)
    mapper = ColorMapper(target)
    data = rgb.tobytes()
    for offset in range(width * height):
        r, g, b = data[offset * 3 : offset * 3 + 3]
        bitmap.set_pixel(offset % width, offset // width, mapper((r, g, b)))
    return bitmap


def open_image(path: str | Path, palette: Sequence[Color] | None = None) -> IndexedBitmap:
    path = Path(path)
    try:
        with Image.open(path) as img:
            return from_pil_image(img, palette)
    except FileNotFoundError as exc:
        raise BitmapError(f"Input file not found: {path}") from exc
    except OSError as exc:
        raise BitmapError(f"Failed to read image: {path}") from exc


def save_preview(bitmap: IndexedBitmap, path: str | Path) -> Path:
    output = Path(path)
    to_pil_image(bitmap).convert("RGB").save(output, format="PNG")
    return output
