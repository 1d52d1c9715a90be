"""Palette helpers: the built-in default palette, JASC-PAL files and BMP colour tables."""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import List, Sequence, Tuple

from .buffer import ByteBuffer
from .errors import PaletteError

Color = Tuple[int, int, int]

PALETTE_SIZE = 256
JASC_MAGIC = "JASC-PAL"
JASC_VERSION = "0100"

# Windows/VGA system colours, indices 0-15 of the default palette.
SYSTEM_COLORS: List[Color] = [
    (0, 0, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 128, 0),
    (0, 0, 128),
    (128, 0, 128),
    (0, 128, 128),
    (192, 192, 192),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
]

CUBE_LEVELS = (0, 51, 102, 153, 204, 255)
GRAY_STEPS = 24


def default_palette() -> List[Color]:
    """Return a fresh copy of the built-in 256-colour palette.

    Layout: 16 system colours, a 6x6x6 colour cube (red major, blue minor)
    and 24 grey steps from 8 to 238.
    """

    palette = list(SYSTEM_COLORS)
    for r in CUBE_LEVELS:
        for g in CUBE_LEVELS:
            for b in CUBE_LEVELS:
                palette.append((r, g, b))
    for step in range(GRAY_STEPS):
        value = 8 + step * 10
        palette.append((value, value, value))
    return palette


def validate_color(color: Sequence[int]) -> Color:
    if len(color) != 3:
        raise PaletteError("Color must have exactly three components")
    values = tuple(int(component) for component in color)
    if any(not (0 <= v <= 255) for v in values):
        raise PaletteError(f"Color components must be between 0 and 255: {values}")
    return values  # type: ignore[return-value]


def is_full_palette(colors: Sequence[Color] | None) -> bool:
    return colors is not None and len(colors) == PALETTE_SIZE


def normalize_palette(colors: Sequence[Sequence[int]]) -> List[Color]:
    """Pad with black (or cut) so the palette has exactly 256 entries."""

    palette = [validate_color(color) for color in colors[:PALETTE_SIZE]]
    palette.extend([(0, 0, 0)] * (PALETTE_SIZE - len(palette)))
    return palette


def resolve_target_palette(
    colors: Sequence[Sequence[int]] | None, stacklevel: int = 3
) -> List[Color] | None:
    """Return ``colors`` as a 256-entry target palette, or ``None`` to use the default.

    A palette without exactly 256 entries is ignored with a ``UserWarning``.
    """

    if colors is None:
        return None
    if not is_full_palette(colors):
        warnings.warn(
            f"Target palette has {len(colors)} entries instead of {PALETTE_SIZE}; "
            "using the built-in default palette",
            UserWarning,
            stacklevel=stacklevel,
        )
        return None
    return normalize_palette(colors)


def palettes_equal(first: Sequence[Color], second: Sequence[Color]) -> bool:
    """Compare the first 256 entries in order, stopping at the first mismatch."""

    if len(first) < PALETTE_SIZE or len(second) < PALETTE_SIZE:
        return False
    for i in range(PALETTE_SIZE):
        if tuple(first[i]) != tuple(second[i]):
            return False
    return True


def parse_jasc_palette(text: str) -> List[Color]:
    lines = [line.strip() for line in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    if len(lines) < 3:
        raise PaletteError("JASC palette is missing its header")
    if lines[0] != JASC_MAGIC:
        raise PaletteError(f"Not a JASC palette (expected {JASC_MAGIC!r}, got {lines[0]!r})")
    if lines[1] != JASC_VERSION:
        raise PaletteError(f"Unsupported JASC palette version: {lines[1]}")
    try:
        count = int(lines[2])
    except ValueError as exc:
        raise PaletteError(f"Invalid JASC color count: {lines[2]}") from exc
    if count < 0 or len(lines) - 3 < count:
        raise PaletteError(f"JASC palette declares {count} colors but has {len(lines) - 3}")

    colors: List[Color] = []
    for number, line in enumerate(lines[3 : 3 + count], start=4):
        parts = line.split()
        # Some editors append an alpha column; it is ignored.
        if len(parts) not in (3, 4):
            raise PaletteError(f"Line {number}: expected 'R G B', got {line!r}")
        try:
            colors.append(validate_color([int(part) for part in parts[:3]]))
        except ValueError as exc:
            raise PaletteError(f"Line {number}: invalid color component in {line!r}") from exc
    return colors


def load_jasc_palette(path: str | Path) -> List[Color]:
    path = Path(path)
    try:
        text = path.read_text(encoding="ascii")
    except UnicodeDecodeError as exc:
        raise PaletteError(f"{path}: bad palette") from exc
    return parse_jasc_palette(text)


def format_jasc_palette(colors: Sequence[Color]) -> str:
    lines = [JASC_MAGIC, JASC_VERSION, str(len(colors))]
    lines.extend(f"{r} {g} {b}" for r, g, b in colors)
    return "\r\n".join(lines) + "\r\n"


def save_jasc_palette(path: str | Path, colors: Sequence[Color]) -> Path:
    output = Path(path)
    output.write_bytes(format_jasc_palette(colors).encode("ascii"))
    return output


def read_color_table(buffer: ByteBuffer, count: int) -> List[Color]:
    """Read ``count`` colour table entries stored as ``B, G, R, reserved``."""

    colors: List[Color] = []
    for _ in range(count):
        b, g, r, _reserved = buffer.read_bytes(4)
        colors.append((r, g, b))
    return colors


def write_color_table(buffer: ByteBuffer, colors: Sequence[Color]) -> None:
    table = bytearray()
    for r, g, b in normalize_palette(colors):
        table.extend((b, g, r, 0))
    buffer.write_bytes(table)
