"""Nearest-colour search against a 256-entry palette."""

from __future__ import annotations

import math
from typing import Dict, List, Sequence

from .palette import PALETTE_SIZE, Color

# Starting minimum: the largest distance possible in RGB space, sqrt(255^2 * 3).
MAX_DISTANCE = 441.673


def color_distance(a: Color, b: Color) -> float:
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2)


def nearest_index(rgb: Color, palette: Sequence[Color]) -> int:
    """
    Return the palette index closest to ``rgb``.

    Entries are scanned in order. An exact match is returned immediately, so
    the earliest duplicate wins. Otherwise the Euclidean distance in RGB space
    is tracked and only a strictly smaller distance replaces the current best,
    which keeps the lowest index on ties.
    """
    best_idx = 0
    best_dist = MAX_DISTANCE
    for i, entry in enumerate(palette[:PALETTE_SIZE]):
        if tuple(entry) == tuple(rgb):
            return i
        dist = color_distance(rgb, entry)
        if dist < best_dist:
            best_idx = i
            best_dist = dist
    return best_idx


def build_index_map(source: Sequence[Color], target: Sequence[Color]) -> List[int]:
    """Map every source palette entry to its nearest target index."""

    return [nearest_index(color, target) for color in source]


class ColorMapper:
    """Memoising wrapper around :func:`nearest_index` for one target palette."""

    def __init__(self, palette: Sequence[Color]):
        self.palette = list(palette)
        self._cache: Dict[Color, int] = {}

    def __call__(self, rgb: Color) -> int:
        index = self._cache.get(rgb)
        if index is None:
            index = nearest_index(rgb, self.palette)
            self._cache[rgb] = index
        return index
