"""Colour helpers and coordinate conversions used when rendering maps."""

from __future__ import annotations

import math
from collections.abc import Sequence

from chunkmap.dimensions import Dimension, dimension_heights

__all__ = [
    "u32_to_rgb",
    "chunk_to_region_coords",
    "biome_index",
    "apply_blue_tint",
    "depth_to_alpha",
    "height_color",
    "temperature_color",
    "downfall_color",
    "linear_color",
]

RGB = tuple[int, int, int]

_BLACK = (0.0, 0.0, 0.0)
_WHITE = (255.0, 255.0, 255.0)
_COLD = (64.0, 125.0, 237.0)
_WARM = (250.0, 118.0, 77.0)


def _round_half_away(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    return math.floor(value + 0.5) if value >= 0 else math.ceil(value - 0.5)


def _to_u8(value: float) -> int:
    """Saturating conversion to a byte, truncating the fraction (NaN gives 0)."""
    if math.isnan(value):
        return 0
    return int(min(max(value, 0.0), 255.0))


def _lerp(start: Sequence[float], end: Sequence[float], t: float) -> RGB:
    r, g, b = (
        _to_u8(_round_half_away(a * (1.0 - t) + z * t)) for a, z in zip(start, end)
    )
    return r, g, b


def u32_to_rgb(color: int) -> RGB:
    """Split a 0xRRGGBB integer into its red, green and blue bytes."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def chunk_to_region_coords(x: int, z: int) -> tuple[int, int]:
    """Region coordinates of the chunk at (x, z)."""
    return x // 32, z // 32


def biome_index(local_x: int, local_z: int) -> int:
    """Index of the 4x4 biome cell holding a column of a chunk (0-15 coordinates)."""
    return (local_z // 4) * 4 + local_x // 4


def depth_to_alpha(depth: int) -> float:
    """Opacity of water over a block, in the range [0, 0.7]."""
    if depth <= 0:
        return 0.0
    if depth <= 9:
        return 0.4 + 0.3 * (depth / 10.0)
    return 0.7


def apply_blue_tint(rgb: Sequence[int], depth: int, water_color: Sequence[int]) -> RGB:
    """Blend a block colour with the water colour according to water depth."""
    alpha = depth_to_alpha(depth)
    r, g, b = (
        int(min(max(_round_half_away((1.0 - alpha) * orig + alpha * water), 0.0), 255.0))
        for orig, water in zip(rgb, water_color)
    )
    return r, g, b


def height_color(value: int, dimension: Dimension) -> RGB:
    """Grey level for a height, black at the dimension's floor and white at its top."""
    low, high = dimension_heights(dimension)
    clamped = min(max(value, low), high)
    normalized = (clamped + abs(low)) / (abs(low) + high)
    level = _to_u8(normalized * 255.0)
    return level, level, level


def temperature_color(value: float) -> RGB:
    """Blue to orange colour for a biome temperature in [-1, 2]."""
    clamped = min(max(value, -1.0), 2.0)
    return _lerp(_COLD, _WARM, (clamped + 1.0) / 3.0)


def downfall_color(value: float) -> RGB:
    """Black to white colour for a biome downfall in [0, 1]."""
    return _lerp(_BLACK, _WHITE, min(max(value, 0.0), 1.0))


def linear_color(value: float, minimum: float, maximum: float) -> RGB:
    """Black to white colour for ``value`` between ``minimum`` and ``maximum``."""
    clamped = min(max(value, minimum), maximum)
    denominator = abs(minimum) + abs(maximum)
    if denominator == 0:
        return 0, 0, 0
    return _lerp(_BLACK, _WHITE, (clamped + abs(minimum)) / denominator)