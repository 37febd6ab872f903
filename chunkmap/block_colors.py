"""Map colours of blocks."""

from __future__ import annotations

import json
import os
import re
from collections.abc import Mapping, MutableSet

from chunkmap.biomes import BiomeData
from chunkmap.utils import u32_to_rgb

__all__ = [
    "UNKNOWN_BLOCK_COLOR",
    "get_block_color",
    "parse_block_colors",
    "load_block_colors",
]

RGB = tuple[int, int, int]

UNKNOWN_BLOCK_COLOR: RGB = (233, 66, 245)

_HEX_COLOR = re.compile(r"[0-9a-fA-F]{6}")
_UNTINTED_LEAVES = frozenset({"birch_leaves", "spruce_leaves", "cherry_leaves"})


def get_block_color(
    name: str,
    snowy: bool,
    biome_data: BiomeData,
    block_colors: Mapping[str, RGB],
    unknown_blocks: MutableSet[str],
) -> RGB:
    """Colour of a block on the map.

    Names missing from ``block_colors`` are added to ``unknown_blocks``.
    """
    if snowy:
        return 255, 255, 255

    clean = name.removeprefix("minecraft:")
    if clean in ("air", "cave_air"):
        return 0, 0, 0
    if clean == "grass_block":
        return u32_to_rgb(biome_data.grass_color)
    if clean == "water":
        return u32_to_rgb(biome_data.water_color)
    if clean == "lava":
        return 255, 100, 0
    if "leaves" in clean and clean not in _UNTINTED_LEAVES:
        return u32_to_rgb(biome_data.foliage_color)

    color = block_colors.get(clean)
    if color is None:
        unknown_blocks.add(clean)
        return UNKNOWN_BLOCK_COLOR
    return color


def parse_block_colors(text: str) -> dict[str, RGB]:
    """Parse a JSON object mapping block names to ``#rrggbb`` colours."""
    raw = json.loads(text)
    if not isinstance(raw, dict):
        raise ValueError("block colours must be a JSON object")
    colors: dict[str, RGB] = {}
    for block_name, hex_color in raw.items():
        if not isinstance(hex_color, str):
            raise ValueError(f"Invalid color found in the JSON: {hex_color!r}")
        digits = hex_color.lstrip("#")
        if not _HEX_COLOR.fullmatch(digits):
            raise ValueError(f"Invalid color found in the JSON: {hex_color}")
        colors[block_name] = (
            int(digits[0:2], 16),
            int(digits[2:4], 16),
            int(digits[4:6], 16),
        )
    return colors


def load_block_colors(path: str | os.PathLike[str]) -> dict[str, RGB]:
    """Read and parse a block colour JSON file."""
    with open(path, encoding="utf-8") as handle:
        return parse_block_colors(handle.read())