"""Rendering region images from chunk surfaces and merging them into a map."""

from __future__ import annotations

import logging
import os
import re
import struct
import time
from collections import defaultdict
from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path

from PIL import Image

from chunkmap.biomes import BiomeData, get_biome_data
from chunkmap.block_colors import get_block_color
from chunkmap.chunks import Block, Chunk, ChunkSurface, parse_chunk_surface
from chunkmap.dimensions import Dimension
from chunkmap.utils import (
    apply_blue_tint,
    biome_index,
    chunk_to_region_coords,
    downfall_color,
    height_color,
    linear_color,
    temperature_color,
    u32_to_rgb,
)

__all__ = ["ImageRenderType", "ImageError", "create_region_images", "create_map_image"]

_log = logging.getLogger(__name__)

RGB = tuple[int, int, int]

_REGION_PIXELS = 32 * 16
_YEAR_MS = 365.0 * 24.0 * 60.0 * 60.0 * 1000.0
_MAX_INHABITED = 1_600_000.0
_MAX_SHADE_STEPS = 3
_REGION_NAME = re.compile(r"r\.(-?\d+)\.(-?\d+)\.png")
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


_DARKEN = _f32(0.8)
_LIGHTEN = _f32(0.9)
_LIGHTEN_ADD = _f32(255.0 * _f32(0.1))


class ImageRenderType(Enum):
    """What a rendered map shows."""

    TEXTURES = "textures"
    TEXTURES_WITHOUT_WATER = "texturesnowater"
    HEIGHTMAP = "heightmap"
    BIOMES = "biomes"
    TEMPERATURE = "temperature"
    DOWNFALL = "downfall"
    INHABITED = "inhabited"
    LAST_UPDATED = "lastupdated"


class ImageError(ValueError):
    """Raised when an image cannot be rendered or merged."""


def _darken(color: RGB) -> RGB:
    r, g, b = (int(_f32(c * _DARKEN)) for c in color)
    return r, g, b


def _lighten(color: RGB) -> RGB:
    r, g, b = (int(_f32(_f32(c * _LIGHTEN) + _LIGHTEN_ADD)) for c in color)
    return r, g, b


def _shade(color: RGB, block: Block, heights: Mapping[tuple[int, int], int]) -> RGB:
    """Darken slopes facing away and lighten slopes facing the viewer."""
    x, y, z = block.position.x, block.position.y, block.position.z
    above = heights.get((x, z - 1))
    below = heights.get((x, z + 1))
    if above is None or below is None:
        return color
    if above > y:
        for _ in range(min(above - y, _MAX_SHADE_STEPS)):
            color = _darken(color)
    elif below > y:
        for _ in range(min(below - y, _MAX_SHADE_STEPS)):
            color = _lighten(color)
    return color


def _biome_of(surface: ChunkSurface, block: Block, biomes_data: Mapping[str, BiomeData]) -> BiomeData:
    full_name = surface.biomes[biome_index(block.position.x & 0xF, block.position.z & 0xF)]
    if not full_name.startswith("minecraft:"):
        raise ImageError(f"Biome name {full_name!r} has no 'minecraft:' prefix")
    return get_biome_data(biomes_data, full_name.removeprefix("minecraft:"))


def _pixel_color(
    block: Block,
    chunk: Chunk,
    surface: ChunkSurface,
    heights: Mapping[tuple[int, int], int],
    dimension: Dimension,
    render_type: ImageRenderType,
    block_colors: Mapping[str, RGB],
    biomes_data: Mapping[str, BiomeData],
    unknown_blocks: set[str],
    now_ms: float,
) -> RGB:
    if render_type is ImageRenderType.HEIGHTMAP:
        return height_color(block.position.y, dimension)

    biome = _biome_of(surface, block, biomes_data)

    if render_type in (ImageRenderType.TEXTURES, ImageRenderType.TEXTURES_WITHOUT_WATER):
        color = get_block_color(block.name, block.snowy, biome, block_colors, unknown_blocks)
        if render_type is ImageRenderType.TEXTURES and block.depth > 0:
            color = apply_blue_tint(color, block.depth, u32_to_rgb(biome.water_color))
        if block.depth == 0:
            color = _shade(color, block, heights)
        return color
    if render_type is ImageRenderType.TEMPERATURE:
        return temperature_color(biome.temperature)
    if render_type is ImageRenderType.DOWNFALL:
        return downfall_color(biome.downfall)
    if render_type is ImageRenderType.BIOMES:
        return u32_to_rgb(biome.grass_color)
    if render_type is ImageRenderType.INHABITED:
        return linear_color(_f32(chunk.inhabited_time), 0.0, _MAX_INHABITED)
    return linear_color(_f32(chunk.last_update), _f32(now_ms - _YEAR_MS), now_ms)


def _render_region(
    rx: int,
    rz: int,
    chunks: Iterable[Chunk],
    dimension: Dimension,
    render_type: ImageRenderType,
    block_colors: Mapping[str, RGB],
    biomes_data: Mapping[str, BiomeData],
) -> Image.Image:
    pixels = bytearray(_REGION_PIXELS * _REGION_PIXELS * 4)
    origin_x = rx * _REGION_PIXELS
    origin_z = rz * _REGION_PIXELS
    unknown_blocks: set[str] = set()
    now_ms = _f32(time.time() * 1000.0)

    for chunk in chunks:
        surface = parse_chunk_surface(chunk, dimension)
        heights = {(b.position.x, b.position.z): b.position.y for b in surface.blocks}

        for block in surface.blocks:
            px = block.position.x - origin_x
            pz = block.position.z - origin_z
            if not (0 <= px < _REGION_PIXELS and 0 <= pz < _REGION_PIXELS):
                continue
            color = _pixel_color(
                block, chunk, surface, heights, dimension, render_type,
                block_colors, biomes_data, unknown_blocks, now_ms,
            )
            offset = (pz * _REGION_PIXELS + px) * 4
            pixels[offset:offset + 4] = bytes((*color, 255))

    if unknown_blocks:
        _log.debug("Unknown blocks in region %d.%d: %s", rx, rz, sorted(unknown_blocks))
    return Image.frombytes("RGBA", (_REGION_PIXELS, _REGION_PIXELS), bytes(pixels))


def create_region_images(
    chunks: Iterable[Chunk],
    dimension: Dimension,
    render_type: ImageRenderType,
    block_colors: Mapping[str, RGB],
    biomes_data: Mapping[str, BiomeData],
) -> list[tuple[int, int, Image.Image]]:
    """Render one 512x512 RGBA image per region touched by ``chunks``.

    Returns ``(region_x, region_z, image)`` triples.
    """
    dimension = Dimension(dimension)
    render_type = ImageRenderType(render_type)

    regions: dict[tuple[int, int], list[Chunk]] = defaultdict(list)
    for chunk in chunks:
        regions[chunk_to_region_coords(chunk.position.x, chunk.position.z)].append(chunk)

    return [
        (rx, rz, _render_region(rx, rz, region_chunks, dimension, render_type, block_colors, biomes_data))
        for (rx, rz), region_chunks in regions.items()
    ]


def _coordinate(text: str) -> int:
    value = int(text)
    if not _I32_MIN <= value <= _I32_MAX:
        raise ImageError(f"Region coordinate out of range: {text}")
    return value


def create_map_image(folder: str | os.PathLike[str]) -> Image.Image:
    """Merge every ``r.<x>.<z>.png`` region image of ``folder`` into one map."""
    path = Path(folder)
    if not path.is_dir():
        raise ImageError(f"Provided path '{folder}' is not a valid directory.")

    regions: list[tuple[int, int, Image.Image]] = []
    for entry in sorted(path.iterdir()):
        if not entry.is_file():
            continue
        match = _REGION_NAME.fullmatch(entry.name)
        if match is None:
            continue
        x, z = (_coordinate(group) for group in match.groups())
        if entry.stat().st_size == 0:
            continue
        try:
            with Image.open(entry) as source:
                image = source.convert("RGBA")
        except OSError as exc:
            raise ImageError(f"Failed to read {entry}: {exc}") from exc
        regions.append((x, z, image))

    if not regions:
        raise ImageError("No valid region images found.")

    min_x = min(x for x, _, _ in regions)
    max_x = max(x for x, _, _ in regions)
    min_z = min(z for _, z, _ in regions)
    max_z = max(z for _, z, _ in regions)

    region_width, region_height = regions[0][2].size
    map_width = (max_x - min_x + 1) * region_width
    map_height = (max_z - min_z + 1) * region_height
    merged = Image.new("RGBA", (map_width, map_height), (0, 0, 0, 0))

    for x, z, image in regions:
        offset_x = (x - min_x) * region_width
        offset_y = (z - min_z) * region_height
        if offset_x + image.width > map_width or offset_y + image.height > map_height:
            raise ImageError(f"Region image r.{x}.{z}.png does not fit in the map")
        merged.paste(image, (offset_x, offset_y))

    return merged