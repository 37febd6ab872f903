"""Chunks and the extraction of their visible surface."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from chunkmap.dimensions import Dimension, dimension_height_offset
from chunkmap.heightmaps import decode_heightmap
from chunkmap.nbt import Byte, Int, LongArray
from chunkmap.sections import biome_at_position, block_at_position

__all__ = [
    "ChunkError",
    "BlockPosition",
    "Block",
    "ChunkPosition",
    "Chunk",
    "ChunkSurface",
    "parse_chunk_heightmaps",
    "parse_chunk_sections",
    "parse_chunk_surface",
]


class ChunkError(ValueError):
    """Raised when chunk data is missing or malformed."""


@dataclass(frozen=True)
class BlockPosition:
    """World coordinates of a block."""

    x: int
    y: int
    z: int


@dataclass
class Block:
    """A surface block: its name, water depth above it and snow state."""

    position: BlockPosition
    name: str
    depth: int
    snowy: bool


@dataclass(frozen=True)
class ChunkPosition:
    """Chunk coordinates (in chunks, not blocks)."""

    x: int
    z: int


@dataclass
class Chunk:
    """A fully generated chunk with its decoded NBT tree."""

    data_version: int
    last_update: int
    inhabited_time: int
    position: ChunkPosition
    nbt: Any


@dataclass
class ChunkSurface:
    """The highest blocks of a chunk and the biomes they stand in.

    ``blocks`` holds 256 entries (16x16) ordered by Z then X;
    ``biomes`` holds 16 entries (4x4) in the same order.
    """

    blocks: list[Block] = field(default_factory=list)
    biomes: list[str] = field(default_factory=list)


def _long_array(heightmaps: Mapping[str, Any], key: str) -> LongArray:
    value = heightmaps.get(key)
    if not isinstance(value, LongArray):
        raise ChunkError(f"'{key}' not found or not a LongArray")
    return value


def parse_chunk_heightmaps(root: Mapping[str, Any]) -> tuple[list[int], list[int]]:
    """Return the world surface and ocean floor heightmaps."""
    heightmaps = root.get("Heightmaps")
    if not isinstance(heightmaps, dict):
        raise ChunkError("'Heightmaps' not found or not a Compound")

    motion_blocking = _long_array(heightmaps, "MOTION_BLOCKING")
    ocean_floor = _long_array(heightmaps, "OCEAN_FLOOR")

    try:
        return decode_heightmap(motion_blocking), decode_heightmap(ocean_floor)
    except ValueError as exc:
        raise ChunkError(str(exc)) from exc


def parse_chunk_sections(root: Mapping[str, Any]) -> dict[int, dict[str, Any]]:
    """Map each section's Y index to its compound."""
    sections = root.get("sections")
    if not isinstance(sections, list):
        raise ChunkError("'sections' not found or not a list")

    by_y: dict[int, dict[str, Any]] = {}
    for section in sections:
        if not isinstance(section, dict):
            raise ChunkError(f"'section' is not a Compound. Got {section!r}")
        y = section.get("Y")
        if not isinstance(y, (Byte, Int)):
            raise ChunkError(f"'section' has invalid 'Y' value. Got {y!r}")
        by_y[int(y)] = section
    return by_y


def parse_chunk_surface(chunk: Chunk, dimension: Dimension) -> ChunkSurface:
    """Find the highest block of every column of the chunk and its biome."""
    dimension = Dimension(dimension)
    root = chunk.nbt
    if not isinstance(root, dict):
        raise ChunkError("Root NBT is not a compound")

    surface_map, floor_map = parse_chunk_heightmaps(root)
    sections = parse_chunk_sections(root)
    offset = dimension_height_offset(dimension)

    surface = ChunkSurface()
    for local_z in range(16):
        for local_x in range(16):
            height_index = local_z * 16 + local_x
            world_x = chunk.position.x * 16 + local_x
            world_z = chunk.position.z * 16 + local_z

            surface_y = surface_map[height_index] - 1 + offset
            floor_y = floor_map[height_index] - 1 + offset
            if dimension is not Dimension.OVERWORLD:
                floor_y = surface_y

            section_y, local_y = divmod(floor_y, 16)
            section = sections.get(section_y)
            if section is None:
                raise ChunkError(f"Section Y={section_y} missing")

            # Biomes are stored in 4x4 cells.
            if local_x % 4 == 0 and local_z % 4 == 0:
                surface.biomes.append(biome_at_position(section, local_x, local_y, local_z))

            name, props = block_at_position(section, local_x, local_y, local_z)
            snowy = props is not None and props.get("snowy", "false") == "true"

            surface.blocks.append(
                Block(
                    position=BlockPosition(world_x, floor_y, world_z),
                    name=name,
                    depth=max(surface_y - floor_y, 0),
                    snowy=snowy,
                )
            )
    return surface