"""Block and biome lookups inside a chunk section."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from chunkmap.nbt import LongArray

__all__ = [
    "SectionError",
    "biome_at_position",
    "block_at_position",
    "extract_block_data",
    "calculate_bits_per_entry",
    "extract_palette_index",
]

_U64_MASK = (1 << 64) - 1


class SectionError(ValueError):
    """Raised when section data is missing or malformed."""


def _ceil_log2(size: int) -> int:
    return (size - 1).bit_length() if size > 1 else 0


def biome_at_position(section: Mapping[str, Any], x: int, y: int, z: int) -> str:
    """Name of the biome covering local block position (x, y, z)."""
    biomes = section.get("biomes")
    if not isinstance(biomes, dict):
        raise SectionError(f"'biomes' not found in section or not a Compound. Got {biomes!r}")

    palette = biomes.get("palette")
    if not isinstance(palette, list):
        raise SectionError(
            f"'biomes.palette' not found in section or not a List. Got {palette!r}"
        )

    if len(palette) == 1:
        name = palette[0]
        if not isinstance(name, str):
            raise SectionError(f"The biome name in the palette is not a String. Got {name!r}")
        return name

    data = biomes.get("data")
    if not isinstance(data, LongArray):
        raise SectionError(f"'biomes.data' not found or not a LongArray. Got {data!r}")

    # Biomes are stored per 4x4x4 cell, in Y-Z-X order.
    biome_index = ((y // 4) * 4 + z // 4) * 4 + x // 4
    bits_per_entry = _ceil_log2(len(palette))
    palette_index = extract_palette_index(data, biome_index, bits_per_entry)

    if palette_index >= len(palette):
        raise SectionError(
            f"Invalid biome palette index: got {palette_index}, palette size is "
            f"{len(palette)}, bits_per_entry is {bits_per_entry}, "
            f"biome_index is {biome_index}"
        )

    name = palette[palette_index]
    if not isinstance(name, str):
        raise SectionError(
            f"The biome name at index {palette_index} in the palette is not a String. "
            f"Got {name!r}"
        )
    return name


def block_at_position(
    section: Mapping[str, Any], x: int, y: int, z: int
) -> tuple[str, dict[str, str] | None]:
    """Name and kept properties of the block at local position (x, y, z)."""
    block_states = section.get("block_states")
    if not isinstance(block_states, dict):
        raise SectionError(
            f"'block_states' not found in section or not a Compound. Got {block_states!r}"
        )

    palette = block_states.get("palette")
    if not isinstance(palette, list):
        raise SectionError(
            f"'block_states.palette' not found in section or not a List. Got {palette!r}"
        )

    if len(palette) == 1:
        block = palette[0]
        if not isinstance(block, dict):
            raise SectionError(f"'palette[0]' is not a Compound. Got {block!r}")
        return extract_block_data(block)

    data = block_states.get("data")
    if not isinstance(data, LongArray):
        raise SectionError("block data not found or not a long array")

    block_index = (y * 16 + z) * 16 + x
    bits_per_entry = calculate_bits_per_entry(len(palette))
    palette_index = extract_palette_index(data, block_index, bits_per_entry)

    if palette_index >= len(palette):
        raise SectionError(
            f"Invalid palette index: got {palette_index}, palette size is {len(palette)}, "
            f"bits_per_entry is {bits_per_entry}, block_index is {block_index}"
        )

    block = palette[palette_index]
    if not isinstance(block, dict):
        raise SectionError(f"'palette[palette_index]' is not a Compound. Got {block!r}")
    return extract_block_data(block)


def extract_block_data(block: Mapping[str, Any]) -> tuple[str, dict[str, str] | None]:
    """Block name plus the properties worth keeping (only ``snowy``)."""
    properties = block.get("Properties")
    if properties is not None and not isinstance(properties, dict):
        raise SectionError(
            f"'block.Properties' was found but is not Compound. Got {properties!r}"
        )

    kept: dict[str, str] | None = None
    if properties is not None and isinstance(properties.get("snowy"), str):
        kept = {"snowy": properties["snowy"]}

    name = block.get("Name")
    if not isinstance(name, str):
        raise SectionError(f"'block.Name' not found or not a String. Got {name!r}")

    return name, kept


def calculate_bits_per_entry(palette_size: int) -> int:
    """Bits used per block state index for a palette of the given size."""
    if palette_size <= 1:
        return 0
    min_bits = _ceil_log2(palette_size)
    if min_bits <= 4:
        return 4
    if min_bits <= 8:
        return min_bits
    return min(min_bits, 15)


def extract_palette_index(data: Sequence[int], index: int, bits_per_entry: int) -> int:
    """Read entry ``index`` from longs packing ``bits_per_entry``-bit values."""
    if bits_per_entry == 0:
        return 0
    if not 0 < bits_per_entry <= 64:
        raise SectionError(f"Invalid bits per entry: {bits_per_entry}")

    entries_per_long = 64 // bits_per_entry
    long_index, entry_index = divmod(index, entries_per_long)

    if long_index >= len(data):
        raise SectionError(
            f"Long index {long_index} out of bounds (data length: {len(data)})"
        )

    long_value = data[long_index] & _U64_MASK
    mask = (1 << bits_per_entry) - 1
    return (long_value >> (entry_index * bits_per_entry)) & mask