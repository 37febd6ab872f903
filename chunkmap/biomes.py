"""Biome colour and climate data."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

__all__ = ["BiomeData", "parse_biomes_data", "load_biomes_data", "get_biome_data"]

_log = logging.getLogger(__name__)

_FLOAT_FIELDS = ("temperature", "downfall")
_COLOR_FIELDS = ("foliage_color", "grass_color", "water_color")


@dataclass(frozen=True)
class BiomeData:
    """Climate and colours of one biome."""

    name: str
    temperature: float
    downfall: float
    foliage_color: int
    grass_color: int
    water_color: int


def _biome_from_json(entry: Any) -> BiomeData:
    if not isinstance(entry, dict):
        raise ValueError(f"biome entry is not an object: {entry!r}")
    name = entry.get("name")
    if not isinstance(name, str):
        raise ValueError(f"biome 'name' missing or not a string: {entry!r}")
    values: dict[str, Any] = {"name": name}
    for key in _FLOAT_FIELDS:
        value = entry.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"biome {name!r}: '{key}' missing or not a number")
        values[key] = float(value)
    for key in _COLOR_FIELDS:
        value = entry.get(key)
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"biome {name!r}: '{key}' missing or not an unsigned 32-bit integer")
        values[key] = value
    return BiomeData(**values)


def parse_biomes_data(text: str) -> dict[str, BiomeData]:
    """Parse a JSON list of biome objects into a mapping keyed by biome name."""
    raw = json.loads(text)
    if not isinstance(raw, list):
        raise ValueError("biome data must be a JSON list")
    return {biome.name: biome for biome in map(_biome_from_json, raw)}


def load_biomes_data(path: str | os.PathLike[str]) -> dict[str, BiomeData]:
    """Read and parse a biome data JSON file."""
    with open(path, encoding="utf-8") as handle:
        return parse_biomes_data(handle.read())


def get_biome_data(data: Mapping[str, BiomeData], name: str) -> BiomeData:
    """Data for ``name``, falling back to plains when the biome is unknown."""
    biome = data.get(name)
    if biome is not None:
        return biome
    _log.warning("No biome data found for '%s'", name)
    try:
        return data["plains"]
    except KeyError:
        raise KeyError("No 'plains' biome found") from None