"""Reading region files: 32x32 chunks behind a sector table."""

from __future__ import annotations

import os
import zlib
from dataclasses import dataclass, field

from chunkmap.chunks import Chunk, ChunkPosition
from chunkmap.nbt import Int, Long, NbtError, loads

__all__ = [
    "CHUNKS_PER_REGION",
    "RegionError",
    "Region",
    "parse_region_bytes",
    "parse_chunk_from_bytes",
    "parse_region_file",
]

CHUNKS_PER_REGION = 1024
_HEADER_SIZE = 8192
_SECTOR_SIZE = 4096
_ZLIB = 2


class RegionError(ValueError):
    """Raised when a region file cannot be read."""


@dataclass
class Region:
    """A 32x32 chunk area."""

    chunks: list[Chunk] = field(default_factory=list)


def _compressed_chunks(data: bytes):
    for index in range(CHUNKS_PER_REGION):
        entry = data[index * 4:index * 4 + 4]
        offset = int.from_bytes(entry[:3], "big")
        sector_count = entry[3]
        if offset == 0 or sector_count == 0:
            continue

        start = offset * _SECTOR_SIZE
        if start + 5 > len(data):
            continue

        length = int.from_bytes(data[start:start + 4], "big")
        compression = data[start + 4]
        if length == 0:
            continue
        end = start + 5 + length - 1
        if end > len(data):
            continue
        if compression != _ZLIB:
            continue

        yield index, data[start + 5:end]


def parse_region_bytes(data: bytes) -> Region:
    """Parse every fully generated chunk stored in region file bytes."""
    data = bytes(data)
    if len(data) < _HEADER_SIZE:
        raise RegionError("Region file too small")

    region = Region()
    for index, compressed in _compressed_chunks(data):
        try:
            raw = zlib.decompress(compressed)
        except zlib.error as exc:
            raise RegionError(f"Failed to decompress chunk {index}: {exc}") from exc
        chunk = parse_chunk_from_bytes(index, raw)
        if chunk is not None:
            region.chunks.append(chunk)
    return region


def _required(root: dict, key: str, kind: type, kind_name: str) -> int:
    value = root.get(key)
    if not isinstance(value, kind):
        raise RegionError(f"'{key}' not found or not a {kind_name}. Got {value!r}")
    return int(value)


def parse_chunk_from_bytes(index: int, data: bytes) -> Chunk | None:
    """Decode one chunk's uncompressed NBT.

    Returns ``None`` for unreadable data and for chunks that are not fully
    generated; raises :class:`RegionError` when required fields are missing.
    """
    try:
        nbt = loads(data)
    except NbtError:
        return None
    if not isinstance(nbt, dict):
        return None

    status = nbt.get("Status")
    if isinstance(status, str) and status != "minecraft:full":
        return None

    data_version = _required(nbt, "DataVersion", Int, "Int")
    last_update = _required(nbt, "LastUpdate", Long, "Long")
    inhabited_time = _required(nbt, "InhabitedTime", Long, "Long")

    x_pos = nbt.get("xPos")
    z_pos = nbt.get("zPos")
    chunk_x = int(x_pos) if isinstance(x_pos, Int) else index % 32
    chunk_z = int(z_pos) if isinstance(z_pos, Int) else index // 32

    return Chunk(
        data_version=data_version,
        last_update=last_update,
        inhabited_time=inhabited_time,
        position=ChunkPosition(chunk_x, chunk_z),
        nbt=nbt,
    )


def parse_region_file(path: str | os.PathLike[str]) -> Region:
    """Read and parse a region file from disk."""
    with open(path, "rb") as handle:
        return parse_region_bytes(handle.read())