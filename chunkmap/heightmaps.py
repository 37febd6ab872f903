"""Decoding of packed chunk heightmaps."""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "HM_LENGTH",
    "HM_BITS_PER_VALUE",
    "HM_VALUES_PER_LONG",
    "decode_heightmap",
]

HM_LENGTH = 256
HM_BITS_PER_VALUE = 9
HM_VALUES_PER_LONG = 64 // HM_BITS_PER_VALUE

_U64_MASK = (1 << 64) - 1
_LONGS_NEEDED = -(-HM_LENGTH // HM_VALUES_PER_LONG)


def decode_heightmap(packed_data: Sequence[int]) -> list[int]:
    """Unpack 256 nine-bit heights stored in signed 64-bit longs.

    Values never straddle two longs; the spare high bits of each long are unused.
    """
    if len(packed_data) < _LONGS_NEEDED:
        raise ValueError(
            f"heightmap needs {_LONGS_NEEDED} longs, got {len(packed_data)}"
        )
    mask = (1 << HM_BITS_PER_VALUE) - 1
    heights = [
        ((value & _U64_MASK) >> (slot * HM_BITS_PER_VALUE)) & mask
        for value in packed_data[:_LONGS_NEEDED]
        for slot in range(HM_VALUES_PER_LONG)
    ]
    return heights[:HM_LENGTH]