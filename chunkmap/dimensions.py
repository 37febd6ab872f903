"""World dimensions and their vertical extents."""

from __future__ import annotations

from enum import Enum

__all__ = ["Dimension", "dimension_height_offset", "dimension_heights"]


class Dimension(Enum):
    """A world dimension."""

    OVERWORLD = "overworld"
    NETHER = "nether"
    END = "end"


_HEIGHT_OFFSETS = {
    Dimension.OVERWORLD: -64,
    Dimension.NETHER: -16,
    Dimension.END: 0,
}

_HEIGHTS = {
    Dimension.OVERWORLD: (-64, 320),
    Dimension.NETHER: (0, 256),
    Dimension.END: (-64, 256),
}


def dimension_height_offset(dimension: Dimension) -> int:
    """Offset added to heightmap values to obtain world Y coordinates."""
    return _HEIGHT_OFFSETS[Dimension(dimension)]


def dimension_heights(dimension: Dimension) -> tuple[int, int]:
    """The (minimum, maximum) Y used when shading heights."""
    return _HEIGHTS[Dimension(dimension)]