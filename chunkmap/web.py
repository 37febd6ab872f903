"""Rendering region file bytes straight to PNG buffers."""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from chunkmap.biomes import BiomeData
from chunkmap.dimensions import Dimension
from chunkmap.images import ImageError, ImageRenderType, create_region_images
from chunkmap.regions import parse_region_bytes

__all__ = ["RegionPng", "render_region_png"]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionPng:
    """A rendered region and its PNG-encoded image."""

    x: int
    z: int
    buffer: bytes


def render_region_png(
    data: bytes,
    block_colors: Mapping[str, tuple[int, int, int]],
    biomes_data: Mapping[str, BiomeData],
) -> list[RegionPng]:
    """Render the overworld textures of a region file to PNG images."""
    region = parse_region_bytes(data)
    try:
        images = create_region_images(
            region.chunks,
            Dimension.OVERWORLD,
            ImageRenderType.TEXTURES,
            block_colors,
            biomes_data,
        )
    except (ValueError, KeyError) as exc:
        message = f"Failed to create region images: {exc}"
        _log.error(message)
        raise ImageError(message) from exc

    rendered = []
    for x, z, image in images:
        _log.debug("Creating image %d.%d", x, z)
        out = io.BytesIO()
        image.save(out, format="PNG")
        rendered.append(RegionPng(x, z, out.getvalue()))
    return rendered