import json

import pytest

from chunkmap.biomes import BiomeData
from chunkmap.block_colors import (
    UNKNOWN_BLOCK_COLOR,
    get_block_color,
    load_block_colors,
    parse_block_colors,
)
from chunkmap.utils import u32_to_rgb

BIOME = BiomeData(
    name="plains",
    temperature=0.8,
    downfall=0.4,
    foliage_color=0x77AB2F,
    grass_color=0x91BD59,
    water_color=0x3F76E4,
)
COLORS = {"stone": (125, 125, 125), "birch_leaves": (128, 167, 85)}


def color(name, snowy=False, unknown=None):
    return get_block_color(name, snowy, BIOME, COLORS, set() if unknown is None else unknown)


def test_snowy_is_white():
    assert color("minecraft:stone", snowy=True) == (255, 255, 255)


@pytest.mark.parametrize("name", ["minecraft:air", "cave_air"])
def test_air_is_black(name):
    assert color(name) == (0, 0, 0)


def test_lava():
    assert color("minecraft:lava") == (255, 100, 0)


def test_biome_tinted_blocks():
    assert color("minecraft:grass_block") == u32_to_rgb(BIOME.grass_color)
    assert color("minecraft:water") == u32_to_rgb(BIOME.water_color)
    assert color("minecraft:oak_leaves") == u32_to_rgb(BIOME.foliage_color)


def test_untinted_leaves_use_table():
    assert color("minecraft:birch_leaves") == COLORS["birch_leaves"]


def test_prefix_is_optional():
    assert color("minecraft:stone") == color("stone") == COLORS["stone"]


def test_unknown_block_recorded():
    unknown = set()
    assert color("minecraft:mystery_block", unknown=unknown) == UNKNOWN_BLOCK_COLOR
    assert unknown == {"mystery_block"}


def test_unknown_block_colour_value():
    assert color("minecraft:not_in_table") == (233, 66, 245)


def test_parse_block_colors():
    parsed = parse_block_colors(json.dumps({"stone": "#7d7d7d", "dirt": "866043"}))
    assert parsed == {"stone": (0x7D, 0x7D, 0x7D), "dirt": (0x86, 0x60, 0x43)}


@pytest.mark.parametrize("bad", ["#fff", "#gggggg", "#1234567", ""])
def test_parse_invalid_colour_raises(bad):
    with pytest.raises(ValueError, match="Invalid color"):
        parse_block_colors(json.dumps({"stone": bad}))


def test_parse_invalid_json_raises():
    with pytest.raises(ValueError):
        parse_block_colors("{")


def test_load_block_colors(tmp_path):
    path = tmp_path / "blocks.json"
    path.write_text(json.dumps({"stone": "#7d7d7d"}), encoding="utf-8")
    assert load_block_colors(path) == {"stone": (0x7D, 0x7D, 0x7D)}