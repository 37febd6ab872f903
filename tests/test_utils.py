import pytest

from chunkmap.dimensions import Dimension, dimension_heights
from chunkmap.utils import (
    apply_blue_tint,
    biome_index,
    chunk_to_region_coords,
    depth_to_alpha,
    downfall_color,
    height_color,
    linear_color,
    temperature_color,
    u32_to_rgb,
)


def test_u32_to_rgb_splits_bytes():
    assert u32_to_rgb(0x123456) == (0x12, 0x34, 0x56)


def test_u32_to_rgb_ignores_high_byte():
    assert u32_to_rgb(0xFF123456) == u32_to_rgb(0x123456)


@pytest.mark.parametrize("x", range(-100, 100, 7))
def test_chunk_to_region_coords_contains_chunk(x):
    rx, rz = chunk_to_region_coords(x, -x)
    assert rx * 32 <= x < rx * 32 + 32
    assert rz * 32 <= -x < rz * 32 + 32


def test_chunk_to_region_coords_negative_floor():
    assert chunk_to_region_coords(-1, -1) == (-1, -1)


def test_biome_index_covers_all_cells():
    indices = {biome_index(x, z) for x in range(16) for z in range(16)}
    assert indices == set(range(16))


def test_biome_index_corners():
    assert biome_index(0, 0) == 0
    assert biome_index(15, 15) == 15


def test_depth_to_alpha_bounds():
    assert depth_to_alpha(0) == 0.0
    assert depth_to_alpha(10) == pytest.approx(0.7)
    assert depth_to_alpha(500) == pytest.approx(0.7)


def test_depth_to_alpha_monotonic_in_range():
    values = [depth_to_alpha(d) for d in range(1, 11)]
    assert values == sorted(values)
    assert all(0.4 <= v <= 0.7 for v in values)


def test_apply_blue_tint_depth_zero_unchanged():
    assert apply_blue_tint((10, 20, 30), 0, (0, 0, 255)) == (10, 20, 30)


def test_apply_blue_tint_same_color_unchanged():
    assert apply_blue_tint((63, 118, 228), 7, (63, 118, 228)) == (63, 118, 228)


@pytest.mark.parametrize("depth", [1, 3, 9, 12])
def test_apply_blue_tint_between_colors(depth):
    base = (200, 50, 0)
    water = (0, 100, 255)
    tinted = apply_blue_tint(base, depth, water)
    for b, w, t in zip(base, water, tinted):
        assert min(b, w) <= t <= max(b, w)


@pytest.mark.parametrize("dimension", list(Dimension))
def test_height_color_extremes(dimension):
    low, high = dimension_heights(dimension)
    assert height_color(low, dimension) == (0, 0, 0)
    assert height_color(high, dimension) == (255, 255, 255)
    assert height_color(low - 100, dimension) == height_color(low, dimension)
    assert height_color(high + 100, dimension) == height_color(high, dimension)


def test_height_color_is_grey_and_monotonic():
    colors = [height_color(y, Dimension.OVERWORLD) for y in range(-64, 321, 16)]
    assert all(r == g == b for r, g, b in colors)
    assert [c[0] for c in colors] == sorted(c[0] for c in colors)


def test_temperature_color_endpoints():
    assert temperature_color(-1.0) == (64, 125, 237)
    assert temperature_color(2.0) == (250, 118, 77)


def test_temperature_color_clamps():
    assert temperature_color(-5.0) == temperature_color(-1.0)
    assert temperature_color(10.0) == temperature_color(2.0)


def test_downfall_color_endpoints_and_grey():
    assert downfall_color(0.0) == (0, 0, 0)
    assert downfall_color(1.0) == (255, 255, 255)
    r, g, b = downfall_color(0.4)
    assert r == g == b
    assert downfall_color(-3.0) == downfall_color(0.0)


def test_linear_color_endpoints():
    assert linear_color(0.0, 0.0, 1_600_000.0) == (0, 0, 0)
    assert linear_color(1_600_000.0, 0.0, 1_600_000.0) == (255, 255, 255)
    assert linear_color(9_000_000.0, 0.0, 1_600_000.0) == (255, 255, 255)


def test_linear_color_monotonic():
    levels = [linear_color(v, 0.0, 100.0)[0] for v in range(0, 101, 5)]
    assert levels == sorted(levels)