import pytest

from chunkmap.dimensions import Dimension, dimension_height_offset, dimension_heights


@pytest.mark.parametrize(
    "dimension, offset",
    [(Dimension.OVERWORLD, -64), (Dimension.NETHER, -16), (Dimension.END, 0)],
)
def test_height_offsets(dimension, offset):
    assert dimension_height_offset(dimension) == offset


@pytest.mark.parametrize(
    "dimension, heights",
    [
        (Dimension.OVERWORLD, (-64, 320)),
        (Dimension.NETHER, (0, 256)),
        (Dimension.END, (-64, 256)),
    ],
)
def test_heights(dimension, heights):
    assert dimension_heights(dimension) == heights


@pytest.mark.parametrize("dimension", list(Dimension))
def test_heights_are_ordered(dimension):
    low, high = dimension_heights(dimension)
    assert low < high


def test_dimension_from_name():
    assert Dimension("nether") is Dimension.NETHER
    assert dimension_height_offset("end") == dimension_height_offset(Dimension.END)


def test_unknown_dimension_raises():
    with pytest.raises(ValueError):
        dimension_heights("moon")