import pytest

from chunkmap.nbt import (
    Byte,
    ByteArray,
    Double,
    Float,
    Int,
    IntArray,
    Long,
    LongArray,
    NbtError,
    Short,
    dumps,
    loads,
)

RAW_ROOT = b"\x0a\x00\x04root\x03\x00\x01a\x00\x00\x00\x05\x00"

SAMPLE = {
    "DataVersion": Int(3953),
    "LastUpdate": Long(-5),
    "Status": "minecraft:full",
    "flag": Byte(-1),
    "short": Short(300),
    "f": Float(0.5),
    "d": Double(-2.25),
    "bytes": ByteArray([-128, 0, 127]),
    "ints": IntArray([-(1 << 31), (1 << 31) - 1]),
    "longs": LongArray([-(1 << 63), (1 << 63) - 1]),
    "list": [Int(1), Int(2)],
    "empty": [],
    "nested": {"sections": [{"Y": Byte(-4)}, {"Y": Byte(3)}]},
    "text": "h\u00e9llo \U0001f642 \x00 end",
}


def test_round_trip_preserves_values():
    assert loads(dumps(SAMPLE, "chunk")) == SAMPLE


@pytest.mark.parametrize(
    "key, cls",
    [
        ("DataVersion", Int),
        ("LastUpdate", Long),
        ("flag", Byte),
        ("short", Short),
        ("f", Float),
        ("d", Double),
        ("bytes", ByteArray),
        ("ints", IntArray),
        ("longs", LongArray),
        ("empty", list),
        ("nested", dict),
        ("text", str),
    ],
)
def test_round_trip_preserves_tag_types(key, cls):
    result = loads(dumps(SAMPLE))
    assert type(result[key]) is cls
    assert result[key] == SAMPLE[key]


def test_list_elements_keep_their_tag():
    result = loads(dumps({"l": [Long(7), Long(-7)]}))
    assert [type(v) for v in result["l"]] == [Long, Long]
    assert result["l"] == [7, -7]


def test_loads_known_bytes():
    result = loads(RAW_ROOT)
    assert result == {"a": 5}
    assert type(result["a"]) is Int


def test_dumps_matches_wire_format():
    assert dumps({"a": Int(5)}, "root") == RAW_ROOT


def test_null_character_uses_modified_utf8():
    encoded = dumps({"s": "\x00"})
    assert b"\x00\x02\xc0\x80" in encoded
    assert loads(encoded) == {"s": "\x00"}


def test_supplementary_character_round_trips():
    text = "\U0001f642\U0001f600"
    encoded = dumps({"s": text})
    assert text.encode("utf-8") not in encoded
    assert loads(encoded)["s"] == text


def test_negative_list_length_reads_as_empty():
    raw = b"\x0a\x00\x00\x09\x00\x01l\x03\xff\xff\xff\xff\x00"
    assert loads(raw) == {"l": []}


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"\x00",
        RAW_ROOT[:-3],
        b"\x0d\x00\x00",
        b"\x0a\x00\x00\x0c\x00\x01a\xff\xff\xff\xff\x00",
        b"\x0a\x00\x00\x09\x00\x01l\x00\x00\x00\x00\x02\x00",
    ],
)
def test_malformed_data_raises(raw):
    with pytest.raises(NbtError):
        loads(raw)


def test_deep_nesting_raises():
    raw = b"\x09\x00\x00" + b"\x09\x00\x00\x00\x01" * 600 + b"\x00\x00\x00\x00\x00"
    with pytest.raises(NbtError):
        loads(raw)


@pytest.mark.parametrize(
    "value",
    [
        {"a": 5},
        {"a": True},
        {"a": 1.5},
        {"a": (1, 2)},
        {"a": None},
        {"l": [Int(1), "x"]},
        {"b": Byte(300)},
        {"i": Int(1 << 40)},
        {1: Int(1)},
    ],
)
def test_unencodable_values_raise(value):
    with pytest.raises(NbtError):
        dumps(value)