"""Reading and writing the NBT binary format (big-endian, uncompressed).

Values map onto Python types as follows: compounds are ``dict`` with ``str``
keys, lists are ``list``, strings are ``str``. Numeric tags and arrays use the
typed wrappers below so that the original tag survives a round trip.
"""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import Any

__all__ = [
    "NbtError",
    "Byte",
    "Short",
    "Int",
    "Long",
    "Float",
    "Double",
    "ByteArray",
    "IntArray",
    "LongArray",
    "loads",
    "dumps",
]

_MAX_DEPTH = 512


class NbtError(ValueError):
    """Raised when NBT data cannot be read or a value cannot be written."""


class _TypedInt(int):
    __slots__ = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class _TypedFloat(float):
    __slots__ = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self)!r})"


class _TypedArray(tuple):
    __slots__ = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class Byte(_TypedInt):
    """Signed 8-bit integer tag."""


class Short(_TypedInt):
    """Signed 16-bit integer tag."""


class Int(_TypedInt):
    """Signed 32-bit integer tag."""


class Long(_TypedInt):
    """Signed 64-bit integer tag."""


class Float(_TypedFloat):
    """32-bit floating point tag."""


class Double(_TypedFloat):
    """64-bit floating point tag."""


class ByteArray(_TypedArray):
    """Array of signed 8-bit integers."""


class IntArray(_TypedArray):
    """Array of signed 32-bit integers."""


class LongArray(_TypedArray):
    """Array of signed 64-bit integers."""


class _Tag(IntEnum):
    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12


_SCALARS: dict[_Tag, tuple[type, str]] = {
    _Tag.BYTE: (Byte, "b"),
    _Tag.SHORT: (Short, "h"),
    _Tag.INT: (Int, "i"),
    _Tag.LONG: (Long, "q"),
    _Tag.FLOAT: (Float, "f"),
    _Tag.DOUBLE: (Double, "d"),
}

_ARRAYS: dict[_Tag, tuple[type, str]] = {
    _Tag.BYTE_ARRAY: (ByteArray, "b"),
    _Tag.INT_ARRAY: (IntArray, "i"),
    _Tag.LONG_ARRAY: (LongArray, "q"),
}

_TAG_BY_TYPE: dict[type, _Tag] = {
    **{cls: tag for tag, (cls, _) in _SCALARS.items()},
    **{cls: tag for tag, (cls, _) in _ARRAYS.items()},
    str: _Tag.STRING,
    list: _Tag.LIST,
    dict: _Tag.COMPOUND,
}


def _decode_mutf8(raw: bytes) -> str:
    try:
        text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
    except UnicodeDecodeError as exc:
        raise NbtError(f"invalid string data: {exc}") from exc
    try:
        # Join surrogate pairs into supplementary characters.
        return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeDecodeError:
        return text


def _encode_mutf8(text: str) -> bytes:
    units = text.encode("utf-16-be", "surrogatepass")
    halves = "".join(chr(unit) for (unit,) in struct.iter_unpack(">H", units))
    return halves.encode("utf-8", "surrogatepass").replace(b"\x00", b"\xc0\x80")


class _Reader:
    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._view = memoryview(data).cast("B")
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if size < 0 or end > len(self._view):
            raise NbtError("unexpected end of NBT data")
        chunk = self._view[self._pos:end].tobytes()
        self._pos = end
        return chunk

    def unpack(self, fmt: str) -> tuple[Any, ...]:
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))

    def tag(self) -> _Tag:
        (raw,) = self.unpack(">B")
        try:
            return _Tag(raw)
        except ValueError:
            raise NbtError(f"unknown tag type {raw}") from None

    def string(self) -> str:
        (length,) = self.unpack(">H")
        return _decode_mutf8(self.take(length))

    def payload(self, tag: _Tag, depth: int) -> Any:
        if depth > _MAX_DEPTH:
            raise NbtError("NBT data nested too deeply")
        if tag in _SCALARS:
            cls, fmt = _SCALARS[tag]
            return cls(self.unpack(">" + fmt)[0])
        if tag in _ARRAYS:
            cls, fmt = _ARRAYS[tag]
            (count,) = self.unpack(">i")
            if count < 0:
                raise NbtError(f"negative array length {count}")
            size = struct.calcsize(fmt)
            return cls(struct.unpack(f">{count}{fmt}", self.take(count * size)))
        if tag is _Tag.STRING:
            return self.string()
        if tag is _Tag.LIST:
            element = self.tag()
            (count,) = self.unpack(">i")
            if count <= 0:
                return []
            if element is _Tag.END:
                raise NbtError("non-empty list of End tags")
            return [self.payload(element, depth + 1) for _ in range(count)]
        if tag is _Tag.COMPOUND:
            compound: dict[str, Any] = {}
            while (child := self.tag()) is not _Tag.END:
                name = self.string()
                compound[name] = self.payload(child, depth + 1)
            return compound
        raise NbtError(f"unexpected tag type {tag.name}")


def loads(data: bytes | bytearray | memoryview) -> Any:
    """Decode uncompressed NBT data and return the value of its root tag."""
    reader = _Reader(data)
    tag = reader.tag()
    if tag is _Tag.END:
        raise NbtError("root tag is End")
    reader.string()
    return reader.payload(tag, 0)


def _tag_of(value: Any) -> _Tag:
    for cls in type(value).__mro__:
        tag = _TAG_BY_TYPE.get(cls)
        if tag is not None:
            return tag
        if cls in (int, float, tuple):
            break
    raise NbtError(f"cannot encode value of type {type(value).__name__}: {value!r}")


def _write_string(out: bytearray, text: str) -> None:
    raw = _encode_mutf8(text)
    if len(raw) > 0xFFFF:
        raise NbtError("string too long for NBT")
    out += struct.pack(">H", len(raw))
    out += raw


def _write_payload(out: bytearray, tag: _Tag, value: Any, depth: int) -> None:
    if depth > _MAX_DEPTH:
        raise NbtError("value nested too deeply")
    try:
        if tag in _SCALARS:
            out += struct.pack(">" + _SCALARS[tag][1], value)
        elif tag in _ARRAYS:
            fmt = _ARRAYS[tag][1]
            out += struct.pack(f">i{len(value)}{fmt}", len(value), *value)
        elif tag is _Tag.STRING:
            _write_string(out, value)
        elif tag is _Tag.LIST:
            tags = {_tag_of(item) for item in value}
            if len(tags) > 1:
                raise NbtError("list elements must share one tag type")
            element = tags.pop() if tags else _Tag.END
            out += struct.pack(">Bi", element, len(value))
            for item in value:
                _write_payload(out, element, item, depth + 1)
        else:
            for name, item in value.items():
                if not isinstance(name, str):
                    raise NbtError(f"compound key must be a string, got {name!r}")
                child = _tag_of(item)
                out.append(child)
                _write_string(out, name)
                _write_payload(out, child, item, depth + 1)
            out.append(_Tag.END)
    except struct.error as exc:
        raise NbtError(f"value out of range for {tag.name}: {exc}") from exc


def dumps(value: Any, name: str = "") -> bytes:
    """Encode ``value`` as an uncompressed named root tag."""
    tag = _tag_of(value)
    out = bytearray([tag])
    _write_string(out, name)
    _write_payload(out, tag, value, 0)
    return bytes(out)