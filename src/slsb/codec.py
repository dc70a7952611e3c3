"""Big-endian binary codec for the compiled registry.

Every codec exposes a matching pair of operations:

``size(value)``
    The exact number of bytes ``write`` will produce.
``write(value, writer)``
    Append the encoded bytes to a :class:`ByteWriter`.

:func:`encode` sizes the value first, reserves a buffer of exactly that many
bytes and then writes into it, so any disagreement between the two surfaces
as an :class:`~slsb.errors.EncodeError` instead of a corrupt artifact.

Models take part through the :class:`Encodable` protocol and the
:data:`MODEL` codec.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from slsb.errors import EncodeError

_COUNT = struct.Struct(">Q")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class ByteWriter:
    """Fixed-capacity output buffer with a write cursor."""

    def __init__(self, capacity: int) -> None:
        self._buf = bytearray(capacity)
        self._pos = 0

    @property
    def capacity(self) -> int:
        return len(self._buf)

    @property
    def position(self) -> int:
        return self._pos

    def pack(self, fmt: struct.Struct, *values: Any) -> None:
        end = self._pos + fmt.size
        if end > len(self._buf):
            msg = f"write of {fmt.size} bytes at offset {self._pos} exceeds reserved {len(self._buf)}"
            raise EncodeError(msg)
        try:
            fmt.pack_into(self._buf, self._pos, *values)
        except struct.error as exc:
            msg = f"cannot pack {values!r} as {fmt.format!r}: {exc}"
            raise EncodeError(msg) from None
        self._pos = end

    def extend(self, data: bytes) -> None:
        end = self._pos + len(data)
        if end > len(self._buf):
            msg = f"write of {len(data)} bytes at offset {self._pos} exceeds reserved {len(self._buf)}"
            raise EncodeError(msg)
        self._buf[self._pos:end] = data
        self._pos = end

    def getvalue(self) -> bytes:
        """Return the buffer, which must have been filled exactly."""
        if self._pos != len(self._buf):
            msg = f"wrote {self._pos} bytes but reserved {len(self._buf)}"
            raise EncodeError(msg)
        return bytes(self._buf)


@runtime_checkable
class Encodable(Protocol):
    """An object that knows its own encoded size and layout."""

    def byte_size(self) -> int: ...

    def write_bytes(self, writer: ByteWriter) -> None: ...


class Codec(Protocol):
    def size(self, value: Any) -> int: ...

    def write(self, value: Any, writer: ByteWriter) -> None: ...


@dataclass(frozen=True)
class FixedInt:
    """Unsigned fixed-width big-endian integer."""

    fmt: struct.Struct

    def size(self, value: int) -> int:
        return self.fmt.size

    def write(self, value: int, writer: ByteWriter) -> None:
        writer.pack(self.fmt, value)


class _Bool:
    _fmt = struct.Struct(">B")

    def size(self, value: bool) -> int:
        return 1

    def write(self, value: bool, writer: ByteWriter) -> None:
        writer.pack(self._fmt, 1 if value else 0)


class _Text:
    def size(self, value: str) -> int:
        return _COUNT.size + len(value.encode("utf-8"))

    def write(self, value: str, writer: ByteWriter) -> None:
        data = value.encode("utf-8")
        writer.pack(_COUNT, len(data))
        writer.extend(data)


def to_millis(value: float) -> int:
    """Convert a 32-bit float to fixed-point thousandths.

    The value is narrowed to single precision, scaled by 1000 in single
    precision and rounded half away from zero.
    """
    if not math.isfinite(value):
        msg = f"cannot encode non-finite float {value!r}"
        raise EncodeError(msg)
    try:
        single = struct.unpack(">f", struct.pack(">f", value))[0]
        scaled = struct.unpack(">f", struct.pack(">f", single * 1000.0))[0]
    except OverflowError:
        msg = f"float {value!r} is out of single precision range"
        raise EncodeError(msg) from None
    if not math.isfinite(scaled):
        msg = f"float {value!r} overflows when scaled to millis"
        raise EncodeError(msg)
    millis = int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))
    if not _I32_MIN <= millis <= _I32_MAX:
        msg = f"float {value!r} does not fit a 32-bit millis value"
        raise EncodeError(msg)
    return millis


class _Millis:
    _fmt = struct.Struct(">i")

    def size(self, value: float) -> int:
        return self._fmt.size

    def write(self, value: float, writer: ByteWriter) -> None:
        writer.pack(self._fmt, to_millis(value))


class _Model:
    def size(self, value: Encodable) -> int:
        return value.byte_size()

    def write(self, value: Encodable, writer: ByteWriter) -> None:
        value.write_bytes(writer)


@dataclass(frozen=True)
class SequenceOf:
    """u64 element count followed by each element in order."""

    item: Codec

    def size(self, value: Sequence[Any]) -> int:
        return _COUNT.size + sum(self.item.size(v) for v in value)

    def write(self, value: Sequence[Any], writer: ByteWriter) -> None:
        writer.pack(_COUNT, len(value))
        for v in value:
            self.item.write(v, writer)


@dataclass(frozen=True)
class MappingOf:
    """u64 pair count followed by each key and value.

    Keys are written in sorted order unless *sort_keys* is false, in which case
    the mapping's own iteration order is used.
    """

    key: Codec
    value: Codec
    sort_keys: bool = True

    def _items(self, value: Mapping[Any, Any]) -> list[tuple[Any, Any]]:
        items = list(value.items())
        if self.sort_keys:
            items.sort(key=lambda kv: kv[0])
        return items

    def size(self, value: Mapping[Any, Any]) -> int:
        return _COUNT.size + sum(
            self.key.size(k) + self.value.size(v) for k, v in value.items()
        )

    def write(self, value: Mapping[Any, Any], writer: ByteWriter) -> None:
        writer.pack(_COUNT, len(value))
        for k, v in self._items(value):
            self.key.write(k, writer)
            self.value.write(v, writer)


U8 = FixedInt(struct.Struct(">B"))
U32 = FixedInt(struct.Struct(">I"))
U64 = FixedInt(struct.Struct(">Q"))
BOOL = _Bool()
TEXT = _Text()
MILLIS = _Millis()
MODEL = _Model()


def write_count(count: int, writer: ByteWriter) -> None:
    """Write a bare u64 count prefix."""
    writer.pack(_COUNT, count)


def count_size() -> int:
    return _COUNT.size


def encode(value: Any, codec: Codec = MODEL) -> bytes:
    """Encode *value* into a buffer reserved from ``codec.size(value)``."""
    writer = ByteWriter(codec.size(value))
    codec.write(value, writer)
    return writer.getvalue()
