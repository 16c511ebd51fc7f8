"""A compact separator-delimited binary record format.

Values are written one after another, each followed by a unit separator.
Integers use zig-zag varints, floats store their IEEE-754 bits as an
unsigned varint, and records end with a record separator.
"""

from __future__ import annotations

import struct

TRUE = 0x01
FALSE = 0x00
US = 0x1F  # unit separator
RS = 0x1E  # record separator
GS = 0x1D  # group separator

_MAX_VARINT_LEN = 10
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1


class FormatError(ValueError):
    """Raised when encoded data is truncated or malformed."""


def _encode_uvarint(value: int) -> bytes:
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


class RecordWriter:
    """Accumulates encoded values in memory."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buf)

    def write_unit_separator(self) -> None:
        self._buf.append(US)

    def write_group_separator(self) -> None:
        self._buf.append(GS)

    def write_end_of_record(self) -> None:
        self._buf.append(RS)

    def write_bool(self, value: bool) -> None:
        self._buf.append(TRUE if value else FALSE)
        self.write_unit_separator()

    def write_string(self, value: str) -> None:
        self._buf.extend(value.encode("utf-8"))
        self.write_unit_separator()

    def write_int(self, value: int) -> None:
        """Write a signed 64-bit integer as a zig-zag varint."""
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"integer out of 64-bit range: {value}")
        zigzag = value << 1 if value >= 0 else ((~value) << 1) | 1
        self._buf.extend(_encode_uvarint(zigzag))
        self.write_unit_separator()

    def write_float(self, value: float) -> None:
        (bits,) = struct.unpack("<Q", struct.pack("<d", value))
        self._buf.extend(_encode_uvarint(bits))
        self.write_unit_separator()

    def write_optional_string(self, value: str | None) -> None:
        """Write a string that may be absent."""
        self.write_bool(value is None)
        if value is not None:
            self._buf.extend(value.encode("utf-8"))
        self.write_unit_separator()


class RecordReader:
    """Reads values written by RecordWriter, in the same order."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def _read_byte(self) -> int:
        if self._pos >= len(self._data):
            raise FormatError("unexpected end of data")
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def _expect(self, marker: int, message: str) -> None:
        if self._read_byte() != marker:
            raise FormatError(message)

    def read_unit_separator(self) -> None:
        self._expect(US, "invalid format, no unit separator found")

    def read_group_separator(self) -> None:
        self._expect(GS, "invalid format, no group separator found")

    def read_end_of_record(self) -> None:
        self._expect(RS, "expected end of record, but not found")

    def read_bool(self) -> bool:
        byte = self._read_byte()
        self.read_unit_separator()
        return byte == TRUE

    def _read_raw_string(self) -> str:
        end = self._data.find(bytes([US]), self._pos)
        if end < 0:
            self._pos = len(self._data)
            raise FormatError("unexpected end of data")
        raw = self._data[self._pos:end]
        self._pos = end + 1
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FormatError(f"invalid UTF-8 in string: {exc}") from exc

    def read_string(self) -> str:
        return self._read_raw_string()

    def _read_uvarint(self) -> int:
        value = 0
        shift = 0
        for i in range(_MAX_VARINT_LEN):
            byte = self._read_byte()
            if byte < 0x80:
                if i == _MAX_VARINT_LEN - 1 and byte > 1:
                    raise FormatError("varint overflows a 64-bit integer")
                return value | (byte << shift)
            value |= (byte & 0x7F) << shift
            shift += 7
        raise FormatError("varint overflows a 64-bit integer")

    def read_int(self) -> int:
        zigzag = self._read_uvarint()
        value = zigzag >> 1
        if zigzag & 1:
            value = ~value
        self.read_unit_separator()
        return value

    def read_float(self) -> float:
        bits = self._read_uvarint()
        self.read_unit_separator()
        (value,) = struct.unpack("<d", struct.pack("<Q", bits & _UINT64_MAX))
        return value

    def read_optional_string(self) -> str | None:
        """Read a string written by write_optional_string."""
        if self.read_bool():
            self.read_unit_separator()
            return None
        return self._read_raw_string()