"""Flat binary container for records crossing a process boundary.

Values are written sequentially with no field tags, so reader and writer must
agree on order. Integers are little-endian signed 32-bit. Strings are an
int32 byte length (-1 for None) followed by the UTF-8 payload padded with
zero bytes to a 4-byte boundary.
"""

import struct

from src.domain.errors import SerializationMismatchError

_INT32 = struct.Struct("<i")
_NULL_LENGTH = -1


def _padding(length: int) -> int:
    return (4 - length % 4) % 4


class ParcelWriter:
    """Append-only writer producing the parcel byte stream."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write_int(self, value: int) -> None:
        try:
            self._buffer += _INT32.pack(value)
        except struct.error as e:
            raise ValueError(f"Value {value} does not fit in 32 bits") from e

    def write_bool(self, value: bool) -> None:
        self.write_int(1 if value else 0)

    def write_string(self, value: str | None) -> None:
        if value is None:
            self.write_int(_NULL_LENGTH)
            return
        payload = value.encode("utf-8")
        self.write_int(len(payload))
        self._buffer += payload
        self._buffer += b"\x00" * _padding(len(payload))

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)


class ParcelReader:
    """Sequential reader over a parcel byte stream.

    Every read checks the remaining length; running short raises
    :class:`SerializationMismatchError` instead of producing defaults.
    """

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(bytes(data))
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._position

    def _take(self, size: int, what: str) -> memoryview:
        if size > self.remaining:
            raise SerializationMismatchError(
                f"Truncated parcel reading {what}: need {size} bytes at offset "
                f"{self._position}, {self.remaining} left"
            )
        chunk = self._data[self._position : self._position + size]
        self._position += size
        return chunk

    def read_int(self, what: str = "int") -> int:
        return _INT32.unpack(self._take(_INT32.size, what))[0]

    def read_bool(self, what: str = "bool") -> bool:
        value = self.read_int(what)
        if value not in (0, 1):
            raise SerializationMismatchError(f"Invalid boolean {value} for {what}")
        return value == 1

    def read_string(self, what: str = "string") -> str | None:
        length = self.read_int(f"{what} length")
        if length == _NULL_LENGTH:
            return None
        if length < 0:
            raise SerializationMismatchError(f"Negative length {length} for {what}")
        payload = bytes(self._take(length, what))
        self._take(_padding(length), f"{what} padding")
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SerializationMismatchError(f"Invalid UTF-8 in {what}") from e

    def expect_end(self) -> None:
        if self.remaining:
            raise SerializationMismatchError(
                f"{self.remaining} unexpected trailing bytes after record"
            )
