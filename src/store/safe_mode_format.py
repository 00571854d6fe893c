"""Parser for rkv SafeMode database files.

A SafeMode store is one bincode file, ``data.safe.bin``, holding a map
from optional table name to database. Each database is a ``u32`` flags
value followed by a map of key bytes to value bytes. Lengths are
little-endian ``u64`` prefixes; an ``Option`` is a 0/1 tag byte.
"""

from __future__ import annotations

from dataclasses import dataclass
import struct

_U8 = struct.Struct("<B")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


class SafeModeFormatError(ValueError):
    """Raised when a SafeMode file does not follow the bincode layout."""


@dataclass(frozen=True)
class SafeModeDatabase:
    """One decoded table.

    Attributes:
        flags: Raw database flag bits.
        entries: ``(key, value)`` pairs sorted by key bytes.
    """

    flags: int
    entries: tuple[tuple[bytes, bytes], ...]


class _BincodeReader:
    """Sequential reader over a bincode byte buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def read_u8(self) -> int:
        return self._unpack(_U8)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_u64(self) -> int:
        return self._unpack(_U64)

    def read_bytes(self) -> bytes:
        length = self.read_u64()
        if length > self.remaining:
            raise SafeModeFormatError(
                f"byte string of length {length} at offset {self._offset} "
                f"overruns file ({self.remaining} bytes left)"
            )
        start = self._offset
        self._offset += length
        return self._data[start : self._offset]

    def read_string(self) -> str:
        offset = self._offset
        raw = self.read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as error:
            raise SafeModeFormatError(
                f"table name at offset {offset} is not UTF-8: {error.reason}"
            ) from error

    def read_optional_string(self) -> str | None:
        tag = self.read_u8()
        if tag == 0:
            return None
        if tag == 1:
            return self.read_string()
        raise SafeModeFormatError(f"invalid option tag {tag} at offset {self._offset - 1}")

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _unpack(self, layout: struct.Struct) -> int:
        if layout.size > self.remaining:
            raise SafeModeFormatError(
                f"unexpected end of file at offset {self._offset}: "
                f"needed {layout.size} bytes, {self.remaining} left"
            )
        (value,) = layout.unpack_from(self._data, self._offset)
        self._offset += layout.size
        return int(value)


def parse_safe_mode_file(data: bytes) -> dict[str | None, SafeModeDatabase]:
    """Decode the contents of a ``data.safe.bin`` file.

    Args:
        data: Whole file contents.

    Returns:
        Databases keyed by table name; ``None`` is the unnamed database.

    Raises:
        SafeModeFormatError: If the file is truncated, has trailing bytes,
            or contains invalid tags or names.
    """
    reader = _BincodeReader(data)
    databases: dict[str | None, SafeModeDatabase] = {}
    for _ in range(reader.read_u64()):
        name = reader.read_optional_string()
        databases[name] = _read_database(reader)
    if reader.remaining:
        raise SafeModeFormatError(f"{reader.remaining} trailing bytes after last table")
    return databases


def _read_database(reader: _BincodeReader) -> SafeModeDatabase:
    flags = reader.read_u32()
    entries = {}
    for _ in range(reader.read_u64()):
        key = reader.read_bytes()
        entries[key] = reader.read_bytes()
    return SafeModeDatabase(flags=flags, entries=tuple(sorted(entries.items())))
