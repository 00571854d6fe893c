"""nimbus-dump exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each layer raises a specific error type so the CLI can report the
table, key, and underlying cause of any failure.
"""

from __future__ import annotations


class NimbusDumpError(Exception):
    """Base exception for all nimbus-dump failures."""


class NimbusDumpConfigError(NimbusDumpError):
    """Raised for invalid runtime configuration."""


class StoreError(NimbusDumpError):
    """Raised for storage engine failures."""


class StoreOpenError(StoreError):
    """Raised when the on-disk store cannot be opened."""


class StoreTableError(StoreError):
    """Raised when a named table cannot be opened."""


class MetadataError(NimbusDumpError):
    """Raised when the metadata table cannot yield participation settings."""


class MissingVersionError(MetadataError):
    """Raised when the schema version key is absent."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Database version missing: metadata key '{key}' not found.")
        self.key = key


class CorruptVersionError(MetadataError):
    """Raised when the schema version value cannot be decoded."""

    def __init__(self, key: str, cause: Exception) -> None:
        super().__init__(f"Could not read database version from key '{key}': {cause}")
        self.key = key
        self.cause = cause


class UnsupportedVersionError(MetadataError):
    """Raised for schema versions without a known participation layout."""

    def __init__(self, version: int) -> None:
        super().__init__(f"Unsupported database version {version}.")
        self.version = version


class MissingParticipationKeyError(MetadataError):
    """Raised when a participation key required by the layout is absent."""

    def __init__(self, key: str, version: int) -> None:
        super().__init__(
            f"Participation key '{key}' missing for database version {version}."
        )
        self.key = key
        self.version = version


class RecordDecodeError(NimbusDumpError):
    """Raised when a stored value cannot be decoded into a record."""


class UnsupportedValueEncodingError(RecordDecodeError):
    """Raised when a stored value is not structured JSON text."""


class SchemaMismatchError(RecordDecodeError):
    """Raised when decoded JSON does not match the expected record shape."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class TableDecodeError(NimbusDumpError):
    """Raised when any entry of a table fails to decode.

    Attributes:
        table_name: Table being read.
        key: Display form of the offending entry key.
        cause: Underlying decode failure.
    """

    def __init__(self, table_name: str, key: str, cause: Exception) -> None:
        super().__init__(f"Failed to decode {table_name} entry {key}: {cause}")
        self.table_name = table_name
        self.key = key
        self.cause = cause
