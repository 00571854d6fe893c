"""Read-only access to the on-disk SafeMode store.

This module is the only place that touches the store file.
Readers depend on the protocols below, never on the file layout.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterator, Mapping, Protocol

from core.constants import SAFE_MODE_FILE_NAME
from core.errors import StoreOpenError, StoreTableError
from core.logging_config import get_logger
from core.types import RawValue
from store.safe_mode_format import SafeModeDatabase, SafeModeFormatError, parse_safe_mode_file
from store.value_codec import split_tagged_value


_LOGGER = get_logger(__name__)


class ReadView(Protocol):
    """Read-only snapshot used for every lookup on one table."""


class StoreTable(Protocol):
    """One named table inside the store."""

    name: str

    def get(self, view: ReadView, key: bytes) -> RawValue | None:
        """Return the value stored under ``key`` or ``None``."""

    def iterate(self, view: ReadView) -> Iterator[tuple[bytes, RawValue]]:
        """Yield entries in the engine's native key order."""


class StoreEnvironment(Protocol):
    """Opened store holding a bounded set of named tables."""

    def open_table(self, name: str) -> StoreTable:
        """Open an existing table by name."""

    def read_view(self) -> ContextManager[ReadView]:
        """Return a read view, released when the block exits."""

    def close(self) -> None:
        """Release the environment."""


class SafeModeReadView:
    """Read view over the immutable snapshot parsed at open time."""


class SafeModeTable:
    """Named table whose values are rkv tagged values."""

    def __init__(self, name: str, database: SafeModeDatabase) -> None:
        self.name = name
        self._entries = database.entries
        self._index = dict(database.entries)

    def get(self, view: SafeModeReadView, key: bytes) -> RawValue | None:
        data = self._index.get(key)
        if data is None:
            return None
        return split_tagged_value(data)

    def iterate(self, view: SafeModeReadView) -> Iterator[tuple[bytes, RawValue]]:
        for key, data in self._entries:
            yield key, split_tagged_value(data)


class SafeModeEnvironment:
    """Read-only SafeMode environment loaded from one file."""

    def __init__(self, databases: Mapping[str | None, SafeModeDatabase]) -> None:
        self._databases = dict(databases)

    def open_table(self, name: str) -> SafeModeTable:
        """Open an existing named table.

        Args:
            name: Table name.

        Returns:
            Table handle.

        Raises:
            StoreTableError: If the table does not exist.
        """
        database = self._databases.get(name)
        if database is None:
            raise StoreTableError(f"Failed to open table '{name}': table not found in store.")
        return SafeModeTable(name, database)

    @contextmanager
    def read_view(self) -> Iterator[SafeModeReadView]:
        yield SafeModeReadView()

    def close(self) -> None:
        self._databases.clear()


def open_environment(path: Path, max_tables: int) -> SafeModeEnvironment:
    """Open an on-disk store read-only.

    Args:
        path: Store directory, or the ``data.safe.bin`` file itself.
        max_tables: Maximum number of named tables.

    Returns:
        Opened environment.

    Raises:
        StoreOpenError: If the store file is missing, unreadable, malformed,
            or holds more named tables than ``max_tables``.
    """
    store_path = path.expanduser()
    store_file = store_path / SAFE_MODE_FILE_NAME if store_path.is_dir() else store_path
    if not store_file.is_file():
        raise StoreOpenError(
            f"Store file does not exist at {store_file}. Pass the Nimbus database directory."
        )
    try:
        databases = parse_safe_mode_file(store_file.read_bytes())
    except OSError as error:
        raise StoreOpenError(f"Failed to read store at {store_file}: {error}") from error
    except SafeModeFormatError as error:
        raise StoreOpenError(f"Failed to parse store at {store_file}: {error}") from error
    named_tables = sorted(name for name in databases if name is not None)
    if len(named_tables) > max_tables:
        raise StoreOpenError(
            f"Store at {store_file} holds {len(named_tables)} named tables, "
            f"more than the configured capacity of {max_tables}."
        )
    _LOGGER.info("store_opened", path=str(store_file), tables=named_tables)
    return SafeModeEnvironment(databases)
