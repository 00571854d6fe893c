"""Generic all-or-nothing table drain.

This module iterates one table, decodes every entry, and aborts on the
first failure with the table name and offending key attached.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from core.errors import RecordDecodeError, TableDecodeError
from core.logging_config import get_logger
from core.types import RawValue
from store.environment import ReadView, StoreTable

_LOGGER = get_logger(__name__)

RecordT = TypeVar("RecordT")


def read_table(
    table: StoreTable,
    view: ReadView,
    table_name: str,
    decode_entry: Callable[[bytes, RawValue], RecordT],
) -> list[RecordT]:
    """Decode every entry of a table in native key order.

    Args:
        table: Opened table.
        view: Read view held for the duration of the drain.
        table_name: Table name used in error context.
        decode_entry: Decoder for one ``(key, value)`` entry.

    Returns:
        Decoded records; empty when the table has no entries.

    Raises:
        TableDecodeError: If any entry fails to decode. No partial
            result is returned.
    """
    records: list[RecordT] = []
    for key, raw_value in table.iterate(view):
        try:
            records.append(decode_entry(key, raw_value))
        except RecordDecodeError as error:
            display_key = format_key(key)
            _LOGGER.warning(
                "table_decode_failed",
                table=table_name,
                key=display_key,
                error=str(error),
            )
            raise TableDecodeError(table_name, display_key, error) from error
    _LOGGER.debug("table_read", table=table_name, record_count=len(records))
    return records


def format_key(key: bytes) -> str:
    """Render a key for diagnostics: quoted text, or a bytes literal."""
    try:
        return f'"{key.decode("utf-8")}"'
    except UnicodeDecodeError:
        return repr(key)
