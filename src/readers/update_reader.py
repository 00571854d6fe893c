"""Pending updates table reader.

Only the envelope is checked here: the key must be UTF-8 text and the
value must be parseable JSON. The JSON tree itself is left as stored.
"""

from __future__ import annotations

from core.constants import UPDATES_TABLE_NAME
from core.errors import SchemaMismatchError
from core.record_shapes import JSON_TREE
from core.types import RawValue, UpdateEntry
from readers.table_reader import read_table
from store.environment import ReadView, StoreTable
from store.record_decoder import decode_record


def read_updates(table: StoreTable, view: ReadView) -> list[UpdateEntry]:
    """Decode every pending update in native key order.

    Raises:
        TableDecodeError: If a key is not text or a value is not JSON.
    """
    return read_table(table, view, UPDATES_TABLE_NAME, _decode_update)


def _decode_update(key: bytes, raw_value: RawValue) -> UpdateEntry:
    try:
        text_key = key.decode("utf-8")
    except UnicodeDecodeError as error:
        raise SchemaMismatchError(f"update key is not valid UTF-8 text: {error.reason}") from error
    return UpdateEntry(key=text_key, value=decode_record(raw_value, JSON_TREE))
