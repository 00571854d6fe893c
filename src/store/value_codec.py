"""Tagged value codec for stored rkv values.

Every stored value is one type byte followed by a bincode payload.
This module splits the tag off and unwraps JSON text payloads.
"""

from __future__ import annotations

from core.constants import BINCODE_LENGTH_PREFIX_SIZE
from core.errors import UnsupportedValueEncodingError
from core.types import RawValue, ValueType


def split_tagged_value(data: bytes) -> RawValue:
    """Split raw stored bytes into type tag and payload.

    Args:
        data: Bytes exactly as stored in the table.

    Returns:
        Raw value; an empty input yields tag 0.
    """
    if not data:
        return RawValue(tag=0, payload=b"")
    return RawValue(tag=data[0], payload=bytes(data[1:]))


def json_text(raw_value: RawValue) -> str:
    """Return the JSON text carried by a JSON-tagged value.

    Args:
        raw_value: Split stored value.

    Returns:
        Decoded JSON text.

    Raises:
        UnsupportedValueEncodingError: If the value is not JSON-tagged
            or its length-prefixed payload is malformed.
    """
    if raw_value.tag != ValueType.JSON:
        raise UnsupportedValueEncodingError(
            f"Unsupported value type '{raw_value.type_name}': expected json."
        )
    payload = raw_value.payload
    if len(payload) < BINCODE_LENGTH_PREFIX_SIZE:
        raise UnsupportedValueEncodingError(
            f"Malformed json value: {len(payload)} byte payload has no length prefix."
        )
    declared_length = int.from_bytes(payload[:BINCODE_LENGTH_PREFIX_SIZE], "little")
    text_bytes = payload[BINCODE_LENGTH_PREFIX_SIZE:]
    if declared_length != len(text_bytes):
        raise UnsupportedValueEncodingError(
            f"Malformed json value: declared length {declared_length}, "
            f"found {len(text_bytes)} bytes."
        )
    try:
        return text_bytes.decode("utf-8")
    except UnicodeDecodeError as error:
        raise UnsupportedValueEncodingError(
            f"Malformed json value: payload is not UTF-8 ({error.reason})."
        ) from error
