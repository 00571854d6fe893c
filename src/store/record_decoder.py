"""Decode stored values into typed records.

This module joins the tagged value codec with declarative record
shapes. Decoding is pure: the same raw value always yields the same
record or the same error.
"""

from __future__ import annotations

import json
from typing import Any

from core.errors import SchemaMismatchError
from core.record_shapes import Shape
from core.types import RawValue
from store.value_codec import json_text


def decode_record(raw_value: RawValue, shape: Shape) -> Any:
    """Decode one stored value into the record described by ``shape``.

    Args:
        raw_value: Split stored value.
        shape: Expected record shape.

    Returns:
        Decoded record.

    Raises:
        UnsupportedValueEncodingError: If the value is not JSON text.
        SchemaMismatchError: If the JSON is invalid, nested too deeply,
            uses non-finite number constants, or does not fit the shape.
    """
    text = json_text(raw_value)
    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as error:
        raise SchemaMismatchError(
            f"invalid JSON at line {error.lineno} column {error.colno}: {error.msg}"
        ) from error
    except RecursionError as error:
        raise SchemaMismatchError("invalid JSON: nesting too deep") from error
    return shape.decode(payload)


def _reject_constant(constant: str) -> object:
    raise SchemaMismatchError(f"invalid JSON: non-finite number {constant} is not allowed")
