"""Declarative record shapes for JSON payload decoding.

Each record is described once as a tree of shapes. The same
description drives parsing and validation, and every mismatch is
reported with the JSON path where it happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from core.constants import U16_MAX, U64_MAX
from core.errors import SchemaMismatchError

ROOT_PATH = "$"


class Shape:
    """Base class for declarative payload shapes."""

    label = "value"

    def decode(self, value: object, path: str = ROOT_PATH) -> Any:
        """Map a parsed JSON value onto this shape.

        Args:
            value: Parsed JSON value.
            path: JSON path of ``value`` for error messages.

        Returns:
            Decoded Python value.

        Raises:
            SchemaMismatchError: If the value does not fit the shape.
        """
        raise NotImplementedError


def _mismatch(path: str, expected: str, value: object) -> SchemaMismatchError:
    return SchemaMismatchError(
        f"{path}: expected {expected}, got {_json_type_name(value)}"
    )


def _json_type_name(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


class StringShape(Shape):
    """JSON string."""

    label = "string"

    def decode(self, value: object, path: str = ROOT_PATH) -> str:
        if not isinstance(value, str):
            raise _mismatch(path, self.label, value)
        return value


class BoolShape(Shape):
    """JSON boolean; integers are rejected."""

    label = "boolean"

    def decode(self, value: object, path: str = ROOT_PATH) -> bool:
        if not isinstance(value, bool):
            raise _mismatch(path, self.label, value)
        return value


class UnsignedShape(Shape):
    """JSON integer within ``[0, maximum]``."""

    def __init__(self, maximum: int, label: str) -> None:
        self.maximum = maximum
        self.label = label

    def decode(self, value: object, path: str = ROOT_PATH) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _mismatch(path, self.label, value)
        if value < 0 or value > self.maximum:
            raise SchemaMismatchError(
                f"{path}: integer {value} out of range for {self.label}"
            )
        return value


class JsonTreeShape(Shape):
    """Any JSON document, passed through unvalidated."""

    label = "JSON value"

    def decode(self, value: object, path: str = ROOT_PATH) -> object:
        return value


class ListShape(Shape):
    """JSON array whose items share one shape; decoded to a tuple."""

    def __init__(self, item: Shape) -> None:
        self.item = item
        self.label = f"array of {item.label}"

    def decode(self, value: object, path: str = ROOT_PATH) -> tuple[Any, ...]:
        if not isinstance(value, list):
            raise _mismatch(path, "array", value)
        return tuple(
            self.item.decode(item, f"{path}[{index}]") for index, item in enumerate(value)
        )


@dataclass(frozen=True)
class Field:
    """One named field of a record shape.

    Attributes:
        key: JSON object key.
        shape: Shape of the field value.
        attribute: Keyword passed to the record factory; defaults to ``key``.
    """

    key: str
    shape: Shape
    attribute: str | None = None

    @property
    def target(self) -> str:
        return self.attribute or self.key


class RecordShape(Shape):
    """JSON object with required fields; unknown keys are ignored."""

    def __init__(self, label: str, fields: tuple[Field, ...], factory: Callable[..., Any]) -> None:
        self.label = label
        self.fields = fields
        self.factory = factory

    def decode(self, value: object, path: str = ROOT_PATH) -> Any:
        if not isinstance(value, dict):
            raise _mismatch(path, f"{self.label} object", value)
        arguments = {}
        for field in self.fields:
            if field.key not in value:
                raise SchemaMismatchError(
                    f"{path}: missing required field '{field.key}' for {self.label}"
                )
            arguments[field.target] = field.shape.decode(value[field.key], f"{path}.{field.key}")
        return self.factory(**arguments)


class VariantShape(Shape):
    """Externally tagged closed variant: ``{"<Tag>": {...body...}}``.

    Only the listed tags are accepted; anything else is a mismatch.
    """

    def __init__(self, label: str, variants: Mapping[str, RecordShape]) -> None:
        self.label = label
        self.variants = dict(variants)

    def decode(self, value: object, path: str = ROOT_PATH) -> Any:
        if not isinstance(value, dict):
            raise _mismatch(path, f"{self.label} object with one variant tag", value)
        if len(value) != 1:
            raise SchemaMismatchError(
                f"{path}: expected exactly one {self.label} variant tag, got {len(value)}"
            )
        tag, body = next(iter(value.items()))
        variant = self.variants.get(tag)
        if variant is None:
            supported_rows = ", ".join(self.variants)
            raise SchemaMismatchError(
                f"{path}: unknown {self.label} variant '{tag}', expected one of: {supported_rows}"
            )
        return variant.decode(body, f"{path}.{tag}")


STRING = StringShape()
BOOL = BoolShape()
U16 = UnsignedShape(U16_MAX, "u16")
U64 = UnsignedShape(U64_MAX, "u64")
JSON_TREE = JsonTreeShape()
