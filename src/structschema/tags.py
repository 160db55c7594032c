"""Declarative per-field annotations and their translation into schema keywords.

A dataclass field opts into schema metadata through its ``metadata`` mapping::

    @dataclass
    class Item:
        _meta: str = field(default="", metadata=tag(title="Item"))
        name: str = field(default="", metadata=tag(required=True, minLength=1))
        size: int | None = schema_field(default=None, name="size", omitempty=True)

Literal values are kept as text until the field's schema type is known, then
coerced by ``apply_tags``.
"""

from __future__ import annotations

import copy
import dataclasses
import decimal
import logging
import math
import re
from collections.abc import Mapping
from typing import Any

import ujson as json
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import DefaultParseError, ExtensionsParseError, TagError, UnsupportedDefaultTypeError
from .node import SchemaNode

logger = logging.getLogger(__name__)

METADATA_KEY = "structschema"
SKIP_NAME = "-"

_INT_RE = re.compile(r"^[+-]?\d+$")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1
_BOOL_LITERALS = {
    "1": True,
    "t": True,
    "T": True,
    "TRUE": True,
    "true": True,
    "True": True,
    "0": False,
    "f": False,
    "F": False,
    "FALSE": False,
    "false": False,
    "False": False,
}


class FieldTags(BaseModel):
    """Annotation record for one dataclass field."""

    name: str | None = None
    omit_empty: bool = Field(default=False, alias="omitempty")
    required: bool = False
    title: str | None = None
    description: str | None = None
    default: str | None = None
    extensions: str | dict[str, Any] | None = None
    # string validators
    min_length: str | None = Field(default=None, alias="minLength")
    max_length: str | None = Field(default=None, alias="maxLength")
    pattern: str | None = None
    enum: str | list[str] | None = None
    const: str | None = None
    # number validators
    multiple_of: str | None = Field(default=None, alias="multipleOf")
    min: str | None = None
    max: str | None = None
    exclusive_min: str | None = Field(default=None, alias="exclusiveMin")
    exclusive_max: str | None = Field(default=None, alias="exclusiveMax")

    model_config = {"populate_by_name": True, "extra": "forbid", "frozen": True}

    @field_validator(
        "default",
        "const",
        "min_length",
        "max_length",
        "multiple_of",
        "min",
        "max",
        "exclusive_min",
        "exclusive_max",
        mode="before",
    )
    @classmethod
    def literal_text(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float, decimal.Decimal)):
            return str(value)
        return value

    def external_name(self, field_name: str) -> str:
        return self.name or field_name

    @property
    def skipped(self) -> bool:
        return self.name == SKIP_NAME

    @property
    def is_required(self) -> bool:
        return self.required and not self.omit_empty


def tag(**kwargs: Any) -> dict[str, FieldTags]:
    """Build a dataclass ``metadata`` mapping carrying schema tags."""
    try:
        return {METADATA_KEY: FieldTags(**kwargs)}
    except ValidationError as exc:
        raise TagError(f"invalid schema tags {kwargs!r}: {exc}") from exc


def schema_field(
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    metadata: Mapping[str, Any] | None = None,
    schema_default: Any = None,
    **tags: Any,
) -> Any:
    """``dataclasses.field`` with schema tags folded into its metadata.

    ``default`` is the dataclass default; the schema's ``default`` keyword is
    passed as ``schema_default``.
    """
    if schema_default is not None:
        tags["default"] = schema_default
    merged = {**(metadata or {}), **tag(**tags)}
    return dataclasses.field(default=default, default_factory=default_factory, metadata=merged)


def read_tags(f: dataclasses.Field) -> FieldTags:  # type: ignore[type-arg]
    raw = f.metadata.get(METADATA_KEY)
    if raw is None:
        return FieldTags()
    if isinstance(raw, FieldTags):
        return raw
    if isinstance(raw, Mapping):
        try:
            return FieldTags.model_validate(dict(raw))
        except ValidationError as exc:
            raise TagError(f"invalid schema tags on field {f.name!r}: {exc}") from exc
    raise TagError(f"schema tags on field {f.name!r} must be a mapping, got {type(raw).__name__}")


def parse_int(raw: str | None) -> int | None:
    if raw is None or not _INT_RE.match(raw):
        return None
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def parse_float(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    # JSON has no encoding for nan/inf.
    if not math.isfinite(value):
        return None
    return value


def parse_bool(raw: str) -> bool | None:
    return _BOOL_LITERALS.get(raw)


def _dropped(key: str, raw: str | None, prop_name: str) -> None:
    if raw is not None:
        logger.debug("Ignoring unparseable %s=%r on property %s", key, raw, prop_name)


def add_string_validators(node: SchemaNode, tags: FieldTags, prop_name: str = "") -> None:
    node.min_length = parse_int(tags.min_length)
    if node.min_length is None:
        _dropped("minLength", tags.min_length, prop_name)
    node.max_length = parse_int(tags.max_length)
    if node.max_length is None:
        _dropped("maxLength", tags.max_length, prop_name)
    if tags.pattern:
        node.pattern = tags.pattern
    if tags.enum:
        values = tags.enum.split("|") if isinstance(tags.enum, str) else list(tags.enum)
        node.enum = values
    if tags.const:
        node.const = tags.const


def _for_type(value: float, json_type: str) -> float | int:
    """Whole numbers on integer nodes are written as ints."""
    if json_type == "integer" and value.is_integer():
        return int(value)
    return value


def add_number_validators(node: SchemaNode, tags: FieldTags, prop_name: str = "") -> None:
    for attr, key, raw in (
        ("multiple_of", "multipleOf", tags.multiple_of),
        ("minimum", "min", tags.min),
        ("maximum", "max", tags.max),
        ("exclusive_minimum", "exclusiveMin", tags.exclusive_min),
        ("exclusive_maximum", "exclusiveMax", tags.exclusive_max),
    ):
        value = parse_float(raw)
        if value is None:
            _dropped(key, raw, prop_name)
        else:
            value = _for_type(value, node.type)
        setattr(node, attr, value)
    const = parse_float(tags.const) if node.type == "number" else parse_int(tags.const)
    if const is None:
        _dropped("const", tags.const, prop_name)
    else:
        node.const = const


def add_validators(node: SchemaNode, tags: FieldTags, prop_name: str = "") -> None:
    if node.type == "string":
        add_string_validators(node, tags, prop_name)
    elif node.type in {"number", "integer"}:
        add_number_validators(node, tags, prop_name)


def coerce_default(raw: str, json_type: str, prop_name: str) -> str | float | int | bool:
    """Turn a default literal into a value of the node's schema type."""
    if json_type == "string":
        return raw
    if json_type in {"number", "integer"}:
        number = parse_float(raw)
        if number is None:
            raise DefaultParseError(raw, "float", prop_name)
        return _for_type(number, json_type)
    if json_type == "boolean":
        flag = parse_bool(raw)
        if flag is None:
            raise DefaultParseError(raw, "bool", prop_name)
        return flag
    raise UnsupportedDefaultTypeError(json_type, prop_name)


def parse_extensions(raw: str | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(raw, Mapping):
        # Field metadata is shared by every build; nodes get their own copy.
        return copy.deepcopy(dict(raw))
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise ExtensionsParseError(raw, str(exc)) from exc
    if not isinstance(payload, dict):
        raise ExtensionsParseError(raw, f"expected a JSON object, got {type(payload).__name__}")
    return payload


def apply_struct_tags(node: SchemaNode, tags: FieldTags) -> None:
    """Attach a private field's title/description/extensions to its object."""
    if tags.title:
        node.title = tags.title
    if tags.description:
        node.description = tags.description
    if tags.extensions is not None:
        node.extensions.update(parse_extensions(tags.extensions))


def apply_tags(node: SchemaNode, tags: FieldTags, prop_name: str) -> None:
    """Apply one field's annotations to its freshly built node."""
    if tags.title:
        node.title = tags.title
    if tags.description:
        node.description = tags.description
    add_validators(node, tags, prop_name)
    if tags.default is not None:
        node.default = coerce_default(tags.default, node.type, prop_name)
    if tags.extensions is not None:
        node.extensions.update(parse_extensions(tags.extensions))
