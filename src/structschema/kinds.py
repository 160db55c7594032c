"""Classification of Python type hints into schema kinds."""

from __future__ import annotations

import dataclasses
import datetime as dt
import decimal
import types
from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet, Sequence
from collections.abc import Set as AbstractSet
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin


class Kind(str, Enum):
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    DATETIME = "datetime"
    BYTES = "bytes"
    OPTIONAL = "optional"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    COMPOSITE = "composite"
    OPAQUE = "opaque"


# Order matters: bool is an int subclass, datetime must win over str-like checks.
_SCALARS: tuple[tuple[type | tuple[type, ...], Kind], ...] = (
    (dt.datetime, Kind.DATETIME),
    (bool, Kind.BOOLEAN),
    (int, Kind.INTEGER),
    (float, Kind.NUMBER),
    (decimal.Decimal, Kind.NUMBER),
    (str, Kind.STRING),
    ((bytes, bytearray, memoryview), Kind.BYTES),
)

KIND_MAPPING: dict[Kind, tuple[str, str]] = {
    Kind.BOOLEAN: ("boolean", ""),
    Kind.INTEGER: ("integer", ""),
    Kind.NUMBER: ("number", ""),
    Kind.STRING: ("string", ""),
    Kind.DATETIME: ("string", "date-time"),
    Kind.BYTES: ("string", ""),
    Kind.SEQUENCE: ("array", ""),
    Kind.MAPPING: ("object", ""),
    Kind.COMPOSITE: ("object", ""),
}

PRIMITIVES = frozenset({Kind.BOOLEAN, Kind.INTEGER, Kind.NUMBER, Kind.STRING, Kind.DATETIME})

_SEQUENCE_ORIGINS = (list, set, frozenset, tuple, Sequence, MutableSequence, AbstractSet, MutableSet)
_MAPPING_ORIGINS = (dict, Mapping, MutableMapping)


def strip_annotated(tp: Any) -> Any:
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def _is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def unwrap_optional(tp: Any) -> Any | None:
    """Return ``T`` for ``Optional[T]``, or ``None`` if ``tp`` is not optional."""
    if not _is_union(tp):
        return None
    args = [arg for arg in get_args(tp) if arg is not type(None)]
    if len(args) != 1 or len(args) == len(get_args(tp)):
        return None
    return strip_annotated(args[0])


def classify(tp: Any) -> Kind:
    tp = strip_annotated(tp)
    if tp is None or tp is type(None):
        return Kind.OPAQUE
    if unwrap_optional(tp) is not None:
        return Kind.OPTIONAL
    origin = get_origin(tp)
    if origin is not None:
        if origin in _SEQUENCE_ORIGINS:
            return Kind.SEQUENCE
        if origin in _MAPPING_ORIGINS:
            return Kind.MAPPING
        return Kind.OPAQUE
    if not isinstance(tp, type):
        return Kind.OPAQUE
    if dataclasses.is_dataclass(tp):
        return Kind.COMPOSITE
    for base, kind in _SCALARS:
        if issubclass(tp, base):
            return kind
    if tp in _SEQUENCE_ORIGINS:
        return Kind.SEQUENCE
    if tp in _MAPPING_ORIGINS:
        return Kind.MAPPING
    return Kind.OPAQUE


def json_type(tp: Any) -> tuple[str, str, Kind]:
    """Look up ``(type, format, kind)`` in the fixed kind table."""
    kind = classify(tp)
    jstype, fmt = KIND_MAPPING.get(kind, ("", ""))
    return jstype, fmt, kind


def is_primitive(tp: Any) -> bool:
    return classify(tp) in PRIMITIVES


def sequence_item(tp: Any) -> Any:
    """Element type of a sequence hint; ``Any`` when it cannot be told."""
    args = get_args(strip_annotated(tp))
    if get_origin(strip_annotated(tp)) is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        if args and all(arg == args[0] for arg in args):
            return args[0]
        return Any
    return args[0] if args else Any


def mapping_value(tp: Any) -> Any:
    args = get_args(strip_annotated(tp))
    return args[1] if len(args) == 2 else Any


def type_name(tp: Any) -> str:
    tp = strip_annotated(tp)
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
