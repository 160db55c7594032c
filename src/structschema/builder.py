"""Recursive walk from a type hint to a ``SchemaNode`` tree."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, get_type_hints

from .errors import ConversionError, FieldConversionError, TypeResolutionError
from .kinds import (
    Kind,
    is_primitive,
    json_type,
    mapping_value,
    sequence_item,
    strip_annotated,
    type_name,
    unwrap_optional,
)
from .node import SchemaNode
from .registry import DefinitionRegistry
from .tags import apply_struct_tags, apply_tags, read_tags

logger = logging.getLogger(__name__)

WILDCARD_PROPERTY = ".*"


class SchemaBuilder:
    """Turn type hints into schema nodes, emitting ``$ref`` for registered composites.

    There is no cycle detection: a dataclass that reaches itself without
    passing through a registered definition recurses until Python raises
    ``RecursionError``.
    """

    def __init__(self, registry: DefinitionRegistry | None = None) -> None:
        self.registry = registry if registry is not None else DefinitionRegistry().freeze()
        self._hints: dict[type, dict[str, Any]] = {}

    def build(self, tp: Any, is_definition_root: bool = False) -> SchemaNode:
        tp = strip_annotated(tp)
        jstype, fmt, kind = json_type(tp)

        if kind is Kind.OPTIONAL:
            inner = unwrap_optional(tp)
            node = self.build(inner, is_definition_root)
            if is_primitive(inner):
                return SchemaNode(any_of=[node, SchemaNode(type="null")])
            return node

        if kind is Kind.COMPOSITE and not is_definition_root:
            pointer = self.registry.reference(tp)
            if pointer is not None:
                logger.debug("Referencing %s as %s", type_name(tp), pointer)
                return SchemaNode.reference(pointer)

        node = SchemaNode(type=jstype, format=fmt)
        if kind is Kind.SEQUENCE:
            self._read_sequence(node, tp)
        elif kind is Kind.MAPPING:
            self._read_mapping(node, tp)
        elif kind is Kind.COMPOSITE:
            self._read_composite(node, tp)
        return node

    def _read_sequence(self, node: SchemaNode, tp: Any) -> None:
        item = sequence_item(tp)
        item_type, _, item_kind = json_type(item)
        if item_type or item_kind is Kind.OPTIONAL:
            node.items = self.build(item)

    def _read_mapping(self, node: SchemaNode, tp: Any) -> None:
        # Values are described one level deep only, under a wildcard name.
        value_type, value_format, _ = json_type(mapping_value(tp))
        if value_type:
            node.properties = {WILDCARD_PROPERTY: SchemaNode(type=value_type, format=value_format)}
        else:
            node.additional_properties = True

    def _read_composite(self, node: SchemaNode, tp: type) -> None:
        node.additional_properties = False
        hints = self._field_types(tp)
        for f in dataclasses.fields(tp):
            try:
                self._read_field(node, f, hints.get(f.name, f.type))
            except ConversionError as exc:
                raise FieldConversionError(type_name(tp), f.name, exc) from exc

    def _read_field(self, node: SchemaNode, f: dataclasses.Field, hint: Any) -> None:  # type: ignore[type-arg]
        tags = read_tags(f)
        if f.name.startswith("_"):
            # Private fields describe the enclosing object instead of a property.
            apply_struct_tags(node, tags)
            return
        if tags.skipped:
            return
        name = tags.external_name(f.name)
        child = self.build(hint)
        apply_tags(child, tags, name)
        node.properties[name] = child
        if tags.is_required:
            node.require(name)

    def _field_types(self, tp: type) -> dict[str, Any]:
        if tp not in self._hints:
            try:
                self._hints[tp] = get_type_hints(tp, include_extras=True)
            except (NameError, TypeError) as exc:
                msg = f"cannot resolve type hints of {type_name(tp)}: {exc}"
                raise TypeResolutionError(msg) from exc
        return self._hints[tp]
