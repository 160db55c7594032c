"""Schema node tree and the assembled JSON Schema document."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

import ujson as json

DEFAULT_SCHEMA = "http://json-schema.org/schema#"


@dataclass
class SchemaNode:
    """One node of the output tree.

    Optional scalars use ``None`` for "unset" so that zero-valued validators
    (``minimum: 0``, ``default: false``) still reach the output. Every child
    node is owned by exactly one parent; ``ref`` is the only cross link and
    it is a name, never an object.
    """

    type: str = ""
    format: str = ""
    items: SchemaNode | None = None
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    additional_properties: bool = False
    description: str = ""
    any_of: list[SchemaNode] = field(default_factory=list)
    one_of: list[SchemaNode] = field(default_factory=list)
    dependencies: dict[str, SchemaNode] = field(default_factory=dict)
    default: str | float | bool | None = None
    extensions: dict[str, Any] = field(default_factory=dict)
    # number validators
    multiple_of: float | None = None
    maximum: float | None = None
    minimum: float | None = None
    exclusive_maximum: float | None = None
    exclusive_minimum: float | None = None
    # string validators
    max_length: int | None = None
    min_length: int | None = None
    pattern: str = ""
    enum: list[str] = field(default_factory=list)
    title: str = ""
    const: str | float | int | None = None
    ref: str = ""

    @classmethod
    def reference(cls, pointer: str) -> SchemaNode:
        return cls(ref=pointer)

    @property
    def is_reference(self) -> bool:
        return bool(self.ref)

    def require(self, name: str) -> None:
        if name not in self.required:
            self.required.append(name)

    def to_dict(self) -> dict[str, Any]:
        """Render JSON Schema vocabulary, omitting empty keys."""
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = self.type
        if self.format:
            out["format"] = self.format
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.properties:
            out["properties"] = {name: prop.to_dict() for name, prop in self.properties.items()}
        if self.required:
            out["required"] = list(self.required)
        if self.additional_properties:
            out["additionalProperties"] = True
        if self.description:
            out["description"] = self.description
        if self.any_of:
            out["anyOf"] = [alt.to_dict() for alt in self.any_of]
        if self.one_of:
            out["oneOf"] = [alt.to_dict() for alt in self.one_of]
        if self.dependencies:
            out["dependencies"] = {
                name: dep.to_dict() for name, dep in self.dependencies.items()
            }
        if self.default is not None:
            out["default"] = self.default
        for key, value in (
            ("multipleOf", self.multiple_of),
            ("maximum", self.maximum),
            ("minimum", self.minimum),
            ("exclusiveMaximum", self.exclusive_maximum),
            ("exclusiveMinimum", self.exclusive_minimum),
            ("maxLength", self.max_length),
            ("minLength", self.min_length),
        ):
            if value is not None:
                out[key] = value
        if self.pattern:
            out["pattern"] = self.pattern
        if self.enum:
            out["enum"] = list(self.enum)
        if self.title:
            out["title"] = self.title
        if self.const is not None:
            out["const"] = self.const
        if self.ref:
            out["$ref"] = self.ref
        # Extensions sit beside the structural keys and win on collision.
        out.update(copy.deepcopy(self.extensions))
        return out


@dataclass(frozen=True)
class JSONSchema:
    """A generated document: dialect URI, named definitions and the root node."""

    schema: str = DEFAULT_SCHEMA
    definitions: dict[str, SchemaNode] = field(default_factory=dict)
    root: SchemaNode | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.schema:
            out["$schema"] = self.schema
        if self.definitions:
            out["definitions"] = {name: node.to_dict() for name, node in self.definitions.items()}
        if self.root is not None:
            out.update(self.root.to_dict())
        return out

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, escape_forward_slashes=False)

    def __str__(self) -> str:
        return self.to_json()
