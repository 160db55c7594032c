"""Assemble root and definition schemas into one document."""

from __future__ import annotations

import logging
from typing import Any

from .builder import SchemaBuilder
from .config import GeneratorConfig, GeneratorOptions, resolve_target
from .errors import ConversionError, DefinitionConversionError, RootConversionError
from .kinds import type_name
from .node import DEFAULT_SCHEMA, JSONSchema, SchemaNode
from .registry import DefinitionRegistry, resolve_type

logger = logging.getLogger(__name__)


class Generator:
    """Configure once, then call ``generate`` as often as needed.

    Every call builds a fresh registry and a fresh node tree, so documents
    returned by separate calls never share nodes.
    """

    def __init__(self, options: GeneratorOptions | None = None) -> None:
        self.options = options or GeneratorOptions()
        self.root: Any = None
        self.definitions: dict[str, Any] = {}

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> Generator:
        generator = cls(config.options())
        if config.root:
            generator.with_root(resolve_target(config.root))
        for name, target in config.definitions.items():
            generator.with_definition(name, resolve_target(target))
        return generator

    def with_root(self, root: Any) -> Generator:
        self.root = root
        return self

    def with_definition(self, name: str, definition: Any) -> Generator:
        self.definitions[name] = definition
        return self

    def with_definitions(self, definitions: dict[str, Any]) -> Generator:
        for name, definition in definitions.items():
            self.with_definition(name, definition)
        return self

    def generate(self) -> JSONSchema:
        registry = DefinitionRegistry.from_mapping(self.definitions)
        builder = SchemaBuilder(registry)

        definitions: dict[str, SchemaNode] = {}
        for name, tp in registry.items():
            try:
                definitions[name] = builder.build(tp, is_definition_root=True)
            except ConversionError as exc:
                raise DefinitionConversionError(name, type_name(tp), exc) from exc
            logger.debug("Built definition %s from %s", name, type_name(tp))

        root: SchemaNode | None = None
        if self.root is not None:
            tp = resolve_type(self.root)
            try:
                root = builder.build(tp)
            except ConversionError as exc:
                raise RootConversionError(type_name(tp), exc) from exc

        return JSONSchema(schema=self.options.schema_uri, definitions=definitions, root=root)


def generate_schema(
    root: Any = None,
    definitions: dict[str, Any] | None = None,
    *,
    schema: str = DEFAULT_SCHEMA,
) -> JSONSchema:
    """One-shot generation for a root and optional definitions."""
    generator = Generator(GeneratorOptions(schema=schema)).with_root(root)
    return generator.with_definitions(definitions or {}).generate()


def schema_json(
    root: Any,
    definitions: dict[str, Any] | None = None,
    *,
    schema: str = DEFAULT_SCHEMA,
    indent: int = 2,
) -> str:
    """Generate and encode in one call."""
    return generate_schema(root, definitions, schema=schema).to_json(indent=indent)
