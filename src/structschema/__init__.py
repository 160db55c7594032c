"""
structschema
============

Generate JSON Schema documents from dataclass type descriptions, with
per-field validation tags and ``$ref`` definitions for recurring types.
"""

from importlib.metadata import PackageNotFoundError, version

from .builder import SchemaBuilder
from .config import GeneratorConfig, GeneratorOptions, load_generator_config
from .errors import (
    ConversionError,
    DefaultParseError,
    DefinitionConversionError,
    ExtensionsParseError,
    FieldConversionError,
    RootConversionError,
    TagError,
    UnsupportedDefaultTypeError,
)
from .generator import Generator, generate_schema, schema_json
from .node import DEFAULT_SCHEMA, JSONSchema, SchemaNode
from .registry import DefinitionRegistry
from .tags import FieldTags, schema_field, tag


def get_version() -> str:
    """Return the installed package version or '0.0.0' when unavailable."""
    try:
        return version("structschema")
    except PackageNotFoundError:
        return "0.0.0"


__all__ = [
    "DEFAULT_SCHEMA",
    "ConversionError",
    "DefaultParseError",
    "DefinitionConversionError",
    "DefinitionRegistry",
    "ExtensionsParseError",
    "FieldConversionError",
    "FieldTags",
    "Generator",
    "GeneratorConfig",
    "GeneratorOptions",
    "JSONSchema",
    "RootConversionError",
    "SchemaBuilder",
    "SchemaNode",
    "TagError",
    "UnsupportedDefaultTypeError",
    "generate_schema",
    "get_version",
    "load_generator_config",
    "schema_field",
    "schema_json",
    "tag",
]
