"""Generator options and file-based generation configs."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import ujson as json
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .node import DEFAULT_SCHEMA


class GeneratorOptions(BaseModel):
    """Per-generator settings."""

    schema_uri: str = Field(default=DEFAULT_SCHEMA, alias="schema")

    model_config = {"populate_by_name": True}

    @field_validator("schema_uri")
    @classmethod
    def default_when_blank(cls, value: str) -> str:
        return value or DEFAULT_SCHEMA


class GeneratorConfig(BaseModel):
    """A generation run described in YAML or JSON.

    ``root`` and the ``definitions`` values are import targets of the form
    ``package.module:Name``.
    """

    schema_uri: str = Field(default=DEFAULT_SCHEMA, alias="schema")
    root: str | None = None
    definitions: dict[str, str] = Field(default_factory=dict)
    indent: int = Field(default=2, ge=0)

    model_config = {"populate_by_name": True, "extra": "forbid"}

    @field_validator("schema_uri")
    @classmethod
    def default_when_blank(cls, value: str) -> str:
        return value or DEFAULT_SCHEMA

    def options(self) -> GeneratorOptions:
        return GeneratorOptions(schema=self.schema_uri)


def resolve_target(target: str) -> Any:
    """Import ``package.module:Name`` (dotted attribute paths allowed after the colon)."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Invalid target {target!r}; expected 'package.module:Name'")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import module {module_name!r} for target {target!r}") from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ValueError(f"Target {target!r} has no attribute {part!r}") from exc
    return obj


def load_generator_config(path: str | Path) -> GeneratorConfig:
    """Load a generation config from YAML or JSON."""
    path = Path(path)
    data: Any
    text = path.read_text()
    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    try:
        return GeneratorConfig(**(data or {}))
    except (TypeError, ValidationError) as exc:
        raise ValueError(f"Invalid config {path}") from exc


def save_generator_config(config: GeneratorConfig, path: str | Path) -> None:
    """Persist a generation config as YAML or JSON based on file suffix."""
    path = Path(path)
    data = config.model_dump(mode="python", by_alias=True)
    if path.suffix in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(data, sort_keys=False))
    else:
        path.write_text(json.dumps(data, indent=2, escape_forward_slashes=False))
