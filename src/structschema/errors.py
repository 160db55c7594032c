"""Exception hierarchy for schema generation."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for every failure raised while turning a type into a schema."""

    def __init__(self, message: str, path: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path: list[str] = list(path or [])

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{' -> '.join(self.path)}: {self.message}"


class TagError(ConversionError):
    """Field metadata could not be read as a tag record."""


class UnsupportedDefaultTypeError(ConversionError):
    """A default was attached to a field whose schema type cannot carry one."""

    def __init__(self, json_type: str, prop_name: str) -> None:
        super().__init__(f"default not supported for type {json_type!r} on property {prop_name}")
        self.json_type = json_type
        self.prop_name = prop_name


class DefaultParseError(ConversionError):
    """A default literal does not parse as the field's schema type."""

    def __init__(self, raw: str, target: str, prop_name: str) -> None:
        super().__init__(f"could not parse {raw!r} to {target} for property {prop_name}")
        self.raw = raw
        self.target = target
        self.prop_name = prop_name


class ExtensionsParseError(ConversionError):
    """An extensions payload is not a JSON object."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"invalid 'extensions' tag value {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


class TypeResolutionError(ConversionError):
    """Type hints of a dataclass could not be resolved."""


class FieldConversionError(ConversionError):
    """A field of a composite type failed to convert."""

    def __init__(self, type_name: str, field_name: str, cause: ConversionError) -> None:
        super().__init__(cause.message, [f"{type_name}.{field_name}", *cause.path])
        self.type_name = type_name
        self.field_name = field_name


class GenerationError(ConversionError):
    """A root or definition build failed during document assembly."""

    def __init__(self, target: str, type_name: str, cause: ConversionError) -> None:
        super().__init__(cause.message, cause.path)
        self.target = target
        self.type_name = type_name

    def __str__(self) -> str:
        return f"error on {self.target} type {self.type_name}: {super().__str__()}"


class RootConversionError(GenerationError):
    def __init__(self, type_name: str, cause: ConversionError) -> None:
        super().__init__("root", type_name, cause)


class DefinitionConversionError(GenerationError):
    def __init__(self, name: str, type_name: str, cause: ConversionError) -> None:
        super().__init__(name, type_name, cause)

    def __str__(self) -> str:
        return f"error on type {self.type_name} ({self.target}): {ConversionError.__str__(self)}"


class RegistryFrozenError(RuntimeError):
    """Raised when a definition is registered after generation has started."""
