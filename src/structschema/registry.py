"""Named definitions keyed by a stable type identity."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, get_origin

from .errors import RegistryFrozenError
from .kinds import strip_annotated

logger = logging.getLogger(__name__)

DEFINITIONS_POINTER = "#/definitions/"


def resolve_type(obj: Any) -> Any:
    """Return the type described by ``obj``: a class or hint as-is, an instance's class."""
    obj = strip_annotated(obj)
    if isinstance(obj, type) or get_origin(obj) is not None or obj is Any:
        return obj
    return type(obj)


def type_key(tp: Any) -> str:
    """Readable ``module.qualname`` name for ``tp``, used in logs and listings."""
    tp = resolve_type(tp)
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", None)
    if module is None or qualname is None or get_origin(tp) is not None:
        return repr(tp)
    return f"{module}.{qualname}"


class DefinitionRegistry:
    """Map from type identity to definition name.

    Entries are keyed by the resolved type object, so two classes sharing a
    ``module.qualname`` (factory-built or local classes) stay distinct.
    Filled once before generation and frozen for the rest of the run. A type
    registered twice keeps only its latest name.
    """

    def __init__(self) -> None:
        self._names: dict[Any, str] = {}
        self._frozen = False

    @classmethod
    def from_mapping(cls, definitions: dict[str, Any]) -> DefinitionRegistry:
        registry = cls()
        for name, instance in definitions.items():
            registry.register(name, instance)
        return registry.freeze()

    def register(self, name: str, type_or_instance: Any) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"cannot register {name!r}: registry is frozen")
        tp = resolve_type(type_or_instance)
        previous = self._names.get(tp)
        if previous is not None and previous != name:
            logger.warning(
                "Type %s registered as %r replaces earlier name %r", type_key(tp), name, previous
            )
        self._names[tp] = name

    def freeze(self) -> DefinitionRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, tp: Any) -> str | None:
        return self._names.get(resolve_type(tp))

    def reference(self, tp: Any) -> str | None:
        name = self.lookup(tp)
        if name is None:
            return None
        return f"{DEFINITIONS_POINTER}{name}"

    def items(self) -> Iterator[tuple[str, Any]]:
        for tp, name in self._names.items():
            yield name, tp

    def __contains__(self, tp: object) -> bool:
        return self.lookup(tp) is not None

    def __len__(self) -> int:
        return len(self._names)
