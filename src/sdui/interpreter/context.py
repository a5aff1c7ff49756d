"""
Render Context
Read-only snapshot of data, collections, actions and services for one pass.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from .bindings import MISSING, lookup_path

ActionHandler = Callable[[Any], None | Awaitable[None]]
"""Handler invoked with the scoped data item (None at top level)."""


@runtime_checkable
class ContextSource(Protocol):
    """Boundary consumed by the interpreter. Everything external flows through it."""

    def bound_collection(self, name: str) -> Sequence[Any]:
        """Items bound to a named collection (empty when unknown)."""
        ...

    def value(self, dotted_path: str) -> Any | None:
        """Named value by dotted path, or None."""
        ...

    def action(self, action_id: str) -> ActionHandler | None:
        """Registered handler for an action id, or None."""
        ...


@dataclass(frozen=True)
class Context:
    """
    Interpretation-time context.

    Built fresh from live application state for every render pass and
    never mutated during a walk. Not serialisable by intent.
    """

    values: Mapping[str, Any] = field(default_factory=dict)
    collections: Mapping[str, Sequence[Any]] = field(default_factory=dict)
    actions: Mapping[str, ActionHandler] = field(default_factory=dict)
    services: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the top-level mappings so a pass sees one snapshot
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(
            self,
            "collections",
            MappingProxyType({name: tuple(items) for name, items in self.collections.items()}),
        )
        object.__setattr__(self, "actions", MappingProxyType(dict(self.actions)))
        object.__setattr__(self, "services", MappingProxyType(dict(self.services)))

    def bound_collection(self, name: str) -> Sequence[Any]:
        return self.collections.get(name, ())

    def value(self, dotted_path: str) -> Any | None:
        found = lookup_path(self.values, dotted_path)
        return None if found is MISSING else found

    def lookup(self, dotted_path: str) -> Any:
        """Like value() but distinguishes a stored None from a missing path."""
        return lookup_path(self.values, dotted_path)

    def action(self, action_id: str) -> ActionHandler | None:
        return self.actions.get(action_id)

    def service(self, name: str) -> Any | None:
        """Auxiliary service by name (formatters, clocks, ...)."""
        return self.services.get(name)

    def data_snapshot(self) -> dict[str, Any]:
        """Data that can influence resolution output, for fingerprinting."""
        return {"values": dict(self.values), "collections": dict(self.collections)}


@dataclass(frozen=True)
class Scope:
    """Row scope: the data item that `key` bindings resolve against."""

    item: Any = None
    has_item: bool = False

    @classmethod
    def top_level(cls) -> "Scope":
        return cls()

    @classmethod
    def row(cls, item: Any) -> "Scope":
        return cls(item=item, has_item=True)


__all__ = ["ActionHandler", "ContextSource", "Context", "Scope"]
