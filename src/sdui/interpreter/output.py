"""Interpreted output - resolved, render-ready nodes."""

from dataclasses import dataclass, field
from typing import Any

from sdui.document import ComponentType
from .style import PresentationColor, PresentationFont


@dataclass(frozen=True)
class ActionBinding:
    """An interactive node's action, captured with the data item in scope."""

    action_id: str
    item: Any = None


@dataclass(frozen=True)
class ResolvedNode:
    """
    One node after bindings, conditionals, lists and styles are resolved.

    Pure data: safe to cache and compare. Interaction goes through the
    dispatcher with `action`.
    """

    id: str
    type: ComponentType
    text: str | None = None
    label: str | None = None
    image_name: str | None = None
    font: PresentationFont | None = None
    foreground: PresentationColor | None = None
    background: PresentationColor | None = None
    corner_radius: float | None = None
    padding: float | None = None
    spacing: float | None = None
    action: ActionBinding | None = None
    children: tuple["ResolvedNode", ...] = field(default_factory=tuple)

    def walk(self):
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, node_id: str) -> "ResolvedNode | None":
        """First node in the subtree with the given id."""
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def texts(self) -> list[str]:
        """All rendered text in document order (labels included)."""
        out = []
        for node in self.walk():
            if node.text is not None:
                out.append(node.text)
            elif node.label is not None:
                out.append(node.label)
        return out

    def interactive(self) -> list["ResolvedNode"]:
        return [node for node in self.walk() if node.action is not None]


__all__ = ["ActionBinding", "ResolvedNode"]
