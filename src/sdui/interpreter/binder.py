"""Data Binder - walks a component tree against a context snapshot.

Resolution is top-down and depth-first. Children inherit the parent's scope
unless a ``list`` boundary introduces a row scope. The item template of a
list is never modified; each row is a separate resolution of the same
template with a different scope.
"""

from dataclasses import dataclass
from typing import Any, assert_never

from sdui.core import get_logger
from sdui.core.errors import BindingResolutionMiss
from sdui.core.hash import fingerprint, hash_fields
from sdui.document import CONTAINER_TYPES, Component, ComponentType, Screen
from sdui.monitoring import metrics_collector
from .bindings import (
    MISSING,
    format_value,
    has_tokens,
    is_truthy,
    lookup_path,
    render_template,
    unescape_literal,
)
from .cache import CacheKey, ViewCache
from .context import ContextSource, Scope
from .output import ActionBinding, ResolvedNode
from .style import StyleResolver

logger = get_logger(__name__)

DEFAULT_COLLECTION = "jobs"

CACHEABLE_TYPES = CONTAINER_TYPES | {ComponentType.LIST}


@dataclass(frozen=True)
class _Pass:
    """State shared by one interpretation pass."""

    context: ContextSource
    context_digest: str | None

    @property
    def cacheable(self) -> bool:
        return self.context_digest is not None


class DataBinder:
    """
    Core interpreter.

    The view cache is optional and injected per render session; output is
    identical with or without it.
    """

    def __init__(
        self,
        style: StyleResolver | None = None,
        cache: ViewCache | None = None,
        default_collection: str = DEFAULT_COLLECTION,
    ) -> None:
        self.style = style or StyleResolver()
        self.cache = cache
        self.default_collection = default_collection

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def interpret(self, screen: Screen, context: ContextSource) -> ResolvedNode | None:
        """
        Resolve an admitted screen.

        Returns:
            Resolved root, or None if the root itself is an omitted conditional
        """
        return self.interpret_component(screen.component, context)

    def interpret_component(
        self,
        component: Component,
        context: ContextSource,
        scope: Scope | None = None,
    ) -> ResolvedNode | None:
        """Resolve a subtree, optionally inside an existing row scope."""
        render_pass = self._begin(context)
        return self._resolve(component, scope or Scope.top_level(), render_pass, self._scope_digest(scope))

    def _begin(self, context: ContextSource) -> _Pass:
        if self.cache is None:
            return _Pass(context, None)

        snapshot = getattr(context, "data_snapshot", None)
        if snapshot is None:
            # Opaque context: data can't be fingerprinted, resolve uncached
            return _Pass(context, None)

        return _Pass(context=context, context_digest=fingerprint(snapshot()))

    @staticmethod
    def _scope_digest(scope: Scope | None) -> str:
        if scope is None or not scope.has_item:
            return "top"
        return fingerprint(scope.item)

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------

    def _resolve(
        self,
        component: Component,
        scope: Scope,
        render_pass: _Pass,
        scope_digest: str,
    ) -> ResolvedNode | None:
        if self.cache is None or not render_pass.cacheable or component.type not in CACHEABLE_TYPES:
            return self._resolve_uncached(component, scope, render_pass, scope_digest)

        # Ids may repeat or be absent, so the subtree itself is part of the key
        key = CacheKey(
            component_id=component.id or component.type.value,
            fingerprint=hash_fields(
                fingerprint(component.to_wire()),
                render_pass.context_digest or "",
                scope_digest,
            ),
        )
        cached = self.cache.get(key)
        if cached is not None:
            return cached[0]

        output = self._resolve_uncached(component, scope, render_pass, scope_digest)
        self.cache.put(key, output)
        return output

    def _resolve_uncached(
        self,
        component: Component,
        scope: Scope,
        render_pass: _Pass,
        scope_digest: str,
    ) -> ResolvedNode | None:
        match component.type:
            case ComponentType.TEXT:
                return self._node(
                    component,
                    scope,
                    text=self._resolve_text(component, scope, render_pass.context),
                    font=self.style.resolve_font(component.font),
                    foreground=self.style.resolve_color(component.foreground_color, scope.item),
                )
            case ComponentType.BUTTON:
                return self._node(
                    component,
                    scope,
                    label=self._resolve_label(component, scope, render_pass.context),
                )
            case ComponentType.IMAGE:
                return self._node(component, scope, image_name=component.image_name)
            case ComponentType.VSTACK | ComponentType.HSTACK | ComponentType.SCROLL:
                return self._node(
                    component,
                    scope,
                    children=self._resolve_children(component, scope, render_pass, scope_digest),
                )
            case ComponentType.CONDITIONAL:
                if not self._condition_holds(component, scope, render_pass.context):
                    return None
                return self._node(
                    component,
                    scope,
                    children=self._resolve_children(component, scope, render_pass, scope_digest),
                )
            case ComponentType.LIST:
                return self._node(
                    component,
                    scope,
                    children=self._expand_list(component, render_pass),
                )
            case ComponentType.SPACER | ComponentType.DIVIDER:
                return self._node(component, scope)
            case _:
                assert_never(component.type)

    def _resolve_children(
        self,
        component: Component,
        scope: Scope,
        render_pass: _Pass,
        scope_digest: str,
    ) -> tuple[ResolvedNode, ...]:
        resolved = (
            self._resolve(child, scope, render_pass, scope_digest) for child in component.child_nodes()
        )
        return tuple(node for node in resolved if node is not None)

    def _expand_list(self, component: Component, render_pass: _Pass) -> tuple[ResolvedNode, ...]:
        """One resolution of the item template per collection element, in order."""
        template = component.item_view
        if template is None:
            logger.warning("list_missing_item_view", component_id=component.id)
            return ()

        name = component.key or self.default_collection
        items = render_pass.context.bound_collection(name)
        if not items:
            logger.debug("list_empty", component_id=component.id, collection=name)

        rows = []
        for item in items:
            row_scope = Scope.row(item)
            row_digest = fingerprint(item) if render_pass.cacheable else ""
            row = self._resolve(template, row_scope, render_pass, row_digest)
            if row is not None:
                rows.append(row)
        return tuple(rows)

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    def _lookup_key(self, key: str, scope: Scope, context: ContextSource) -> Any:
        """
        Resolve a key against the row item, or the context values at top level.

        Raises:
            BindingResolutionMiss: If nothing is bound at that path
        """
        if scope.has_item:
            value = lookup_path(scope.item, key)
        else:
            value = self._context_value(context, key)

        if value is MISSING or value is None:
            raise BindingResolutionMiss(key)
        return value

    @staticmethod
    def _context_value(context: ContextSource, path: str) -> Any:
        lookup = getattr(context, "lookup", None)
        if lookup is not None:
            return lookup(path)
        value = context.value(path)
        return MISSING if value is None else value

    def _resolve_text(self, component: Component, scope: Scope, context: ContextSource) -> str:
        if component.key:
            try:
                return format_value(self._lookup_key(component.key, scope, context))
            except BindingResolutionMiss as e:
                self._binding_miss("key", e.path, component)
                return ""

        text = component.text or ""
        if not has_tokens(text):
            return unescape_literal(text)

        rendered, misses = render_template(text, lambda path: self._context_value(context, path))
        for path in misses:
            self._binding_miss("token", path, component)
        return rendered

    def _resolve_label(self, component: Component, scope: Scope, context: ContextSource) -> str:
        if component.key:
            try:
                return format_value(self._lookup_key(component.key, scope, context))
            except BindingResolutionMiss as e:
                self._binding_miss("key", e.path, component)
        if component.label is not None:
            return component.label
        if component.text is not None:
            rendered, misses = render_template(component.text, lambda path: self._context_value(context, path))
            for path in misses:
                self._binding_miss("token", path, component)
            return rendered
        return ""

    def _condition_holds(self, component: Component, scope: Scope, context: ContextSource) -> bool:
        if not component.condition_key:
            return False
        try:
            value = self._lookup_key(component.condition_key, scope, context)
        except BindingResolutionMiss:
            return False
        return is_truthy(value)

    @staticmethod
    def _binding_miss(kind: str, path: str, component: Component) -> None:
        logger.debug("binding_miss", kind=kind, path=path, component_id=component.id)
        metrics_collector.record_binding_miss(kind)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _node(self, component: Component, scope: Scope, **fields: Any) -> ResolvedNode:
        """Build an output node with shared styling and action wiring."""
        if component.font is not None and "font" not in fields:
            fields["font"] = self.style.resolve_font(component.font)
        if component.foreground_color is not None and "foreground" not in fields:
            fields["foreground"] = self.style.resolve_color(component.foreground_color, scope.item)

        background = self.style.resolve_background(component.background_color, scope.item)

        action = None
        if component.action_id:
            action = ActionBinding(component.action_id, scope.item if scope.has_item else None)

        return ResolvedNode(
            id=component.id or component.type.value,
            type=component.type,
            background=background,
            # Corner radius only shapes a painted fill
            corner_radius=component.corner_radius if background is not None else None,
            padding=component.padding,
            spacing=component.spacing,
            action=action,
            **fields,
        )


def interpret(
    screen: Screen,
    context: ContextSource,
    cache: ViewCache | None = None,
    default_collection: str = DEFAULT_COLLECTION,
) -> ResolvedNode | None:
    """Convenience function: resolve a screen with a fresh binder."""
    return DataBinder(cache=cache, default_collection=default_collection).interpret(screen, context)


__all__ = ["DataBinder", "DEFAULT_COLLECTION", "interpret"]
