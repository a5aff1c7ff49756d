"""Screen codec - JSON bytes to validated, immutable Screen documents."""

from collections.abc import Iterator
from itertools import count
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from sdui.core import get_logger
from sdui.core.errors import DocumentDecodeError
from sdui.core.json import JSONParseError, dumps_bytes, parse_json_object, validate_json_depth
from .models import Component, ComponentType, Screen

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 32
DEFAULT_MAX_BYTES = 512 * 1024


class ScreenDecoder:
    """Decodes screen JSON, filling missing ids and checking tree structure."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self.max_depth = max_depth
        self.max_bytes = max_bytes

    def decode(self, data: bytes | str | dict[str, Any]) -> Screen:
        """
        Decode a screen document.

        Args:
            data: Raw JSON, or an already parsed object

        Returns:
            Immutable Screen

        Raises:
            DocumentDecodeError: If the body is malformed or violates the schema
        """
        if isinstance(data, dict):
            raw = data
        else:
            try:
                raw = parse_json_object(data, max_size=self.max_bytes)
            except JSONParseError as e:
                logger.error("screen_parse_failed", error=str(e))
                raise DocumentDecodeError(f"Invalid screen JSON: {e}", original=e) from e

        try:
            # component -> children list -> component costs two JSON levels per tree level
            validate_json_depth(raw, max_depth=2 * self.max_depth + 2)
        except JSONParseError as e:
            raise DocumentDecodeError(str(e), original=e) from e

        component = raw.get("component")
        if not isinstance(component, dict):
            logger.error("missing_component")
            raise DocumentDecodeError("Invalid screen: missing 'component' object")

        prepared = dict(raw)
        prepared["component"] = self._assign_ids(component, count())

        try:
            screen = Screen.model_validate(prepared)
        except PydanticValidationError as e:
            logger.error("screen_schema_invalid", errors=e.error_count())
            raise DocumentDecodeError(f"Invalid screen: {e}", original=e) from e

        validate_component(screen.component, max_depth=self.max_depth)
        return screen

    def _assign_ids(self, node: Any, counter: Iterator[int]) -> Any:
        """
        Give every node without an id a deterministic `<type>-<n>` id.

        The counter belongs to one decode call; a shared decoder may run
        decodes from several threads at once.
        """
        if not isinstance(node, dict):
            return node

        result = dict(node)
        if not result.get("id"):
            result["id"] = f"{result.get('type', 'node')}-{next(counter)}"

        children = result.get("children")
        if isinstance(children, list):
            result["children"] = [self._assign_ids(child, counter) for child in children]

        item_view = result.get("itemView", result.get("item_view"))
        if isinstance(item_view, dict):
            result.pop("item_view", None)
            result["itemView"] = self._assign_ids(item_view, counter)

        return result


def validate_component(component: Component, max_depth: int = DEFAULT_MAX_DEPTH, depth: int = 1) -> None:
    """
    Check structural invariants of a component tree.

    Raises:
        DocumentDecodeError: On depth overflow or misplaced fields
    """
    if depth > max_depth:
        raise DocumentDecodeError(f"Component depth {depth} exceeds maximum {max_depth}")

    if component.type == ComponentType.LIST:
        if component.item_view is None:
            raise DocumentDecodeError(f"List component '{component.id}' missing 'itemView'")
    elif component.item_view is not None:
        raise DocumentDecodeError(
            f"Component '{component.id}' of type '{component.type.value}' cannot carry 'itemView'"
        )

    if component.type == ComponentType.CONDITIONAL and not component.condition_key:
        raise DocumentDecodeError(f"Conditional component '{component.id}' missing 'conditionKey'")

    for child in component.child_nodes():
        validate_component(child, max_depth, depth + 1)
    if component.item_view is not None:
        validate_component(component.item_view, max_depth, depth + 1)


def decode_screen(
    data: bytes | str | dict[str, Any],
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> Screen:
    """Convenience function to decode a screen document."""
    return ScreenDecoder(max_depth=max_depth, max_bytes=max_bytes).decode(data)


def encode_screen(screen: Screen) -> bytes:
    """Encode a screen to compact JSON bytes with wire field names."""
    return dumps_bytes(screen.to_wire())


__all__ = ["ScreenDecoder", "decode_screen", "encode_screen", "validate_component"]
