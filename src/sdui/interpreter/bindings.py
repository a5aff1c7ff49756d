"""Binding expression language.

Two kinds of bindings exist in a document:

- ``key`` fields: a dotted path resolved against the scoped data item
  (the list row, or the context values at top level).
- ``{{token}}`` placeholders inside ``text``: dotted paths resolved against
  the context's named values, independent of row scope.

Both are fail-soft. A missing ``key`` resolves to empty; an unresolved token
is left in the text exactly as written, braces included. A token whose path
breaks at any segment (``route.alertSummary`` with no ``route``) counts as
unresolved as a whole.

A backslash before the opening braces (``\\{{``) marks literal braces; the
backslash is dropped on render and the span is never substituted.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any


class _Missing:
    """Sentinel for an unresolved path (distinct from a stored None)."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

TOKEN_PATTERN = re.compile(r"(?<![\\{])\{\{\s*([^{}]+?)\s*\}\}")
ESCAPED_OPEN = "\\{{"

FALSY_STRINGS = frozenset({"", "false", "0"})


@dataclass(frozen=True)
class Token:
    """One ``{{...}}`` span in a text template."""

    path: str
    start: int
    end: int
    raw: str


def tokenize(text: str) -> list[Token]:
    """Extract placeholder spans in order of appearance."""
    return [
        Token(path=m.group(1), start=m.start(), end=m.end(), raw=m.group(0))
        for m in TOKEN_PATTERN.finditer(text)
    ]


def has_tokens(text: str | None) -> bool:
    return bool(text) and TOKEN_PATTERN.search(text) is not None


def escape_literal(text: str) -> str:
    """Neutralise placeholder braces in data that must render verbatim."""
    return text.replace("{{", ESCAPED_OPEN)


def unescape_literal(text: str) -> str:
    return text.replace(ESCAPED_OPEN, "{{")


def _step(source: Any, segment: str) -> Any:
    if source is None or source is MISSING:
        return MISSING
    if isinstance(source, Mapping):
        return source[segment] if segment in source else MISSING
    if isinstance(source, (list, tuple)) and segment.isdigit():
        index = int(segment)
        return source[index] if index < len(source) else MISSING
    if segment.startswith("_") or isinstance(source, (str, bytes, int, float)):
        return MISSING
    found = getattr(source, segment, MISSING)
    # Methods are not data
    return MISSING if callable(found) else found


def lookup_path(source: Any, dotted_path: str) -> Any:
    """
    Walk a dotted path through mappings, sequences and attributes.

    Returns:
        The value found, or MISSING if any segment is absent
    """
    path = dotted_path.strip()
    if not path:
        return MISSING

    current = source
    for segment in path.split("."):
        current = _step(current, segment)
        if current is MISSING:
            return MISSING
    return current


def format_value(value: Any) -> str:
    """Render a bound value as display text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return format_value(value.value)
    return str(value)


def is_truthy(value: Any) -> bool:
    """
    Condition semantics for ``conditional`` nodes.

    Falsy: missing, None, empty string, zero, False, the strings "false"
    and "0", and empty collections.
    """
    if value is MISSING or value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() not in FALSY_STRINGS
    if isinstance(value, Enum):
        return is_truthy(value.value)
    try:
        return len(value) > 0
    except TypeError:
        return True


def render_template(text: str, resolve: Callable[[str], Any]) -> tuple[str, list[str]]:
    """
    Substitute every resolvable ``{{path}}`` in text.

    Args:
        text: Template text
        resolve: Path resolver returning MISSING (or None) for misses

    Returns:
        Rendered text and the list of unresolved paths
    """
    misses: list[str] = []
    parts: list[str] = []
    position = 0

    for match in TOKEN_PATTERN.finditer(text):
        parts.append(unescape_literal(text[position:match.start()]))
        path = match.group(1)
        value = resolve(path)
        if value is MISSING or value is None:
            misses.append(path)
            parts.append(match.group(0))
        else:
            # Substituted values are emitted as-is
            parts.append(format_value(value))
        position = match.end()

    parts.append(unescape_literal(text[position:]))
    return "".join(parts), misses


__all__ = [
    "MISSING",
    "TOKEN_PATTERN",
    "Token",
    "tokenize",
    "has_tokens",
    "escape_literal",
    "unescape_literal",
    "lookup_path",
    "format_value",
    "is_truthy",
    "render_template",
]
