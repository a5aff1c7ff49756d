"""Fast, type-safe JSON parsing and encoding with multiple backends."""

from typing import Any

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def parse_json_object(data: bytes | str, max_size: int | None = None) -> dict[str, Any]:
    """
    Parse a JSON document that must be an object.

    Args:
        data: Raw JSON bytes or text
        max_size: Optional byte limit checked before decoding

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If the payload is too large, malformed, or not an object
    """
    raw = data.encode("utf-8") if isinstance(data, str) else data

    if max_size is not None:
        validate_json_size(raw, max_size, "Screen")

    if not raw.strip():
        raise JSONParseError("Empty JSON payload")

    try:
        result = _decoder.decode(raw)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def dumps_bytes(obj: Any) -> bytes:
    """Encode object to compact JSON bytes (orjson)."""
    return orjson.dumps(obj)


def validate_json_size(data: bytes, max_size: int, name: str = "JSON") -> None:
    """
    Validate JSON payload size before decoding.

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(data)
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = 20, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion.

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)


__all__ = [
    "JSONParseError",
    "parse_json_object",
    "dumps_bytes",
    "validate_json_size",
    "validate_json_depth",
]
