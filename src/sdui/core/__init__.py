"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationResult,
    ScreenRequest,
    parse_rfc3339,
    validate_screen_request,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    parse_json_object,
    dumps_bytes,
    JSONParseError,
    validate_json_size,
    validate_json_depth,
)
from .hash import Algorithm, hash_string, hash_fields, fingerprint
from .cache import LRUCache, Stats


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationResult",
    "ScreenRequest",
    "parse_rfc3339",
    "validate_screen_request",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "parse_json_object",
    "dumps_bytes",
    "JSONParseError",
    "validate_json_size",
    "validate_json_depth",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_fields",
    "fingerprint",
    # Caching
    "LRUCache",
    "Stats",
]
