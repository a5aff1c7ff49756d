"""Fast hashing for cache keys, data fingerprints and stable component ids.

xxhash64 is used for view cache fingerprints; SHA256 is available where
digests have to match other services.
"""

from typing import Any, Protocol
from enum import Enum
import hashlib

import orjson
import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # Fast, non-cryptographic (cache keys)
    SHA256 = "sha256"      # Secure, portable digests


class Hasher(Protocol):
    """Protocol for hash implementations."""

    def digest(self, data: bytes) -> str:
        """Compute hex digest of data."""
        ...


class XXHasher:
    """Ultra-fast non-cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        """Compute xxhash64 hex digest."""
        return xxhash.xxh64(data).hexdigest()


class SHA256Hasher:
    """Secure cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        """Compute SHA256 hex digest."""
        return hashlib.sha256(data).hexdigest()


def create_hasher(algorithm: Algorithm = Algorithm.XXHASH64) -> Hasher:
    """
    Create hasher instance.

    Args:
        algorithm: Hash algorithm to use

    Returns:
        Hasher instance

    Raises:
        ValueError: If the algorithm is unknown
    """
    if algorithm == Algorithm.XXHASH64:
        return XXHasher()
    elif algorithm == Algorithm.SHA256:
        return SHA256Hasher()
    else:
        raise ValueError(f"Unknown algorithm: {algorithm}")


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None
) -> str:
    """
    Hash string to hex digest.

    Args:
        text: String to hash
        algorithm: Hash algorithm (default: xxhash64 for speed)
        truncate: Optional length to truncate digest

    Returns:
        Hex digest string
    """
    digest = create_hasher(algorithm).digest(text.encode("utf-8"))
    return digest[:truncate] if truncate else digest


def hash_fields(*fields: str, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Hash multiple fields together (deterministic).

    Examples:
        >>> hash_fields("technician-home", "root", "0")
        'b4f3c2...'
    """
    combined = "\x00".join(fields)  # Null byte separator
    return hash_string(combined, algorithm)


def _canonical_default(value: Any) -> Any:
    """Fallback encoder for values orjson cannot serialise natively."""
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, (set, frozenset)):
        return sorted(str(v) for v in value)
    if hasattr(value, "__dict__"):
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    return str(value)


def canonical_bytes(value: Any) -> bytes:
    """
    Serialise a value to canonical JSON bytes (sorted keys).

    Equal data yields equal bytes regardless of mapping insertion order.
    """
    return orjson.dumps(
        value,
        default=_canonical_default,
        option=orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS,
    )


def fingerprint(value: Any, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Fingerprint arbitrary scope data for cache keys.

    Args:
        value: Mapping, sequence, model or scalar

    Returns:
        Hex digest that changes whenever the data changes
    """
    return create_hasher(algorithm).digest(canonical_bytes(value))


__all__ = [
    "Algorithm",
    "Hasher",
    "create_hasher",
    "hash_string",
    "hash_fields",
    "canonical_bytes",
    "fingerprint",
]
