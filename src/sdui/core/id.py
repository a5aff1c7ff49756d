"""ID Generation.

ULID-based request identifiers for log correlation, plus the monotonic
sequence used to discard stale screen fetches.

Design:
- ULIDs: lexicographically sortable, timestamp-based
- Prefixed: readable in logs (req_*, fetch_*)
"""

import itertools
import threading
from typing import NewType

from ulid import ULID

RequestID = NewType("RequestID", str)
"""Inbound HTTP request identifier"""

FetchID = NewType("FetchID", str)
"""Client-side screen fetch identifier"""


class Prefix:
    """ID prefix constants."""

    REQUEST = "req"
    FETCH = "fetch"


def _generate(prefix: str) -> str:
    return f"{prefix}_{ULID()}"


def new_request_id() -> RequestID:
    """Generate a request id for an inbound screen request."""
    return RequestID(_generate(Prefix.REQUEST))


def new_fetch_id() -> FetchID:
    """Generate an id for an outbound screen fetch."""
    return FetchID(_generate(Prefix.FETCH))


class Sequence:
    """
    Thread-safe, monotonically increasing counter.

    Each fetch takes the next value; only the response holding the latest
    value may be applied.
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._latest = start - 1
        self._lock = threading.Lock()

    def next(self) -> int:
        """Issue the next token."""
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_latest(self, token: int) -> bool:
        """Whether token is the most recently issued one."""
        with self._lock:
            return token == self._latest

    @property
    def latest(self) -> int:
        return self._latest


__all__ = [
    "RequestID",
    "FetchID",
    "Prefix",
    "new_request_id",
    "new_fetch_id",
    "Sequence",
]
