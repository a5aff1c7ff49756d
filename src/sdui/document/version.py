"""Version Gate - admits or rejects a screen before interpretation."""

from enum import Enum

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from sdui.core import get_logger
from sdui.core.errors import UnsupportedVersionError
from .models import Screen

logger = get_logger(__name__)

MIN_SUPPORTED_VERSION = 1
MAX_SUPPORTED_VERSION = 5


class GateState(str, Enum):
    """Outcome of gating one screen."""

    UNCHECKED = "unchecked"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class VersionGate:
    """
    Checks a screen's version against the supported range.

    Rejection is terminal for that screen: callers substitute a fallback
    instead of interpreting any part of it.
    """

    def __init__(
        self,
        max_supported: int = MAX_SUPPORTED_VERSION,
        min_supported: int | None = MIN_SUPPORTED_VERSION,
    ) -> None:
        if min_supported is not None and min_supported > max_supported:
            raise ValueError("min_supported must not exceed max_supported")
        self.max_supported = max_supported
        self.min_supported = min_supported
        self.state = GateState.UNCHECKED

    def is_supported(self, version: int) -> bool:
        if version > self.max_supported:
            return False
        if self.min_supported is not None and version < self.min_supported:
            return False
        return True

    def check(self, screen: Screen) -> Result[Screen, UnsupportedVersionError]:
        """Gate a screen (Result pattern version)."""
        if self.is_supported(screen.version):
            self.state = GateState.ACCEPTED
            return Success(screen)

        self.state = GateState.REJECTED
        logger.warning(
            "version_rejected",
            version=screen.version,
            min_supported=self.min_supported,
            max_supported=self.max_supported,
        )
        return Failure(
            UnsupportedVersionError(
                screen.version,
                self.min_supported if self.min_supported is not None else 0,
                self.max_supported,
            )
        )

    def admit(self, screen: Screen) -> Screen:
        """
        Gate a screen, raising on rejection.

        Raises:
            UnsupportedVersionError: If the version is outside the range
        """
        result = self.check(screen)
        if not is_successful(result):
            raise result.failure()
        return result.unwrap()


__all__ = ["GateState", "VersionGate", "MIN_SUPPORTED_VERSION", "MAX_SUPPORTED_VERSION"]
