"""Error taxonomy for document fetch, gating, binding, style and actions.

Only fetch and version errors cross the render boundary. Binding, style and
action errors are raised internally and absorbed where they occur.
"""


class SDUIError(Exception):
    """Base class for all engine errors."""

    pass


class DocumentFetchError(SDUIError):
    """Fetching a screen document failed (transport or server side)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.original = original


class DocumentDecodeError(DocumentFetchError):
    """Screen body was received but is not a valid document."""

    pass


class UnsupportedVersionError(SDUIError):
    """Screen version is outside the supported range."""

    def __init__(self, version: int, min_supported: int, max_supported: int) -> None:
        super().__init__(
            f"Screen version {version} outside supported range "
            f"[{min_supported}, {max_supported}]"
        )
        self.version = version
        self.min_supported = min_supported
        self.max_supported = max_supported


class BindingResolutionMiss(SDUIError):
    """A key or placeholder path has no value in scope."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No value bound for '{path}'")
        self.path = path


class StyleParseError(SDUIError):
    """A color or font token could not be parsed."""

    def __init__(self, token: str, kind: str = "color") -> None:
        super().__init__(f"Unrecognised {kind} token '{token}'")
        self.token = token
        self.kind = kind


class ActionNotFoundError(SDUIError):
    """No handler is registered for an action id."""

    def __init__(self, action_id: str) -> None:
        super().__init__(f"No handler registered for action '{action_id}'")
        self.action_id = action_id


__all__ = [
    "SDUIError",
    "DocumentFetchError",
    "DocumentDecodeError",
    "UnsupportedVersionError",
    "BindingResolutionMiss",
    "StyleParseError",
    "ActionNotFoundError",
]
