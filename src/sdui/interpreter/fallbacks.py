"""Static screens substituted while loading, after failures, or on version rejection."""

from sdui.document import Component, ComponentType, Screen

RETRY_ACTION = "retry"

# Lowest version: these must render on every client
_STATIC_VERSION = 1


def _screen(screen_id: str, *children: Component) -> Screen:
    return Screen(
        version=_STATIC_VERSION,
        component=Component(
            id=f"{screen_id}-root",
            type=ComponentType.VSTACK,
            spacing=8,
            padding=16,
            children=children,
        ),
    )


def skeleton_screen() -> Screen:
    """Placeholder shown while a fetch is pending."""
    return _screen(
        "skeleton",
        Component(id="skeleton-title", type=ComponentType.TEXT, text="Loading UI...", font="headline"),
        Component(id="skeleton-divider", type=ComponentType.DIVIDER),
        Component(
            id="skeleton-line",
            type=ComponentType.TEXT,
            text="",
            background_color="gray",
            corner_radius=4,
        ),
    )


def error_screen(message: str = "Unable to load this screen.") -> Screen:
    """Visible error with a retry button."""
    return _screen(
        "error",
        Component(
            id="error-title",
            type=ComponentType.TEXT,
            text="Something went wrong",
            font="headline",
            foreground_color="orange",
        ),
        Component(
            id="error-message",
            type=ComponentType.TEXT,
            text=message,
            font="caption",
            foreground_color="secondary",
        ),
        Component(id="error-retry", type=ComponentType.BUTTON, label="Retry", action_id=RETRY_ACTION),
    )


def unsupported_screen(version: int) -> Screen:
    """Shown instead of a screen this client cannot interpret."""
    return _screen(
        "unsupported",
        Component(
            id="unsupported-title",
            type=ComponentType.TEXT,
            text="Unsupported version",
            font="headline",
            foreground_color="red",
        ),
        Component(
            id="unsupported-message",
            type=ComponentType.TEXT,
            text=f"This screen needs a newer app (document version {version}). Please update.",
            font="caption",
            foreground_color="secondary",
        ),
    )


__all__ = ["RETRY_ACTION", "skeleton_screen", "error_screen", "unsupported_screen"]
