"""
Screen interpreter
Resolves screen documents against a render context into presentation trees
"""

from .actions import ActionDispatcher
from .binder import DataBinder, interpret
from .cache import CacheKey, ViewCache
from .context import ActionHandler, Context, ContextSource, Scope
from .fallbacks import RETRY_ACTION, error_screen, skeleton_screen, unsupported_screen
from .output import ActionBinding, ResolvedNode
from .session import RenderSession, SessionState
from .style import PresentationColor, PresentationFont, StyleResolver

__all__ = [
    "ActionDispatcher",
    "DataBinder",
    "interpret",
    "CacheKey",
    "ViewCache",
    "ActionHandler",
    "Context",
    "ContextSource",
    "Scope",
    "RETRY_ACTION",
    "error_screen",
    "skeleton_screen",
    "unsupported_screen",
    "ActionBinding",
    "ResolvedNode",
    "RenderSession",
    "SessionState",
    "PresentationColor",
    "PresentationFont",
    "StyleResolver",
]
