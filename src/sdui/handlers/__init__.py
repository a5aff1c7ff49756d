"""HTTP handlers."""

from .screens import ScreenHandler, router as screens_router
from .system import router as system_router

__all__ = ["ScreenHandler", "screens_router", "system_router"]
