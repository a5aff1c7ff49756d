"""
Screen composer
Server-side assembly of personalised screens
"""

from .composer import NO_ROUTE_LABEL, SCREEN_VERSION, ScreenComposer, Templates, stamp_ids
from .memory import MemoryStore
from .models import Route, RouteAlert, RouteStop, Technician
from .repository import NotFoundError, RouteRepository, TechnicianRepository

__all__ = [
    "NO_ROUTE_LABEL",
    "SCREEN_VERSION",
    "ScreenComposer",
    "Templates",
    "stamp_ids",
    "MemoryStore",
    "Route",
    "RouteAlert",
    "RouteStop",
    "Technician",
    "NotFoundError",
    "RouteRepository",
    "TechnicianRepository",
]
