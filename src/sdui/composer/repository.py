"""Repository interfaces for composer lookups."""

from datetime import datetime
from typing import Protocol

from .models import Route, Technician


class NotFoundError(LookupError):
    """Requested entity does not exist."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class TechnicianRepository(Protocol):
    """Retrieves technician profiles."""

    def get_by_id(self, technician_id: str) -> Technician:
        """Raises NotFoundError when absent."""
        ...


class RouteRepository(Protocol):
    """Retrieves and stores route assignments."""

    def get_route(self, technician_id: str, service_date: datetime) -> Route:
        """Raises NotFoundError when absent."""
        ...

    def get_route_by_id(self, route_id: str) -> Route:
        """Raises NotFoundError when absent."""
        ...

    def save_route(self, route: Route) -> None:
        ...


__all__ = ["NotFoundError", "TechnicianRepository", "RouteRepository"]
