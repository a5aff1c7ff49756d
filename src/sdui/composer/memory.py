"""Thread-safe in-memory repository for local development and tests."""

import threading
from datetime import datetime, timezone

from sdui.core import get_logger
from .models import Route, Technician
from .repository import NotFoundError

logger = get_logger(__name__)


def _route_key(technician_id: str, service_date: datetime) -> tuple[str, str]:
    # Routes are keyed by calendar day, not instant
    return technician_id, service_date.date().isoformat()


class MemoryStore:
    """Implements both TechnicianRepository and RouteRepository."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._technicians: dict[str, Technician] = {}
        self._routes: dict[tuple[str, str], Route] = {}

    def get_by_id(self, technician_id: str) -> Technician:
        with self._lock:
            technician = self._technicians.get(technician_id)
        if technician is None:
            raise NotFoundError("technician", technician_id)
        return technician

    def add_technician(self, technician: Technician) -> None:
        """Seed a technician."""
        with self._lock:
            self._technicians[technician.id] = technician

    def get_route(self, technician_id: str, service_date: datetime) -> Route:
        key = _route_key(technician_id, service_date)
        with self._lock:
            route = self._routes.get(key)
        if route is None:
            raise NotFoundError("route", "/".join(key))
        return route

    def get_route_by_id(self, route_id: str) -> Route:
        with self._lock:
            route = next((r for r in self._routes.values() if r.id == route_id), None)
        if route is None:
            raise NotFoundError("route", route_id)
        return route

    def save_route(self, route: Route) -> None:
        if route.last_modified is None:
            route = route.model_copy(update={"last_modified": datetime.now(timezone.utc)})
        with self._lock:
            self._routes[_route_key(route.technician_id, route.service_date)] = route
        logger.debug("route_saved", route_id=route.id, technician_id=route.technician_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._routes)


__all__ = ["MemoryStore"]
