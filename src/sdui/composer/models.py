"""Domain entities the composer personalises screens with."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DomainModel(BaseModel):
    """Immutable domain record."""

    model_config = ConfigDict(frozen=True)


class Technician(DomainModel):
    """A field technician using the app."""

    id: str = Field(min_length=1)
    email: str = ""
    display_name: str = ""
    role: str = ""
    region: str = ""
    certifications: tuple[str, ...] = ()


class RouteStop(DomainModel):
    """One customer visit on a route."""

    customer_id: str
    customer_name: str
    address: str = ""
    window_start: datetime | None = None
    window_end: datetime | None = None
    priority: str = "normal"
    notes: str = ""


class RouteAlert(DomainModel):
    """Route-level communication shown to the technician."""

    type: str
    message: str
    severity: str = "info"


class Route(DomainModel):
    """A technician's assignment for one service date."""

    id: str = Field(min_length=1)
    technician_id: str
    service_date: datetime
    customer_stops: tuple[RouteStop, ...] = ()
    alerts: tuple[RouteAlert, ...] = ()
    last_modified: datetime | None = None
