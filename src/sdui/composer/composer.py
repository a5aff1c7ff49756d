"""
Screen Composer
Builds personalised technician screens from a request plus domain lookups.
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from sdui.core import ScreenRequest, get_logger, hash_fields
from sdui.document import Component, ComponentType, Screen
from sdui.interpreter.bindings import escape_literal
from sdui.monitoring import metrics_collector
from .models import Route, RouteAlert, RouteStop, Technician
from .repository import NotFoundError, RouteRepository, TechnicianRepository

logger = get_logger(__name__)

SCREEN_VERSION = 5
NO_ROUTE_LABEL = "No route assigned"

PRIORITY_COLORS = {
    "high": "critical",
    "urgent": "critical",
    "normal": "secondary",
    "low": "secondary",
}

SEVERITY_COLORS = {
    "critical": "critical",
    "high": "critical",
    "warning": "warning",
    "info": "info",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_service_date(value: datetime) -> str:
    """Render like `Jan 2, 2006`."""
    return f"{value:%b} {value.day}, {value.year}"


def format_window(start: datetime | None, end: datetime | None) -> str:
    """Render a visit window, e.g. `9:00 AM - 11:00 AM`."""

    def clock(value: datetime) -> str:
        hour = value.hour % 12 or 12
        return f"{hour}:{value:%M} {'AM' if value.hour < 12 else 'PM'}"

    if start and end:
        return f"{clock(start)} - {clock(end)}"
    if start:
        return f"From {clock(start)}"
    if end:
        return f"Until {clock(end)}"
    return "Anytime"


class Templates:
    """Component templates."""

    @staticmethod
    def text(
        text: str,
        font: str | None = None,
        color: str | None = None,
    ) -> Component:
        return Component(type=ComponentType.TEXT, text=text, font=font, foreground_color=color)

    @staticmethod
    def literal(
        text: str,
        font: str | None = None,
        color: str | None = None,
    ) -> Component:
        """Text from domain data; placeholder braces in it render verbatim."""
        return Templates.text(escape_literal(text), font=font, color=color)

    @staticmethod
    def bound_text(key: str, font: str | None = None, color: str | None = None) -> Component:
        return Component(type=ComponentType.TEXT, key=key, font=font, foreground_color=color)

    @staticmethod
    def button(label: str, action_id: str) -> Component:
        return Component(type=ComponentType.BUTTON, label=label, action_id=action_id)

    @staticmethod
    def vstack(*children: Component, spacing: float | None = None, padding: float | None = None) -> Component:
        return Component(type=ComponentType.VSTACK, children=children, spacing=spacing, padding=padding)

    @staticmethod
    def hstack(*children: Component, spacing: float | None = None) -> Component:
        return Component(type=ComponentType.HSTACK, children=children, spacing=spacing)

    @staticmethod
    def scroll(*children: Component) -> Component:
        return Component(type=ComponentType.SCROLL, children=children)

    @staticmethod
    def conditional(condition_key: str, *children: Component) -> Component:
        return Component(type=ComponentType.CONDITIONAL, condition_key=condition_key, children=children)

    @staticmethod
    def item_list(item_view: Component, key: str | None = None) -> Component:
        return Component(type=ComponentType.LIST, key=key, item_view=item_view)

    @staticmethod
    def spacer() -> Component:
        return Component(type=ComponentType.SPACER)

    @staticmethod
    def divider() -> Component:
        return Component(type=ComponentType.DIVIDER)

    @staticmethod
    def card(*children: Component) -> Component:
        return Component(
            type=ComponentType.VSTACK,
            children=children,
            spacing=4,
            padding=12,
            background_color="#f2f2f7",
            corner_radius=12,
        )


class ScreenComposer:
    """
    Assembles screens for technicians.

    Lookups that miss degrade to generic content; `get_screen` always
    returns a renderable document. Output is a pure function of the request,
    the repository contents and the clock.
    """

    def __init__(
        self,
        technicians: TechnicianRepository,
        routes: RouteRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.technicians = technicians
        self.routes = routes
        self.clock = clock
        self.templates = Templates()

    def get_screen(self, request: ScreenRequest) -> Screen:
        """
        Compose the screen for a request.

        Args:
            request: Validated screen request

        Returns:
            Screen with deterministic component ids
        """
        with metrics_collector.time_compose():
            service_date = request.service_date or self.clock()
            technician = self._find_technician(request)
            route = self._find_route(request, technician, service_date)

            root = self._build_technician_screen(technician, route, service_date)
            screen = Screen(version=SCREEN_VERSION, component=stamp_ids(root, request.screen_id))

        logger.info(
            "composed",
            screen_id=request.screen_id,
            user_id=request.user_id or None,
            route_found=route is not None,
        )
        return screen

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _find_technician(self, request: ScreenRequest) -> Technician | None:
        if not request.user_id:
            return None
        try:
            return self.technicians.get_by_id(request.user_id)
        except NotFoundError as e:
            logger.info("technician_fallback", user_id=request.user_id, reason=str(e))
            metrics_collector.record_fallback("technician_not_found")
            return None

    def _find_route(
        self,
        request: ScreenRequest,
        technician: Technician | None,
        service_date: datetime,
    ) -> Route | None:
        try:
            if request.route_id:
                return self.routes.get_route_by_id(request.route_id)
            if technician is not None:
                return self.routes.get_route(technician.id, service_date)
        except NotFoundError as e:
            logger.info("route_fallback", route_id=request.route_id or None, reason=str(e))
            metrics_collector.record_fallback("route_not_found")
            return None

        metrics_collector.record_fallback("no_route_requested")
        return None

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_technician_screen(
        self,
        technician: Technician | None,
        route: Route | None,
        service_date: datetime,
    ) -> Component:
        t = self.templates

        route_label = f"Route {route.id}" if route is not None else NO_ROUTE_LABEL
        header: list[Component] = [
            t.text("Good day, {{user.name}}", font="title2"),
            t.literal(f"{route_label} • {format_service_date(service_date)}", font="subheadline", color="secondary"),
        ]
        if technician is not None and (technician.role or technician.region):
            details = " • ".join(part for part in (technician.role, technician.region) if part)
            header.append(t.literal(details, font="caption", color="secondary"))

        sections: list[Component] = [
            *header,
            self._metrics_row(),
            t.divider(),
        ]
        if route is not None and route.customer_stops:
            sections += [self._stops_section(route.customer_stops), t.divider()]

        sections += [
            self._jobs_list(),
            t.divider(),
        ]
        if route is not None and route.alerts:
            sections.append(self._alerts_section(route.alerts))

        sections += [
            self._communications_section(),
            t.text(
                "Last sync {{lastSync}} • Profile {{profileCompleteness}} complete",
                font="caption",
                color="secondary",
            ),
        ]
        return t.scroll(t.vstack(*sections, spacing=16, padding=16))

    def _metrics_row(self) -> Component:
        t = self.templates

        def metric(caption: str, value: str) -> Component:
            return t.vstack(t.text(caption, font="caption", color="secondary"), t.text(value, font="title3"))

        return t.hstack(
            metric("Jobs today", "{{todayJobsCompleted}}"),
            metric("Week total", "{{weekJobsCompleted}}"),
            metric("Streak", "{{activeStreak}} days"),
            spacing=24,
        )

    def _stops_section(self, stops: Iterable[RouteStop]) -> Component:
        """Stops known at compose time, emitted as explicit siblings."""
        t = self.templates
        cards = []
        for stop in stops:
            lines = [
                t.hstack(
                    t.literal(stop.customer_name, font="headline"),
                    t.spacer(),
                    t.literal(stop.priority.capitalize(), font="caption", color=PRIORITY_COLORS.get(stop.priority.lower(), "secondary")),
                ),
                t.literal(stop.address, font="subheadline", color="secondary"),
                t.text(format_window(stop.window_start, stop.window_end), font="caption", color="secondary"),
            ]
            if stop.notes:
                lines.append(t.literal(stop.notes, font="caption", color="warning"))
            cards.append(t.card(*lines))
        return t.vstack(t.text("Stops", font="headline"), *cards, spacing=8)

    def _jobs_list(self) -> Component:
        """Jobs the client already holds, bound row by row on device."""
        t = self.templates
        row = t.vstack(
            t.hstack(
                t.vstack(
                    t.bound_text("customerName", font="headline"),
                    t.bound_text("address", font="subheadline", color="secondary"),
                    t.bound_text("scheduledTime", font="caption", color="secondary"),
                ),
                t.spacer(),
                t.bound_text("status", font="caption", color="statusColor"),
            ),
            t.conditional("pinnedNotes", t.bound_text("pinnedNotes", font="caption", color="warning")),
            t.hstack(
                t.button("Start", "startJob"),
                t.button("Complete", "completeJob"),
                t.button("Skip", "skipJob"),
            ),
        )
        return t.item_list(row, key="jobs")

    def _alerts_section(self, alerts: Iterable[RouteAlert]) -> Component:
        t = self.templates
        lines = [
            t.literal(alert.message, font="body", color=SEVERITY_COLORS.get(alert.severity.lower(), "primary"))
            for alert in alerts
        ]
        return t.vstack(t.text("Route alerts", font="headline"), *lines, spacing=8)

    def _communications_section(self) -> Component:
        t = self.templates
        return t.vstack(
            t.text("Communications", font="headline"),
            t.conditional(
                "route.hasCustomerAlerts",
                t.text("{{route.alertSummary}}", font="body", color="warning"),
            ),
            t.conditional(
                "route.hasComplianceTasks",
                t.text("{{route.complianceHeadline}}", font="body", color="critical"),
            ),
        )


def stamp_ids(component: Component, screen_id: str, path: str = "0") -> Component:
    """
    Assign ids derived from (screen id, position in tree).

    Existing ids are kept. Children and item templates are stamped first so
    the rebuilt parent holds the final nodes.
    """
    update: dict = {}
    if not component.id:
        update["id"] = f"{component.type.value}-{hash_fields(screen_id, path)[:12]}"
    if component.children is not None:
        update["children"] = tuple(
            stamp_ids(child, screen_id, f"{path}.{index}") for index, child in enumerate(component.children)
        )
    if component.item_view is not None:
        update["item_view"] = stamp_ids(component.item_view, screen_id, f"{path}.item")
    return component.model_copy(update=update) if update else component


__all__ = ["ScreenComposer", "Templates", "SCREEN_VERSION", "NO_ROUTE_LABEL", "stamp_ids", "format_service_date"]
