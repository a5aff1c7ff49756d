"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from sdui.composer import MemoryStore, Route, RouteAlert, RouteStop, ScreenComposer, Technician
from sdui.core import Settings
from sdui.document import decode_screen
from sdui.interpreter import Context, ViewCache


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["SDUI_LOG_LEVEL"] = "DEBUG"
    os.environ["SDUI_COMPOSER_URL"] = "http://composer.test"


FIXED_NOW = datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc)


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings (environment independent)."""
    return Settings(composer_url="http://composer.test", view_cache_size=64)


@pytest.fixture
def view_cache():
    """Fresh view cache per test."""
    return ViewCache(max_size=64)


# ============================================================================
# Document Fixtures
# ============================================================================

@pytest.fixture
def home_document():
    """Wire-format screen with a header, job list and a conditional."""
    return {
        "version": 5,
        "component": {
            "id": "root",
            "type": "vstack",
            "children": [
                {"id": "header", "type": "text", "text": "Good day, {{user.name}}", "font": "title2"},
                {
                    "id": "jobs",
                    "type": "list",
                    "key": "jobs",
                    "itemView": {
                        "id": "row",
                        "type": "vstack",
                        "children": [
                            {"id": "row-name", "type": "text", "key": "customerName", "font": "headline"},
                            {"id": "row-status", "type": "text", "key": "status", "color": "statusColor"},
                            {
                                "id": "row-notes",
                                "type": "conditional",
                                "conditionKey": "pinnedNotes",
                                "children": [{"id": "row-notes-text", "type": "text", "key": "pinnedNotes"}],
                            },
                            {"id": "row-start", "type": "button", "label": "Start", "actionId": "startJob"},
                        ],
                    },
                },
                {
                    "id": "alerts",
                    "type": "conditional",
                    "conditionKey": "route.hasCustomerAlerts",
                    "children": [{"id": "alerts-text", "type": "text", "text": "{{route.alertSummary}}"}],
                },
            ],
        },
    }


@pytest.fixture
def home_screen(home_document):
    """Decoded home screen."""
    return decode_screen(home_document)


@pytest.fixture
def jobs():
    """Two jobs as the client holds them."""
    return [
        {"id": "job-1", "customerName": "A", "status": "pending", "pinnedNotes": "Gate code 1234"},
        {"id": "job-2", "customerName": "B", "status": "completed", "pinnedNotes": ""},
    ]


@pytest.fixture
def context(jobs):
    """Context with user, jobs and no handlers."""
    return Context(values={"user": {"name": "Ava"}}, collections={"jobs": jobs})


# ============================================================================
# Composer Fixtures
# ============================================================================

@pytest.fixture
def technician():
    return Technician(id="tech-1", email="ava@example.com", display_name="Ava", role="Technician", region="North")


@pytest.fixture
def route():
    return Route(
        id="R-42",
        technician_id="tech-1",
        service_date=FIXED_NOW,
        customer_stops=(
            RouteStop(
                customer_id="c-1",
                customer_name="Acme Foods",
                address="1 Main St",
                window_start=datetime(2024, 3, 5, 9, 0, tzinfo=timezone.utc),
                window_end=datetime(2024, 3, 5, 11, 0, tzinfo=timezone.utc),
                priority="high",
                notes="Dog on premises",
            ),
            RouteStop(customer_id="c-2", customer_name="Bay Bakery", address="2 Dock Rd"),
        ),
        alerts=(RouteAlert(type="weather", message="Rain expected after 2 PM", severity="warning"),),
    )


@pytest.fixture
def store(technician, route):
    """Memory store seeded with one technician and route."""
    store = MemoryStore()
    store.add_technician(technician)
    store.save_route(route)
    return store


@pytest.fixture
def composer(store):
    """Composer with a fixed clock."""
    return ScreenComposer(technicians=store, routes=store, clock=lambda: FIXED_NOW)


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest.fixture
def app(settings, store):
    """Application wired to the seeded store."""
    from injector import Injector

    from sdui.core.container import CoreModule
    from sdui.main import create_app

    container = Injector([CoreModule(settings)])
    container.binder.bind(MemoryStore, to=store)
    return create_app(settings, container)


@pytest.fixture
def client(app):
    """HTTP test client."""
    with TestClient(app) as client:
        yield client
