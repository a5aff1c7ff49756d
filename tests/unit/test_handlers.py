"""Tests for the HTTP surface."""

import pytest

from sdui.clients import ScreenClient
from sdui.composer import MemoryStore, ScreenComposer
from sdui.core import create_container
from sdui.document import decode_screen
from sdui.handlers import ScreenHandler


def _texts(component: dict) -> list[str]:
    out = [component["text"]] if "text" in component else []
    for child in component.get("children", []):
        out.extend(_texts(child))
    return out


@pytest.mark.unit
def test_get_screen_success(client):
    response = client.get("/screens/technician-home")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    body = response.json()
    assert body["version"] == 5
    assert body["component"]["type"] == "scroll"
    assert decode_screen(response.content).version == 5


@pytest.mark.unit
def test_get_screen_personalised(client):
    response = client.get(
        "/screens/technician-home",
        params={"userId": "tech-1", "serviceDate": "2024-03-05T10:00:00Z", "locale": "en_US"},
    )

    assert response.status_code == 200
    assert "Route R-42 • Mar 5, 2024" in _texts(response.json()["component"])


@pytest.mark.unit
def test_unparsable_service_date_ignored(client):
    response = client.get("/screens/home", params={"serviceDate": "next tuesday"})

    assert response.status_code == 200


@pytest.mark.unit
def test_unknown_user_still_succeeds(client):
    """Missing personalisation data degrades instead of failing."""
    response = client.get("/screens/home", params={"userId": "ghost", "routeId": "R-404"})

    assert response.status_code == 200
    assert any(text.startswith("No route assigned") for text in _texts(response.json()["component"]))


@pytest.mark.unit
@pytest.mark.parametrize("path", ["/screens", "/screens/", "/screens/%20"])
def test_missing_screen_id(client, path):
    response = client.get(path)

    assert response.status_code == 400
    assert response.json() == {"detail": "missing screenId"}


@pytest.mark.unit
def test_composer_failure_returns_500(client, app, monkeypatch):
    def broken(request):
        raise RuntimeError("template store offline")

    monkeypatch.setattr(app.state.screen_handler.composer, "get_screen", broken)

    response = client.get("/screens/home")

    assert response.status_code == 500
    assert response.json() == {"detail": "failed to resolve screen"}


@pytest.mark.unit
def test_identical_requests_identical_documents(client):
    params = {"userId": "tech-1", "serviceDate": "2024-03-05T10:00:00Z"}

    first = client.get("/screens/home", params=params)
    second = client.get("/screens/home", params=params)

    assert first.content == second.content


@pytest.mark.unit
def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["service"] == "sdui"


@pytest.mark.unit
def test_metrics_exposed(client):
    client.get("/screens/home")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "sdui_screens_served_total" in response.text


@pytest.mark.unit
def test_container_wiring(settings):
    container = create_container(settings)

    composer = container.get(ScreenComposer)
    assert composer is container.get(ScreenComposer)
    assert composer.technicians is container.get(MemoryStore)
    assert container.get(ScreenHandler).composer is composer

    with container.get(ScreenClient) as screen_client:
        assert screen_client.base_url == "http://composer.test"
