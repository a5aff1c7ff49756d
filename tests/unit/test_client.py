"""Tests for the screen client."""

import httpx
import pybreaker
import pytest
import respx
from unittest.mock import patch

from sdui.clients import ScreenClient
from sdui.core import ScreenRequest
from sdui.core.errors import DocumentDecodeError, DocumentFetchError

BASE_URL = "http://composer.test"

SCREEN_BODY = {
    "version": 5,
    "component": {"id": "root", "type": "vstack", "children": [{"type": "text", "text": "Hi"}]},
}


@pytest.fixture
def screen_client():
    client = ScreenClient(BASE_URL, timeout=1.0, fail_max=3, reset_timeout=60)
    yield client
    client.close()


def _screen_route(screen_id: str = "home"):
    return respx.route(method="GET", host="composer.test", path=f"/screens/{screen_id}")


@pytest.mark.unit
def test_client_initialization(screen_client):
    assert screen_client.base_url == BASE_URL
    assert isinstance(screen_client._breaker, pybreaker.CircuitBreaker)
    assert screen_client._breaker.name == "screen-http"
    assert screen_client._breaker.fail_max == 3


@pytest.mark.unit
def test_client_strips_trailing_slash():
    with ScreenClient(BASE_URL + "/") as client:
        assert client.base_url == BASE_URL


@pytest.mark.unit
@respx.mock
def test_fetch_screen_decodes(screen_client):
    _screen_route().mock(return_value=httpx.Response(200, json=SCREEN_BODY))

    screen = screen_client.fetch_screen(ScreenRequest(screen_id="home"))

    assert screen.version == 5
    assert screen.component.children[0].id == "text-0"


@pytest.mark.unit
@respx.mock
def test_fetch_forwards_query_parameters(screen_client):
    route = _screen_route().mock(return_value=httpx.Response(200, json=SCREEN_BODY))

    screen_client.fetch_screen(ScreenRequest(screen_id="home", user_id="tech-1", locale="en_US"))

    params = route.calls.last.request.url.params
    assert params["userId"] == "tech-1"
    assert params["locale"] == "en_US"
    assert "routeId" not in params


@pytest.mark.unit
@respx.mock
def test_fetch_http_error_status(screen_client):
    _screen_route().mock(return_value=httpx.Response(503))

    with pytest.raises(DocumentFetchError) as exc_info:
        screen_client.fetch_screen(ScreenRequest(screen_id="home"))

    assert exc_info.value.status_code == 503


@pytest.mark.unit
@respx.mock
def test_fetch_network_error(screen_client):
    _screen_route().mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(DocumentFetchError) as exc_info:
        screen_client.fetch_screen(ScreenRequest(screen_id="home"))

    assert isinstance(exc_info.value.original, httpx.ConnectError)


@pytest.mark.unit
@respx.mock
def test_fetch_malformed_body(screen_client):
    _screen_route().mock(return_value=httpx.Response(200, content=b'{"version": 5'))

    with pytest.raises(DocumentDecodeError):
        screen_client.fetch_screen(ScreenRequest(screen_id="home"))


@pytest.mark.unit
@respx.mock
def test_breaker_opens_after_repeated_failures(screen_client):
    route = _screen_route().mock(side_effect=httpx.ConnectError("down"))

    for _ in range(3):
        with pytest.raises(DocumentFetchError):
            screen_client.fetch_screen(ScreenRequest(screen_id="home"))

    calls = route.call_count
    with pytest.raises(DocumentFetchError, match="Circuit breaker open"):
        screen_client.fetch_screen(ScreenRequest(screen_id="home"))

    assert str(screen_client.breaker_state) == "open"
    assert route.call_count == calls


@pytest.mark.unit
def test_breaker_state_change_logged(screen_client):
    listener = screen_client._breaker.listeners[0]

    with patch("sdui.clients.screens.logger") as mock_logger:
        listener.state_change(screen_client._breaker, "closed", "open")

    assert mock_logger.warning.call_args[0][0] == "breaker_state_change"


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_afetch_screen(screen_client):
    _screen_route().mock(return_value=httpx.Response(200, json=SCREEN_BODY))

    screen = await screen_client.afetch_screen(ScreenRequest(screen_id="home"))

    assert screen.component.id == "root"


@pytest.mark.unit
@respx.mock
def test_health_check(screen_client):
    respx.get(f"{BASE_URL}/health").mock(return_value=httpx.Response(200))
    assert screen_client.health_check() is True


@pytest.mark.unit
@respx.mock
def test_health_check_unreachable(screen_client):
    respx.get(f"{BASE_URL}/health").mock(side_effect=httpx.ConnectError("down"))
    assert screen_client.health_check() is False
