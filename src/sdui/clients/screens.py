"""Screen Composer Client"""

import asyncio
from typing import Any

import httpx
import pybreaker

from sdui.core import ScreenRequest, get_logger
from sdui.core.errors import DocumentDecodeError, DocumentFetchError
from sdui.core.id import new_fetch_id
from sdui.document import Screen, ScreenDecoder
from sdui.monitoring import metrics_collector

logger = get_logger(__name__)


class ScreenClient:
    """
    Client for fetching screen documents with circuit breaker protection.
    Every failure surfaces as a DocumentFetchError.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 5.0,
        fail_max: int = 5,
        reset_timeout: int = 30,
        decoder: ScreenDecoder | None = None,
    ) -> None:
        """
        Initialize screen client with circuit breaker.

        Args:
            base_url: Base URL of the screen composer
            timeout: Request timeout in seconds
            fail_max: Consecutive failures before the breaker opens
            reset_timeout: Seconds before an open breaker lets a trial call through
            decoder: Document decoder (default limits when omitted)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.decoder = decoder or ScreenDecoder()
        self._client = httpx.Client(timeout=timeout)

        class BreakerListener(pybreaker.CircuitBreakerListener):
            """Listener for circuit breaker state changes."""

            def state_change(self, cb, old_state, new_state):
                logger.warning(
                    "breaker_state_change",
                    breaker=cb.name,
                    from_state=str(old_state),
                    to_state=str(new_state),
                )

        self._breaker = pybreaker.CircuitBreaker(
            fail_max=fail_max,
            reset_timeout=reset_timeout,
            name="screen-http",
            listeners=[BreakerListener()],
        )

        logger.info("client_init", url=self.base_url)

    @property
    def breaker_state(self) -> str:
        return self._breaker.current_state

    def fetch_screen(self, request: ScreenRequest) -> Screen:
        """
        Fetch and decode one screen with circuit breaker protection.

        Args:
            request: Screen id plus personalisation parameters

        Returns:
            Decoded screen (not yet version gated)

        Raises:
            DocumentFetchError: Transport failure, non-2xx status or open breaker
            DocumentDecodeError: Body is not a valid screen document
        """
        fetch_id = new_fetch_id()
        url = f"{self.base_url}/screens/{request.screen_id}"
        params = request.query_params()

        def _make_request() -> httpx.Response:
            response = self._client.get(url, params=params)
            # Raise inside the breaker so HTTP errors count as failures
            response.raise_for_status()
            return response

        try:
            response = self._breaker.call(_make_request)
        except pybreaker.CircuitBreakerError as e:
            metrics_collector.record_fetch("breaker_open")
            logger.error("fetch_failed", fetch_id=fetch_id, error="Circuit breaker open - composer unavailable")
            raise DocumentFetchError("Circuit breaker open - composer unavailable", original=e) from e
        except httpx.HTTPStatusError as e:
            metrics_collector.record_fetch("http_error")
            status = e.response.status_code
            logger.warning("fetch_http_status", fetch_id=fetch_id, status=status)
            raise DocumentFetchError(f"Composer returned {status}", status_code=status, original=e) from e
        except httpx.HTTPError as e:
            metrics_collector.record_fetch("transport_error")
            logger.warning("fetch_http_error", fetch_id=fetch_id, error=str(e))
            raise DocumentFetchError(f"Screen fetch failed: {e}", original=e) from e

        try:
            screen = self.decoder.decode(response.content)
        except DocumentDecodeError:
            metrics_collector.record_fetch("decode_error")
            raise

        metrics_collector.record_fetch("success")
        logger.info("fetched", fetch_id=fetch_id, screen_id=request.screen_id, version=screen.version)
        return screen

    async def afetch_screen(self, request: ScreenRequest) -> Screen:
        """Async variant; runs the blocking fetch in a worker thread."""
        return await asyncio.to_thread(self.fetch_screen, request)

    def health_check(self) -> bool:
        """
        Check if the composer is reachable (bypasses circuit breaker).

        Returns:
            True if composer is healthy
        """
        try:
            response = self._client.get(f"{self.base_url}/health", timeout=2.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def close(self) -> None:
        """Close HTTP client."""
        self._client.close()

    def __enter__(self) -> "ScreenClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


__all__ = ["ScreenClient"]
