"""
Render Session
Owns one screen's lifecycle on the client: fetch, gate, render, dispatch.
"""

import asyncio
from collections.abc import Callable
from enum import Enum
from typing import Protocol

from returns.pipeline import is_successful

from sdui.core import Settings, get_logger, get_settings
from sdui.core.errors import DocumentFetchError, UnsupportedVersionError
from sdui.core.id import Sequence
from sdui.core.validate import ScreenRequest
from sdui.document import Screen, VersionGate
from .actions import ActionDispatcher
from .binder import DataBinder
from .cache import ViewCache
from .context import ContextSource
from .fallbacks import error_screen, skeleton_screen, unsupported_screen
from .output import ActionBinding, ResolvedNode

logger = get_logger(__name__)


class SessionState(str, Enum):
    """What the session currently shows."""

    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    UNSUPPORTED = "unsupported"


class ScreenFetcher(Protocol):
    """Anything that can fetch a screen asynchronously."""

    async def afetch_screen(self, request: ScreenRequest) -> Screen:
        ...


class RenderSession:
    """
    Client-side rendering session.

    Each `load` takes a sequence token; a response that is not for the
    latest token is discarded, so an older fetch can never overwrite the
    result of a newer one. The view cache belongs to the session.
    """

    def __init__(
        self,
        fetcher: ScreenFetcher,
        settings: Settings | None = None,
        cache: ViewCache | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.fetcher = fetcher
        self.cache = cache or ViewCache(
            max_size=self.settings.view_cache_size,
            ttl_seconds=self.settings.view_cache_ttl,
        )
        self.binder = DataBinder(cache=self.cache, default_collection=self.settings.default_collection)
        self.on_change = on_change

        self.state = SessionState.LOADING
        self.screen: Screen | None = None
        self.error: Exception | None = None
        self._sequence = Sequence()
        self._dispatcher: ActionDispatcher | None = None
        self._lock = asyncio.Lock()

    def _new_gate(self) -> VersionGate:
        return VersionGate(
            max_supported=self.settings.max_supported_version,
            min_supported=self.settings.min_supported_version,
        )

    async def load(self, request: ScreenRequest) -> Screen | None:
        """
        Fetch and gate a screen.

        Returns:
            The admitted screen, or None if this response was superseded

        Raises:
            DocumentFetchError: Fetch failed (state becomes FAILED)
            UnsupportedVersionError: Version rejected (state becomes UNSUPPORTED)
        """
        token = self._sequence.next()
        self.state = SessionState.LOADING
        logger.info("screen_fetch_started", screen_id=request.screen_id, token=token)

        try:
            screen = await self.fetcher.afetch_screen(request)
        except DocumentFetchError as e:
            async with self._lock:
                if not self._sequence.is_latest(token):
                    logger.info("stale_fetch_discarded", token=token, error=str(e))
                    return None
                self.state = SessionState.FAILED
                self.error = e
                self.screen = None
            logger.error("screen_fetch_failed", screen_id=request.screen_id, error=str(e))
            raise

        async with self._lock:
            if not self._sequence.is_latest(token):
                logger.info("stale_response_discarded", token=token, latest=self._sequence.latest)
                return None

            result = self._new_gate().check(screen)
            if not is_successful(result):
                rejection: UnsupportedVersionError = result.failure()
                self.state = SessionState.UNSUPPORTED
                self.error = rejection
                self.screen = None
                raise rejection

            self.screen = result.unwrap()
            self.state = SessionState.READY
            self.error = None
            self.cache.clear()

        logger.info("screen_ready", screen_id=request.screen_id, version=screen.version)
        return self.screen

    def current_document(self) -> Screen:
        """The document a render would interpret in the current state."""
        match self.state:
            case SessionState.READY if self.screen is not None:
                return self.screen
            case SessionState.FAILED:
                return error_screen(str(self.error) if self.error else "Unable to load this screen.")
            case SessionState.UNSUPPORTED:
                version = getattr(self.error, "version", 0)
                return unsupported_screen(version)
            case _:
                return skeleton_screen()

    def render(self, context: ContextSource) -> ResolvedNode | None:
        """
        Interpret the current document against a context snapshot.

        The context also backs subsequent `dispatch` calls until the next render.
        """
        self._dispatcher = ActionDispatcher(context, on_change=self.on_change)
        return self.binder.interpret(self.current_document(), context)

    def dispatch(self, binding: ActionBinding) -> asyncio.Task[None] | None:
        """Route an interaction from rendered output to its handler."""
        if self._dispatcher is None:
            logger.warning("dispatch_before_render", action_id=binding.action_id)
            return None
        return self._dispatcher.trigger(binding)


__all__ = ["SessionState", "ScreenFetcher", "RenderSession"]
