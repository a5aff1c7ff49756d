"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from sdui.clients import ScreenClient
from sdui.composer import MemoryStore, ScreenComposer
from sdui.document import ScreenDecoder
from sdui.handlers import ScreenHandler
from .config import Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_store(self) -> MemoryStore:
        """Provide in-memory store backing technician and route lookups."""
        return MemoryStore()

    @singleton
    @provider
    def provide_composer(self, store: MemoryStore) -> ScreenComposer:
        return ScreenComposer(technicians=store, routes=store)

    @singleton
    @provider
    def provide_screen_handler(self, composer: ScreenComposer) -> ScreenHandler:
        return ScreenHandler(composer)

    @singleton
    @provider
    def provide_decoder(self, settings: Settings) -> ScreenDecoder:
        return ScreenDecoder(max_depth=settings.max_document_depth, max_bytes=settings.max_document_bytes)

    @provider
    def provide_screen_client(self, settings: Settings, decoder: ScreenDecoder) -> ScreenClient:
        """Provide a composer client; callers own and close it."""
        return ScreenClient(
            base_url=settings.composer_url,
            timeout=settings.fetch_timeout,
            fail_max=settings.breaker_fail_max,
            reset_timeout=settings.breaker_reset_timeout,
            decoder=decoder,
        )


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
