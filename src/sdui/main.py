"""
Screen Service - Main Entry Point
Serves composed screens over HTTP
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from injector import Injector

from sdui import __version__
from sdui.core import Settings, configure_logging, create_container, get_logger, get_settings
from sdui.handlers import ScreenHandler, screens_router, system_router

logger = get_logger(__name__)


def create_app(settings: Settings | None = None, container: Injector | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings override (environment otherwise)
        container: Pre-built injector, e.g. with a seeded store in tests

    Returns:
        Configured application
    """
    settings = settings or get_settings()
    container = container or create_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("startup", host=settings.host, port=settings.port, version=__version__)
        yield
        logger.info("shutdown")

    app = FastAPI(
        title="SDUI Screen Service",
        description="Server-driven UI screen composer",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.container = container
    app.state.screen_handler = container.get(ScreenHandler)

    app.include_router(screens_router)
    app.include_router(system_router)
    return app


def run() -> None:
    """Console entry point."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
