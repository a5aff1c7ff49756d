"""Screen Handler."""

import time

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, Response
from returns.pipeline import is_successful

from sdui.core import LogContext, get_logger, parse_rfc3339, validate_screen_request
from sdui.core.id import new_request_id
from sdui.composer import ScreenComposer
from sdui.document import encode_screen
from sdui.monitoring import metrics_collector

logger = get_logger(__name__)

MISSING_SCREEN_ID = "missing screenId"
RESOLVE_FAILED = "failed to resolve screen"


class ScreenHandler:
    """Handles screen composition requests."""

    def __init__(self, composer: ScreenComposer) -> None:
        self.composer = composer

    def get_screen(
        self,
        screen_id: str,
        user_id: str = "",
        route_id: str = "",
        service_date: str = "",
        device_model: str = "",
        app_version: str = "",
        locale: str = "",
    ) -> Response:
        """
        Compose a screen and encode it.

        Missing personalisation data never fails the request; only a missing
        screen id (400) or an unexpected composer error (500) does.
        """
        start_time = time.time()

        result = validate_screen_request(
            screen_id=screen_id,
            user_id=user_id,
            route_id=route_id,
            # Unparsable dates are ignored
            service_date=parse_rfc3339(service_date),
            device_model=device_model,
            app_version=app_version,
            locale=locale,
        )
        if not is_successful(result):
            failure = result.failure()
            logger.warning("validation", field=failure.field, error=failure.message)
            metrics_collector.record_screen_served("bad_request")
            return JSONResponse(status_code=400, content={"detail": MISSING_SCREEN_ID})

        request = result.unwrap()
        try:
            screen = self.composer.get_screen(request)
            body = encode_screen(screen)
        except Exception as e:
            metrics_collector.record_screen_served("error")
            logger.error("get_screen_failed", user_id=request.user_id, error=str(e), exc_info=True)
            return JSONResponse(status_code=500, content={"detail": RESOLVE_FAILED})

        metrics_collector.record_screen_served("ok")
        logger.info("screen_served", version=screen.version, duration=round(time.time() - start_time, 4))
        return Response(content=body, media_type="application/json")


router = APIRouter(prefix="/screens", tags=["screens"])


def _handler(request: Request) -> ScreenHandler:
    return request.app.state.screen_handler


@router.get("")
@router.get("/")
def missing_screen_id() -> JSONResponse:
    """Screen id is a required path segment."""
    metrics_collector.record_screen_served("bad_request")
    return JSONResponse(status_code=400, content={"detail": MISSING_SCREEN_ID})


@router.get("/{screen_id}")
def get_screen(
    request: Request,
    screen_id: str,
    user_id: str = Query(default="", alias="userId"),
    route_id: str = Query(default="", alias="routeId"),
    service_date: str = Query(default="", alias="serviceDate"),
    device_model: str = Query(default="", alias="deviceModel"),
    app_version: str = Query(default="", alias="appVersion"),
    locale: str = Query(default=""),
) -> Response:
    """Resolve a personalised screen for a technician."""
    with LogContext(request_id=new_request_id(), screen_id=screen_id):
        return _handler(request).get_screen(
            screen_id,
            user_id=user_id,
            route_id=route_id,
            service_date=service_date,
            device_model=device_model,
            app_version=app_version,
            locale=locale,
        )


__all__ = ["ScreenHandler", "router"]
