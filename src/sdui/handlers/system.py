"""Health and metrics endpoints."""

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

from sdui import __version__
from sdui.monitoring import metrics_collector

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "healthy", "service": "sdui", "version": __version__}


@router.get("/metrics")
def metrics() -> Response:
    """Prometheus exposition."""
    return Response(content=metrics_collector.get_metrics(), media_type=CONTENT_TYPE_LATEST)
