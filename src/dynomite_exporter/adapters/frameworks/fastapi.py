"""FastAPI adapter for the exporter endpoints."""

from fastapi import APIRouter, Response
from fastapi.responses import HTMLResponse

from dynomite_exporter.adapters.frameworks.asgi import landing_page
from dynomite_exporter.core.encoding.prometheus import CONTENT_TYPE, encode_metrics
from dynomite_exporter.core.registry import CollectorRegistry


def create_exporter_router(
    registry: CollectorRegistry,
    metrics_path: str = "/metrics",
) -> APIRouter:
    """Create a FastAPI router with the metrics endpoint and landing page.

    Args:
        registry: Collectors to scrape on each request to metrics_path.
        metrics_path: Path of the Prometheus text endpoint.

    Returns:
        APIRouter with the metrics path and ``/`` configured.
    """
    router = APIRouter()

    @router.get(metrics_path)
    async def get_metrics() -> Response:
        """Return metrics in Prometheus text format."""
        samples = await registry.collect()
        body = encode_metrics(registry.describe(), samples)
        return Response(content=body, media_type=CONTENT_TYPE)

    @router.get("/", response_class=HTMLResponse)
    async def get_root() -> HTMLResponse:
        """Return the landing page linking to the metrics endpoint."""
        return HTMLResponse(content=landing_page(metrics_path))

    return router
