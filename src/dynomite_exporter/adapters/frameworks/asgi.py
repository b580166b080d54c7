"""ASGI generic adapter for the exporter endpoints.

This adapter provides a framework-agnostic ASGI application that can be used
with any ASGI server (uvicorn, hypercorn, daphne) without requiring FastAPI
as a dependency.
"""

import fnmatch
import json
import logging
import time
import uuid
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

from dynomite_exporter.core.encoding.prometheus import CONTENT_TYPE, encode_metrics
from dynomite_exporter.core.registry import CollectorRegistry

logger = logging.getLogger(__name__)

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

LANDING_PAGE = """<html>
<head><title>Dynomite Exporter</title></head>
<body>
<h1>Dynomite Exporter</h1>
<p><a href='{metrics_path}'>Metrics</a></p>
</body>
</html>
"""


def landing_page(metrics_path: str) -> str:
    """Render the static root page linking to the metrics path."""
    return LANDING_PAGE.format(metrics_path=metrics_path)


def _extract_request_id(scope: Scope, header_name: str = "X-Request-ID") -> str:
    """Extract or generate a request ID from ASGI scope headers.

    Searches for the specified header (case-insensitive). If not found,
    generates a new UUID.
    """
    header_bytes = header_name.lower().encode()
    headers: list[tuple[bytes, bytes]] = scope.get("headers", [])
    for name, value in headers:
        if name.lower() == header_bytes:
            return str(value.decode("utf-8", errors="replace"))
    return str(uuid.uuid4())


def _get_log_level_for_status(status_code: int) -> int:
    """Map an HTTP status code to a logging level.

    2xx and other codes log at DEBUG, 4xx at WARNING and 5xx at ERROR.
    """
    if 400 <= status_code < 500:
        return logging.WARNING
    if 500 <= status_code < 600:
        return logging.ERROR
    return logging.DEBUG


async def _send_response(send: Send, status: int, content_type: str, body: str) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
    """
    # Encoding must not fail after http.response.start has been sent
    payload = body.encode()
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": payload})


async def _handle_endpoint(
    send: Send,
    endpoint_func: Callable[[], Coroutine[Any, Any, str]],
    content_type: str,
    log_message: str,
) -> None:
    """Execute an endpoint function with error handling and send response.

    Args:
        send: ASGI send callable for writing response.
        endpoint_func: Async function that returns response body.
        content_type: Content-Type header for success response.
        log_message: Message to log on error.
    """
    try:
        body = await endpoint_func()
        await _send_response(send, 200, content_type, body)
    except Exception:
        logger.exception(log_message)
        error_body = json.dumps({"error": "Internal Server Error"})
        await _send_response(send, 500, "application/json", error_body)


async def render_metrics(registry: CollectorRegistry) -> str:
    """Collect every registered collector and encode the result."""
    samples = await registry.collect()
    return encode_metrics(registry.describe(), samples)


async def _handle_lifespan(
    receive: Receive,
    send: Send,
    on_shutdown: list[Callable[[], Awaitable[None]]],
) -> None:
    """Acknowledge lifespan startup and run shutdown hooks."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            for hook in on_shutdown:
                await hook()
            await send({"type": "lifespan.shutdown.complete"})
            return


class ScrapeLoggingMiddleware:
    """ASGI middleware that logs every request with its status and duration.

    Successful requests are logged at DEBUG, so scrapes stay quiet unless the
    log level is lowered.
    """

    def __init__(
        self,
        app: ASGIApp,
        exclude_paths: list[str] | None = None,
        request_id_header: str = "X-Request-ID",
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
            exclude_paths: Paths not to log. Supports exact matches and
                wildcard patterns (e.g., "/internal/*").
            request_id_header: Header to take the request ID from.
        """
        self.app = app
        self.exclude_paths = exclude_paths or []
        self.request_id_header = request_id_header

    def _path_excluded(self, path: str) -> bool:
        """Check if path matches any pattern in exclude_paths."""
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exclude_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        request_id = _extract_request_id(scope, self.request_id_header)
        captured: dict[str, Any] = {"status": None, "body_size": 0}

        async def wrapped_send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                captured["status"] = message["status"]
            elif message["type"] == "http.response.body":
                captured["body_size"] += len(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, receive, wrapped_send)
        except Exception:
            captured["status"] = 500
            raise
        finally:
            if not self._path_excluded(scope["path"]):
                status = captured["status"] or 0
                logger.log(
                    _get_log_level_for_status(status),
                    "%s %s",
                    scope["method"],
                    scope["path"],
                    extra={
                        "request_id": request_id,
                        "status_code": status,
                        "response_body_size": captured["body_size"],
                        "duration_ms": (time.perf_counter() - start_time) * 1000,
                    },
                )


def create_asgi_app(
    registry: CollectorRegistry,
    metrics_path: str = "/metrics",
    on_shutdown: list[Callable[[], Awaitable[None]]] | None = None,
) -> ASGIApp:
    """Create an ASGI app serving the registry and a landing page.

    Args:
        registry: Collectors to scrape on each request to metrics_path.
        metrics_path: Path of the Prometheus text endpoint.
        on_shutdown: Async callables run on lifespan shutdown.

    Returns:
        ASGI application callable.
    """
    shutdown_hooks = list(on_shutdown or [])
    root_body = landing_page(metrics_path)

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send, shutdown_hooks)
            return
        if scope["type"] != "http":
            return

        path = scope["path"]

        if path == metrics_path:
            await _handle_endpoint(
                send,
                lambda: render_metrics(registry),
                CONTENT_TYPE,
                "Error collecting metrics endpoint",
            )
        elif path == "/":
            await _send_response(send, 200, "text/html; charset=utf-8", root_body)
        else:
            await _send_response(send, 404, "text/plain", "Not Found")

    return app
