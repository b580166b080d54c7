"""Process entry point: wire the registry and serve it with uvicorn."""

import logging
import platform
from collections.abc import Sequence

import uvicorn

from dynomite_exporter import PROGRAM, __version__
from dynomite_exporter.adapters.frameworks.asgi import (
    ASGIApp,
    ScrapeLoggingMiddleware,
    create_asgi_app,
)
from dynomite_exporter.adapters.logging import configure_logging
from dynomite_exporter.adapters.upstream.http import HTTPStatusSource
from dynomite_exporter.config import ExporterConfig, parse_args
from dynomite_exporter.core.build_info import BuildInfoCollector
from dynomite_exporter.core.collector import DynomiteCollector
from dynomite_exporter.core.registry import CollectorRegistry

logger = logging.getLogger(__name__)


def build_app(
    config: ExporterConfig, source: HTTPStatusSource | None = None
) -> tuple[ASGIApp, CollectorRegistry]:
    """Compose the registry and the ASGI app for a configuration.

    Args:
        config: Exporter settings.
        source: Upstream source override (default: HTTP to config.address).

    Returns:
        Tuple of (ASGI app, registry).
    """
    source = source or HTTPStatusSource(config.address, config.timeout)
    registry = CollectorRegistry()
    registry.register(BuildInfoCollector(PROGRAM, __version__))
    registry.register(DynomiteCollector(source))
    app = create_asgi_app(
        registry, metrics_path=config.metrics_path, on_shutdown=[source.aclose]
    )
    return ScrapeLoggingMiddleware(app), registry


def main(argv: Sequence[str] | None = None) -> None:
    """Run the exporter until interrupted."""
    config = parse_args(argv, version=__version__)
    configure_logging(config.log_level, config.log_format)

    logger.info(
        "Starting dynomite_exporter",
        extra={"version": __version__, "pyversion": platform.python_version()},
    )
    app, _ = build_app(config)

    logger.info("Listening on address", extra={"address": config.listen_address})
    uvicorn.run(
        app,
        host=config.listen_host,
        port=config.listen_port,
        log_config=None,
        access_log=False,
        lifespan="on",
    )
