"""Command-line configuration for the exporter."""

import argparse
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass

from dynomite_exporter.adapters.logging import LOG_FORMATS, LOG_LEVELS

_DURATION_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(text: str) -> float:
    """Parse a duration such as ``1s``, ``500ms`` or ``1m30s`` into seconds.

    A bare number is taken as seconds.

    Raises:
        ValueError: If the text is not a positive duration.
    """
    text = text.strip()
    try:
        seconds = float(text)
    except ValueError:
        pos = 0
        seconds = 0.0
        for match in _DURATION_RE.finditer(text):
            if match.start() != pos:
                break
            seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
            pos = match.end()
        if pos == 0 or pos != len(text):
            raise ValueError(f"invalid duration {text!r}") from None
    if not math.isfinite(seconds) or seconds <= 0:
        raise ValueError(f"duration must be positive: {text!r}")
    return seconds


def parse_listen_address(text: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``:port``) into host and port.

    An empty host listens on all IPv4 interfaces; ``[::]:port`` listens on
    IPv6 (dual-stack where the OS allows it).

    Raises:
        ValueError: If the port is missing or out of range.
    """
    host, sep, port_text = text.rpartition(":")
    if not sep or not port_text.isdigit():
        raise ValueError(f"invalid listen address {text!r}")
    port = int(port_text)
    if not 0 < port < 65536:
        raise ValueError(f"port out of range in {text!r}")
    host = host.strip("[]") or "0.0.0.0"
    return host, port


@dataclass(frozen=True)
class ExporterConfig:
    """Runtime settings of the exporter.

    Attributes:
        address: Dynomite stats address (``host:port`` or URL).
        timeout: Upstream request timeout in seconds.
        listen_address: Address of the exporter's HTTP server.
        metrics_path: Path serving the Prometheus text endpoint.
        log_level: One of debug, info, warn, error.
        log_format: logfmt or json.
    """

    address: str = "localhost:22222"
    timeout: float = 1.0
    listen_address: str = ":9122"
    metrics_path: str = "/metrics"
    log_level: str = "info"
    log_format: str = "logfmt"

    @property
    def listen_host(self) -> str:
        return parse_listen_address(self.listen_address)[0]

    @property
    def listen_port(self) -> int:
        return parse_listen_address(self.listen_address)[1]


def _duration_arg(text: str) -> float:
    try:
        return parse_duration(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _listen_address_arg(text: str) -> str:
    try:
        parse_listen_address(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return text


def _metrics_path_arg(text: str) -> str:
    if not text.startswith("/"):
        raise argparse.ArgumentTypeError(f"metrics path must start with '/': {text!r}")
    return text


def build_parser(version: str) -> argparse.ArgumentParser:
    """Build the argument parser using the exporter's flag names."""
    defaults = ExporterConfig()
    parser = argparse.ArgumentParser(
        prog="dynomite_exporter",
        description="Prometheus exporter for Dynomite stats.",
    )
    parser.add_argument(
        "--dynomite.address",
        dest="address",
        default=defaults.address,
        help="dynomite server address (default: %(default)s)",
    )
    parser.add_argument(
        "--dynomite.timeout",
        dest="timeout",
        type=_duration_arg,
        default=defaults.timeout,
        help="dynomite connect timeout, e.g. 1s or 500ms (default: 1s)",
    )
    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        type=_listen_address_arg,
        default=defaults.listen_address,
        help="address to listen on for web interface and telemetry "
        "(default: %(default)s)",
    )
    parser.add_argument(
        "--web.telemetry-path",
        dest="metrics_path",
        type=_metrics_path_arg,
        default=defaults.metrics_path,
        help="path under which to expose metrics (default: %(default)s)",
    )
    parser.add_argument(
        "--log.level",
        dest="log_level",
        choices=list(LOG_LEVELS),
        default=defaults.log_level,
        help="only log messages with the given severity or above",
    )
    parser.add_argument(
        "--log.format",
        dest="log_format",
        choices=list(LOG_FORMATS),
        default=defaults.log_format,
        help="output format of log messages",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {version}"
    )
    return parser


def parse_args(argv: Sequence[str] | None = None, version: str = "") -> ExporterConfig:
    """Parse command-line arguments into an ExporterConfig.

    Exits with a usage error on invalid values, like any argparse program.
    """
    namespace = build_parser(version).parse_args(argv)
    return ExporterConfig(
        address=namespace.address,
        timeout=namespace.timeout,
        listen_address=namespace.listen_address,
        metrics_path=namespace.metrics_path,
        log_level=namespace.log_level,
        log_format=namespace.log_format,
    )
