"""Python logging formatters for the exporter.

Records are rendered as logfmt (``key=value`` pairs) or JSON lines. Fields
passed through ``extra=`` are appended after the standard fields.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

LOG_FORMATS = ("logfmt", "json")

ROOT_LOGGER = "dynomite_exporter"


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Extract the ordered fields of a log record.

    Args:
        record: The log record to render.

    Returns:
        Mapping of ts, level, logger, caller, msg, extra attributes and
        exception info.
    """
    fields: dict[str, Any] = {
        "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
            timespec="milliseconds"
        ),
        "level": record.levelname.lower(),
        "logger": record.name,
        "caller": f"{record.module}:{record.lineno}",
        "msg": record.getMessage(),
    }

    # Add any extra attributes passed via logging call
    for key, value in record.__dict__.items():
        if key not in _STANDARD_LOGRECORD_ATTRS and not key.startswith("_"):
            fields[key] = value

    # Extract exception info if present
    if record.exc_info:
        exc_type, exc_value, _ = record.exc_info
        if exc_type is not None:
            fields["exc_type"] = exc_type.__name__
        if exc_value is not None:
            fields["exc_message"] = str(exc_value)

    return fields


def _logfmt_value(value: Any) -> str:
    text = value if isinstance(value, str) else json.dumps(value, default=str)
    if text == "" or any(c in text for c in ' ="\\\n'):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
    return text


class LogfmtFormatter(logging.Formatter):
    """Formatter rendering records as logfmt lines."""

    def format(self, record: logging.LogRecord) -> str:
        return " ".join(
            f"{key}={_logfmt_value(value)}"
            for key, value in record_fields(record).items()
        )


class JSONFormatter(logging.Formatter):
    """Formatter rendering records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(record_fields(record), default=str)


def configure_logging(level: str = "info", fmt: str = "logfmt") -> logging.Logger:
    """Install a stderr handler on the exporter's logger.

    Calling this again replaces the previously installed handler.

    Args:
        level: One of ``debug``, ``info``, ``warn``, ``error``.
        fmt: ``logfmt`` or ``json``.

    Returns:
        The configured ``dynomite_exporter`` logger.

    Raises:
        ValueError: If level or fmt is unknown.
    """
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}")
    if fmt not in LOG_FORMATS:
        raise ValueError(f"unknown log format {fmt!r}")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if fmt == "json" else LogfmtFormatter())

    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(LOG_LEVELS[level])
    return logger
