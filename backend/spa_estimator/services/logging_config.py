"""
Structured logging for the spa estimator.

Every logger lives under the ``spa-estimator`` namespace. Context passed via
``extra=`` (estimate and request identifiers, timings, HTTP fields) is lifted
into top-level JSON keys so log aggregators can filter on it.
"""
import logging
import json
import sys
from datetime import datetime, timezone

ROOT_LOGGER = "spa-estimator"

# extra= keys promoted to top-level JSON fields, in output order
CONTEXT_FIELDS = (
    "estimate_id",
    "vessel_count",
    "duration_ms",
    "request_id",
    "http_method",
    "http_path",
    "http_status",
)

_NOISY_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def get_logger(component: str = "") -> logging.Logger:
    """``spa-estimator`` or ``spa-estimator.<component>``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{component}" if component else ROOT_LOGGER)


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local runs; context fields trail the message."""

    def __init__(self):
        super().__init__("%(asctime)s [%(name)s] %(levelname)s: %(message)s")

    def format(self, record):
        line = super().format(record)
        context = [
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        ]
        return f"{line} ({', '.join(context)})" if context else line


def setup_logging(level: str = "INFO", json_output: bool = True) -> logging.Logger:
    """
    Install a single stdout handler on the root logger.

    Args:
        level:       Level name; unknown names fall back to INFO.
        json_output: JSON lines when True, TextFormatter otherwise.

    Returns:
        The ``spa-estimator`` logger.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_output else TextFormatter())
    root.handlers = [handler]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return get_logger()
