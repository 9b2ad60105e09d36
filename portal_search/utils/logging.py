"""Logging setup: JSON or plain lines, tagged with the request being served."""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import orjson

# Set by RequestLoggingMiddleware for the lifetime of one request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
search_mode_var: ContextVar[Optional[str]] = ContextVar("search_mode", default=None)

# ``extra=`` keys copied into JSON lines when present
_EXTRA_FIELDS = ("method", "path", "status_code", "duration_ms", "client_ip")

_NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "httpx", "httpcore", "openai")

PLAIN_FORMAT = "%(asctime)s %(levelname)-7s [%(request_id)s] %(name)s: %(message)s"


class RequestContextFilter(logging.Filter):
    """Stamp every record with the current request id and search mode."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get() or "-"
        if not getattr(record, "search_mode", None):
            record.search_mode = search_mode_var.get()
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line, serialised with orjson."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id and request_id != "-":
            entry["request_id"] = request_id
        if getattr(record, "search_mode", None):
            entry["search_mode"] = record.search_mode
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return orjson.dumps(entry, default=str).decode()


def setup_logging(level: str = "INFO", json_format: bool = True, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_format: JSON lines (True) or plain text (False)
        log_file: Also write to this file when given
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter: logging.Formatter = (
        JSONFormatter() if json_format else logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(log_level)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(RequestContextFilter())
        root.addHandler(handler)

    # Upstream clients log every request at INFO
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
