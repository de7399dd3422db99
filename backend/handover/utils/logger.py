"""
Structured JSON logging

Every record is one JSON object per line. The request correlation ID and a
fixed set of handover context fields (project, checklist, version, ...) are
lifted from the record onto the top level so log queries can filter on them.
"""
import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional, Tuple

from ..config.settings import settings


correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

# Record attributes copied into the JSON payload when a caller passes them via extra=
CONTEXT_FIELDS: Tuple[str, ...] = (
    "project_id",
    "checklist",
    "version",
    "action",
    "status",
    "error_code",
    "method",
    "path",
    "status_code",
    "duration_ms",
)

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


class JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON line"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = getattr(record, "correlation_id", None) or correlation_id_var.get()
        if correlation_id:
            payload["correlation_id"] = correlation_id

        payload.update({
            name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)
        })

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _rotating_handler(path: str, formatter: logging.Formatter, level: int = logging.NOTSET) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: Optional[str] = None, logs_path: Optional[str] = None) -> None:
    """
    Configure the root logger

    Logs go to stdout and, when a logs directory is configured, to
    handover.log plus an error-only error.log (both rotated at 10MB).

    Args:
        level: Log level name; defaults to settings.log_level
        logs_path: Directory for log files; defaults to settings.logs_path,
            an empty string disables file logging
    """
    level_name = (level or settings.log_level).upper()
    logs_path = settings.logs_path if logs_path is None else logs_path
    formatter = JsonFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    if logs_path:
        os.makedirs(logs_path, exist_ok=True)
        root_logger.addHandler(_rotating_handler(os.path.join(logs_path, "handover.log"), formatter))
        root_logger.addHandler(
            _rotating_handler(os.path.join(logs_path, "error.log"), formatter, logging.ERROR)
        )

    # Third-party chatter
    for noisy in ("uvicorn.access", "httpx", "pymongo"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class ContextLogger(logging.LoggerAdapter):
    """Adapter that stamps bound context (project_id, checklist, ...) on every record"""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_context_logger(name: str, **context: Any) -> ContextLogger:
    """Logger bound to a project/checklist context"""
    return ContextLogger(logging.getLogger(name), context)


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()
