"""Logging, identifiers and date helpers shared across layers"""
from .logger import get_logger, get_context_logger, setup_logging
from .idgen import generate_project_id, generate_correlation_id
from .time import utc_now, today_iso, normalize_date

__all__ = [
    "get_logger",
    "get_context_logger",
    "setup_logging",
    "generate_project_id",
    "generate_correlation_id",
    "utc_now",
    "today_iso",
    "normalize_date",
]
