"""Time Utilities - UTC timestamps and formatting"""
from datetime import datetime, timezone
from typing import Optional
from dateutil import parser as date_parser


def utc_now() -> datetime:
    """Get current UTC datetime"""
    return datetime.now(timezone.utc)


def today_iso(now: Optional[datetime] = None) -> str:
    """Calendar date (YYYY-MM-DD) in UTC, used for handover/completion dates"""
    return (now or utc_now()).date().isoformat()


def normalize_date(value: Optional[str]) -> Optional[str]:
    """
    Normalize a user supplied date to YYYY-MM-DD

    Empty strings clear the date (None). Anything dateutil cannot parse
    raises ValueError.
    """
    if value is None or not str(value).strip():
        return None
    return date_parser.parse(str(value)).date().isoformat()
