"""Timestamp parsing shared by the models and the normalizer"""

from datetime import date, datetime, timezone
from typing import Optional

from dateutil import parser as dateutil_parser

from localpress.utils.logger import get_logger

logger = get_logger(__name__)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a provider timestamp into an aware UTC datetime.

    Naive values are taken to be UTC (NewsData.io sends "2024-01-15 10:30:00").
    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = dateutil_parser.parse(str(value))
        except (ValueError, TypeError, OverflowError):
            logger.debug("Unparseable timestamp: %r", value)
            return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_iso_date(value: Optional[str]) -> Optional[str]:
    """Timestamp -> "YYYY-MM-DD" (UTC calendar date), or None."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.date().isoformat()


def iso_date_to_datetime(value: Optional[str]) -> Optional[datetime]:
    """"YYYY-MM-DD" (or a full timestamp) -> aware datetime at UTC midnight for bare dates."""
    if not value:
        return None
    try:
        day = date.fromisoformat(value)
    except (ValueError, TypeError):
        return parse_timestamp(value)
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
