"""Display helpers for the web layer"""

import math
import re
from datetime import datetime
from typing import Optional
from urllib.parse import urlencode

from localpress.utils.date_utils import parse_timestamp, utc_now

WORDS_PER_MINUTE = 200


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def generate_meta_description(content: str, max_length: int = 160) -> str:
    """Strip tags, collapse whitespace, truncate."""
    plain = re.sub(r"<[^>]*>", "", content or "")
    plain = re.sub(r"\s+", " ", plain).strip()
    return truncate_text(plain, max_length)


def optimize_image_url(
    imgix_url: str,
    width: Optional[int] = None,
    height: Optional[int] = None,
    fit: Optional[str] = None,
    quality: Optional[int] = None,
) -> str:
    """Append imgix sizing parameters; ``auto=format,compress`` is always added."""
    if not imgix_url:
        return ""
    params = {}
    if width:
        params["w"] = width
    if height:
        params["h"] = height
    if fit:
        params["fit"] = fit
    if quality:
        params["q"] = quality
    params["auto"] = "format,compress"

    separator = "&" if "?" in imgix_url else "?"
    return f"{imgix_url}{separator}{urlencode(params)}"


def calculate_reading_time(content: str) -> int:
    """Minutes at 200 words per minute, rounded up."""
    word_count = len((content or "").split())
    return math.ceil(word_count / WORDS_PER_MINUTE)


def format_date(value: str) -> str:
    """"2024-01-05" -> "January 5, 2024"."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return "Invalid date"
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_relative_time(value: str, now: Optional[datetime] = None) -> str:
    """"Just now", "5 minutes ago", "2 hours ago", "3 days ago", else the full date."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return "Unknown time"

    seconds = int(((now or utc_now()) - parsed).total_seconds())
    if seconds < 60:
        return "Just now"
    for unit, size, upper in (("minute", 60, 3600), ("hour", 3600, 86400), ("day", 86400, 604800)):
        if seconds < upper:
            count = seconds // size
            return f"{count} {unit}{'' if count == 1 else 's'} ago"
    return format_date(value)


def format_currency(amount: float) -> str:
    """USD, e.g. 1234.5 -> "$1,234.50"."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
