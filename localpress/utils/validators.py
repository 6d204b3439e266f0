"""Form-level input checks (zip code, email, tip amount)

These run before anything reaches the aggregation layer.
"""

import re
from typing import Optional

from localpress.errors import ValidationError

ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$", re.ASCII)
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MAX_TIP_AMOUNT = 1000.0


def is_valid_zip_code(zip_code: str) -> bool:
    """US zip code: 5 digits or ZIP+4 ("12345-6789"). Surrounding whitespace is ignored."""
    if not isinstance(zip_code, str):
        return False
    return bool(ZIP_CODE_PATTERN.match(zip_code.strip()))


def sanitize_zip_code(zip_code: str) -> str:
    """Keep digits and hyphens, at most 10 characters."""
    return re.sub(r"[^0-9-]", "", zip_code or "")[:10]


def is_valid_email(email: str) -> bool:
    if not isinstance(email, str):
        return False
    return bool(EMAIL_PATTERN.match(email.strip()))


def require_zip_code(zip_code: Optional[str]) -> str:
    """Return the trimmed zip code or raise ValidationError."""
    value = (zip_code or "").strip()
    if not is_valid_zip_code(value):
        raise ValidationError("zip_code", "Please enter a valid 5-digit zip code")
    return value


def require_email(email: Optional[str]) -> str:
    value = (email or "").strip()
    if not is_valid_email(value):
        raise ValidationError("email", "Please enter a valid email address")
    return value


def require_tip_amount(amount: object) -> float:
    """Positive amount up to MAX_TIP_AMOUNT, rounded to cents."""
    try:
        value = float(amount)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError("amount", "Please enter a valid tip amount")
    if value != value or value <= 0:
        raise ValidationError("amount", "Please enter a valid tip amount")
    if value > MAX_TIP_AMOUNT:
        raise ValidationError("amount", f"Tips are limited to ${MAX_TIP_AMOUNT:,.0f}")
    return round(value, 2)
