import math
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from marketplace.errors import InvalidInput

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> str:
    # Microseconds keep created_at ordering stable for jobs posted in the same second.
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


def require_text(value: str | None, field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise InvalidInput(f"{field} is required")
    return text


def optional_text(value: str | None) -> str | None:
    text = (value or "").strip()
    return text or None


def parse_positive_amount(value, error_cls) -> float:
    """Parse a currency amount to the float that gets stored.

    Raises ``error_cls`` unless the stored value is finite and > 0, so amounts
    that only overflow or underflow as a float are rejected too.
    """
    if value is None or isinstance(value, bool):
        raise error_cls()
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise error_cls() from None
    if not amount.is_finite() or amount <= 0:
        raise error_cls()
    stored = float(amount)
    if not math.isfinite(stored) or stored <= 0:
        raise error_cls()
    return stored


def escape_like_pattern(pattern: str) -> str:
    """Escape LIKE metacharacters so user input matches as a literal substring."""
    return pattern.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
