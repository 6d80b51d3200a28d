from __future__ import annotations

from typing import Optional

from ..core.constants import ALLOWED_FINE_AMOUNTS
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Blank strings are stored as missing values."""
    v = (value or "").strip()
    return v or None


def require_fine_amount(value: int) -> int:
    try:
        amount = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Fine amount must be a number")
    if amount not in ALLOWED_FINE_AMOUNTS:
        allowed = ", ".join(str(a) for a in ALLOWED_FINE_AMOUNTS)
        raise ValidationError(f"Fine amount must be one of: {allowed}")
    return amount
