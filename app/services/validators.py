"""Input normalisation shared by the business, catalog and appointment managers."""

from typing import Any, Optional

from app.core.exceptions import ValidationError


def require_text(value: Any, field: str) -> str:
    """Return the stripped string or raise ValidationError if it is empty."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    """Blank optional strings are stored as NULL."""
    if value is None or not str(value).strip():
        return None
    return str(value).strip()
