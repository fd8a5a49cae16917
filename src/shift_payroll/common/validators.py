from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import MalformedTimeError, ValidationError
from .time_utils import to_minutes


def require_hhmm(value: str, field_name: str) -> str:
    try:
        to_minutes(value)
    except MalformedTimeError:
        raise ValidationError(f"{field_name} must be in HH:MM format")
    return value.strip()


def require_decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not number.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return number


def optional_decimal(value: Any, field_name: str) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_decimal(value, field_name)


def require_range(value, field_name: str, *, minimum=None, maximum=None):
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field_name} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field_name} must be <= {maximum}")
    return value
