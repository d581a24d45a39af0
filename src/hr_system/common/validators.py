from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_decimal(value: Any, field_name: str) -> Decimal:
    # floats go through str() so 0.1 stays 0.1
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return result
