from __future__ import annotations

import math
import re
from datetime import date
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return v or None


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    return value


def require_length_between(value: str, field_name: str, min_len: int, max_len: int) -> str:
    value = require_non_empty(value, field_name)
    if not (min_len <= len(value) <= max_len):
        raise ValidationError(f"{field_name} must be between {min_len} and {max_len} characters")
    return value


def require_email(value: str, field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name).lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError("Please provide a valid email address")
    return value


def require_number(value: Any, field_name: str, *, minimum: Optional[float] = None, default: Optional[float] = None) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a valid number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a valid number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field_name} cannot be less than {minimum:g}")
    return number


def require_int(value: Any, field_name: str, *, minimum: Optional[int] = None, default: Optional[int] = None) -> int:
    number = require_number(value, field_name, minimum=minimum, default=default)
    if number != int(number):
        raise ValidationError(f"{field_name} must be a whole number")
    return int(number)


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(str(m.value) for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {choices}")


def require_not_future(value: date, field_name: str, *, today: Optional[date] = None) -> date:
    if value > (today or date.today()):
        raise ValidationError(f"{field_name} cannot be in the future")
    return value
