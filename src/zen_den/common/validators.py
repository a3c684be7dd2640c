from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required.")
    return value.strip()


def require_choice(value: Optional[str], enum_cls: Type[E], field_name: str) -> E:
    v = (value or "").strip()
    if not v:
        raise ValidationError(f"{field_name} is required.")
    try:
        return enum_cls(v)
    except ValueError:
        raise ValidationError(f"{field_name} '{v}' is not a valid choice.")


def optional_choice(value: Optional[str], enum_cls: Type[E], field_name: str) -> Optional[E]:
    """Like require_choice, but blank and "all" mean no filter."""
    v = (value or "").strip()
    if not v or v.lower() == "all":
        return None
    return require_choice(v, enum_cls, field_name)
