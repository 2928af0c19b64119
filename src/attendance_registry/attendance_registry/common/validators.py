from __future__ import annotations

from typing import Any

from ..core.constants import ZERO_IDENTITY
from ..core.exceptions import InvalidIdentity, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_int(value: Any, field_name: str) -> int:
    """Accept ints and integer strings; reject bools, floats and garbage."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field_name} must be an integer")


def is_null_identity(identity: Any) -> bool:
    """Empty/blank strings and the zero address (``0x`` + zeros) are null."""
    if not isinstance(identity, str) or not identity.strip():
        return True
    value = identity.strip().lower()
    if value == ZERO_IDENTITY:
        return True
    return value.startswith("0x") and len(value) > 2 and set(value[2:]) == {"0"}


def require_identity(identity: Any, field_name: str = "identity") -> str:
    if is_null_identity(identity):
        raise InvalidIdentity(f"{field_name} must be a real (non-null) identity")
    return identity
