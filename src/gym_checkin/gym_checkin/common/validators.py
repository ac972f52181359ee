from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_present(value, field_name: str):
    if value is None:
        raise ValidationError(f"{field_name} is required")
    return value


def require_known_names(values: Iterable[str], allowed: Iterable[str], field_name: str) -> frozenset[str]:
    names = frozenset(str(v).strip() for v in values if str(v).strip())
    unknown = names - frozenset(allowed)
    if unknown:
        raise ValidationError(f"Unknown {field_name}: {', '.join(sorted(unknown))}")
    return names
