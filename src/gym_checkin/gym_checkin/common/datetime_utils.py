from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import DATETIME_LOCAL_FORMAT
from ..core.exceptions import ValidationError


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_datetime_local(value) -> Optional[datetime]:
    """Parse a ``YYYY-MM-DDTHH:MM`` form value (seconds and ISO forms accepted too).

    Empty values map to None; datetimes pass through unchanged.
    """
    if value is None or isinstance(value, datetime):
        return value

    v = str(value).strip()
    if not v:
        return None
    try:
        return datetime.strptime(v, DATETIME_LOCAL_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(v)
    except ValueError:
        raise ValidationError("Invalid date/time (YYYY-MM-DDTHH:MM)")


def format_datetime_local(value: Optional[datetime]) -> str:
    if not value:
        return ""
    return value.strftime(DATETIME_LOCAL_FORMAT)
