from __future__ import annotations

from enum import Enum


class ActivityType(str, Enum):
    """Kind of activity an athlete can check into."""

    TEAM = "team"
    CLASS = "class"


class CheckInStatus(str, Enum):
    """Reconciled status of one expected activity."""

    CHECKED_IN = "Checked In"
    MISSED = "Missed"


class StatusFilter(str, Enum):
    ALL = "All"
    CHECKED_IN = "Checked In"
    MISSED = "Missed"


class CategoryFilter(str, Enum):
    ALL = "All"
    TEAM = "team"
    CLASS = "class"


class GateDecision(str, Enum):
    ALLOW = "ALLOW"
    DENY = "DENY"


class GestureState(str, Enum):
    IDLE = "IDLE"
    HOLDING = "HOLDING"
