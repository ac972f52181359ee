from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import ActivityType


@dataclass(frozen=True)
class Athlete:
    """Roster entry: an athlete and the teams/classes they are assigned to."""

    athlete_id: str
    name: str
    teams: frozenset[str] = field(default_factory=frozenset)
    classes: frozenset[str] = field(default_factory=frozenset)
    is_approved: bool = False

    def assignments(self, activity_type: ActivityType) -> frozenset[str]:
        return self.teams if activity_type == ActivityType.TEAM else self.classes

    def is_assigned(self, activity_type: ActivityType, activity_name: str) -> bool:
        return activity_name in self.assignments(activity_type)
