from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Sequence

from ..auth.gate import AuthorizationGate
from ..common.feed import ChangeFeed
from ..common.validators import require_known_names, require_non_empty
from ..core.enums import ActivityType
from ..core.exceptions import ValidationError
from .model import Athlete
from .repository import RosterRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: read the roster; approve athletes and change assignments behind the gate."""

    def __init__(
        self,
        athletes: RosterRepository,
        gate: AuthorizationGate,
        *,
        teams: Sequence[str],
        classes: Sequence[str],
    ):
        self._athletes = athletes
        self._gate = gate
        self._teams = tuple(teams)
        self._classes = tuple(classes)
        self._feed: ChangeFeed[Sequence[Athlete]] = ChangeFeed("roster", self.list_all)

    @property
    def teams(self) -> tuple[str, ...]:
        return self._teams

    @property
    def classes(self) -> tuple[str, ...]:
        return self._classes

    def activity_names(self, activity_type: ActivityType) -> tuple[str, ...]:
        return self._teams if activity_type == ActivityType.TEAM else self._classes

    def list_all(self) -> Sequence[Athlete]:
        return list(self._athletes.list_all())

    def list_approved(self) -> list[Athlete]:
        return [a for a in self._athletes.list_all() if a.is_approved]

    def get(self, athlete_id: str) -> Optional[Athlete]:
        return self._athletes.get_by_id(athlete_id)

    def subscribe(self, callback: Callable[[Sequence[Athlete]], None]) -> Callable[[], None]:
        return self._feed.subscribe(callback)

    def notify_changed(self) -> None:
        """Push the roster to subscribers after an external roster edit."""
        self._feed.publish()

    def approve(self, athlete_id: str, *, passcode: str) -> None:
        self._gate.require(passcode, action="athlete approval")

        athlete = self._require_athlete(athlete_id)
        self._athletes.set_approved(athlete.athlete_id, is_approved=True)
        logger.info("Approved athlete %s (%s)", athlete.athlete_id, athlete.name)
        self._feed.publish()

    def update_assignments(
        self,
        athlete_id: str,
        *,
        teams: Iterable[str],
        classes: Iterable[str],
        passcode: str,
    ) -> None:
        self._gate.require(passcode, action="athlete edits")

        athlete = self._require_athlete(athlete_id)
        team_names = require_known_names(teams, self._teams, "team")
        class_names = require_known_names(classes, self._classes, "class")

        self._athletes.update_assignments(athlete.athlete_id, teams=team_names, classes=class_names)
        logger.info("Updated assignments of athlete %s", athlete.athlete_id)
        self._feed.publish()

    def _require_athlete(self, athlete_id: str) -> Athlete:
        athlete_id = require_non_empty(athlete_id, "Athlete")
        athlete = self._athletes.get_by_id(athlete_id)
        if not athlete:
            raise ValidationError("Athlete not found")
        return athlete
