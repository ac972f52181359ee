from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Athlete


class RosterRepository(Protocol):
    """Read side of the athlete roster, plus the few writes coaches make through the gate."""

    def list_all(self) -> Sequence[Athlete]:
        raise NotImplementedError

    def get_by_id(self, athlete_id: str) -> Optional[Athlete]:
        raise NotImplementedError

    def set_approved(self, athlete_id: str, *, is_approved: bool) -> bool:
        raise NotImplementedError

    def update_assignments(self, athlete_id: str, *, teams: Iterable[str], classes: Iterable[str]) -> bool:
        raise NotImplementedError
