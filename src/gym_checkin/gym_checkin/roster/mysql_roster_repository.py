from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import Athlete
from .repository import RosterRepository


def _row_to_athlete(r: dict) -> Athlete:
    return Athlete(
        athlete_id=str(r["athlete_id"]),
        name=r["name"],
        teams=frozenset(load_json(r.get("teams"), [])),
        classes=frozenset(load_json(r.get("classes"), [])),
        is_approved=bool(r.get("is_approved")),
    )


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Athlete]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT athlete_id, name, teams, classes, is_approved
                FROM athletes
                ORDER BY name
                """
            )
            return [_row_to_athlete(r) for r in fetchall(cur)]

    def get_by_id(self, athlete_id: str) -> Optional[Athlete]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT athlete_id, name, teams, classes, is_approved FROM athletes WHERE athlete_id=%s",
                (athlete_id,),
            )
            r = fetchone(cur)
            return _row_to_athlete(r) if r else None

    def set_approved(self, athlete_id: str, *, is_approved: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE athletes SET is_approved=%s WHERE athlete_id=%s",
                (1 if is_approved else 0, athlete_id),
            )
            return cur.rowcount > 0

    def update_assignments(self, athlete_id: str, *, teams: Iterable[str], classes: Iterable[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE athletes SET teams=%s, classes=%s WHERE athlete_id=%s",
                (dump_json(sorted(teams)), dump_json(sorted(classes)), athlete_id),
            )
            return cur.rowcount > 0
