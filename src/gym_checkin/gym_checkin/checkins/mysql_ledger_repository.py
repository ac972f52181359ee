from __future__ import annotations

import uuid
from datetime import datetime
from typing import Iterable, Sequence

from ..core.enums import ActivityType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime
from .model import CheckInEvent
from .repository import LedgerRepository


class MySQLLedgerRepository(LedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        athlete_id: str,
        athlete_name: str,
        activity_type: ActivityType,
        activity_name: str,
        timestamp: datetime,
    ) -> CheckInEvent:
        event = CheckInEvent(
            event_id=uuid.uuid4().hex,
            athlete_id=athlete_id,
            athlete_name=athlete_name,
            activity_type=activity_type,
            activity_name=activity_name,
            timestamp=timestamp,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO current_checkins(event_id, athlete_id, athlete_name, activity_type, activity_name, checked_in_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.event_id,
                    event.athlete_id,
                    event.athlete_name,
                    event.activity_type.value,
                    event.activity_name,
                    event.timestamp,
                ),
            )
        return event

    def list_all(self) -> Sequence[CheckInEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, athlete_id, athlete_name, activity_type, activity_name, checked_in_at
                FROM current_checkins
                ORDER BY checked_in_at
                """
            )
            return [
                CheckInEvent(
                    event_id=str(r["event_id"]),
                    athlete_id=str(r["athlete_id"]),
                    athlete_name=r["athlete_name"],
                    activity_type=ActivityType(r["activity_type"]),
                    activity_name=r["activity_name"],
                    timestamp=normalize_mysql_datetime(r["checked_in_at"]),
                )
                for r in fetchall(cur)
            ]

    def delete_many(self, event_ids: Iterable[str]) -> int:
        ids = list(event_ids)
        if not ids:
            return 0
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM current_checkins WHERE event_id IN ({placeholders})", tuple(ids))
            return int(cur.rowcount)
