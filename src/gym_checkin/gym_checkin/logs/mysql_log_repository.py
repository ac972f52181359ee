from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..checkins.model import CheckInEvent
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json, normalize_mysql_datetime
from .model import LogEntry
from .repository import LogRepository


def _row_to_entry(r: dict) -> LogEntry:
    return LogEntry(
        log_id=str(r["log_id"]),
        created_at=normalize_mysql_datetime(r["created_at"]),
        created_by_actor=r["created_by_actor"],
        events=tuple(CheckInEvent.from_document(d) for d in load_json(r.get("events"), [])),
        last_edited_at=normalize_mysql_datetime(r.get("last_edited_at")),
    )


class MySQLLogRepository(LogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, entry: LogEntry) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO checkin_logs(log_id, created_at, created_by_actor, events, last_edited_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    entry.log_id,
                    entry.created_at,
                    entry.created_by_actor,
                    dump_json([e.to_document() for e in entry.events]),
                    entry.last_edited_at,
                ),
            )

    def list_all(self) -> Sequence[LogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, created_at, created_by_actor, events, last_edited_at
                FROM checkin_logs
                ORDER BY created_at DESC
                """
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, log_id: str) -> Optional[LogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, created_at, created_by_actor, events, last_edited_at
                FROM checkin_logs
                WHERE log_id=%s
                """,
                (log_id,),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def replace_events(self, log_id: str, *, events: Sequence[CheckInEvent], last_edited_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE checkin_logs SET events=%s, last_edited_at=%s WHERE log_id=%s",
                (dump_json([e.to_document() for e in events]), last_edited_at, log_id),
            )
            return cur.rowcount > 0
