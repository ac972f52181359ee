from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from ..auth.gate import AuthorizationGate
from ..checkins.service import parse_activity_type
from ..common.feed import ChangeFeed
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..roster.repository import RosterRepository
from .corrections import CorrectionEditor
from .model import LogEntry, LogReport, ReconciliationFilter
from .reconciliation import build_report
from .repository import LogRepository

logger = logging.getLogger(__name__)


class LogService:
    """Use case: browse the check-in history and correct it behind the passcode gate."""

    def __init__(
        self,
        logs: LogRepository,
        roster: RosterRepository,
        gate: AuthorizationGate,
        *,
        teams: Sequence[str],
        classes: Sequence[str],
    ):
        self._logs = logs
        self._roster = roster
        self._gate = gate
        self._teams = tuple(teams)
        self._classes = tuple(classes)
        self.feed: ChangeFeed[Sequence[LogEntry]] = ChangeFeed("checkin_logs", self.list_entries)

    def list_entries(self) -> list[LogEntry]:
        return sorted(self._logs.list_all(), key=lambda e: e.created_at, reverse=True)

    def subscribe(self, callback: Callable[[Sequence[LogEntry]], None]) -> Callable[[], None]:
        return self.feed.subscribe(callback)

    def report(self, flt: ReconciliationFilter | None = None) -> list[LogReport]:
        approved = [a for a in self._roster.list_all() if a.is_approved]
        return build_report(approved, self._logs.list_all(), flt)

    def open_editor(self, log_id: str, *, passcode: str) -> CorrectionEditor:
        self._gate.require(passcode, action="editing this log")

        entry = self._logs.get_by_id(require_non_empty(log_id, "Log"))
        if not entry:
            raise ValidationError("Log entry not found")

        return CorrectionEditor(
            entry,
            self._logs,
            roster=self._roster.list_all(),
            teams=self._teams,
            classes=self._classes,
            on_saved=self.feed.publish,
        )

    def apply_corrections(self, log_id: str, operations: Iterable[dict], *, passcode: str) -> LogEntry:
        """Replay append/remove/edit operations on a working copy, then save once.

        Any invalid operation aborts the whole batch before anything is written.
        """

        editor = self.open_editor(log_id, passcode=passcode)
        for op in operations:
            if not isinstance(op, dict):
                raise ValidationError("Invalid operation")
            kind = str(op.get("op") or "").strip().lower()
            if kind == "append":
                editor.append(
                    op.get("athlete_id", ""),
                    parse_activity_type(op.get("activity_type")),
                    op.get("activity_name", ""),
                    op.get("timestamp"),
                )
            elif kind == "remove":
                editor.remove(op.get("index"))
            elif kind == "edit":
                editor.edit(op.get("index"), op.get("field", ""), op.get("value"))
            else:
                raise ValidationError(f"Unknown operation: {kind or '-'}")
        return editor.save()
