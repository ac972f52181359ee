from __future__ import annotations

import logging
import uuid
from datetime import datetime

from ..checkins.service import LedgerService
from ..common.datetime_utils import now_local
from ..common.feed import ChangeFeed
from ..common.validators import require_non_empty
from ..core.exceptions import PersistenceError
from .model import LogEntry
from .repository import LogRepository

logger = logging.getLogger(__name__)


class ArchivalService:
    """Close out the day: copy the ledger into a new log entry, then clear the ledger.

    The snapshot read and the delete are not serialized against concurrent
    check-ins or other resets. A check-in landing after the snapshot stays in the
    ledger for the next day; two overlapping resets can archive the same events
    twice. If the delete fails after the entry is written, the entry stays and the
    next reset archives those events again.
    """

    def __init__(self, ledger: LedgerService, logs: LogRepository, *, log_feed: ChangeFeed | None = None):
        self._ledger = ledger
        self._logs = logs
        self._log_feed = log_feed

    def reset(self, actor: str, *, now: datetime | None = None) -> LogEntry:
        actor = require_non_empty(actor, "Actor")

        snapshot = tuple(self._ledger.list())
        entry = LogEntry(
            log_id=uuid.uuid4().hex,
            created_at=now or now_local(),
            created_by_actor=actor,
            events=snapshot,
        )

        try:
            self._logs.create(entry)
        except PersistenceError:
            logger.error("Reset by %s aborted: log entry could not be written", actor)
            raise
        if self._log_feed:
            self._log_feed.publish()

        try:
            self._ledger.delete_many(e.event_id for e in snapshot)
        except PersistenceError as e:
            logger.error(
                "Reset by %s logged entry %s but failed to clear %d check-ins; they will be archived again",
                actor,
                entry.log_id,
                len(snapshot),
            )
            raise PersistenceError(f"Check-ins were logged but could not be cleared: {e}") from e

        logger.info("Reset by %s archived %d check-ins into log %s", actor, len(snapshot), entry.log_id)
        return entry
