from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .auth.gate import AuthorizationGate
from .checkins.mysql_ledger_repository import MySQLLedgerRepository
from .checkins.repository import LedgerRepository
from .checkins.service import LedgerService
from .core.constants import (
    CHECK_IN_HOLD_SECONDS,
    DEFAULT_CLASSES,
    DEFAULT_MASTER_PASSCODE,
    DEFAULT_TEAMS,
    RESET_HOLD_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .gesture.registry import HoldRegistry
from .logs.archival import ArchivalService
from .logs.mysql_log_repository import MySQLLogRepository
from .logs.repository import LogRepository
from .logs.service import LogService
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.repository import RosterRepository
from .roster.service import RosterService


@dataclass(frozen=True)
class Container:
    roster_repo: RosterRepository
    ledger_repo: LedgerRepository
    logs_repo: LogRepository

    gate: AuthorizationGate
    roster_service: RosterService
    ledger_service: LedgerService
    log_service: LogService
    archival_service: ArchivalService
    holds: HoldRegistry

    check_in_hold_seconds: int = CHECK_IN_HOLD_SECONDS
    reset_hold_seconds: int = RESET_HOLD_SECONDS


def build_services(
    *,
    roster_repo: RosterRepository,
    ledger_repo: LedgerRepository,
    logs_repo: LogRepository,
    passcode: str = DEFAULT_MASTER_PASSCODE,
    teams: Sequence[str] = DEFAULT_TEAMS,
    classes: Sequence[str] = DEFAULT_CLASSES,
    check_in_hold_seconds: int = CHECK_IN_HOLD_SECONDS,
    reset_hold_seconds: int = RESET_HOLD_SECONDS,
) -> Container:
    """Wire services over any repository implementation (MySQL in the app, in-memory in tests)."""

    gate = AuthorizationGate(passcode)
    roster_service = RosterService(roster_repo, gate, teams=teams, classes=classes)
    ledger_service = LedgerService(ledger_repo, roster_repo)
    log_service = LogService(logs_repo, roster_repo, gate, teams=teams, classes=classes)
    archival_service = ArchivalService(ledger_service, logs_repo, log_feed=log_service.feed)

    return Container(
        roster_repo=roster_repo,
        ledger_repo=ledger_repo,
        logs_repo=logs_repo,
        gate=gate,
        roster_service=roster_service,
        ledger_service=ledger_service,
        log_service=log_service,
        archival_service=archival_service,
        holds=HoldRegistry(),
        check_in_hold_seconds=int(check_in_hold_seconds),
        reset_hold_seconds=int(reset_hold_seconds),
    )


def build_container(*, db_config: dict, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        roster_repo=MySQLRosterRepository(conn),
        ledger_repo=MySQLLedgerRepository(conn),
        logs_repo=MySQLLogRepository(conn),
        passcode=getattr(settings, "MASTER_PASSCODE", DEFAULT_MASTER_PASSCODE),
        teams=getattr(settings, "TEAMS", DEFAULT_TEAMS),
        classes=getattr(settings, "CLASSES", DEFAULT_CLASSES),
        check_in_hold_seconds=getattr(settings, "CHECK_IN_HOLD_SECONDS", CHECK_IN_HOLD_SECONDS),
        reset_hold_seconds=getattr(settings, "RESET_HOLD_SECONDS", RESET_HOLD_SECONDS),
    )
