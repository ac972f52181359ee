from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable

from .connection import DBConfig, DatabaseConnection
from .mysql_base import dump_json

logger = logging.getLogger(__name__)

DEMO_ROSTER = (
    ("Alice Johnson", ("Sparkle Squad",), ("Tumble Basics",)),
    ("Bella Chen", ("Sparkle Squad", "Power Pumas"), ()),
    ("Carmen Diaz", ("Victory Vipers",), ("Flexibility Fusion", "Routine Polish")),
    ("Dana Brooks", (), ("Jump & Stunt Drills",)),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied schema %s", schema_path)


def ensure_demo_roster(db_config: dict) -> int:
    """Insert the demo athletes that are missing (matched by name). Returns the insert count."""

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    inserted = 0
    try:
        cur = conn.cursor(dictionary=True)
        for name, teams, classes in DEMO_ROSTER:
            cur.execute("SELECT athlete_id FROM athletes WHERE name=%s", (name,))
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO athletes(athlete_id, name, teams, classes, is_approved)
                VALUES(%s,%s,%s,%s,1)
                """,
                (uuid.uuid4().hex, name, dump_json(list(teams)), dump_json(list(classes))),
            )
            inserted += 1
        conn.commit()
    finally:
        conn.close()
    return inserted


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
