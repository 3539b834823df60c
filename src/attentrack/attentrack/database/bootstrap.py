from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"
TABLES = ("students", "attendance_records", "student_attendance")


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal splitter for the bundled schema file (';' inside quotes is kept).
    buf: list[str] = []
    quote: Optional[str] = None
    escape = False

    for ch in _strip_comments(sql):
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote is not None:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            buf.pop()
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def load_schema(schema_path: str | Path = SCHEMA_PATH) -> list[str]:
    return list(iter_sql_statements(Path(schema_path).read_text(encoding="utf-8")))


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    """CREATE DATABASE IF NOT EXISTS using a server-level connection."""
    database = conn_factory.config.database
    conn = conn_factory.connect_server()
    try:
        cur = conn.cursor()
        try:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )
        finally:
            cur.close()
        conn.commit()
        logger.info("Database %r ensured", database)
    finally:
        conn.close()


def apply_schema(conn, statements: Optional[Iterable[str]] = None) -> int:
    """Run the schema statements on an open connection; returns how many ran."""
    statements = list(statements) if statements is not None else load_schema()
    cur = conn.cursor()
    try:
        for stmt in statements:
            cur.execute(stmt)
    finally:
        cur.close()
    conn.commit()
    return len(statements)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        try:
            cur.execute("SHOW TABLES")
            return [row[0] for row in cur.fetchall()]
        finally:
            cur.close()
    finally:
        conn.close()
