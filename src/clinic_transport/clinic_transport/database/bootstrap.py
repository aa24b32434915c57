"""Apply database/schema.sql and database/seed.sql through the connector.

Used by `create_app` (AUTO_INIT_DB / AUTO_SEED_DB) and by scripts/init_db.py,
scripts/seed_db.py.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, List

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# The target database comes from DB_CONFIG, so files must not pick one themselves.
_CREATE_DB_RE = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_DB_RE = re.compile(r"(?im)^\s*USE\b.*?;\s*$")
_LINE_COMMENT_RE = re.compile(r"(?m)^\s*--.*$")


def _prepare(sql: str) -> str:
    for pattern in (_CREATE_DB_RE, _USE_DB_RE, _LINE_COMMENT_RE):
        sql = pattern.sub("", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split on ';' outside quoted strings. Backslash escapes are honored."""
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _run_file(conn_factory: DatabaseConnection, path: Path) -> int:
    statements = list(iter_sql_statements(_prepare(path.read_text(encoding="utf-8"))))
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    return len(statements)


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)
    count = _run_file(conn_factory, Path(schema_path))
    logger.info("Applied %s (%d statements)", schema_path, count)


def apply_seed_sql(conn_factory: DatabaseConnection, *, seed_path: str | Path) -> None:
    count = _run_file(conn_factory, Path(seed_path))
    logger.info("Applied %s (%d statements)", seed_path, count)


def list_tables(conn_factory: DatabaseConnection) -> List[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
