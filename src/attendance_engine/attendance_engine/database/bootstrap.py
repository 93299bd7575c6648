from __future__ import annotations

import logging
import re
from pathlib import Path

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _statements(sql: str) -> list[str]:
    # Schema files hold plain DDL: no ';' inside literals.
    sql = re.sub(r"(?m)^\s*--.*$", "", sql)
    return [stmt.strip() for stmt in sql.split(";") if stmt.strip()]


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> int:
    """Create the database and tables if missing. Returns the statement count."""
    ensure_database_exists(conn_factory)

    statements = _statements(Path(schema_path).read_text(encoding="utf-8"))
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    logger.info("Schema applied to %s (%d statements)", conn_factory.config.database, len(statements))
    return len(statements)
