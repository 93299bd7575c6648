from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def execute_many(conn_factory: DatabaseConnection, sql: str, rows: Sequence[Sequence[Any]]) -> int:
    """Run one parameterised statement for every row in a single transaction."""
    if not rows:
        return 0
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.executemany(sql, [tuple(r) for r in rows])
        return int(cur.rowcount)
