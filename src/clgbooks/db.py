from __future__ import annotations
import sqlite3, threading
from contextlib import contextmanager
from typing import Iterator, Any, Dict
from .config import Settings

CATALOG_TABLES = ("pdfs", "external_links")

_lock = threading.Lock()

def _row_factory(cursor, row) -> Dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}

def _apply_pragmas(con: sqlite3.Connection) -> None:
    # WAL lets readers keep a stable snapshot while build_db or an upload writes
    con.execute("PRAGMA journal_mode=WAL;")
    con.execute("PRAGMA busy_timeout=5000;")
    con.execute("PRAGMA synchronous=NORMAL;")

@contextmanager
def get_connection() -> Iterator[sqlite3.Connection]:
    Settings.ensure_dirs()
    with _lock:
        con = sqlite3.connect(Settings.DB_PATH, timeout=30)
    try:
        con.row_factory = _row_factory
        _apply_pragmas(con)
        yield con
    finally:
        con.close()

@contextmanager
def read_transaction(con: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run several SELECTs against one consistent view of the database."""
    if con.in_transaction:
        con.commit()
    con.execute("BEGIN")
    try:
        yield con
    finally:
        con.rollback()

def health_ok() -> bool:
    try:
        with get_connection() as con:
            rows = con.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name IN (?, ?)",
                CATALOG_TABLES,
            ).fetchall()
        return {row["name"] for row in rows} == set(CATALOG_TABLES)
    except (sqlite3.Error, OSError):
        return False
