from __future__ import annotations

import json
import os
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Iterable, Sequence

from .config import Settings
from .db import get_connection

PDF_COLUMNS = ("id", "title", "author", "category", "description", "tags", "filename", "file_size", "uploaded_at")

SAMPLE_PDFS = (
    {
        "title": "Engineering Physics",
        "author": "H.K. Malik",
        "category": "Physics",
        "description": "Comprehensive engineering physics textbook",
        "tags": ["physics", "engineering", "mechanics"],
        "filename": "engineering_physics.pdf",
        "file_size": 5242880,
    },
    {
        "title": "C Programming Language",
        "author": "Dennis Ritchie",
        "category": "Programming",
        "description": "The classic C programming book",
        "tags": ["c", "programming", "computer science"],
        "filename": "c_programming.pdf",
        "file_size": 3145728,
    },
    {
        "title": "Data Structures and Algorithms",
        "author": "Cormen",
        "category": "Computer Science",
        "description": "Introduction to algorithms",
        "tags": ["algorithms", "data structures", "programming"],
        "filename": "dsa.pdf",
        "file_size": 8388608,
    },
    {
        "title": "Engineering Mathematics",
        "author": "B.S. Grewal",
        "category": "Mathematics",
        "description": "Higher engineering mathematics",
        "tags": ["mathematics", "calculus", "engineering"],
        "filename": "engineering_math.pdf",
        "file_size": 6291456,
    },
    {
        "title": "Digital Electronics",
        "author": "Morris Mano",
        "category": "Electronics",
        "description": "Digital design fundamentals",
        "tags": ["electronics", "digital", "logic gates"],
        "filename": "digital_electronics.pdf",
        "file_size": 4194304,
    },
)


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _insert_ignore_many(
    con: sqlite3.Connection,
    table: str,
    columns: Iterable[str],
    rows: Iterable[Sequence[object]],
) -> None:
    cached_rows = list(rows)
    if not cached_rows:
        return
    column_tuple = tuple(columns)
    placeholder = ",".join(["?"] * len(column_tuple))
    column_list = ",".join(column_tuple)
    sql = f"INSERT OR IGNORE INTO {table} ({column_list}) VALUES ({placeholder})"
    con.executemany(sql, cached_rows)


def _sample_pdf_rows() -> list[tuple[object, ...]]:
    uploaded_at = _utcnow_iso()
    return [
        (
            uuid.uuid4().hex,
            pdf["title"],
            pdf["author"],
            pdf["category"],
            pdf["description"],
            json.dumps(pdf["tags"]),
            pdf["filename"],
            pdf["file_size"],
            uploaded_at,
        )
        for pdf in SAMPLE_PDFS
    ]


def build_db(force: bool = False) -> None:
    Settings.ensure_dirs()
    if force and os.path.exists(Settings.DB_PATH):
        os.remove(Settings.DB_PATH)
    with get_connection() as con:
        con.executescript(
            """
            CREATE TABLE IF NOT EXISTS pdfs(
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                author TEXT,
                category TEXT,
                description TEXT,
                tags TEXT NOT NULL DEFAULT '[]',
                filename TEXT NOT NULL,
                file_size INTEGER,
                uploaded_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );
            CREATE TABLE IF NOT EXISTS external_links(
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                url TEXT NOT NULL,
                description TEXT
            );
            """
        )
        if Settings.SEED_SAMPLES:
            count = con.execute("SELECT COUNT(*) AS n FROM pdfs").fetchone()["n"]
            if not count:
                _insert_ignore_many(con, "pdfs", PDF_COLUMNS, _sample_pdf_rows())
        con.commit()


if __name__ == "__main__":
    build_db(force=True)
