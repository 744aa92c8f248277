from __future__ import annotations
import json
import sqlite3
from typing import Any, Dict, List, NamedTuple

from .db import read_transaction
from .models import CatalogItem, ExternalResource


def _parse_tags(raw: object) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(tag).strip() for tag in raw if str(tag).strip()]
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(parsed, list):
        return []
    return [str(tag).strip() for tag in parsed if str(tag).strip()]


def _row_to_item(row: Dict[str, Any]) -> CatalogItem:
    item = dict(row)
    item["tags"] = _parse_tags(item.get("tags"))
    return CatalogItem(**item)


def load_catalog_items(con: sqlite3.Connection) -> List[CatalogItem]:
    rows = con.execute(
        """
        SELECT id, title, author, category, description, tags, filename, file_size, uploaded_at
          FROM pdfs
         ORDER BY rowid
        """
    ).fetchall()
    return [_row_to_item(row) for row in rows]


def load_external_resources(con: sqlite3.Connection) -> List[ExternalResource]:
    rows = con.execute(
        "SELECT id, title, url, description FROM external_links ORDER BY rowid"
    ).fetchall()
    return [ExternalResource(**row) for row in rows]


class CatalogSnapshot(NamedTuple):
    items: List[CatalogItem]
    resources: List[ExternalResource]


def load_snapshot(con: sqlite3.Connection) -> CatalogSnapshot:
    """Both tables as of one point in time, so a concurrent writer can't split them."""
    with read_transaction(con):
        return CatalogSnapshot(load_catalog_items(con), load_external_resources(con))
