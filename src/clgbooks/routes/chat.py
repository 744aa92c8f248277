from __future__ import annotations
from typing import Any, Dict, List
from flask import Blueprint, current_app, request
from pydantic import ValidationError

from ..catalog import load_snapshot
from ..db import get_connection
from ..matcher import MAX_RESULTS, search, search_fallback
from ..models import CatalogItem, ExternalResource
from ..replies import classify, compose_reply
from ..schemas import ChatRequest

bp = Blueprint("chat", __name__, url_prefix="/api")


def _json_error(code: str, message: str, status: int = 400):
    return {"ok": False, "error": {"code": code, "message": message}}, status


def _dump(records: List[CatalogItem] | List[ExternalResource]) -> List[Dict[str, Any]]:
    return [record.model_dump() for record in records]


@bp.post("/chat")
def chat():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    try:
        payload = ChatRequest(**body)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        return _json_error("INVALID", str(first.get("msg") or "Invalid request"))

    with get_connection() as con:
        items, resources = load_snapshot(con)

    pdfs = search(payload.message, items)
    links: List[ExternalResource] = []
    if not pdfs:
        links = search_fallback(payload.message, resources)[:MAX_RESULTS]

    outcome = classify(pdfs, links)
    current_app.logger.info(
        "chat outcome=%s pdfs=%d links=%d catalog=%d", outcome.value, len(pdfs), len(links), len(items)
    )
    return {
        "ok": True,
        "message": compose_reply(pdfs, links),
        "pdfs": _dump(pdfs),
        "externalLinks": _dump(links),
    }
