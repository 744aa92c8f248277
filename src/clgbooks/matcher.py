"""Fuzzy catalog search used by the chat endpoint.

Scores run from 0.0 (perfect match) to 1.0 (no similarity); lower is better.

Field similarity is scored per query term against the words of the field. A
term contained in a word costs nothing; otherwise the cost is the optimal
string alignment distance to the closest word (substitution, insertion,
deletion and adjacent transposition each cost 1). A term whose cost exceeds
``SCORE_THRESHOLD * len(term)`` edits counts as a miss (1.0), otherwise it
scores ``cost / len(term)``. The field score is the mean over the distinct
query terms, of which at most ``MAX_QUERY_TERMS`` are used.
"""
from __future__ import annotations
import re
import unicodedata
from typing import Dict, List, Optional, Sequence

from rapidfuzz import process
from rapidfuzz.distance import OSA

from .models import CatalogItem, ExternalResource, SearchResult

FIELD_WEIGHTS: Dict[str, float] = {
    "title": 0.40,
    "author": 0.20,
    "category": 0.20,
    "description": 0.10,
    "tags": 0.10,
}
SCORE_THRESHOLD = 0.4
MAX_RESULTS = 3
MAX_QUERY_TERMS = 16

_NO_MATCH = 1.0
_EPSILON = 1e-9
_TOKEN_RE = re.compile(r"[^\W_]+")


def _normalize_text(value: object) -> str:
    raw = str(value or "").strip()
    if not raw:
        return ""
    normalized = unicodedata.normalize("NFKD", raw)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch)).lower()


def tokenize(value: Optional[str]) -> List[str]:
    return _TOKEN_RE.findall(_normalize_text(value))


def query_terms(query: Optional[str]) -> List[str]:
    """Distinct query tokens in first-seen order, capped at ``MAX_QUERY_TERMS``."""
    return list(dict.fromkeys(tokenize(query)))[:MAX_QUERY_TERMS]


def _term_score(term: str, words: Sequence[str]) -> float:
    if any(term in word for word in words):
        return 0.0
    budget = int(len(term) * SCORE_THRESHOLD + _EPSILON)
    best = process.extractOne(term, words, scorer=OSA.distance, score_cutoff=budget)
    if best is None:
        return _NO_MATCH
    return best[1] / len(term)


def _field_score(terms: Sequence[str], words: Sequence[str]) -> float:
    if not terms or not words:
        return _NO_MATCH
    return sum(_term_score(term, words) for term in terms) / len(terms)


def similarity(pattern: str, text: Optional[str]) -> float:
    """Fuzzy similarity of ``pattern`` inside ``text`` in [0, 1], 0 = perfect."""
    return _field_score(query_terms(pattern), tokenize(text))


def _field_texts(item: CatalogItem) -> Dict[str, Optional[str]]:
    return {
        "title": item.title,
        "author": item.author,
        "category": item.category,
        "description": item.description,
        "tags": " ".join(item.tags),
    }


def _score_terms(terms: Sequence[str], item: CatalogItem) -> float:
    texts = _field_texts(item)
    total = 0.0
    for field, weight in FIELD_WEIGHTS.items():
        # missing fields keep their weight at the no-match extreme
        total += weight * _field_score(terms, tokenize(texts[field]))
    return min(total, 1.0)


def score(query: str, item: CatalogItem) -> float:
    """Weighted score of one catalog item for ``query``."""
    return _score_terms(query_terms(query), item)


def _check_contract(query: object, records: object, name: str) -> None:
    if not isinstance(query, str):
        raise TypeError(f"query must be str, got {type(query).__name__}")
    if records is None:
        raise TypeError(f"{name} must be a sequence, got None")


def rank(query: str, items: Sequence[CatalogItem]) -> List[SearchResult]:
    """All items within the acceptance threshold, best first.

    Ties keep the snapshot order. A query without searchable tokens matches
    nothing.
    """
    _check_contract(query, items, "items")
    terms = query_terms(query)
    if not terms:
        return []
    results: List[SearchResult] = []
    for item in items:
        item_score = _score_terms(terms, item)
        if item_score <= SCORE_THRESHOLD + _EPSILON:
            results.append(SearchResult(item=item, score=item_score))
    results.sort(key=lambda r: r.score)
    return results


def search(query: str, items: Sequence[CatalogItem]) -> List[CatalogItem]:
    return [result.item for result in rank(query, items)[:MAX_RESULTS]]


def search_fallback(query: str, resources: Sequence[ExternalResource]) -> List[ExternalResource]:
    """Plain case-insensitive substring search over title and description."""
    _check_contract(query, resources, "resources")
    if not query.strip():
        return []
    needle = query.lower()
    return [
        res for res in resources
        if needle in res.title.lower() or needle in (res.description or "").lower()
    ]
