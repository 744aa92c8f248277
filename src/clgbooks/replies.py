from __future__ import annotations
from enum import Enum
from typing import Sequence

from .models import CatalogItem, ExternalResource


class Outcome(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"
    BOTH = "both"
    NONE = "none"


NO_RESULTS_MESSAGE = (
    "I couldn't find any matching books in our library. "
    "Try different keywords or ask for a specific subject."
)


def classify(pdfs: Sequence[CatalogItem], links: Sequence[ExternalResource]) -> Outcome:
    if pdfs and links:
        return Outcome.BOTH
    if pdfs:
        return Outcome.PRIMARY
    if links:
        return Outcome.FALLBACK
    return Outcome.NONE


def _books_message(count: int) -> str:
    if count == 1:
        return "I found the perfect match for you!"
    return f"I found {count} matching books. Here are the best matches:"


def _links_message(count: int) -> str:
    if count == 1:
        return "I couldn't find a PDF in our library, but here's an external resource that might help:"
    return "I couldn't find a PDF in our library, but here are some external resources that might help:"


def compose_reply(pdfs: Sequence[CatalogItem], links: Sequence[ExternalResource]) -> str:
    outcome = classify(pdfs, links)
    if outcome is Outcome.PRIMARY:
        return _books_message(len(pdfs))
    if outcome is Outcome.FALLBACK:
        return _links_message(len(links))
    if outcome is Outcome.BOTH:
        return _books_message(len(pdfs)) + " I've also included some related external resources."
    return NO_RESULTS_MESSAGE
