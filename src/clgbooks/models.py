from __future__ import annotations
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class CatalogItem(BaseModel):
    """A PDF in the library catalog. Only the text fields are searched."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    author: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()
    filename: Optional[str] = None
    file_size: Optional[int] = None
    uploaded_at: Optional[str] = None


class ExternalResource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    url: str
    description: Optional[str] = None


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: CatalogItem
    score: float = Field(..., ge=0.0, le=1.0, description="0 = perfect match, 1 = no similarity")
