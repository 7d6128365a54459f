# src/pricing/search/models.py — v1
"""Normalized web search response shapes.

Provider adapters translate their wire format into these models so the
candidate extractor never sees provider-specific keys.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StructuredPrice(BaseModel):
    """Price field a provider may attach to a response or a result."""

    model_config = ConfigDict(extra="ignore")

    value: float | None = None
    currency: str | None = None
    raw: str | None = None

    @property
    def is_present(self) -> bool:
        """A structured price counts only when it carries a value or raw text."""
        return bool(self.value or self.raw)


class SearchHit(BaseModel):
    """One ranked search result."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    snippet: str = ""
    summary: str = ""
    url: str | None = None
    source: str | None = None
    price: StructuredPrice | None = None

    @property
    def text(self) -> str:
        """Title, snippet and summary joined for text parsing."""
        return " ".join([self.title or "", self.snippet or "", self.summary or ""])

    @property
    def origin(self) -> str | None:
        return self.url or self.source


class SearchResponse(BaseModel):
    """Provider response: top-level price, ranked results and/or raw text."""

    model_config = ConfigDict(extra="ignore")

    price: StructuredPrice | None = None
    source: str | None = None
    results: list[SearchHit] = Field(default_factory=list)
    text: str | None = None
