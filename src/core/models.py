# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

Catalog, price and cache types live here so the retriever, the resolver
and the API layer agree on a single shape.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# === CATALOG ===


class CatalogMatch(BaseModel):
    """Top catalog entry returned for a question, metadata normalized to strings."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    score: float | None = None
    brand: str = ""
    model_name: str = ""
    reference_number: str = ""
    description: str = ""
    category: str = ""
    movement: str = ""
    caliber: str = ""

    def headline(self) -> str:
        """Brand, model and reference as a single display line."""
        return f"{self.brand} {self.model_name} ({self.reference_number})"


# === INTENT ===


class IntentDecision(BaseModel):
    """Outcome of the lexical price-intent gate."""

    needs_live_price: bool = False
    matched_terms: list[str] = Field(default_factory=list)


# === PRICES ===


class PriceCandidate(BaseModel):
    """Tentative price pulled from provider output.

    ``value`` stays None when only the raw text could be matched.
    """

    value: float | None = None
    currency: str | None = None
    raw: str | None = None
    source: str | None = None


class LivePrice(BaseModel):
    """Resolved live price, stamped with its resolution instant."""

    value: float | None = None
    currency: str | None = None
    raw: str | None = None
    source: str
    ts: str
    cached: bool = False


class PriceCacheEntry(BaseModel):
    """Single price cache slot."""

    key: str
    timestamp: float
    value: LivePrice
