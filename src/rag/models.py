# src/rag/models.py — v1
"""Vector search result model shared by all vector store adapters."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class VectorMatch(BaseModel):
    """One nearest-neighbour hit, in the order the store returned it."""

    id: str | None = None
    score: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
