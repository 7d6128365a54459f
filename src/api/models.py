# src/api/models.py — v1
"""API-level models: ChatRequest, Provenance, AnswerResult, ErrorResponse."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from watchbutler.core.models import CatalogMatch


class ChatRequest(BaseModel):
    """Inbound question. Blank questions are rejected by the pipeline."""

    question: str | None = None

    @field_validator("question", mode="before")
    @classmethod
    def _scalar_to_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class Provenance(BaseModel):
    """Where a live price came from and the exact text it was read from."""

    source: str
    raw: str = ""


class AnswerResult(BaseModel):
    """Return value of QueryPipeline.answer()."""

    answer: str
    metadata: CatalogMatch | None = None
    provenance: list[Provenance] | None = None

    def to_payload(self) -> dict:
        """JSON body with absent sections omitted."""
        return self.model_dump(exclude_none=True)


class ErrorResponse(BaseModel):
    error: str = Field(description="Human-readable error message")
