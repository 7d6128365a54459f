# src/core/errors.py — v1
"""Exception hierarchy shared by the pipeline and its collaborators."""

from __future__ import annotations


class WatchButlerError(Exception):
    """Base class for all package errors."""


class QuestionRequiredError(WatchButlerError):
    """Question is missing or blank. Maps to a client error."""

    def __init__(self, message: str = "question required") -> None:
        super().__init__(message)


class PipelineError(WatchButlerError):
    """Unexpected failure while answering a question. Maps to a server error."""


class EmbeddingError(WatchButlerError):
    """Embedding provider failed or returned no vector."""


class SearchProviderError(WatchButlerError):
    """Web search provider call failed (transport, status or configuration)."""

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider} search failed: {message}")
