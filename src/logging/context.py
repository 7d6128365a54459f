# src/logging/context.py — v1
"""Contextual logging support: attach request_id and stage to log records."""

from __future__ import annotations

import contextvars
import uuid
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per question.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(request_id=_request_id.get(), stage=_stage.get())


def new_request_id() -> str:
    """Short random identifier for one question/answer cycle."""
    return uuid.uuid4().hex[:12]


def set_request_context(request_id: str | None = None) -> str:
    """Bind a request id to the current task and return it."""
    rid = request_id or new_request_id()
    _request_id.set(rid)
    _stage.set(None)
    return rid


def set_stage(stage: str | None) -> None:
    """Record the pipeline stage currently executing (retrieve, classify, price)."""
    _stage.set(stage)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _stage.set(None)
