# src/api/server.py — v1
"""FastAPI server exposing the question pipeline.

Usage:
    watchbutler serve
    # or
    uvicorn watchbutler.api.server:app --port 8000

Endpoints:
    POST /api/chat   {"question": "..."} → {"answer", "metadata"?, "provenance"?}
    GET  /health
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from watchbutler.api.models import ChatRequest, ErrorResponse
from watchbutler.core.errors import PipelineError, QuestionRequiredError

if TYPE_CHECKING:
    from watchbutler.api.facade import QueryPipeline
    from watchbutler.config.settings import Settings

logger = logging.getLogger(__name__)


def create_app(
    pipeline: QueryPipeline | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the ASGI app.

    Args:
        pipeline: Pre-built pipeline (tests). Built from settings on startup if None.
        settings: Settings used when the pipeline has to be built.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = False
        if getattr(app.state, "pipeline", None) is None:
            from watchbutler.api.facade import QueryPipeline
            from watchbutler.config.settings import Settings

            app.state.pipeline = QueryPipeline.from_settings(settings or Settings())
            owned = True
        yield
        if owned:
            await app.state.pipeline.aclose()

    app = FastAPI(title="watchbutler", lifespan=lifespan)
    app.state.pipeline = pipeline

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected chat request body: %s", exc.errors())
        return _error(400, str(QuestionRequiredError()))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception: %s", exc, exc_info=exc)
        return _error(500, "internal error")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/chat")
    async def chat(body: ChatRequest, request: Request) -> JSONResponse:
        try:
            result = await request.app.state.pipeline.answer(body.question)
        except QuestionRequiredError as e:
            return _error(400, str(e))
        except PipelineError as e:
            return _error(500, str(e) or "internal error")
        return JSONResponse(result.to_payload())

    return app


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        ErrorResponse(error=message).model_dump(), status_code=status_code
    )


app = create_app()
