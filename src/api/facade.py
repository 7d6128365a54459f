# src/api/facade.py — v1
"""Public API facade: single entry point for answering a question.

Usage:
    from watchbutler.api.facade import answer
    result = await answer("What's the Submariner selling for right now?")

Flow:
  1. Reject blank questions (no collaborator calls)
  2. Retrieve the closest catalog entry; none → fixed no-match answer
  3. Classify price intent
  4. Catalog-only answer, or live price lookup with graceful degradation
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from watchbutler.api.models import AnswerResult, Provenance
from watchbutler.core.errors import PipelineError, QuestionRequiredError
from watchbutler.core.models import CatalogMatch, LivePrice
from watchbutler.logging.context import set_request_context, set_stage
from watchbutler.rag.intent_classifier import classify_intent

if TYPE_CHECKING:
    from watchbutler.config.settings import Settings
    from watchbutler.pricing.resolver import LivePriceResolver
    from watchbutler.rag.catalog_retriever import CatalogRetriever

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = (
    "I couldn't find a matching model in the catalog. "
    "Try asking about a specific brand/model."
)


class QueryPipeline:
    """Compose retrieval, intent classification and live pricing.

    Args:
        retriever: Catalog retriever (always consulted).
        resolver: Live price resolver; None disables live pricing.
    """

    def __init__(
        self,
        retriever: CatalogRetriever,
        resolver: LivePriceResolver | None = None,
    ) -> None:
        self._retriever = retriever
        self._resolver = resolver

    @classmethod
    def from_settings(cls, settings: Settings) -> QueryPipeline:
        """Build the pipeline with the configured providers."""
        from watchbutler.pricing.resolver import LivePriceResolver
        from watchbutler.pricing.search.search_factory import create_search_client
        from watchbutler.rag.catalog_retriever import CatalogRetriever

        retriever = CatalogRetriever.from_settings(settings)
        resolver = None
        if settings.live_price_enabled:
            resolver = LivePriceResolver.from_settings(
                settings, create_search_client(settings)
            )
        else:
            logger.info("Live price lookup disabled (SEARCH_PROVIDER=none)")
        return cls(retriever=retriever, resolver=resolver)

    async def aclose(self) -> None:
        """Release provider connections held by the resolver."""
        if self._resolver is not None:
            await self._resolver.aclose()

    async def answer(self, question: str | None) -> AnswerResult:
        """Answer one question.

        Raises:
            QuestionRequiredError: If the question is missing or blank.
            PipelineError: On any unexpected collaborator failure.
        """
        if not question or not question.strip():
            raise QuestionRequiredError()

        request_id = set_request_context()
        logger.info("Answering question (request_id=%s)", request_id)

        try:
            return await self._answer(question)
        except QuestionRequiredError:
            raise
        except Exception as e:
            logger.exception("Pipeline failed")
            raise PipelineError(str(e) or "internal error") from e
        finally:
            set_stage(None)

    async def _answer(self, question: str) -> AnswerResult:
        set_stage("retrieve")
        match = await self._retriever.retrieve(question)
        if match is None:
            return AnswerResult(answer=NO_MATCH_MESSAGE)

        set_stage("classify")
        intent = classify_intent(question)
        if not intent.needs_live_price:
            return AnswerResult(answer=catalog_answer(match), metadata=match)

        logger.info("Price intent detected: %s", ", ".join(intent.matched_terms))

        if self._resolver is None:
            logger.warning("Live price lookup requested but no search provider is configured")
            return AnswerResult(
                answer=(
                    "Live price lookup is not available. Here's catalog info:\n\n"
                    f"{match.headline()}\n{match.description}"
                ),
                metadata=match,
            )

        set_stage("price")
        live = await self._resolver.resolve(
            match.brand, match.model_name, match.reference_number
        )
        if live is None:
            return AnswerResult(
                answer=(
                    "I couldn't fetch a clear live listing price right now. "
                    "Here's the catalog info I found:\n\n"
                    f"{match.headline()}\n{match.description}"
                ),
                metadata=match,
            )

        return AnswerResult(
            answer=live_price_answer(live),
            metadata=match,
            provenance=[Provenance(source=live.source, raw=live.raw or "")],
        )


def catalog_answer(match: CatalogMatch) -> str:
    """Catalog-only answer text."""
    return f"{match.headline()}:\n{match.description}"


def live_price_answer(live: LivePrice) -> str:
    """Price-bearing answer text."""
    amount = format_amount(live)
    currency = live.currency or ""
    return f"Live listing: {currency} {amount} (source: {live.source}, as of {live.ts})."


def format_amount(live: LivePrice) -> str:
    """Thousands-separated value, or the raw match when no value was parsed."""
    if live.value is None:
        return live.raw or "unknown"
    if float(live.value).is_integer():
        return f"{live.value:,.0f}"
    return f"{live.value:,.2f}"


async def answer(question: str, settings: Settings | None = None) -> AnswerResult:
    """Answer a question with a pipeline built from settings (.env if None)."""
    from watchbutler.config.settings import Settings

    pipeline = QueryPipeline.from_settings(settings or Settings())
    try:
        return await pipeline.answer(question)
    finally:
        await pipeline.aclose()
