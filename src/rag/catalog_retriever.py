# src/rag/catalog_retriever.py — v1
"""Catalog retriever: question → embedding → nearest catalog entry.

Single shot. No retry, re-ranking or de-duplication; the store's ordering is
trusted and only the first match is kept.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from watchbutler.core.errors import EmbeddingError
from watchbutler.core.models import CatalogMatch
from watchbutler.rag.models import VectorMatch

if TYPE_CHECKING:
    from watchbutler.config.settings import Settings
    from watchbutler.rag.embeddings.base_embedder import BaseEmbedder
    from watchbutler.rag.vector_store.base_vector_store import BaseVectorStore

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3

_METADATA_FIELDS = (
    "brand",
    "model_name",
    "reference_number",
    "description",
    "category",
    "movement",
    "caliber",
)


class CatalogRetriever:
    """Find the catalog entry closest to a question.

    Args:
        embedder: Embedding provider for the question text.
        vector_store: Catalog index.
        collection: Index / collection name.
        top_k: Breadth requested from the store.
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        vector_store: BaseVectorStore,
        collection: str,
        top_k: int = DEFAULT_TOP_K,
    ) -> None:
        self._embedder = embedder
        self._vector_store = vector_store
        self._collection = collection
        self._top_k = top_k

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        embedder: BaseEmbedder | None = None,
        vector_store: BaseVectorStore | None = None,
    ) -> CatalogRetriever:
        if embedder is None:
            from watchbutler.rag.embeddings.embedder_factory import create_embedder
            embedder = create_embedder(settings)
        if vector_store is None:
            from watchbutler.rag.vector_store.vector_store_factory import create_vector_store
            vector_store = create_vector_store(settings)
        return cls(
            embedder=embedder,
            vector_store=vector_store,
            collection=settings.vector_db_collection,
            top_k=settings.retrieval_top_k,
        )

    async def retrieve(self, question: str) -> CatalogMatch | None:
        """Return the top catalog match, or None when the index has no hits.

        Raises:
            EmbeddingError: If the embedding provider fails or returns no vector.
        """
        embedding = await self._embed(question)

        matches = await self._vector_store.query(
            self._collection, embedding, top_k=self._top_k
        )
        if not matches:
            logger.info("Catalog query returned no matches")
            return None

        top = normalize_match(matches[0])
        logger.info(
            "Top catalog match: %s %s (score=%s)", top.brand, top.model_name, top.score
        )
        return top

    async def _embed(self, question: str) -> list[float]:
        try:
            embedding = await self._embedder.embed_query(question)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(
                f"{self._embedder.provider_name} embedding failed: {e}"
            ) from e
        if not embedding:
            raise EmbeddingError(
                f"{self._embedder.provider_name} returned no embedding"
            )
        return list(embedding)


def normalize_match(match: VectorMatch) -> CatalogMatch:
    """Project a raw vector hit onto CatalogMatch, blanks instead of None."""
    metadata: dict[str, Any] = match.metadata or {}
    fields = {name: _as_text(metadata.get(name)) for name in _METADATA_FIELDS}
    return CatalogMatch(
        id=match.id or _as_optional_text(metadata.get("id")),
        score=match.score,
        **fields,
    )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
