# src/rag/vector_store/base_vector_store.py — v1
"""Abstract vector store interface (read side only)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from watchbutler.rag.models import VectorMatch


class BaseVectorStore(ABC):
    """Unified interface for vector store backends."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        query_embedding: list[float],
        top_k: int = 3,
        filter: dict | None = None,
    ) -> list[VectorMatch]:
        """Return nearest matches, most similar first."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (pinecone, chromadb)."""
