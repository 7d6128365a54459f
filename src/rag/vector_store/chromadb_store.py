# src/rag/vector_store/chromadb_store.py — v1
"""ChromaDB vector store adapter for local catalogs.

Requires: pip install chromadb. Similarity is reported as 1 - distance.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from watchbutler.rag.models import VectorMatch
from watchbutler.rag.vector_store.base_vector_store import BaseVectorStore

logger = logging.getLogger(__name__)


class ChromaDBStore(BaseVectorStore):
    """Vector store backed by ChromaDB."""

    def __init__(
        self,
        persist_path: str | Path | None = None,
        host: str | None = None,
        port: int = 8000,
    ) -> None:
        try:
            import chromadb
        except ImportError as e:
            raise ImportError(
                "chromadb package required: pip install chromadb"
            ) from e

        if host:
            self._client = chromadb.HttpClient(host=host, port=port)
        elif persist_path:
            self._client = chromadb.PersistentClient(
                path=str(Path(persist_path).expanduser())
            )
        else:
            self._client = chromadb.Client()

    async def query(
        self,
        collection: str,
        query_embedding: list[float],
        top_k: int = 3,
        filter: dict | None = None,
    ) -> list[VectorMatch]:
        """Query by embedding similarity."""
        col = await asyncio.to_thread(self._client.get_collection, collection)
        kwargs: dict = {
            "query_embeddings": [query_embedding],
            "n_results": top_k,
            "include": ["metadatas", "distances"],
        }
        if filter:
            kwargs["where"] = filter

        results = await asyncio.to_thread(col.query, **kwargs)

        matches: list[VectorMatch] = []
        if results["ids"] and results["ids"][0]:
            distances = results.get("distances") or []
            metadatas = results.get("metadatas") or []
            for i, doc_id in enumerate(results["ids"][0]):
                score = 1.0 - distances[0][i] if distances else None
                meta = metadatas[0][i] if metadatas else None
                matches.append(
                    VectorMatch(id=doc_id, score=score, metadata=dict(meta or {}))
                )
        return matches

    @property
    def provider_name(self) -> str:
        return "chromadb"
