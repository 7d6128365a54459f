# src/rag/vector_store/pinecone_store.py — v1
"""Pinecone vector store adapter.

Uses the pinecone SDK. The SDK is synchronous, so queries run in a worker
thread to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from watchbutler.rag.models import VectorMatch
from watchbutler.rag.vector_store.base_vector_store import BaseVectorStore

logger = logging.getLogger(__name__)


class PineconeStore(BaseVectorStore):
    """Vector store backed by a Pinecone serverless or pod index.

    Args:
        api_key: Pinecone API key.
        host: Index host URL; when set it takes precedence over the index name.
        namespace: Optional namespace queried for every call.
    """

    def __init__(
        self,
        api_key: str | None = None,
        host: str | None = None,
        namespace: str | None = None,
    ) -> None:
        try:
            from pinecone import Pinecone
        except ImportError as e:
            raise ImportError(
                "pinecone package required: pip install pinecone"
            ) from e

        self._client = Pinecone(api_key=api_key or None)
        self._host = host or None
        self._namespace = namespace or None
        self._indexes: dict[str, Any] = {}

    def _index(self, collection: str) -> Any:
        index = self._indexes.get(collection)
        if index is None:
            if self._host:
                index = self._client.Index(host=self._host)
            else:
                index = self._client.Index(collection)
            self._indexes[collection] = index
        return index

    async def query(
        self,
        collection: str,
        query_embedding: list[float],
        top_k: int = 3,
        filter: dict | None = None,
    ) -> list[VectorMatch]:
        """Query by embedding similarity, metadata included, values excluded."""
        index = self._index(collection)
        kwargs: dict[str, Any] = {
            "vector": query_embedding,
            "top_k": top_k,
            "include_metadata": True,
            "include_values": False,
        }
        if self._namespace:
            kwargs["namespace"] = self._namespace
        if filter:
            kwargs["filter"] = filter

        results = await asyncio.to_thread(index.query, **kwargs)
        return [_to_match(m) for m in _matches_of(results)]

    @property
    def provider_name(self) -> str:
        return "pinecone"


def _matches_of(results: Any) -> list[Any]:
    """Read ``matches`` from either the SDK response object or a plain dict."""
    matches = getattr(results, "matches", None)
    if matches is None and isinstance(results, dict):
        matches = results.get("matches")
    return list(matches or [])


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _to_match(raw: Any) -> VectorMatch:
    metadata = _field(raw, "metadata") or {}
    return VectorMatch(
        id=_field(raw, "id"),
        score=_field(raw, "score"),
        metadata=dict(metadata),
    )
