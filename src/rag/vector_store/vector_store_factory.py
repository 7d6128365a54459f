# src/rag/vector_store/vector_store_factory.py — v1
"""Factory: instantiate vector store from configuration."""

from __future__ import annotations

import logging

from watchbutler.config.settings import Settings
from watchbutler.rag.vector_store.base_vector_store import BaseVectorStore

logger = logging.getLogger(__name__)


class UnsupportedVectorStoreError(ValueError):
    """Raised when a vector store type is not supported."""


def create_vector_store(settings: Settings) -> BaseVectorStore:
    """Instantiate the configured vector store.

    Raises:
        UnsupportedVectorStoreError: If VECTOR_DB_TYPE is not supported.
    """
    db_type = settings.vector_db_type

    if db_type == "pinecone":
        from watchbutler.rag.vector_store.pinecone_store import PineconeStore
        return PineconeStore(
            api_key=settings.pinecone_api_key,
            host=settings.pinecone_host,
            namespace=settings.pinecone_namespace,
        )

    if db_type == "chromadb":
        from watchbutler.rag.vector_store.chromadb_store import ChromaDBStore
        url = settings.vector_db_url
        if url:
            host, port = _split_host_port(url)
            return ChromaDBStore(host=host, port=port)
        return ChromaDBStore(persist_path=settings.vector_db_path)

    raise UnsupportedVectorStoreError(
        f"Unsupported vector store type: {db_type!r}. Available: pinecone, chromadb"
    )


def _split_host_port(url: str, default_port: int = 8000) -> tuple[str, int]:
    """Parse 'http://host:port', 'host:port' or 'host'."""
    netloc = url.split("://", 1)[-1].rstrip("/")
    if ":" in netloc:
        host, port = netloc.rsplit(":", 1)
        return host, int(port)
    return netloc, default_port
