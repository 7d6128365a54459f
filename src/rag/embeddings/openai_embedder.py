# src/rag/embeddings/openai_embedder.py — v1
"""OpenAI embedding adapter.

Uses the openai SDK. The catalog index was built with
text-embedding-3-small, so queries must use the same model.
"""

from __future__ import annotations

import logging

from watchbutler.core.errors import EmbeddingError
from watchbutler.rag.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)


class OpenAIEmbedder(BaseEmbedder):
    """Embeddings via OpenAI API."""

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
        dimensions: int = 1536,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._dimensions = dimensions
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install openai"
                ) from e
            self.__client = openai.AsyncOpenAI(api_key=self._api_key or None)
        return self.__client

    async def embed_query(self, query: str) -> list[float]:
        """Embed one question; an empty payload is an error."""
        response = await self._client.embeddings.create(
            input=query, model=self._model
        )
        if not response.data or not response.data[0].embedding:
            raise EmbeddingError("OpenAI returned no embedding")
        return list(response.data[0].embedding)

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model
