# src/pricing/search/base_search_client.py — v1
"""Abstract web search provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from watchbutler.pricing.search.models import SearchResponse


class BaseSearchClient(ABC):
    """Unified interface for web search providers used for live prices."""

    @abstractmethod
    async def search(self, query: str) -> SearchResponse:
        """Run a free-text query.

        Raises:
            SearchProviderError: On transport failure or non-success status.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier, also used for the generic source tag."""

    async def aclose(self) -> None:
        """Release pooled connections. No-op by default."""
