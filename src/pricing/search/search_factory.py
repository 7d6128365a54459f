# src/pricing/search/search_factory.py — v1
"""Factory: instantiate the web search provider from configuration."""

from __future__ import annotations

import logging

from watchbutler.config.settings import Settings
from watchbutler.pricing.search.base_search_client import BaseSearchClient

logger = logging.getLogger(__name__)


class UnsupportedSearchProviderError(ValueError):
    """Raised when a search provider is not supported."""


def create_search_client(settings: Settings) -> BaseSearchClient | None:
    """Instantiate the configured search provider.

    Returns:
        Configured client, or None when SEARCH_PROVIDER is 'none'.
    """
    provider = settings.search_provider

    if provider == "none":
        return None

    if provider == "exa":
        from watchbutler.pricing.search.exa_client import ExaSearchClient

        if not settings.exa_api_key:
            logger.warning("EXA_API_KEY is empty; live price lookups will fail")
        return ExaSearchClient(
            api_key=settings.exa_api_key,
            endpoint=settings.exa_endpoint,
            num_results=settings.search_num_results,
            timeout_s=settings.search_timeout_s,
        )

    raise UnsupportedSearchProviderError(
        f"Unsupported search provider: {provider!r}. Available: exa, none"
    )
