# tests/conftest.py — v1
"""Shared test fixtures for unit tests.

Provides a sample catalog match, fake collaborators (embedder, vector
store, search client) and a price cache driven by a manual clock.
No external dependencies: all I/O is mocked.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from watchbutler.core.models import CatalogMatch
from watchbutler.pricing.cache import PriceCache
from watchbutler.pricing.search.models import SearchHit, SearchResponse
from watchbutler.rag.models import VectorMatch


class ManualClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# === FIXTURES: Sample data ===


@pytest.fixture
def submariner_metadata() -> dict:
    """Raw vector store metadata for the Rolex Submariner."""
    return {
        "brand": "Rolex",
        "model_name": "Submariner",
        "reference_number": "126610LN",
        "description": "Oystersteel dive watch with a black Cerachrom bezel.",
        "category": "dive",
        "movement": "automatic",
        "caliber": "3235",
    }


@pytest.fixture
def submariner_vector_match(submariner_metadata: dict) -> VectorMatch:
    return VectorMatch(id="rolex-126610ln", score=0.91, metadata=submariner_metadata)


@pytest.fixture
def submariner_match() -> CatalogMatch:
    """Normalized catalog match for the Submariner."""
    return CatalogMatch(
        id="rolex-126610ln",
        score=0.91,
        brand="Rolex",
        model_name="Submariner",
        reference_number="126610LN",
        description="Oystersteel dive watch with a black Cerachrom bezel.",
        category="dive",
        movement="automatic",
        caliber="3235",
    )


@pytest.fixture
def chrono24_response() -> SearchResponse:
    """Search response whose first result carries a price in its snippet."""
    return SearchResponse(
        results=[
            SearchHit(
                title="Rolex Submariner Date 126610LN",
                snippet="... listed at $9,500 on Chrono24 ...",
                url="https://www.chrono24.com/rolex/submariner-126610ln.htm",
            )
        ]
    )


# === FIXTURES: Fake collaborators ===


@pytest.fixture
def mock_embedder() -> AsyncMock:
    """Embedder returning a short fixed vector."""
    embedder = AsyncMock()
    embedder.embed_query = AsyncMock(return_value=[0.1, 0.2, 0.3])
    embedder.provider_name = "mock"
    embedder.model_name = "mock-embed"
    embedder.dimensions = 3
    return embedder


@pytest.fixture
def mock_vector_store(submariner_vector_match: VectorMatch) -> AsyncMock:
    """Vector store returning the Submariner first."""
    store = AsyncMock()
    store.query = AsyncMock(
        return_value=[
            submariner_vector_match,
            VectorMatch(id="omega-seamaster", score=0.72, metadata={"brand": "Omega"}),
        ]
    )
    store.provider_name = "mock"
    return store


@pytest.fixture
def mock_search_client(chrono24_response: SearchResponse) -> AsyncMock:
    """Search client answering every query with the Chrono24 response."""
    client = AsyncMock()
    client.search = AsyncMock(return_value=chrono24_response)
    client.aclose = AsyncMock()
    client.provider_name = "exa"
    return client


# === FIXTURES: Cache ===


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def price_cache(clock: ManualClock) -> PriceCache:
    """Five-minute cache on a manual clock."""
    return PriceCache(ttl_s=300.0, max_entries=16, clock=clock)
