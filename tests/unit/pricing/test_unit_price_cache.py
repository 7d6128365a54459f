# tests/unit/pricing/test_unit_price_cache.py — v1
"""Tests for pricing/cache.py — key normalization, TTL and LRU bound."""

from __future__ import annotations

import pytest

from watchbutler.core.models import LivePrice
from watchbutler.pricing.cache import PriceCache, is_cacheable_key, make_cache_key


def _live(value: float = 9500.0) -> LivePrice:
    return LivePrice(
        value=value, currency="$", raw=f"${value:,.0f}",
        source="https://example.com", ts="2026-10-18T12:00:00+00:00",
    )


class TestMakeCacheKey:
    def test_case_and_whitespace_normalized(self):
        assert make_cache_key("Rolex", "Submariner", "126610LN") == make_cache_key(
            "rolex", " submariner ", "126610ln"
        )

    def test_format(self):
        assert make_cache_key("Rolex", "Submariner", "126610LN") == "rolex|submariner|126610ln"

    def test_missing_fields_collapse_to_empty(self):
        assert make_cache_key("Omega", None, "") == "omega||"
        assert make_cache_key(None, None, None) == "||"


class TestIsCacheableKey:
    def test_brand_only_is_cacheable(self):
        assert is_cacheable_key("omega||")

    def test_model_only_is_cacheable(self):
        assert is_cacheable_key("|speedmaster|")

    def test_reference_only_is_not(self):
        assert not is_cacheable_key("||311.30.42.30.01.005")

    def test_all_empty_is_not(self):
        assert not is_cacheable_key("||")


class TestPriceCache:
    def test_miss(self, price_cache):
        assert price_cache.get("rolex|submariner|126610ln") is None

    def test_hit_marks_cached(self, price_cache):
        price_cache.put("k", _live())
        hit = price_cache.get("k")
        assert hit.cached is True
        assert hit.value == 9500.0

    def test_hit_payload_matches_except_marker(self, price_cache):
        original = _live()
        price_cache.put("k", original)
        hit = price_cache.get("k")
        assert hit.model_dump(exclude={"cached"}) == original.model_dump(exclude={"cached"})

    def test_stale_entry_ignored_but_kept(self, price_cache, clock):
        price_cache.put("k", _live())
        clock.advance(300.0)
        assert price_cache.get("k") is None
        assert "k" in price_cache

    def test_fresh_just_before_ttl(self, price_cache, clock):
        price_cache.put("k", _live())
        clock.advance(299.9)
        assert price_cache.get("k") is not None

    def test_overwrite_refreshes_timestamp(self, price_cache, clock):
        price_cache.put("k", _live(9500.0))
        clock.advance(400.0)
        price_cache.put("k", _live(9800.0))
        hit = price_cache.get("k")
        assert hit.value == 9800.0

    def test_lru_eviction(self, clock):
        cache = PriceCache(ttl_s=300.0, max_entries=2, clock=clock)
        cache.put("a", _live(1.0))
        cache.put("b", _live(2.0))
        cache.get("a")  # a becomes most recent
        cache.put("c", _live(3.0))
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert len(cache) == 2

    def test_clear(self, price_cache):
        price_cache.put("k", _live())
        price_cache.clear()
        assert len(price_cache) == 0

    def test_invalid_ttl(self):
        with pytest.raises(ValueError, match="ttl_s"):
            PriceCache(ttl_s=0)

    def test_invalid_capacity(self):
        with pytest.raises(ValueError, match="max_entries"):
            PriceCache(max_entries=0)
