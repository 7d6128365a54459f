# tests/unit/config/test_unit_settings.py — v1
"""Tests for config/settings.py — defaults and validation rules."""

from __future__ import annotations

import pytest

from watchbutler.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_embedding_defaults(self):
        s = Settings(_env_file=None)
        assert s.embedding_provider == "openai"
        assert s.embedding_model == "text-embedding-3-small"

    def test_retrieval_breadth(self):
        assert Settings(_env_file=None).retrieval_top_k == 3

    def test_price_cache_defaults(self):
        s = Settings(_env_file=None)
        assert s.price_cache_ttl_s == 300.0
        assert s.price_cache_max_entries == 1024
        assert s.price_coalesce_inflight is True

    def test_search_defaults(self):
        s = Settings(_env_file=None)
        assert s.exa_endpoint == "https://api.exa.ai/search"
        assert "Chrono24" in s.search_marketplace_hints

    def test_live_price_enabled(self):
        assert Settings(_env_file=None, search_provider="exa").live_price_enabled is True
        assert Settings(_env_file=None, search_provider="none").live_price_enabled is False


class TestSettingsValidation:
    def test_pinecone_needs_index_or_host(self):
        with pytest.raises(ConfigurationError, match="pinecone"):
            Settings(_env_file=None, vector_db_type="pinecone", vector_db_collection="", pinecone_host="")

    def test_pinecone_host_alone_is_enough(self):
        s = Settings(
            _env_file=None, vector_db_type="pinecone", vector_db_collection="",
            pinecone_host="https://my-ai.svc.pinecone.io",
        )
        assert s.pinecone_host

    def test_chromadb_needs_collection(self):
        with pytest.raises(ConfigurationError, match="chromadb"):
            Settings(_env_file=None, vector_db_type="chromadb", vector_db_collection="")

    @pytest.mark.parametrize("field", ["retrieval_top_k", "search_num_results", "price_cache_max_entries"])
    def test_positive_ints(self, field):
        with pytest.raises(ValueError, match=field):
            Settings(_env_file=None, **{field: 0})

    @pytest.mark.parametrize("field", ["price_cache_ttl_s", "search_timeout_s"])
    def test_positive_seconds(self, field):
        with pytest.raises(ValueError, match=field):
            Settings(_env_file=None, **{field: 0})

    def test_invalid_search_provider(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, search_provider="bing")


class TestLoadSettings:
    def test_overrides(self):
        s = load_settings(_env_file=None, retrieval_top_k=5)
        assert s.retrieval_top_k == 5

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("PRICE_CACHE_TTL_S", "60")
        monkeypatch.setenv("SEARCH_PROVIDER", "none")
        s = load_settings(_env_file=None)
        assert s.price_cache_ttl_s == 60.0
        assert s.search_provider == "none"
