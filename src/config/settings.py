# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for provider credentials, retrieval breadth,
price cache policy and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === EMBEDDINGS ===
    embedding_provider: str = "openai"
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536
    openai_api_key: str = ""

    # === Vector database ===
    vector_db_type: Literal["pinecone", "chromadb"] = "pinecone"
    vector_db_collection: str = "my-ai"
    pinecone_api_key: str = ""
    pinecone_host: str = ""
    pinecone_namespace: str = ""
    vector_db_path: Path = Path("~/.watchbutler/vectordb")
    vector_db_url: str = ""

    # === Retrieval ===
    retrieval_top_k: int = 3

    # === Web search ===
    search_provider: Literal["exa", "none"] = "exa"
    exa_api_key: str = ""
    exa_endpoint: str = "https://api.exa.ai/search"
    search_num_results: int = 5
    search_timeout_s: float = 10.0
    search_marketplace_hints: str = 'price Chrono24 Jomashop "price"'

    # === Price cache ===
    price_cache_ttl_s: float = 300.0
    price_cache_max_entries: int = 1024
    price_coalesce_inflight: bool = True

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # === HTTP API ===
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # --- Validators ---

    @field_validator(
        "retrieval_top_k", "search_num_results", "price_cache_max_entries"
    )
    @classmethod
    def validate_positive_int(cls, v: int, info) -> int:  # noqa: N805
        if v < 1:
            raise ValueError(f"{info.field_name} must be >= 1")
        return v

    @field_validator("price_cache_ttl_s", "search_timeout_s")
    @classmethod
    def validate_positive_seconds(cls, v: float, info) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field checks on the vector database selection."""
        errors: list[str] = []

        if (
            self.vector_db_type == "pinecone"
            and not self.vector_db_collection
            and not self.pinecone_host
        ):
            errors.append(
                "VECTOR_DB_TYPE=pinecone requires VECTOR_DB_COLLECTION or PINECONE_HOST"
            )

        if self.vector_db_type == "chromadb" and not self.vector_db_collection:
            errors.append("VECTOR_DB_TYPE=chromadb requires VECTOR_DB_COLLECTION")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def live_price_enabled(self) -> bool:
        """Whether a web search provider is configured at all."""
        return self.search_provider != "none"


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
