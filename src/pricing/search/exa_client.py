# src/pricing/search/exa_client.py — v1
"""Exa search adapter.

POSTs to the Exa ``/search`` endpoint with httpx and maps each result's
page text or highlights onto the snippet field.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from watchbutler.core.errors import SearchProviderError
from watchbutler.pricing.parser import parse_amount
from watchbutler.pricing.search.base_search_client import BaseSearchClient
from watchbutler.pricing.search.models import SearchHit, SearchResponse, StructuredPrice

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.exa.ai/search"
MAX_TEXT_CHARACTERS = 1000


class ExaSearchClient(BaseSearchClient):
    """Live price search via the Exa REST API."""

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str = DEFAULT_ENDPOINT,
        num_results: int = 5,
        timeout_s: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint
        self._num_results = num_results
        self._timeout_s = timeout_s
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout_s)
        return self._http_client

    async def search(self, query: str) -> SearchResponse:
        """Run one Exa query and normalize the payload."""
        if not self._api_key:
            raise SearchProviderError(self.provider_name, "EXA_API_KEY not configured")

        payload = {
            "query": query,
            "numResults": self._num_results,
            "contents": {
                "text": {"maxCharacters": MAX_TEXT_CHARACTERS},
                "summary": True,
            },
        }
        headers = {"x-api-key": self._api_key, "Content-Type": "application/json"}

        try:
            resp = await self._client.post(self._endpoint, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise SearchProviderError(self.provider_name, str(e) or type(e).__name__) from e

        if not resp.is_success:
            raise SearchProviderError(
                self.provider_name,
                f"status {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise SearchProviderError(self.provider_name, "response is not JSON") from e

        return parse_exa_payload(data)

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    @property
    def provider_name(self) -> str:
        return "exa"


def parse_exa_payload(data: Any) -> SearchResponse:
    """Translate a raw Exa JSON body into a SearchResponse."""
    if not isinstance(data, dict):
        return SearchResponse()

    hits: list[SearchHit] = []
    for item in data.get("results") or []:
        if not isinstance(item, dict):
            continue
        hits.append(
            SearchHit(
                title=item.get("title") or "",
                snippet=_snippet_of(item),
                summary=item.get("summary") or "",
                url=item.get("url"),
                source=item.get("source"),
                price=_price_of(item.get("price")),
            )
        )

    return SearchResponse(
        price=_price_of(data.get("price")),
        source=data.get("source"),
        results=hits,
        text=data.get("text") if isinstance(data.get("text"), str) else None,
    )


def _snippet_of(item: dict[str, Any]) -> str:
    """Prefer an explicit snippet, then page text, then joined highlights."""
    if item.get("snippet"):
        return str(item["snippet"])
    if item.get("text"):
        return str(item["text"])
    highlights = item.get("highlights") or []
    return " ".join(str(h) for h in highlights)


def _price_of(raw: Any) -> StructuredPrice | None:
    if not isinstance(raw, dict):
        return None
    try:
        return StructuredPrice.model_validate(raw)
    except ValueError:
        logger.debug("Structured price needs coercion: %r", raw)

    value = raw.get("value")
    text = _text_of(raw.get("raw"))
    if isinstance(value, str):
        text = text or value
        amount = parse_amount(value)
    else:
        amount = None
    return StructuredPrice(value=amount, currency=_text_of(raw.get("currency")), raw=text)


def _text_of(value: Any) -> str | None:
    if isinstance(value, str):
        return value or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None
