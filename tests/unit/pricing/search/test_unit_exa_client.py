# tests/unit/pricing/search/test_unit_exa_client.py — v1
"""Tests for pricing/search/exa_client.py, using an httpx mock transport."""

from __future__ import annotations

import json

import httpx
import pytest

from watchbutler.core.errors import SearchProviderError
from watchbutler.pricing.search.exa_client import ExaSearchClient, parse_exa_payload


def _client(handler) -> ExaSearchClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ExaSearchClient(api_key="test-key", num_results=3, http_client=http_client)


class TestExaSearchClient:
    def test_provider_name(self):
        assert ExaSearchClient().provider_name == "exa"

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        client = ExaSearchClient(api_key="")
        with pytest.raises(SearchProviderError, match="EXA_API_KEY"):
            await client.search("Rolex Submariner price")

    @pytest.mark.asyncio
    async def test_request_shape(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"results": []})

        client = _client(handler)
        await client.search("Rolex Submariner 126610LN price")
        assert seen["url"] == "https://api.exa.ai/search"
        assert seen["key"] == "test-key"
        assert seen["body"]["query"] == "Rolex Submariner 126610LN price"
        assert seen["body"]["numResults"] == 3

    @pytest.mark.asyncio
    async def test_results_normalized(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "results": [
                        {
                            "title": "Rolex Submariner 126610LN",
                            "url": "https://www.chrono24.com/x.htm",
                            "text": "listed at $9,500 on Chrono24",
                            "summary": "Pre-owned listing.",
                        }
                    ]
                },
            )

        resp = await _client(handler).search("q")
        assert len(resp.results) == 1
        hit = resp.results[0]
        assert hit.snippet == "listed at $9,500 on Chrono24"
        assert hit.url == "https://www.chrono24.com/x.htm"
        assert "$9,500" in hit.text

    @pytest.mark.asyncio
    async def test_any_2xx_accepted(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(203, json={"results": [{"title": "Submariner $9,500"}]})

        resp = await _client(handler).search("q")
        assert resp.results[0].title == "Submariner $9,500"

    @pytest.mark.asyncio
    async def test_non_2xx_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, text="invalid key")

        with pytest.raises(SearchProviderError) as exc_info:
            await _client(handler).search("q")
        assert exc_info.value.status_code == 401
        assert exc_info.value.provider == "exa"

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SearchProviderError, match="connection refused"):
            await _client(handler).search("q")

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(SearchProviderError, match="not JSON"):
            await _client(handler).search("q")

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self):
        http_client = httpx.AsyncClient()
        client = ExaSearchClient(api_key="k", http_client=http_client)
        await client.aclose()
        assert not http_client.is_closed
        await http_client.aclose()


class TestParseExaPayload:
    def test_non_dict(self):
        assert parse_exa_payload(["unexpected"]).results == []

    def test_top_level_price_and_text(self):
        resp = parse_exa_payload(
            {
                "price": {"value": 10100, "currency": "USD", "raw": "USD 10,100"},
                "source": "https://agg.example",
                "text": "about $10,000",
            }
        )
        assert resp.price.value == 10100
        assert resp.source == "https://agg.example"
        assert resp.text == "about $10,000"

    def test_highlights_used_as_snippet(self):
        resp = parse_exa_payload(
            {"results": [{"title": "t", "highlights": ["from $8,900", "free shipping"]}]}
        )
        assert resp.results[0].snippet == "from $8,900 free shipping"

    def test_explicit_snippet_preferred(self):
        resp = parse_exa_payload(
            {"results": [{"snippet": "snippet $1,000", "text": "page $2,000"}]}
        )
        assert resp.results[0].snippet == "snippet $1,000"

    def test_unparseable_structured_value_keeps_raw(self):
        resp = parse_exa_payload(
            {"price": {"value": "not-a-number", "currency": "USD"}, "results": [None]}
        )
        assert resp.price.value is None
        assert resp.price.raw == "not-a-number"
        assert resp.price.currency == "USD"
        assert resp.results == []

    def test_formatted_structured_value_coerced(self):
        resp = parse_exa_payload({"price": {"value": "9,500", "currency": "$", "raw": "$9,500"}})
        assert resp.price.value == 9500.0
        assert resp.price.raw == "$9,500"
        assert resp.price.is_present

    def test_structured_price_without_fields(self):
        resp = parse_exa_payload({"price": {"value": ["x"]}})
        assert resp.price is not None
        assert not resp.price.is_present
