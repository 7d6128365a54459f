# src/pricing/resolver.py — v1
"""Live price resolver: cache → web search → candidate extraction → cache.

Failures on this path never reach the caller. A provider error, a timeout or
an empty extraction all resolve to None, and nothing is cached for them.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from watchbutler.core.errors import SearchProviderError
from watchbutler.core.models import LivePrice
from watchbutler.pricing.cache import PriceCache, is_cacheable_key, make_cache_key
from watchbutler.pricing.extractor import extract_candidate

if TYPE_CHECKING:
    from watchbutler.config.settings import Settings
    from watchbutler.pricing.search.base_search_client import BaseSearchClient

logger = logging.getLogger(__name__)

DEFAULT_MARKETPLACE_HINTS = 'price Chrono24 Jomashop "price"'

# Shared across resolver instances in one process.
_default_cache: PriceCache | None = None


def get_default_cache(settings: Settings | None = None) -> PriceCache:
    """Return the process-wide price cache, creating it on first use."""
    global _default_cache  # noqa: PLW0603
    if _default_cache is None:
        if settings is None:
            _default_cache = PriceCache()
        else:
            _default_cache = PriceCache(
                ttl_s=settings.price_cache_ttl_s,
                max_entries=settings.price_cache_max_entries,
            )
    return _default_cache


def build_search_query(
    brand: str,
    model_name: str,
    reference_number: str = "",
    hints: str = DEFAULT_MARKETPLACE_HINTS,
) -> str:
    """Compose the marketplace-biased query for one catalog item."""
    ref_part = f" {reference_number}" if reference_number else ""
    return f"{brand} {model_name}{ref_part} {hints}".strip()


class LivePriceResolver:
    """Resolve a current market price for a catalog item.

    Args:
        search_client: Web search provider.
        cache: Price cache; defaults to the process-wide instance.
        timeout_s: Deadline for one provider call.
        marketplace_hints: Terms appended to every query.
        coalesce_inflight: Share one provider call between concurrent
            lookups of the same key.
    """

    def __init__(
        self,
        search_client: BaseSearchClient,
        cache: PriceCache | None = None,
        timeout_s: float = 10.0,
        marketplace_hints: str = DEFAULT_MARKETPLACE_HINTS,
        coalesce_inflight: bool = True,
    ) -> None:
        self._search = search_client
        self._cache = cache if cache is not None else get_default_cache()
        self._timeout_s = timeout_s
        self._hints = marketplace_hints
        self._coalesce = coalesce_inflight
        self._inflight: dict[str, asyncio.Task[LivePrice | None]] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        search_client: BaseSearchClient,
        cache: PriceCache | None = None,
    ) -> LivePriceResolver:
        return cls(
            search_client=search_client,
            cache=cache if cache is not None else get_default_cache(settings),
            timeout_s=settings.search_timeout_s,
            marketplace_hints=settings.search_marketplace_hints,
            coalesce_inflight=settings.price_coalesce_inflight,
        )

    @property
    def cache(self) -> PriceCache:
        return self._cache

    async def aclose(self) -> None:
        await self._search.aclose()

    async def resolve(
        self,
        brand: str,
        model_name: str,
        reference_number: str = "",
    ) -> LivePrice | None:
        """Return a fresh or cached live price, or None when nothing was found."""
        key = make_cache_key(brand, model_name, reference_number)

        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Live price served from cache for %r", key)
            return cached

        if not self._coalesce:
            return await self._fetch(key, brand, model_name, reference_number)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(
                self._fetch(key, brand, model_name, reference_number)
            )
            self._inflight[key] = task
            task.add_done_callback(lambda _t: self._inflight.pop(key, None))
        else:
            logger.debug("Joining in-flight live price lookup for %r", key)
        return await asyncio.shield(task)

    async def _fetch(
        self,
        key: str,
        brand: str,
        model_name: str,
        reference_number: str,
    ) -> LivePrice | None:
        query = build_search_query(brand, model_name, reference_number, self._hints)
        provider = self._search.provider_name

        try:
            response = await asyncio.wait_for(
                self._search.search(query), timeout=self._timeout_s
            )
        except asyncio.TimeoutError:
            logger.warning(
                "%s search timed out after %.1fs for %r", provider, self._timeout_s, query
            )
            return None
        except SearchProviderError as e:
            logger.warning("Live price lookup failed: %s", e)
            return None
        except Exception as e:
            logger.warning("%s search raised %s: %s", provider, type(e).__name__, e)
            return None

        candidate = extract_candidate(response)
        if candidate is None:
            logger.info("No price candidate in %s response for %r", provider, query)
            return None

        live = LivePrice(
            value=candidate.value,
            currency=candidate.currency,
            raw=candidate.raw,
            source=candidate.source or f"{provider}-search",
            ts=datetime.now(timezone.utc).isoformat(),
        )

        if is_cacheable_key(key):
            self._cache.put(key, live)
        else:
            logger.debug("Not caching live price for identity-less key %r", key)

        logger.info(
            "Resolved live price %s %s from %s", live.currency, live.value, live.source
        )
        return live
