# src/pricing/extractor.py — v1
"""Pick one price candidate out of a search response.

Priority: top-level structured price, then the first ranked result with a
structured price or parseable text, then the response's own text. The first
hit ends the search.
"""

from __future__ import annotations

from watchbutler.core.models import PriceCandidate
from watchbutler.pricing.parser import parse_price
from watchbutler.pricing.search.models import SearchResponse, StructuredPrice


def extract_candidate(response: SearchResponse | None) -> PriceCandidate | None:
    """Walk the fallback chain and return the first candidate found."""
    if response is None:
        return None

    if response.price is not None and response.price.is_present:
        return _from_structured(response.price, response.source)

    for hit in response.results:
        if hit.price is not None and hit.price.is_present:
            return _from_structured(hit.price, hit.origin)
        parsed = parse_price(hit.text)
        if parsed is not None:
            return parsed.model_copy(update={"source": hit.origin})

    if response.text:
        parsed = parse_price(response.text)
        if parsed is not None:
            return parsed.model_copy(update={"source": response.source})

    return None


def _from_structured(price: StructuredPrice, source: str | None) -> PriceCandidate:
    return PriceCandidate(
        value=price.value or None,
        currency=price.currency or None,
        raw=price.raw or None,
        source=source,
    )
