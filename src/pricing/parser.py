# src/pricing/parser.py — v1
"""Price text parser: pull a currency-marked amount out of free prose.

Best-effort heuristic, not a price grammar. Kept as a pure function so the
pattern can be hardened without touching the resolver.
"""

from __future__ import annotations

import re

from watchbutler.core.models import PriceCandidate

CURRENCY_MARKERS: tuple[str, ...] = ("USD", "EUR", "GBP", "CHF", "INR", "$", "€", "£", "₹")

_PRICE_RE = re.compile(
    "(" + "|".join(re.escape(m) for m in CURRENCY_MARKERS) + r")\s?([0-9.,]{2,})",
    re.IGNORECASE,
)


def parse_price(text: str | None) -> PriceCandidate | None:
    """Find the first currency marker followed by a numeric token.

    Args:
        text: Arbitrary prose (titles, snippets, page text).

    Returns:
        Candidate with value, currency and raw match; value None when the
        numeric token is malformed; None when no marker/number pair exists.
    """
    if not text:
        return None

    match = _PRICE_RE.search(text)
    if not match:
        return None

    currency = _normalize_currency(match.group(1))
    raw = match.group(0)
    value = parse_amount(match.group(2))
    return PriceCandidate(value=value, currency=currency, raw=raw)


def _normalize_currency(marker: str) -> str:
    """Upper-case letter codes, leave symbols untouched."""
    return marker.upper() if marker.isalpha() else marker


def parse_amount(token: str) -> float | None:
    """Strip thousands separators and parse. Malformed tokens give None."""
    cleaned = re.sub(r"\s+", "", token).replace(",", "")
    try:
        return float(cleaned)
    except ValueError:
        return None
