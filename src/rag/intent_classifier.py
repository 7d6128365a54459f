# src/rag/intent_classifier.py — v1
"""Price-intent gate: does a question need a live market price?

Lexical substring match over a fixed, case-insensitive vocabulary.
"""

from __future__ import annotations

from watchbutler.core.models import IntentDecision

PRICE_INTENT_TERMS: tuple[str, ...] = (
    "price",
    "cost",
    "market",
    "listing",
    "resale",
    "sell",
    "how much",
    "current price",
    "value",
)


def classify_intent(question: str) -> IntentDecision:
    """Classify a question as price-seeking or catalog-only.

    Args:
        question: Raw user question.

    Returns:
        IntentDecision with the vocabulary terms that matched.
    """
    q = (question or "").lower()
    if not q.strip():
        return IntentDecision(needs_live_price=False)

    matched = [t for t in PRICE_INTENT_TERMS if t in q]
    return IntentDecision(needs_live_price=bool(matched), matched_terms=matched)