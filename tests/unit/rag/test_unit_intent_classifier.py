# tests/unit/rag/test_unit_intent_classifier.py — v1
"""Tests for rag/intent_classifier.py."""

from __future__ import annotations

import pytest

from watchbutler.rag.intent_classifier import PRICE_INTENT_TERMS, classify_intent


class TestClassifyIntent:
    @pytest.mark.parametrize(
        "question",
        [
            "What's the Submariner selling for right now?",
            "How much is a Speedmaster Professional?",
            "What is the current price of the Nautilus 5711?",
            "Does the Daytona hold its value?",
            "Resale market for the Royal Oak?",
            "Any listing for a Tudor Black Bay 58?",
            "What does a Seamaster cost?",
        ],
    )
    def test_price_questions(self, question):
        assert classify_intent(question).needs_live_price is True

    @pytest.mark.parametrize(
        "question",
        [
            "What movement does the Submariner use?",
            "Tell me about the Omega Speedmaster moonwatch",
            "Is the Cartier Santos water resistant?",
        ],
    )
    def test_catalog_only_questions(self, question):
        assert classify_intent(question).needs_live_price is False

    def test_case_insensitive(self):
        assert classify_intent("PRICE of the GMT-Master II").needs_live_price is True

    def test_matched_terms_reported(self):
        decision = classify_intent("What's the current price and resale value?")
        assert "current price" in decision.matched_terms
        assert "resale" in decision.matched_terms
        assert "value" in decision.matched_terms

    def test_empty_and_blank(self):
        assert classify_intent("").needs_live_price is False
        assert classify_intent("   ").needs_live_price is False

    def test_vocabulary(self):
        assert set(PRICE_INTENT_TERMS) >= {"price", "cost", "how much", "sell"}
