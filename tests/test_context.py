# =============================================================================
# Unit Tests — Context Builder
# =============================================================================

from __future__ import annotations

import random
import string

from app.services.context import (
    AUDIT_FRAME,
    CHAT_FRAME,
    build_audit_message,
    build_chat_message,
    build_context,
)
from conftest import SAMPLE_CSV


def _random_text(rng: random.Random, max_len: int = 60) -> str:
    alphabet = string.printable + "{}₹é"
    return "".join(rng.choice(alphabet) for _ in range(rng.randint(0, max_len)))


class TestBuildContext:
    """Rule order: ledger frame, then goal suffix, else unchanged text."""

    def test_no_ledger_returns_text_unchanged(self):
        text = "What's my 3-month spending projection?"
        assert build_context(text) == text

    def test_chat_frame_embeds_ledger_verbatim(self):
        result = build_chat_message("Why did my bill spike?", SAMPLE_CSV)
        assert result == (
            f"Based on my transaction history:\n{SAMPLE_CSV}\n\n"
            "Query: Why did my bill spike?"
        )

    def test_ledger_is_not_truncated(self):
        big = "date,amount\n" + "2026-01-01,1.00\n" * 20000
        assert big in build_chat_message("q", big)

    def test_empty_ledger_still_framed(self):
        assert build_chat_message("q", "") == "Based on my transaction history:\n\n\nQuery: q"

    def test_audit_frame_without_goals(self):
        assert build_audit_message(SAMPLE_CSV) == f"Analyze this CSV data:\n{SAMPLE_CSV}"

    def test_goals_comma_joined_in_order(self):
        result = build_audit_message("a,b\n1,2\n", ["Save more", "Cut dining", "Buy car"])
        assert result.endswith(
            "\n\nUser's financial goals: Save more, Cut dining, Buy car"
        )

    def test_empty_goal_list_adds_nothing(self):
        assert build_audit_message("x", []) == "Analyze this CSV data:\nx"

    def test_braces_in_ledger_are_kept(self):
        csv = "memo\n{query} {ledger} {0}\n"
        assert build_chat_message("hi", csv) == CHAT_FRAME.format(ledger=csv, query="hi")


class TestDeterminism:
    """Identical inputs always yield byte-identical output."""

    def test_random_inputs_are_deterministic(self):
        rng = random.Random(1234)
        for _ in range(300):
            text = _random_text(rng)
            ledger = rng.choice([None, _random_text(rng, 400)])
            goals = [_random_text(rng, 20) for _ in range(rng.randint(0, 4))]
            frame = rng.choice([CHAT_FRAME, AUDIT_FRAME])

            first = build_context(text, ledger, list(goals), frame=frame)
            second = build_context(text, ledger, list(goals), frame=frame)

            assert first == second
            if ledger is not None:
                assert ledger in first
            if ledger is None and not goals:
                assert first == text

    def test_inputs_not_mutated(self):
        goals = ["a", "b"]
        build_audit_message("x", goals)
        assert goals == ["a", "b"]
