# =============================================================================
# Unit Tests — Transcript Store
# =============================================================================

from __future__ import annotations

import dataclasses

import pytest

from app.services.transcript import ConversationTurn, Speaker, TranscriptStore


class TestTranscriptStore:

    def test_append_preserves_order(self):
        store = TranscriptStore()
        store.append(ConversationTurn(speaker=Speaker.USER, text="one"))
        store.append(ConversationTurn(speaker=Speaker.ASSISTANT, text="two"))
        assert [t.text for t in store] == ["one", "two"]
        assert store.last.text == "two"
        assert len(store) == 2

    def test_turns_snapshot_is_detached(self):
        store = TranscriptStore()
        store.append(ConversationTurn(speaker=Speaker.USER, text="one"))
        before = store.turns
        store.append(ConversationTurn(speaker=Speaker.USER, text="two"))
        assert len(before) == 1
        assert isinstance(before, tuple)

    def test_turns_are_immutable(self):
        turn = ConversationTurn(speaker=Speaker.USER, text="hi")
        with pytest.raises(dataclasses.FrozenInstanceError):
            turn.text = "edited"

    def test_user_turn_cannot_carry_insight(self):
        with pytest.raises(ValueError):
            ConversationTurn(speaker=Speaker.USER, text="hi", attached_insight={"a": 1})

    def test_produced_at_is_timezone_aware(self):
        turn = ConversationTurn(speaker=Speaker.ASSISTANT, text="hi")
        assert turn.produced_at.tzinfo is not None

    def test_empty_store(self):
        store = TranscriptStore()
        assert store.last is None
        assert list(store) == []
