# =============================================================================
# Transcript Store — Append-Only Conversation Log
# =============================================================================
#
# Ordered log of ConversationTurn values. The only mutation is append:
# no edits, no deletes, no reordering. Turns themselves are frozen.
# Resetting a conversation means starting a new TranscriptStore, never
# truncating an existing one.
# =============================================================================

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


class Speaker(str, enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class ConversationTurn:
    """
    One message in the conversation.

    `attached_insight` holds the structured orchestrator result and is only
    set on assistant turns produced by a successful agent call.
    """

    speaker: Speaker
    text: str
    produced_at: datetime = field(default_factory=_utcnow)
    attached_insight: Any = None

    def __post_init__(self) -> None:
        if self.speaker is Speaker.USER and self.attached_insight is not None:
            raise ValueError("User turns cannot carry an attached insight")


class TranscriptStore:
    """Append-only sequence of conversation turns."""

    def __init__(self) -> None:
        self._turns: list[ConversationTurn] = []

    def append(self, turn: ConversationTurn) -> ConversationTurn:
        self._turns.append(turn)
        return turn

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        """Snapshot of the log; later appends do not affect it."""
        return tuple(self._turns)

    @property
    def last(self) -> ConversationTurn | None:
        return self._turns[-1] if self._turns else None

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(self.turns)
