# =============================================================================
# Chat Orchestrator — Message → Context → Orchestrator Agent → Transcript
# =============================================================================
#
# FLOW (one send):
#   1. Append the user turn
#   2. Build context: ledger text when one is loaded, audit or not
#   3. Invoke the ORCHESTRATOR agent
#   4. Append exactly one assistant turn:
#        success → explanation + numbered recommendations, result attached
#        failure → "Sorry, I encountered an error: ...", nothing attached
#
# `awaiting_reply` is true from dispatch until the call settles.
#
# At most one send in flight is an external invariant (the API answers 409
# while a reply is pending); this class does no locking.
#
# reset() swaps in a fresh transcript and bumps the generation. A reply
# that settles after the reset is dropped instead of being appended.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from app.services.context import build_chat_message
from app.services.errors import AgentLogicError, OrchestrationError
from app.services.gateway import AgentGateway, AgentRole
from app.services.transcript import ConversationTurn, Speaker, TranscriptStore

logger = logging.getLogger(__name__)

# Fixed prompts offered by the UI as one-click queries
QUICK_QUERIES: tuple[str, ...] = (
    "Why did my electricity bill spike?",
    "Can I afford a ₹15,000 purchase?",
    "Show fuel price trends affecting my travel budget",
    "What's my 3-month spending projection?",
    "Any market news affecting my subscriptions?",
)

ERROR_REPLY = "Sorry, I encountered an error: {message}"


class ChatOrchestrator:
    """Owns the transcript and the awaiting-reply flag."""

    def __init__(
        self,
        gateway: AgentGateway,
        ledger_text: Callable[[], str | None] = lambda: None,
    ) -> None:
        """
        Args:
            gateway: Agent gateway used for every send.
            ledger_text: Returns the currently loaded ledger content, or None.
        """
        self._gateway = gateway
        self._ledger_text = ledger_text

        self.transcript = TranscriptStore()
        self.awaiting_reply = False
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def send(self, user_text: str) -> ConversationTurn | None:
        """
        Send one user message and record the reply.

        Returns:
            The assistant turn appended, or None when the text was blank or
            the conversation was reset before the reply arrived.
        """
        text = user_text.strip()
        if not text:
            return None

        generation = self._generation
        transcript = self.transcript
        transcript.append(ConversationTurn(speaker=Speaker.USER, text=text))
        self.awaiting_reply = True

        logger.info("Chat send: message='%s'", text[:80])

        try:
            result = await self._gateway.invoke(
                AgentRole.ORCHESTRATOR,
                build_chat_message(text, self._ledger_text()),
            )
            insight = result.raise_for_outcome("Query failed")
            reply = ConversationTurn(
                speaker=Speaker.ASSISTANT,
                text=format_reply(insight),
                attached_insight=insight,
            )
        except OrchestrationError as e:
            logger.warning("Chat reply failed (%s): %s", type(e).__name__, e.message)
            reply = _error_turn(e.message)
        except Exception as e:
            logger.exception("Chat reply raised unexpectedly")
            reply = _error_turn(str(e) or "Query failed")
        finally:
            # a reset already cleared the flag for the new conversation
            if generation == self._generation:
                self.awaiting_reply = False

        if generation != self._generation:
            logger.info("Discarding chat reply from before reset")
            return None

        return transcript.append(reply)

    def reset(self) -> None:
        """Start a new, empty conversation."""
        self._generation += 1
        self.transcript = TranscriptStore()
        self.awaiting_reply = False
        logger.info("Chat reset: generation=%d", self._generation)


def _error_turn(message: str) -> ConversationTurn:
    return ConversationTurn(
        speaker=Speaker.ASSISTANT,
        text=ERROR_REPLY.format(message=message),
    )


def format_reply(insight: Any) -> str:
    """
    Render an orchestrator result as chat text.

    Uses `synthesis.explanation`, followed by a numbered recommendation
    list when `synthesis.recommendations` is non-empty.

    Raises:
        AgentLogicError: The result has no textual explanation, or its
            recommendations are not a list.
    """
    synthesis = insight.get("synthesis") if isinstance(insight, dict) else None
    if not isinstance(synthesis, dict) or not isinstance(
        synthesis.get("explanation"), str
    ):
        raise AgentLogicError("Orchestrator reply did not include an explanation")

    text = synthesis["explanation"]
    recommendations = synthesis.get("recommendations")
    if recommendations is None:
        recommendations = []
    if not isinstance(recommendations, list):
        raise AgentLogicError("Orchestrator recommendations must be a list")
    if recommendations:
        text += "\n\nRecommendations:\n"
        for i, recommendation in enumerate(recommendations, 1):
            text += f"{i}. {recommendation}\n"
    return text
