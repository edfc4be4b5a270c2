# =============================================================================
# Context Builder — Agent Payload Assembly
# =============================================================================
#
# Pure functions: identical inputs always give byte-identical output.
#
# Rules, in order:
#   1. Ledger present → wrap in a literal frame embedding the FULL ledger
#      content verbatim (no truncation, no summarisation).
#   2. Goals present → append a comma-joined goal suffix, insertion order.
#   3. Otherwise → the user text unchanged.
#
# Two frames are in use:
#   CHAT_FRAME  — chat queries with the ledger as background
#   AUDIT_FRAME — the primary audit, which has no user query of its own
# =============================================================================

from __future__ import annotations

from collections.abc import Iterable

CHAT_FRAME = "Based on my transaction history:\n{ledger}\n\nQuery: {query}"
AUDIT_FRAME = "Analyze this CSV data:\n{ledger}"
GOALS_SUFFIX = "\n\nUser's financial goals: {goals}"


def build_context(
    user_text: str,
    ledger_content: str | None = None,
    goals: Iterable[str] | None = None,
    frame: str = CHAT_FRAME,
) -> str:
    """
    Produce the exact string sent to an agent.

    Args:
        user_text: What the user typed (may be empty for the audit).
        ledger_content: Raw CSV text, or None when no ledger is loaded.
            An empty string still counts as a loaded ledger.
        goals: Ordered goals to enumerate (audit flow only).
        frame: Template with `{ledger}` and optionally `{query}` fields.

    Returns:
        The payload string.
    """
    message = user_text
    if ledger_content is not None:
        # Substituted values are never re-parsed, so braces in the CSV are safe
        message = frame.format(ledger=ledger_content, query=user_text)

    goal_list = list(goals) if goals else []
    if goal_list:
        message += GOALS_SUFFIX.format(goals=", ".join(goal_list))

    return message


def build_audit_message(
    ledger_content: str,
    goals: Iterable[str] | None = None,
) -> str:
    """Payload for the primary financial-audit agent."""
    return build_context("", ledger_content, goals, frame=AUDIT_FRAME)


def build_chat_message(user_text: str, ledger_content: str | None = None) -> str:
    """Payload for the master orchestrator agent."""
    return build_context(user_text, ledger_content, frame=CHAT_FRAME)
