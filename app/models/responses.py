# =============================================================================
# API Response Models — Pydantic V2 Schemas
# =============================================================================
#
# Shapes returned to the presentation layer. Agent payloads (audit result,
# market context, attached insight) are passed through as generic JSON;
# rendering them is the client's concern.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health — confirms the API is running."""

    status: str = "ok"
    version: str
    service: str


class LedgerResponse(BaseModel):
    """Metadata of the currently selected ledger."""

    name: str
    size_bytes: int
    mime_hint: str | None = None


class GoalsResponse(BaseModel):
    """Current goal list, in insertion order."""

    goals: list[str] = Field(default_factory=list)


class AnalysisResponse(BaseModel):
    """
    Response for GET/POST /analysis — the analysis lifecycle as rendered.

    `result` and `market_context` are only present once an audit completed;
    `market_context` stays null until enrichment succeeds.
    """

    state: str = Field(description="idle, uploading, analyzing, enriching_context, ready, failed")
    error: str | None = None
    ledger: LedgerResponse | None = None
    goals: list[str] = Field(default_factory=list)
    result: Any = None
    market_context: Any = None
    produced_at: datetime | None = None


class TurnResponse(BaseModel):
    """One conversation turn."""

    speaker: str
    text: str
    produced_at: datetime
    attached_insight: Any = None


class ChatResponse(BaseModel):
    """Response for GET/POST /chat — the whole transcript."""

    awaiting_reply: bool = False
    turns: list[TurnResponse] = Field(default_factory=list)


class SuggestionsResponse(BaseModel):
    """Fixed one-click queries."""

    queries: list[str]
