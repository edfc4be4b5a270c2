# =============================================================================
# Chat API — Conversation with the Master Orchestrator Agent
# =============================================================================
#
# ENDPOINTS:
#   POST /chat              — send a message, returns the updated transcript
#   GET  /chat              — current transcript
#   GET  /chat/suggestions  — fixed one-click queries
#
# A failed agent call is NOT an HTTP error: it shows up as an apologetic
# assistant turn in a 200 response.
# =============================================================================

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.agents.chat import QUICK_QUERIES, ChatOrchestrator
from app.agents.session import Session, get_session
from app.models.requests import ChatRequest
from app.models.responses import ChatResponse, SuggestionsResponse, TurnResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Ask the orchestrator agent a question",
    description=(
        "Appends the message to the transcript, consults the orchestrator "
        "agent (with the selected ledger as context when present) and "
        "appends its reply."
    ),
)
async def send_message_endpoint(
    request: ChatRequest,
    session: Session = Depends(get_session),
) -> ChatResponse:
    if session.chat.awaiting_reply:
        raise HTTPException(status_code=409, detail="Still waiting for the previous reply")

    await session.chat.send(request.message)
    return _chat_response(session.chat)


@router.get("/chat", response_model=ChatResponse)
async def get_transcript_endpoint(
    session: Session = Depends(get_session),
) -> ChatResponse:
    return _chat_response(session.chat)


@router.get("/chat/suggestions", response_model=SuggestionsResponse)
async def suggestions_endpoint() -> SuggestionsResponse:
    return SuggestionsResponse(queries=list(QUICK_QUERIES))


def _chat_response(chat: ChatOrchestrator) -> ChatResponse:
    return ChatResponse(
        awaiting_reply=chat.awaiting_reply,
        turns=[
            TurnResponse(
                speaker=turn.speaker.value,
                text=turn.text,
                produced_at=turn.produced_at,
                attached_insight=turn.attached_insight,
            )
            for turn in chat.transcript
        ],
    )
