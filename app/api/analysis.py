# =============================================================================
# Analysis API — Ledger, Goals, Audit, Export, Reset
# =============================================================================
#
# ENDPOINTS:
#   PUT    /ledger            — select a ledger (multipart CSV upload)
#   GET    /ledger            — currently selected ledger
#   GET    /goals             — goal list
#   POST   /goals             — add a goal
#   DELETE /goals/{goal}      — remove a goal (may contain "/")
#   POST   /analysis          — upload → audit; enrichment continues in background
#   GET    /analysis          — current analysis state and snapshot
#   GET    /analysis/export   — download the audit result as JSON
#   DELETE /session           — reset ledger, goals, audit and chat
#
# Handlers stay thin: validation and lifecycle live in the orchestrators.
# =============================================================================

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from app.agents.analysis import AnalysisOrchestrator
from app.agents.session import Session, get_session
from app.models.requests import GoalRequest
from app.models.responses import AnalysisResponse, GoalsResponse, LedgerResponse
from app.services.errors import ValidationError
from app.services.export import export_report

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------


@router.put(
    "/ledger",
    response_model=LedgerResponse,
    summary="Select the ledger to analyse",
)
async def select_ledger_endpoint(
    file: UploadFile = File(..., description="Transaction ledger (.csv, max 10 MiB)"),
    session: Session = Depends(get_session),
) -> LedgerResponse:
    """Validate and adopt a CSV ledger. Nothing is sent to the agents yet."""
    data = await file.read()
    try:
        session.analysis.select_ledger(
            file.filename or "", data, file.content_type,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message) from e

    return _ledger_response(session.analysis)


@router.get("/ledger", response_model=LedgerResponse | None)
async def get_ledger_endpoint(
    session: Session = Depends(get_session),
) -> LedgerResponse | None:
    return _ledger_response(session.analysis)


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------


@router.get("/goals", response_model=GoalsResponse)
async def list_goals_endpoint(
    session: Session = Depends(get_session),
) -> GoalsResponse:
    return GoalsResponse(goals=session.analysis.goals.as_list())


@router.post("/goals", response_model=GoalsResponse)
async def add_goal_endpoint(
    request: GoalRequest,
    session: Session = Depends(get_session),
) -> GoalsResponse:
    session.analysis.add_goal(request.goal)
    return GoalsResponse(goals=session.analysis.goals.as_list())


@router.delete("/goals/{goal:path}", response_model=GoalsResponse)
async def remove_goal_endpoint(
    goal: str,
    session: Session = Depends(get_session),
) -> GoalsResponse:
    session.analysis.remove_goal(goal)
    return GoalsResponse(goals=session.analysis.goals.as_list())


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


@router.post(
    "/analysis",
    response_model=AnalysisResponse,
    summary="Run the financial audit on the selected ledger",
    description=(
        "Uploads the ledger, calls the audit agent and returns once the "
        "audit settles. Market-context enrichment continues in the "
        "background; poll GET /analysis to pick it up."
    ),
)
async def run_analysis_endpoint(
    session: Session = Depends(get_session),
) -> AnalysisResponse:
    analysis = session.analysis
    if analysis.is_busy:
        raise HTTPException(status_code=409, detail="An analysis is already running")
    if analysis.ledger is None:
        raise HTTPException(status_code=400, detail="Please upload a CSV file first")

    await analysis.run_analysis()
    return _analysis_response(analysis)


@router.get("/analysis", response_model=AnalysisResponse)
async def get_analysis_endpoint(
    session: Session = Depends(get_session),
) -> AnalysisResponse:
    return _analysis_response(session.analysis)


@router.get(
    "/analysis/export",
    summary="Download the audit result as JSON",
    responses={404: {"description": "No audit result to export"}},
)
async def export_analysis_endpoint(
    session: Session = Depends(get_session),
) -> Response:
    snapshot = session.analysis.snapshot
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No analysis to export")

    report = export_report(snapshot)
    return Response(
        content=report.content,
        media_type=report.media_type,
        headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
    )


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@router.delete("/session", status_code=204, summary="Clear all session data")
async def reset_session_endpoint(
    session: Session = Depends(get_session),
) -> Response:
    session.reset()
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Response Mapping
# ---------------------------------------------------------------------------


def _ledger_response(analysis: AnalysisOrchestrator) -> LedgerResponse | None:
    ledger = analysis.ledger
    if ledger is None:
        return None
    return LedgerResponse(
        name=ledger.name, size_bytes=ledger.size_bytes, mime_hint=ledger.mime_hint,
    )


def _analysis_response(analysis: AnalysisOrchestrator) -> AnalysisResponse:
    snapshot = analysis.snapshot
    return AnalysisResponse(
        state=analysis.state.value,
        error=analysis.error,
        ledger=_ledger_response(analysis),
        goals=analysis.goals.as_list(),
        result=snapshot.result if snapshot else None,
        market_context=snapshot.market_context if snapshot else None,
        produced_at=snapshot.produced_at if snapshot else None,
    )
