# =============================================================================
# Analysis Orchestrator — Upload → Audit → Market-Context Enrichment
# =============================================================================
#
# STATE MACHINE:
#
#   IDLE ──run_analysis──▶ UPLOADING ──ok──▶ ANALYZING ──ok──▶ READY
#                              │                 │              │  ▲
#                              └──fail──▶ FAILED ◀──fail────────┘  │
#                                                          (detached task)
#                                              READY ▶ ENRICHING_CONTEXT ▶ READY
#
#   reset(): any state ──▶ IDLE (clears ledger, goals, snapshot, error)
#
# Steps run strictly in sequence: upload, then audit (needs the asset
# references), then enrichment (needs a completed audit). The audit agent
# is never called without a successful upload.
#
# Enrichment is best-effort. It runs as a detached asyncio task, its
# failure is logged and absorbed, and it never moves the machine to
# FAILED or touches the primary result.
#
# GENERATIONS: reset() and every new run bump `_generation`. Each
# continuation after an await captures the generation it started under and
# discards its result if that is no longer current, so a late audit or
# enrichment reply cannot resurface after a reset.
#
# Mutual exclusion between runs is the caller's job (the API returns 409
# while a run is in flight).
# =============================================================================

from __future__ import annotations

import asyncio
import dataclasses
import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from app.config import settings
from app.services.context import build_audit_message
from app.services.errors import (
    AgentCallError,
    AgentLogicError,
    EnrichmentError,
    OrchestrationError,
    UploadError,
    ValidationError,
)
from app.services.gateway import AgentGateway, AgentRole
from app.services.ledger import GoalSet, LedgerFile, validate_ledger
from app.services.uploads import AssetUploader

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------


class AnalysisState(str, enum.Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    ANALYZING = "analyzing"
    ENRICHING_CONTEXT = "enriching_context"
    READY = "ready"
    FAILED = "failed"


# States in which a run is in flight and a new one must not start
BUSY_STATES = frozenset({AnalysisState.UPLOADING, AnalysisState.ANALYZING})


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class AuditSnapshot:
    """
    Result of one successful audit.

    `result` is the audit agent's payload as returned (executive summary,
    spending breakdown, insights, recurring charges, recommendations).
    `market_context` stays None until enrichment succeeds; the snapshot is
    replaced wholesale when it does.
    """

    result: Any
    produced_at: datetime = field(default_factory=_utcnow)
    market_context: Any = None


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class AnalysisOrchestrator:
    """Owns the ledger, goals, audit snapshot and the analysis lifecycle."""

    def __init__(self, gateway: AgentGateway, uploader: AssetUploader) -> None:
        self._gateway = gateway
        self._uploader = uploader

        self.state = AnalysisState.IDLE
        self.ledger: LedgerFile | None = None
        self.goals = GoalSet()
        self.snapshot: AuditSnapshot | None = None
        self.error: str | None = None

        self._generation = 0
        self._enrichment_task: asyncio.Task | None = None

    # -----------------------------------------------------------------------
    # Intake
    # -----------------------------------------------------------------------

    def select_ledger(
        self,
        name: str,
        data: bytes,
        mime_hint: str | None = None,
    ) -> LedgerFile:
        """
        Validate and adopt a newly selected ledger, replacing any previous one.

        On rejection the previous ledger and the state are left untouched and
        `error` holds the message.

        Raises:
            ValidationError: Not a CSV, or larger than the configured limit.
        """
        try:
            ledger = validate_ledger(name, data, mime_hint)
        except ValidationError as e:
            self.error = e.message
            raise

        self.ledger = ledger
        self.error = None
        logger.info("Ledger selected: name=%s, size=%d", name, ledger.size_bytes)
        return ledger

    def add_goal(self, goal: str) -> bool:
        return self.goals.add(goal)

    def remove_goal(self, goal: str) -> bool:
        return self.goals.remove(goal)

    # -----------------------------------------------------------------------
    # Properties
    # -----------------------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_busy(self) -> bool:
        return self.state in BUSY_STATES

    @property
    def has_result(self) -> bool:
        """True once the primary audit is usable, enrichment or not."""
        return self.state in (AnalysisState.READY, AnalysisState.ENRICHING_CONTEXT)

    @property
    def enrichment_task(self) -> asyncio.Task | None:
        return self._enrichment_task

    # -----------------------------------------------------------------------
    # Workflow
    # -----------------------------------------------------------------------

    async def run_analysis(
        self,
        ledger: LedgerFile | None = None,
        goals: Iterable[str] | None = None,
    ) -> AnalysisState:
        """
        Upload the ledger, run the primary audit, then kick off enrichment.

        Args:
            ledger: Ledger to analyse. Defaults to the selected one.
            goals: Goals to include. Defaults to the current goal set.

        Returns:
            The state the run settled in (READY, FAILED, or the unchanged
            state when there was nothing to analyse / the run went stale).
        """
        ledger = ledger or self.ledger
        goal_list = list(goals) if goals is not None else self.goals.as_list()

        if ledger is None:
            self.error = ValidationError("Please upload a CSV file first").message
            return self.state

        self._generation += 1
        generation = self._generation
        self.error = None
        self.state = AnalysisState.UPLOADING

        logger.info(
            "Analysis started: ledger=%s, goals=%d, generation=%d",
            ledger.name, len(goal_list), generation,
        )

        try:
            upload = await self._uploader.upload(ledger)
            if self._is_stale(generation):
                return self.state
            if not upload.succeeded:
                raise UploadError(upload.error_message)

            self.state = AnalysisState.ANALYZING
            result = await self._gateway.invoke(
                AgentRole.PRIMARY_AUDIT,
                build_audit_message(ledger.text, goal_list),
                attachments=upload.asset_references,
            )
            if self._is_stale(generation):
                return self.state
            audit = result.raise_for_outcome("Analysis failed")

        except OrchestrationError as e:
            self.state = AnalysisState.FAILED
            self.error = e.message
            logger.warning(
                "Analysis failed (%s): %s", type(e).__name__, e.message,
            )
            return self.state
        except Exception:
            logger.exception("Analysis raised unexpectedly: generation=%d", generation)
            if self._is_stale(generation):
                return self.state
            self.state = AnalysisState.FAILED
            self.error = "Analysis failed"
            return self.state

        self.snapshot = AuditSnapshot(result=audit)
        self.state = AnalysisState.READY
        logger.info("Analysis ready: generation=%d", generation)

        self._enrichment_task = asyncio.create_task(
            self._enrich(generation, self.snapshot)
        )
        return self.state

    async def wait_for_enrichment(self) -> None:
        """Await the pending enrichment task, if any."""
        if self._enrichment_task is not None:
            await self._enrichment_task

    def reset(self) -> None:
        """Back to IDLE from any state. In-flight work becomes stale."""
        self._generation += 1
        self.state = AnalysisState.IDLE
        self.ledger = None
        self.goals.clear()
        self.snapshot = None
        self.error = None
        logger.info("Analysis reset: generation=%d", self._generation)

    # -----------------------------------------------------------------------
    # Internal Helpers
    # -----------------------------------------------------------------------

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info(
                "Discarding stale analysis step: generation=%d, current=%d",
                generation, self._generation,
            )
            return True
        return False

    async def _enrich(self, generation: int, snapshot: AuditSnapshot) -> None:
        """Fetch market news for the fresh snapshot. Never raises."""
        if self._is_stale(generation):
            return
        self.state = AnalysisState.ENRICHING_CONTEXT

        try:
            try:
                result = await self._gateway.invoke(
                    AgentRole.NEWS_CONTEXT, settings.market_context_query,
                )
                if self._is_stale(generation):
                    return
                market_context = result.raise_for_outcome()
            except (AgentCallError, AgentLogicError) as e:
                raise EnrichmentError(e.message) from e
            except Exception as e:
                # absorb anything a non-conforming gateway raises
                raise EnrichmentError(str(e) or type(e).__name__) from e
        except EnrichmentError as e:
            logger.warning("Failed to fetch market context: %s", e.message)
            self.state = AnalysisState.READY
            return

        self.snapshot = dataclasses.replace(snapshot, market_context=market_context)
        self.state = AnalysisState.READY
        logger.info("Market context attached: generation=%d", generation)
