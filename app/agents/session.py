# =============================================================================
# Session — Composition Root
# =============================================================================
#
# Wires one AnalysisOrchestrator and one ChatOrchestrator to a shared agent
# gateway and uploader. The chat reads the ledger through the analysis
# orchestrator, so a freshly selected ledger is chat context immediately,
# whether or not an audit has run.
#
# One Session per process; all state is in memory and gone on restart.
# =============================================================================

from __future__ import annotations

import logging

from app.agents.analysis import AnalysisOrchestrator
from app.agents.chat import ChatOrchestrator
from app.services.gateway import AgentGateway, get_agent_gateway
from app.services.uploads import AssetUploader, HttpAssetUploader

logger = logging.getLogger(__name__)


class Session:
    """The user's working set: ledger, goals, audit and conversation."""

    def __init__(
        self,
        gateway: AgentGateway | None = None,
        uploader: AssetUploader | None = None,
    ) -> None:
        self.gateway = gateway or get_agent_gateway()
        self.uploader = uploader or HttpAssetUploader()
        self.analysis = AnalysisOrchestrator(self.gateway, self.uploader)
        self.chat = ChatOrchestrator(self.gateway, ledger_text=self._ledger_text)

    def _ledger_text(self) -> str | None:
        ledger = self.analysis.ledger
        return ledger.text if ledger is not None else None

    def reset(self) -> None:
        """Clear ledger, goals, audit and transcript. In-flight replies are dropped."""
        self.analysis.reset()
        self.chat.reset()
        logger.info("Session reset")


_session: Session | None = None


def get_session() -> Session:
    """FastAPI dependency returning the process-wide session."""
    global _session
    if _session is None:
        _session = Session()
    return _session
