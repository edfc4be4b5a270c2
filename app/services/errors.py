# =============================================================================
# Error Taxonomy — Orchestration Failures
# =============================================================================
#
#   OrchestrationError
#   ├── ValidationError   — bad ledger type/size, missing ledger (pre-network)
#   ├── UploadError       — upload collaborator failed
#   ├── AgentCallError    — transport / remote-side failure of an agent call
#   ├── AgentLogicError   — call succeeded but status != "success"
#   └── EnrichmentError   — market-context enrichment failed (never surfaced)
#
# Every error carries a human-readable message that is safe to show the
# user verbatim. None of them is fatal to the process: the orchestrators
# catch them at their workflow boundary and turn them into state.
# =============================================================================

from __future__ import annotations


class OrchestrationError(Exception):
    """Base class for all failures handled by the orchestrators."""

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(OrchestrationError):
    """Ledger rejected before any network call was made."""

    default_message = "Please upload a CSV file"


class UploadError(OrchestrationError):
    """The upload collaborator could not store the ledger."""

    default_message = "File upload failed"


class AgentCallError(OrchestrationError):
    """The remote agent could not be reached or reported a failure."""

    default_message = "Agent call failed"


class AgentLogicError(OrchestrationError):
    """The call went through but the agent did not report success."""

    default_message = "Agent did not return a successful result"


class EnrichmentError(OrchestrationError):
    """Best-effort market-context enrichment failed."""

    default_message = "Market context unavailable"
