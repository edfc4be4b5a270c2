# =============================================================================
# Remote Agent Wire Schemas — Pydantic V2
# =============================================================================
#
# Shapes exchanged with the remote agent service. Only the outer envelope
# is typed; `result` stays a generic JSON value because each agent returns
# its own structure (audit report, news digest, calculation steps,
# synthesis) and deep fields are a presentation concern.
#
#   AgentCallRequest   → POST {agent_base_url}/agent
#   AgentCallEnvelope  ← {success, response?: {status, result}, error?}
#   UploadEnvelope     ← {success, asset_ids[], error?}
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AgentCallRequest(BaseModel):
    """Request body for a single agent invocation."""

    message: str = Field(min_length=1)
    agent_id: str
    assets: list[str] | None = None


class AgentResponseBody(BaseModel):
    """Inner `response` object. Extra keys are kept and passed through."""

    status: str
    result: Any = None

    model_config = ConfigDict(extra="allow")


class AgentCallEnvelope(BaseModel):
    """Outer envelope returned by the agent service for every call."""

    success: bool
    response: AgentResponseBody | None = None
    error: str | None = None

    model_config = ConfigDict(extra="ignore")


class UploadEnvelope(BaseModel):
    """Response of the upload endpoint."""

    success: bool
    asset_ids: list[str] = Field(default_factory=list)
    error: str | None = None

    model_config = ConfigDict(extra="ignore")
