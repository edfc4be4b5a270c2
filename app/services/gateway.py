# =============================================================================
# Agent Gateway — Uniform Access to the Four Remote Agents
# =============================================================================
#
# One call contract for every remote agent role:
#
#   invoke(role, message, attachments) -> AgentResult
#
# The gateway NEVER raises. Transport errors, timeouts, HTTP error codes,
# unparsable bodies and malformed envelopes are all folded into
# AgentResult(succeeded=False, error_message=...). Orchestrators only ever
# branch on the envelope.
#
# One outbound request per call: no retries, no caching, no coalescing.
#
# ARCHITECTURE:
#   AgentRole (Enum)          — closed set of four roles
#   AgentResult (dataclass)   — normalised outcome envelope
#   AgentGateway (Protocol)   — what the orchestrators depend on
#   HttpAgentGateway          — httpx implementation against the agent service
#   get_agent_gateway()       — lazy singleton, reads from config
# =============================================================================

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import pydantic

from app.config import settings
from app.models.agents import AgentCallEnvelope, AgentCallRequest
from app.services.errors import AgentCallError, AgentLogicError

logger = logging.getLogger(__name__)

SUCCESS_STATUS = "success"


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------


class AgentRole(str, enum.Enum):
    """The four remote agents this client talks to."""

    PRIMARY_AUDIT = "primary_audit"
    ORCHESTRATOR = "orchestrator"
    NEWS_CONTEXT = "news_context"
    ACTUARY = "actuary"

    @property
    def agent_id(self) -> str:
        """Remote identifier configured for this role."""
        return {
            AgentRole.PRIMARY_AUDIT: settings.audit_agent_id,
            AgentRole.ORCHESTRATOR: settings.orchestrator_agent_id,
            AgentRole.NEWS_CONTEXT: settings.news_agent_id,
            AgentRole.ACTUARY: settings.actuary_agent_id,
        }[self]


@dataclass(frozen=True)
class AgentResult:
    """
    Normalised outcome of one agent call.

    `payload` is the remote `response` object ({"status", "result", ...})
    when the call went through, otherwise None and `error_message` says why.
    """

    succeeded: bool
    payload: dict[str, Any] | None = None
    error_message: str | None = None

    @property
    def status(self) -> str | None:
        if not self.payload:
            return None
        return self.payload.get("status")

    @property
    def result(self) -> Any:
        if not self.payload:
            return None
        return self.payload.get("result")

    @classmethod
    def failure(cls, message: str) -> AgentResult:
        return cls(succeeded=False, payload=None, error_message=message)

    def raise_for_outcome(self, default_message: str | None = None) -> Any:
        """
        Return the inner `result`, or raise the matching taxonomy error.

        Raises:
            AgentCallError: The call itself failed.
            AgentLogicError: The call succeeded but status != "success".
        """
        if not self.succeeded:
            raise AgentCallError(self.error_message or default_message)
        if self.status != SUCCESS_STATUS:
            raise AgentLogicError(self.error_message or default_message)
        return self.result


# ---------------------------------------------------------------------------
# Protocol Definition
# ---------------------------------------------------------------------------


class AgentGateway(Protocol):
    """Interface the orchestrators depend on. Fakes implement it in tests."""

    async def invoke(
        self,
        role: AgentRole,
        message: str,
        attachments: list[str] | None = None,
    ) -> AgentResult:
        """
        Invoke one remote agent.

        Args:
            role: Which of the four agents to call.
            message: Non-empty text payload (see app.services.context).
            attachments: Optional asset references from a prior upload.

        Returns:
            AgentResult — never raises.
        """
        ...


# ---------------------------------------------------------------------------
# HTTP Implementation
# ---------------------------------------------------------------------------


class HttpAgentGateway:
    """
    Agent gateway backed by the remote agent service's HTTP API.

    Accepts an injected httpx.AsyncClient so tests can plug in an
    httpx.MockTransport.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.agent_base_url).rstrip("/")
        self._timeout = timeout or settings.agent_timeout_seconds
        resolved_key = api_key if api_key is not None else settings.agent_api_key

        headers = {}
        if resolved_key:
            headers["Authorization"] = f"Bearer {resolved_key}"
        self._headers = headers

        self._client = http_client or httpx.AsyncClient(timeout=self._timeout)
        self._owns_client = http_client is None

        logger.info("Initialized HttpAgentGateway (base_url=%s)", self._base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    async def invoke(
        self,
        role: AgentRole,
        message: str,
        attachments: list[str] | None = None,
    ) -> AgentResult:
        """Invoke one agent and normalise whatever comes back."""
        if not isinstance(role, AgentRole):
            return AgentResult.failure(f"Unknown agent role: {role!r}")
        if not message or not message.strip():
            return AgentResult.failure("Message must not be empty")

        request = AgentCallRequest(
            message=message,
            agent_id=role.agent_id,
            assets=list(attachments) if attachments else None,
        )

        logger.info(
            "Invoking agent: role=%s, message='%s', attachments=%d",
            role.value, message[:80], len(attachments or []),
        )

        try:
            response = await self._client.post(
                f"{self._base_url}/agent",
                json=request.model_dump(exclude_none=True),
                headers=self._headers,
            )
            response.raise_for_status()
            envelope = AgentCallEnvelope.model_validate(response.json())
        except httpx.TimeoutException:
            return self._fail(role, f"Agent request timed out after {self._timeout:g}s")
        except httpx.HTTPStatusError as e:
            return self._fail(
                role, f"Agent service returned HTTP {e.response.status_code}"
            )
        except httpx.HTTPError as e:
            return self._fail(role, f"Could not reach agent service: {e}")
        except pydantic.ValidationError:
            return self._fail(role, "Agent service returned a malformed response")
        except ValueError:
            return self._fail(role, "Agent service returned an invalid response")

        if not envelope.success:
            return self._fail(role, envelope.error or "Agent call failed")
        if envelope.response is None:
            return self._fail(role, "Agent service returned an empty response")

        logger.info(
            "Agent call complete: role=%s, status=%s",
            role.value, envelope.response.status,
        )
        return AgentResult(
            succeeded=True,
            payload=envelope.response.model_dump(),
            error_message=envelope.error,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def _fail(role: AgentRole, message: str) -> AgentResult:
        logger.warning("Agent call failed: role=%s, error=%s", role.value, message)
        return AgentResult.failure(message)


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

_gateway: HttpAgentGateway | None = None


def get_agent_gateway() -> HttpAgentGateway:
    """Return the process-wide gateway, creating it on first use."""
    global _gateway
    if _gateway is None:
        _gateway = HttpAgentGateway()
    return _gateway
