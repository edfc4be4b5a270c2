# =============================================================================
# Shared Test Fakes — Agent Gateway and Uploader
# =============================================================================
#
# In-memory stand-ins recording every call in order, so tests can assert
# call sequencing (upload before audit before enrichment) without HTTP.
# =============================================================================

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest

from app.services.gateway import AgentResult, AgentRole
from app.services.ledger import LedgerFile
from app.services.uploads import UploadResult

SAMPLE_CSV = (
    "date,merchant,amount\n"
    "2026-09-01,Electricity Board,2450.00\n"
    "2026-09-03,StreamFlix,649.00\n"
    "2026-09-05,Fuel Station,1800.00\n"
)


def ok(result: Any) -> AgentResult:
    """A successful agent call carrying `result`."""
    return AgentResult(succeeded=True, payload={"status": "success", "result": result})


def orchestrator_reply(explanation: str, recommendations: list[str] | None = None) -> dict:
    return {
        "query_analysis": {
            "user_question": "q",
            "query_type": "general",
            "agents_consulted": ["News Sentinel", "Actuary"],
        },
        "insights": {},
        "synthesis": {
            "explanation": explanation,
            "recommendations": recommendations or [],
            "confidence": "high",
        },
    }


@dataclass
class FakeGateway:
    """
    Records calls; replies from `responses[role]` (an AgentResult or a list
    consumed in order). A role in `gates` waits for its Event before replying.
    """

    responses: dict[AgentRole, Any] = field(default_factory=dict)
    gates: dict[AgentRole, asyncio.Event] = field(default_factory=dict)
    calls: list[tuple[AgentRole, str, list[str] | None]] = field(default_factory=list)
    log: list[str] | None = None

    async def invoke(
        self,
        role: AgentRole,
        message: str,
        attachments: list[str] | None = None,
    ) -> AgentResult:
        self.calls.append((role, message, attachments))
        if self.log is not None:
            self.log.append(role.value)
        reply = self.responses.get(role, AgentResult.failure("no fake response"))
        if isinstance(reply, list):
            reply = reply.pop(0)
        if role in self.gates:
            await self.gates[role].wait()
        return reply

    def roles_called(self) -> list[AgentRole]:
        return [call[0] for call in self.calls]


@dataclass
class FakeUploader:
    """Records uploads; returns `result`."""

    result: UploadResult = field(
        default_factory=lambda: UploadResult(succeeded=True, asset_references=["asset-1"])
    )
    uploads: list[LedgerFile] = field(default_factory=list)
    log: list[str] | None = None

    async def upload(self, ledger: LedgerFile) -> UploadResult:
        self.uploads.append(ledger)
        if self.log is not None:
            self.log.append("upload")
        return self.result


@pytest.fixture()
def call_log() -> list[str]:
    return []


@pytest.fixture()
def gateway(call_log) -> FakeGateway:
    return FakeGateway(log=call_log)


@pytest.fixture()
def uploader(call_log) -> FakeUploader:
    return FakeUploader(log=call_log)


@pytest.fixture()
def ledger() -> LedgerFile:
    return LedgerFile(name="ledger.csv", data=SAMPLE_CSV.encode(), mime_hint="text/csv")
