# =============================================================================
# Upload Collaborator — Ledger → Asset References
# =============================================================================
#
# Stores the ledger with the agent service so the audit agent can be given
# asset references alongside the inline CSV text.
#
#   upload(ledger) -> UploadResult {succeeded, asset_references, error_message}
#
# Like the agent gateway, the uploader never raises: every failure comes
# back as succeeded=False. The analysis orchestrator turns that into an
# UploadError and stops before the audit call.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx
import pydantic

from app.models.agents import UploadEnvelope
from app.services.gateway import HttpAgentGateway, get_agent_gateway
from app.services.ledger import CSV_MIME_TYPE, LedgerFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """Outcome of one upload."""

    succeeded: bool
    asset_references: list[str] = field(default_factory=list)
    error_message: str | None = None


class AssetUploader(Protocol):
    """Interface the analysis orchestrator depends on."""

    async def upload(self, ledger: LedgerFile) -> UploadResult:
        ...


class HttpAssetUploader:
    """
    Uploads ledgers to {agent_base_url}/upload as multipart form data.

    Reuses the agent gateway's HTTP client, base URL and auth header so
    both talk to the same service with the same credentials.
    """

    def __init__(self, gateway: HttpAgentGateway | None = None) -> None:
        self._gateway = gateway or get_agent_gateway()

    async def upload(self, ledger: LedgerFile) -> UploadResult:
        logger.info(
            "Uploading ledger: name=%s, size=%d", ledger.name, ledger.size_bytes,
        )
        files = {
            "files": (ledger.name, ledger.data, ledger.mime_hint or CSV_MIME_TYPE),
        }

        try:
            response = await self._gateway.client.post(
                f"{self._gateway.base_url}/upload",
                files=files,
                headers=self._gateway.headers,
            )
            response.raise_for_status()
            envelope = UploadEnvelope.model_validate(response.json())
        except httpx.TimeoutException:
            return self._fail("Upload timed out")
        except httpx.HTTPStatusError as e:
            return self._fail(f"Upload failed with HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            return self._fail(f"Could not reach upload service: {e}")
        except (pydantic.ValidationError, ValueError):
            return self._fail("Upload service returned an invalid response")

        if not envelope.success:
            return self._fail(envelope.error or "File upload failed")

        logger.info("Upload complete: %d asset(s)", len(envelope.asset_ids))
        return UploadResult(succeeded=True, asset_references=envelope.asset_ids)

    @staticmethod
    def _fail(message: str) -> UploadResult:
        logger.warning("Ledger upload failed: %s", message)
        return UploadResult(succeeded=False, error_message=message)
