# =============================================================================
# Report Export — Audit Snapshot → Downloadable JSON
# =============================================================================
#
# Serialises the current audit result verbatim as 2-space indented JSON.
# The filename embeds an ISO-8601 UTC timestamp, e.g.
#   financial-report-2026-10-19T12:34:56.789Z.json
# =============================================================================

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime

from app.agents.analysis import AuditSnapshot
from app.config import settings


@dataclass(frozen=True)
class ExportedReport:
    filename: str
    content: str
    media_type: str = "application/json"


def export_filename(now: datetime | None = None, prefix: str | None = None) -> str:
    """
    Timestamped export filename (UTC, millisecond precision, Z suffix).

    Raises:
        ValueError: `now` is naive; its zone would be guessed as local time.
    """
    if now is not None and now.utcoffset() is None:
        raise ValueError("export timestamp must be timezone-aware")
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    stamp = moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"{prefix or settings.export_filename_prefix}-{stamp}.json"


def export_report(
    snapshot: AuditSnapshot,
    now: datetime | None = None,
) -> ExportedReport:
    """Render the snapshot's audit result for download."""
    content = json.dumps(snapshot.result, indent=2, ensure_ascii=False)
    return ExportedReport(filename=export_filename(now), content=content)
