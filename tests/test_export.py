# =============================================================================
# Unit Tests — Report Export
# =============================================================================

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta, timezone

import pytest

from app.agents.analysis import AuditSnapshot
from app.services.export import export_filename, export_report


class TestExport:

    def test_filename_embeds_iso_timestamp(self):
        moment = datetime(2026, 10, 19, 12, 34, 56, 789000, tzinfo=UTC)
        assert export_filename(moment) == "financial-report-2026-10-19T12:34:56.789Z.json"

    def test_filename_normalised_to_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        moment = datetime(2026, 10, 19, 18, 0, 0, tzinfo=ist)
        assert export_filename(moment) == "financial-report-2026-10-19T12:30:00.000Z.json"

    def test_naive_timestamp_is_rejected(self):
        with pytest.raises(ValueError):
            export_filename(datetime(2026, 10, 19, 12, 0, 0))

    def test_content_is_indented_audit_result(self):
        result = {"executive_summary": {"total_spending": 4899.0}, "recommendations": ["₹ save"]}
        snapshot = AuditSnapshot(result=result, market_context={"news_found": False})

        report = export_report(snapshot)

        assert json.loads(report.content) == result
        assert report.content.startswith('{\n  "executive_summary"')
        assert "₹ save" in report.content
        assert report.media_type == "application/json"
