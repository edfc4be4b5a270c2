# =============================================================================
# Ledger Intake — Uploaded Ledger File and Goal Set
# =============================================================================
#
# LedgerFile: the raw CSV the user selected or dropped. Validated before
# anything touches the network:
#   - delimited text: MIME hint "text/csv" OR a name ending in ".csv"
#   - size <= settings.max_ledger_bytes (10 MiB by default, inclusive)
#
# GoalSet: ordered set of free-text goals, unique on exact (case-sensitive)
# match, insertion order preserved.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from app.config import settings
from app.services.errors import ValidationError

logger = logging.getLogger(__name__)

CSV_MIME_TYPE = "text/csv"
CSV_SUFFIX = ".csv"


# ---------------------------------------------------------------------------
# LedgerFile
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LedgerFile:
    """An uploaded ledger: raw bytes plus the metadata the browser reported."""

    name: str
    data: bytes
    mime_hint: str | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def text(self) -> str:
        """Ledger content as text, passed verbatim to the agents."""
        return self.data.decode("utf-8", errors="replace")


def validate_ledger(
    name: str,
    data: bytes,
    mime_hint: str | None = None,
    max_bytes: int | None = None,
) -> LedgerFile:
    """
    Build a LedgerFile, rejecting anything that is not a small CSV.

    Raises:
        ValidationError: Wrong content type or file too large.
    """
    limit = max_bytes if max_bytes is not None else settings.max_ledger_bytes

    is_csv = mime_hint == CSV_MIME_TYPE or (name or "").endswith(CSV_SUFFIX)
    if not is_csv:
        logger.info("Rejected ledger '%s': not a CSV (mime=%s)", name, mime_hint)
        raise ValidationError("Please upload a CSV file")

    if len(data) > limit:
        logger.info(
            "Rejected ledger '%s': %d bytes exceeds %d", name, len(data), limit,
        )
        raise ValidationError(
            f"File size must be less than {limit // (1024 * 1024)}MB"
        )

    return LedgerFile(name=name, data=data, mime_hint=mime_hint)


# ---------------------------------------------------------------------------
# GoalSet
# ---------------------------------------------------------------------------


class GoalSet:
    """
    Ordered, exact-match-unique collection of goal strings.

    Goals are trimmed on the way in; blank goals are ignored. No
    normalisation beyond that: "Save more" and "save more" are distinct.
    """

    def __init__(self, goals: Iterable[str] = ()) -> None:
        self._goals: list[str] = []
        for goal in goals:
            self.add(goal)

    def add(self, goal: str) -> bool:
        """Add a goal. Returns False when blank or already present."""
        goal = goal.strip()
        if not goal or goal in self._goals:
            return False
        self._goals.append(goal)
        return True

    def remove(self, goal: str) -> bool:
        """Remove a goal by exact match after trimming. Returns False when absent."""
        goal = goal.strip()
        if goal not in self._goals:
            return False
        self._goals.remove(goal)
        return True

    def clear(self) -> None:
        self._goals.clear()

    def as_list(self) -> list[str]:
        return list(self._goals)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._goals))

    def __len__(self) -> int:
        return len(self._goals)

    def __contains__(self, goal: object) -> bool:
        return goal in self._goals

    def __repr__(self) -> str:
        return f"GoalSet({self._goals!r})"
