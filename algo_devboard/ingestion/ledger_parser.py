"""
Commit Ledger Parser — CSV text to CommitRecord rows.

The ledger feed is a plain comma-separated file with a header row:

    date,developer,repository,commits
    2024-03-01,alice,algorand/go-algorand,5

Columns are read positionally and the header is always discarded without
inspection. Malformed rows are skipped, never defaulted, so a partial parse
never surfaces as an error to the dashboard.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

LEDGER_COLUMNS = ("date", "developer", "repository", "commits")


class NoValidDatesError(ValueError):
    """Raised when a ledger holds no parseable date to anchor time windows."""


@dataclass(frozen=True)
class CommitRecord:
    """One ledger row: commits by a developer to a repository on a day."""

    date: date
    developer: str
    repository: str
    commit_count: int


def _parse_date(value: str) -> Optional[date]:
    """Parse the calendar-date part of an ISO 8601 string.

    Accepts plain dates ("2024-03-01") and timestamps ("2024-03-01T12:00:00Z");
    only the first ten characters are considered.

    Examples:
        >>> _parse_date("2024-03-01")
        datetime.date(2024, 3, 1)
        >>> _parse_date("not-a-date") is None
        True
    """
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


_LEADING_INT = re.compile(r"[+-]?\d+")


def _parse_commit_count(value: str) -> int:
    """Leading base-10 digits ("5.0" -> 5, "12abc" -> 12); otherwise 0.

    Negative counts are clamped to 0.
    """
    match = _LEADING_INT.match(value.strip())
    if match is None:
        return 0
    return max(int(match.group()), 0)


def parse_ledger_csv(text: str) -> list[CommitRecord]:
    """Parse raw ledger CSV text into CommitRecord rows.

    Args:
        text: Full CSV body, header line first.

    Returns:
        CommitRecords in input order (not sorted by date). Rows missing a
        date, developer or repository, or carrying an unparsable date, are
        dropped.
    """
    if not text:
        return []

    records: list[CommitRecord] = []
    skipped = 0

    # First line is the header, whatever it says.
    for line in text.split("\n")[1:]:
        values = line.split(",")
        fields = [v.strip() for v in values[:4]]
        fields += [""] * (4 - len(fields))
        raw_date, developer, repository, raw_commits = fields

        if not raw_date or not developer or not repository:
            if line.strip():
                skipped += 1
            continue

        parsed_date = _parse_date(raw_date)
        if parsed_date is None:
            skipped += 1
            continue

        records.append(
            CommitRecord(
                date=parsed_date,
                developer=developer,
                repository=repository,
                commit_count=_parse_commit_count(raw_commits or "0"),
            )
        )

    if skipped:
        logger.debug("Ledger parse: skipped %d malformed rows.", skipped)
    logger.debug("Ledger parse: %d commit records.", len(records))
    return records


def get_max_date(records: Iterable[CommitRecord]) -> Optional[date]:
    """Most recent date in the ledger, or None when it has no records."""
    return max((r.date for r in records), default=None)


def require_max_date(records: Iterable[CommitRecord]) -> date:
    """Like get_max_date(), but a missing reference date is an error.

    Raises:
        NoValidDatesError: If no record carries a date.
    """
    max_date = get_max_date(records)
    if max_date is None:
        raise NoValidDatesError("No valid dates found in data")
    return max_date
