"""
algo_devboard/metrics/ranking.py — Ranking / Sort Service.

Two concerns:

1. Table ordering. The developer/repository table can be re-sorted by
   developer, repository or commits. Selecting the current key again flips
   the direction; selecting a new key starts descending.

2. Stable ranks. A developer's rank is their 1-based position in the
   *unfiltered* DeveloperTotal projection. A text search only hides rows,
   it never renumbers the ones that remain.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence

from algo_devboard.metrics.aggregation import DeveloperRepoTotal, DeveloperTotal

logger = logging.getLogger(__name__)


class SortKey(str, Enum):
    DEV = "dev"
    REPO = "repo"
    COMMITS = "commits"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortState:
    """Current table ordering. Immutable: select() returns a new state."""

    key: SortKey = SortKey.COMMITS
    direction: SortDirection = SortDirection.DESC

    def select(self, key: SortKey) -> "SortState":
        """Header click on *key*: toggle if already active, else new key descending."""
        key = SortKey(key)
        if key is self.key:
            flipped = (
                SortDirection.ASC
                if self.direction is SortDirection.DESC
                else SortDirection.DESC
            )
            return replace(self, direction=flipped)
        return SortState(key=key, direction=SortDirection.DESC)


@dataclass(frozen=True)
class RankedDeveloper:
    rank: int
    developer: str
    total_commits: int


def _text_key(value: str) -> tuple[str, str]:
    # Case-insensitive first, raw string breaks ties deterministically.
    return (value.casefold(), value)


def sort_dev_repo_totals(
    rows: Sequence[DeveloperRepoTotal],
    state: SortState = SortState(),
) -> list[DeveloperRepoTotal]:
    """Return *rows* re-ordered by state.key / state.direction (stable)."""
    key = SortKey(state.key)
    if key is SortKey.DEV:
        sort_key = lambda r: _text_key(r.developer)  # noqa: E731
    elif key is SortKey.REPO:
        sort_key = lambda r: _text_key(r.repository)  # noqa: E731
    else:
        sort_key = lambda r: r.total_commits  # noqa: E731

    return sorted(
        rows,
        key=sort_key,
        reverse=SortDirection(state.direction) is SortDirection.DESC,
    )


def normalize_search(term: Optional[str]) -> str:
    return (term or "").strip().lower()


def matches_search(developer: str, term: Optional[str]) -> bool:
    """Case-insensitive substring match; a blank term matches everything."""
    needle = normalize_search(term)
    return not needle or needle in developer.lower()


def search_rows(rows: Sequence, term: Optional[str]) -> list:
    """Rows (anything with a `developer` attribute) whose developer matches *term*."""
    return [r for r in rows if matches_search(r.developer, term)]


def compute_ranks(dev_totals: Sequence[DeveloperTotal]) -> dict[str, int]:
    """
    Map developer → 1-based position in the full leaderboard.

    Args:
        dev_totals: The unfiltered projection from aggregate(), already sorted.

    Returns:
        Dict of developer to rank. Never computed from a searched subset.
    """
    return {d.developer: i for i, d in enumerate(dev_totals, start=1)}


def ranked_leaderboard(
    dev_totals: Sequence[DeveloperTotal],
    search: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[RankedDeveloper]:
    """
    Leaderboard rows with ranks pinned to the unfiltered ordering.

    Args:
        dev_totals: Unfiltered DeveloperTotal projection.
        search:     Optional developer search; narrows rows, keeps ranks.
        limit:      Maximum number of rows returned after searching.
    """
    ranks = compute_ranks(dev_totals)
    rows = [
        RankedDeveloper(ranks[d.developer], d.developer, d.total_commits)
        for d in search_rows(dev_totals, search)
    ]
    if limit is not None:
        rows = rows[:limit]
    return rows


def split_podium(
    ranked: Sequence[RankedDeveloper],
    size: int = 3,
) -> tuple[list[RankedDeveloper], list[RankedDeveloper]]:
    """Split leaderboard rows into the top-*size* podium and the remainder."""
    return list(ranked[:size]), list(ranked[size:])
