"""
algo_devboard/metrics/aggregation.py — Aggregation Engine.

The single source of truth for every commit projection the dashboard shows.
Both the leaderboard and the developer/repository table read from one call
to aggregate(); no view keeps its own copy of this logic.

Algorithm:
    1. Time-Window Filter   (deny-list + lower date bound)
    2. Repository Classifier filter (skipped for category `all`)
    3. Fold surviving rows into two groupings, summing commit_count:
           developer                → DeveloperTotal
           (developer, repository)  → DeveloperRepoTotal
    4. Sort both descending by total_commits. Ties keep first-encountered
       order (Python's sort is stable; no secondary key).

Every call starts again from the canonical records. Results are never patched
from a previous scope's output, so the projections are a pure function of
(records, window, category, max_date).
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

import pandas as pd

from algo_devboard.config import DEFAULT_CONFIG, DevboardConfig
from algo_devboard.ingestion.ledger_parser import CommitRecord, get_max_date
from algo_devboard.metrics.repo_classifier import RepoCategory, matches_category
from algo_devboard.metrics.time_window import TimeWindow, filter_by_window

logger = logging.getLogger(__name__)


@dataclass
class DeveloperTotal:
    """Commits by one developer within the active filter scope."""

    developer: str
    total_commits: int = 0


@dataclass
class DeveloperRepoTotal:
    """Commits by one developer to one repository within the active scope."""

    developer: str
    repository: str
    total_commits: int = 0


@dataclass
class AggregationResult:
    """
    Both projections for one filter scope.

    Fields:
        dev_totals:      One row per developer, descending by total_commits.
        dev_repo_totals: One row per (developer, repository), descending.
    """

    dev_totals: list[DeveloperTotal] = field(default_factory=list)
    dev_repo_totals: list[DeveloperRepoTotal] = field(default_factory=list)

    @property
    def total_commits(self) -> int:
        return sum(d.total_commits for d in self.dev_totals)

    def dev_totals_frame(self) -> pd.DataFrame:
        """Leaderboard projection as a DataFrame (rank, developer, total_commits)."""
        df = pd.DataFrame(
            [(d.developer, d.total_commits) for d in self.dev_totals],
            columns=["developer", "total_commits"],
        )
        df.insert(0, "rank", range(1, len(df) + 1))
        return df

    def dev_repo_totals_frame(self) -> pd.DataFrame:
        """Developer × repository projection as a DataFrame."""
        return pd.DataFrame(
            [(r.developer, r.repository, r.total_commits) for r in self.dev_repo_totals],
            columns=["developer", "repository", "total_commits"],
        )


def filter_scope(
    records: Sequence[CommitRecord],
    window: TimeWindow,
    category: RepoCategory,
    max_date: Optional[date],
    config: DevboardConfig = DEFAULT_CONFIG,
) -> list[CommitRecord]:
    """Records surviving both the time-window and the repository filter."""
    in_window = filter_by_window(records, window, max_date, config)
    if RepoCategory(category) is RepoCategory.ALL:
        return in_window
    return [r for r in in_window if matches_category(r.repository, category, config)]


def aggregate(
    records: Sequence[CommitRecord],
    window: TimeWindow = TimeWindow.ALL_TIME,
    category: RepoCategory = RepoCategory.ALL,
    max_date: Optional[date] = None,
    config: DevboardConfig = DEFAULT_CONFIG,
) -> AggregationResult:
    """
    Aggregate the ledger into per-developer and per-developer-per-repo totals.

    Args:
        records:  Canonical CommitRecord rows. Never modified.
        window:   TimeWindow (or its string value).
        category: RepoCategory (or its string value).
        max_date: Window anchor. Defaults to the max date of *records*; pass
                  the load-time value to avoid rescanning the ledger.
        config:   DevboardConfig (deny-list, window lengths, prefixes).

    Returns:
        AggregationResult. Empty input, a ledger without dates, or a scope
        that filters out everything all give two empty lists.

    Notes:
        - Each surviving record lands in exactly one bucket of each grouping,
          so both projections sum to the same total.
        - Identical arguments always give identical output.
    """
    if not records:
        return AggregationResult()

    if max_date is None:
        max_date = get_max_date(records)

    scoped = filter_scope(records, window, category, max_date, config)

    # dicts keep insertion order → first-encountered order for ties.
    by_dev: dict[str, DeveloperTotal] = {}
    by_dev_repo: dict[tuple[str, str], DeveloperRepoTotal] = {}

    for record in scoped:
        dev_total = by_dev.get(record.developer)
        if dev_total is None:
            dev_total = by_dev[record.developer] = DeveloperTotal(record.developer)
        dev_total.total_commits += record.commit_count

        key = (record.developer, record.repository)
        pair_total = by_dev_repo.get(key)
        if pair_total is None:
            pair_total = by_dev_repo[key] = DeveloperRepoTotal(*key)
        pair_total.total_commits += record.commit_count

    dev_totals = sorted(by_dev.values(), key=lambda d: d.total_commits, reverse=True)
    dev_repo_totals = sorted(
        by_dev_repo.values(), key=lambda r: r.total_commits, reverse=True
    )

    logger.debug(
        "Aggregated %d/%d records (window=%s, category=%s): %d developers, %d pairs.",
        len(scoped),
        len(records),
        TimeWindow(window).value,
        RepoCategory(category).value,
        len(dev_totals),
        len(dev_repo_totals),
    )
    return AggregationResult(dev_totals=dev_totals, dev_repo_totals=dev_repo_totals)
