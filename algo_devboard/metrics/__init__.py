"""
algo_devboard.metrics — Commit aggregation and derived views.

Modules:
    time_window      — named windows anchored on the ledger's max date.
    repo_classifier  — foundation / core / ecosystem segments.
    aggregation      — the Aggregation Engine (per-dev, per-dev-per-repo).
    ranking          — table sorting, search, and search-stable ranks.
    chart_range      — slider → visible slice of the active-dev series.

All thresholds and namespaces live in algo_devboard.config.DevboardConfig.
"""

from algo_devboard.metrics.aggregation import (
    AggregationResult,
    DeveloperRepoTotal,
    DeveloperTotal,
    aggregate,
)
from algo_devboard.metrics.repo_classifier import RepoCategory, classify_repository
from algo_devboard.metrics.time_window import TimeWindow
