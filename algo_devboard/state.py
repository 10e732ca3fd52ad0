"""
algo_devboard/state.py — Explicit dashboard state.

DashboardState holds the canonical datasets (write-once, loaded by
algo_devboard.pipeline) together with every user control:

    time window, repo category   → filter scope
    search term, sort state      → table presentation
    slider value                 → active-dev chart zoom
    dark mode                    → theme tokens

The state is immutable. Each control change returns a new state via a
`with_*` method, and view() derives everything the presentation layer needs
from the canonical data and the current controls. Nothing derived is stored,
so controls can change in any order without a stale projection surviving.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from algo_devboard.config import DEFAULT_CONFIG, DevboardConfig
from algo_devboard.ingestion.active_devs import ActiveDevPoint
from algo_devboard.ingestion.ledger_parser import CommitRecord
from algo_devboard.metrics.aggregation import (
    AggregationResult,
    DeveloperRepoTotal,
    aggregate,
)
from algo_devboard.metrics.chart_range import (
    month_end_points,
    select_chart_range,
    series_domain,
    should_show_labels,
)
from algo_devboard.metrics.ranking import (
    RankedDeveloper,
    SortKey,
    SortState,
    compute_ranks,
    ranked_leaderboard,
    search_rows,
    sort_dev_repo_totals,
    split_podium,
)
from algo_devboard.metrics.repo_classifier import RepoCategory
from algo_devboard.metrics.time_window import TimeWindow
from algo_devboard.viz.theme import ThemeTokens, theme_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableRow:
    """One developer/repository table row with the developer's leaderboard rank."""

    rank: Optional[int]
    developer: str
    repository: str
    total_commits: int


@dataclass
class DashboardView:
    """Everything the presentation layer renders for one state."""

    aggregation: AggregationResult
    leaderboard: list[RankedDeveloper]
    podium: list[RankedDeveloper]
    runners_up: list[RankedDeveloper]
    table: list[TableRow]
    chart_points: list[ActiveDevPoint]
    chart_labels: list[ActiveDevPoint]
    theme: ThemeTokens


@dataclass(frozen=True)
class DashboardState:
    """
    Canonical data plus user controls.

    Fields:
        records:        Canonical ledger rows (tuple, never mutated).
        series:         Canonical active-dev series, ascending by date.
        max_date:       Ledger max date computed once at load time.
        window:         Active TimeWindow.
        category:       Active RepoCategory.
        search:         Developer search text for the table.
        sort:           Table SortState.
        slider_value:   Chart zoom position (0–100).
        dark_mode:      Theme selection.
        series_error:   User-facing error of the active-dev feed, if any.
        ledger_error:   User-facing error of the ledger feed, if any.
    """

    records: tuple[CommitRecord, ...] = ()
    series: tuple[ActiveDevPoint, ...] = ()
    max_date: Optional[date] = None
    window: TimeWindow = TimeWindow.LAST_30D
    category: RepoCategory = RepoCategory.ALL
    search: str = ""
    sort: SortState = SortState()
    slider_value: float = DEFAULT_CONFIG.default_slider_value
    dark_mode: bool = False
    series_error: Optional[str] = None
    ledger_error: Optional[str] = None
    config: DevboardConfig = field(default=DEFAULT_CONFIG, compare=False, repr=False)

    # ── Control changes ───────────────────────────────────────────────────────

    def with_window(self, window: TimeWindow) -> "DashboardState":
        return replace(self, window=TimeWindow(window))

    def with_category(self, category: RepoCategory) -> "DashboardState":
        return replace(self, category=RepoCategory(category))

    def with_search(self, search: str) -> "DashboardState":
        return replace(self, search=search or "")

    def with_sort(self, key: SortKey) -> "DashboardState":
        return replace(self, sort=self.sort.select(key))

    def with_slider(self, slider_value: float) -> "DashboardState":
        return replace(self, slider_value=float(slider_value))

    def with_dark_mode(self, dark_mode: bool) -> "DashboardState":
        return replace(self, dark_mode=bool(dark_mode))

    # ── Derived views ─────────────────────────────────────────────────────────

    @property
    def theme(self) -> ThemeTokens:
        return theme_for(self.dark_mode)

    @property
    def chart_domain(self) -> Optional[tuple[date, date]]:
        return series_domain(self.series)

    def aggregate(self) -> AggregationResult:
        """Both projections for the current scope, from the canonical records."""
        return aggregate(
            self.records,
            self.window,
            self.category,
            max_date=self.max_date,
            config=self.config,
        )

    def table_rows(self, aggregation: AggregationResult) -> list[TableRow]:
        ranks = compute_ranks(aggregation.dev_totals)
        visible: list[DeveloperRepoTotal] = search_rows(
            aggregation.dev_repo_totals, self.search
        )
        return [
            TableRow(ranks.get(r.developer), r.developer, r.repository, r.total_commits)
            for r in sort_dev_repo_totals(visible, self.sort)
        ]

    def view(self, compact: bool = False) -> DashboardView:
        """Recompute every derived view for the current controls."""
        aggregation = self.aggregate()
        leaderboard = ranked_leaderboard(
            aggregation.dev_totals, limit=self.config.leaderboard_limit
        )
        podium, runners_up = split_podium(leaderboard, self.config.podium_size)

        chart_points = select_chart_range(self.series, self.chart_domain, self.slider_value)
        chart_labels = (
            month_end_points(chart_points)
            if should_show_labels(self.slider_value, compact)
            else []
        )

        return DashboardView(
            aggregation=aggregation,
            leaderboard=leaderboard,
            podium=podium,
            runners_up=runners_up,
            table=self.table_rows(aggregation),
            chart_points=chart_points,
            chart_labels=chart_labels,
            theme=self.theme,
        )
