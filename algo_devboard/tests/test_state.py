"""
Tests for algo_devboard.state.DashboardState.

Controls may change in any order; the view for a given set of controls must
not depend on the path taken to reach it.
"""
from datetime import date

import pytest

from algo_devboard.ingestion.ledger_parser import CommitRecord, get_max_date
from algo_devboard.metrics.aggregation import aggregate
from algo_devboard.metrics.ranking import SortDirection, SortKey
from algo_devboard.metrics.repo_classifier import RepoCategory
from algo_devboard.metrics.time_window import TimeWindow
from algo_devboard.state import DashboardState, TableRow
from algo_devboard.viz.theme import DARK, LIGHT


@pytest.fixture
def state(ledger_records, january_series) -> DashboardState:
    return DashboardState(
        records=tuple(ledger_records),
        series=tuple(january_series),
        max_date=get_max_date(ledger_records),
        window=TimeWindow.ALL_TIME,
    )


def test_controls_return_new_states(state):
    changed = state.with_window("last30d")
    assert changed is not state
    assert state.window is TimeWindow.ALL_TIME
    assert changed.window is TimeWindow.LAST_30D


def test_view_matches_direct_aggregation(state, ledger_records):
    view = state.with_category(RepoCategory.CORE).view()
    assert view.aggregation == aggregate(
        ledger_records, TimeWindow.ALL_TIME, RepoCategory.CORE
    )


def test_order_of_control_changes_is_irrelevant(state):
    a = (
        state.with_window("last30d")
        .with_category("foundation")
        .with_search("ali")
        .with_sort(SortKey.REPO)
    )
    b = (
        state.with_sort(SortKey.REPO)
        .with_search("ali")
        .with_category("ecosystem")
        .with_window("last1y")
        .with_category("foundation")
        .with_window("last30d")
    )
    assert a == b
    assert a.view().table == b.view().table
    assert a.view().leaderboard == b.view().leaderboard


def test_table_rows_carry_unfiltered_rank(state):
    view = state.with_search("bob").view()
    assert {r.developer for r in view.table} == {"bob"}
    full_ranks = {r.developer: r.rank for r in state.view().leaderboard}
    assert all(r.rank == full_ranks["bob"] for r in view.table)


def test_table_sorting(state):
    s = state.with_sort(SortKey.DEV)
    assert s.sort.direction is SortDirection.DESC
    s = s.with_sort(SortKey.DEV)
    devs = [r.developer for r in s.view().table]
    assert devs == sorted(devs)


def test_leaderboard_is_not_narrowed_by_search(state):
    assert state.with_search("zzz").view().leaderboard == state.view().leaderboard


def test_podium_split(state):
    view = state.view()
    assert [r.rank for r in view.podium] == [1, 2, 3]
    assert [r.rank for r in view.runners_up] == [4]


def test_chart_follows_slider(state):
    assert len(state.with_slider(0).view().chart_points) == 31
    zoomed = state.with_slider(100).view()
    assert [p.date for p in zoomed.chart_points] == [date(2024, 1, 31)]
    assert [p.date for p in zoomed.chart_labels] == [date(2024, 1, 31)]


def test_labels_hidden_when_zoomed_out(state):
    assert state.with_slider(0).view().chart_labels == []


def test_compact_layout_needs_deeper_zoom(state):
    zoomed = state.with_slider(60)
    assert zoomed.view().chart_labels
    assert zoomed.view(compact=True).chart_labels == []
    assert state.with_slider(95).view(compact=True).chart_labels


def test_theme_follows_dark_mode(state):
    assert state.theme is LIGHT
    assert state.with_dark_mode(True).view().theme is DARK


def test_empty_state_views_are_empty():
    view = DashboardState().view()
    assert view.leaderboard == [] and view.table == [] and view.chart_points == []


def test_table_row_type(state):
    row = state.view().table[0]
    assert isinstance(row, TableRow)
    # dave's single 9-commit repo tops the pair table; alice leads overall
    assert (row.developer, row.total_commits, row.rank) == ("dave", 9, 2)


def test_view_lists_every_developer():
    """The podium plus runners-up cover the whole scope, not a top-N slice."""
    records = tuple(
        CommitRecord(date(2024, 1, 1), f"dev{i:03d}", "algorand/go-algorand", 100 - i)
        for i in range(75)
    )
    view = DashboardState(records=records, max_date=date(2024, 1, 1)).view()
    assert len(view.leaderboard) == 75
    assert len(view.podium) + len(view.runners_up) == 75
    assert view.runners_up[-1].developer == "dev074"
    assert view.runners_up[-1].rank == 75
