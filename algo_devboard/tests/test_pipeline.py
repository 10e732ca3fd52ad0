"""
Tests for algo_devboard.pipeline.

Each feed fails independently: a broken ledger never hides the series and
vice versa. A ledger without any date is reported as the ledger's error.
"""
from dataclasses import replace
from datetime import date

from algo_devboard.config import DEFAULT_CONFIG
from algo_devboard.metrics.repo_classifier import RepoCategory
from algo_devboard.metrics.time_window import TimeWindow
from algo_devboard.pipeline import (
    LEDGER_ERROR_MESSAGE,
    SERIES_ERROR_MESSAGE,
    build_series,
    initial_state,
    load_dashboard_data,
)
from algo_devboard.ingestion.feeds import FeedResult


def _config(data_url, csv_url):
    return replace(DEFAULT_CONFIG, data_url=data_url, csv_url=csv_url)


def test_loads_both_feeds(feed_files):
    series_path, ledger_path = feed_files
    data = load_dashboard_data(_config(series_path, ledger_path))

    assert data.series_error is None and data.ledger_error is None
    assert len(data.series) == 31
    assert data.series[0].date == date(2024, 1, 1)  # file was written newest-first
    assert len(data.records) == 8
    assert data.max_date == date(2024, 3, 1)


def test_ledger_failure_keeps_series(feed_files, tmp_path):
    series_path, _ = feed_files
    data = load_dashboard_data(_config(series_path, str(tmp_path / "missing.csv")))
    assert data.ledger_error == LEDGER_ERROR_MESSAGE
    assert data.records == [] and data.max_date is None
    assert len(data.series) == 31


def test_series_failure_keeps_ledger(feed_files, tmp_path):
    _, ledger_path = feed_files
    data = load_dashboard_data(_config(str(tmp_path / "missing.json"), ledger_path))
    assert data.series_error == SERIES_ERROR_MESSAGE
    assert data.series == []
    assert len(data.records) == 8


def test_ledger_without_dates_is_an_error(feed_files, tmp_path):
    series_path, _ = feed_files
    ledger = tmp_path / "empty.csv"
    ledger.write_text("date,developer,repository,commits\n,alice,foo/bar,1\n")
    data = load_dashboard_data(_config(series_path, str(ledger)))
    assert data.ledger_error == "No valid dates found in data"
    assert data.records == []


def test_series_payload_must_be_object():
    points, error = build_series(FeedResult(source="x", data=[1, 2, 3]))
    assert points == [] and error == SERIES_ERROR_MESSAGE


def test_initial_state_uses_config_defaults(feed_files):
    series_path, ledger_path = feed_files
    config = replace(
        _config(series_path, ledger_path),
        default_window="last90d",
        default_category="core",
        default_slider_value=10.0,
    )
    state = initial_state(load_dashboard_data(config), config)
    assert state.window is TimeWindow.LAST_90D
    assert state.category is RepoCategory.CORE
    assert state.slider_value == 10.0
    assert state.max_date == date(2024, 3, 1)
    assert isinstance(state.records, tuple)


def test_initial_state_carries_errors(tmp_path):
    config = _config(str(tmp_path / "a.json"), str(tmp_path / "b.csv"))
    state = initial_state(load_dashboard_data(config), config)
    assert state.series_error and state.ledger_error
    assert state.view().leaderboard == []
