"""
Unit tests for algo_devboard.ingestion.active_devs.
"""
from datetime import date

from algo_devboard.ingestion.active_devs import ActiveDevPoint, load_active_dev_series


def test_series_sorted_ascending():
    """Unordered JSON keys come back ascending by calendar date."""
    raw = {"2024-02-01": 12, "2023-12-31": 10, "2024-01-15": 11}
    series = load_active_dev_series(raw)
    assert [p.date for p in series] == [date(2023, 12, 31), date(2024, 1, 15), date(2024, 2, 1)]
    assert series[0] == ActiveDevPoint(date(2023, 12, 31), 10)


def test_non_contiguous_dates_are_kept_as_is():
    series = load_active_dev_series({"2024-01-01": 1, "2024-03-01": 3})
    assert len(series) == 2


def test_empty_or_missing_mapping():
    assert load_active_dev_series({}) == []
    assert load_active_dev_series(None) == []


def test_malformed_entries_are_skipped():
    raw = {"2024-01-01": 5, "not-a-date": 3, "2024-01-02": "n/a", "2024-01-03": -1}
    series = load_active_dev_series(raw)
    assert [p.date for p in series] == [date(2024, 1, 1)]


def test_numeric_strings_are_accepted():
    series = load_active_dev_series({"2024-01-01": "42"})
    assert series[0].active_dev_count == 42
