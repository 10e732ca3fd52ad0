"""
algo_devboard/pipeline.py — Load both feeds and build the initial state.

Provides load_dashboard_data(), which fetches the active-dev series and the
commit ledger concurrently, parses them, and reports a separate error for
each source, and initial_state(), which wraps the result in a DashboardState.

Usage:
    from algo_devboard.pipeline import load_dashboard_data, initial_state
    state = initial_state(load_dashboard_data())
    view = state.with_window("last90d").view()
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from algo_devboard.config import DEFAULT_CONFIG, DevboardConfig
from algo_devboard.ingestion.active_devs import ActiveDevPoint, load_active_dev_series
from algo_devboard.ingestion.feeds import FeedResult, fetch_json, fetch_text
from algo_devboard.ingestion.ledger_parser import (
    CommitRecord,
    NoValidDatesError,
    parse_ledger_csv,
    require_max_date,
)
from algo_devboard.metrics.repo_classifier import RepoCategory
from algo_devboard.metrics.time_window import TimeWindow
from algo_devboard.state import DashboardState

logger = logging.getLogger(__name__)

SERIES_ERROR_MESSAGE = "Error fetching data. Please check your URL and try again."
LEDGER_ERROR_MESSAGE = "Error fetching commit data."


@dataclass
class DashboardData:
    """
    Canonical datasets for one session, plus per-source load errors.

    A failed source leaves its dataset empty and sets its error; the other
    source is unaffected.
    """

    series: list[ActiveDevPoint] = field(default_factory=list)
    records: list[CommitRecord] = field(default_factory=list)
    max_date: Optional[date] = None
    series_error: Optional[str] = None
    ledger_error: Optional[str] = None


def build_series(result: FeedResult) -> tuple[list[ActiveDevPoint], Optional[str]]:
    """Series points and error message from a fetched JSON feed."""
    if not result.ok:
        return [], SERIES_ERROR_MESSAGE
    if result.data is None:
        return [], None
    if not isinstance(result.data, dict):
        logger.warning(
            "Active-dev feed is a %s, expected a JSON object.", type(result.data).__name__
        )
        return [], SERIES_ERROR_MESSAGE
    return load_active_dev_series(result.data), None


def build_ledger(
    result: FeedResult,
) -> tuple[list[CommitRecord], Optional[date], Optional[str]]:
    """Ledger records, max date and error message from a fetched CSV feed."""
    if not result.ok:
        return [], None, LEDGER_ERROR_MESSAGE
    records = parse_ledger_csv(result.data or "")
    try:
        max_date = require_max_date(records)
    except NoValidDatesError as exc:
        logger.warning("Commit ledger from %s: %s", result.source, exc)
        return [], None, str(exc)
    return records, max_date, None


def load_dashboard_data(config: DevboardConfig = DEFAULT_CONFIG) -> DashboardData:
    """
    Fetch and parse both feeds.

    The two fetches run on separate threads and may finish in either order.
    Parsing happens after both return, on the calling thread.

    Args:
        config: Uses data_url, csv_url, http_timeout_s.

    Returns:
        DashboardData with canonical datasets and per-source errors.
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        series_future = executor.submit(fetch_json, config.data_url, config.http_timeout_s)
        ledger_future = executor.submit(fetch_text, config.csv_url, config.http_timeout_s)
        series_result = series_future.result()
        ledger_result = ledger_future.result()

    series, series_error = build_series(series_result)
    records, max_date, ledger_error = build_ledger(ledger_result)

    logger.info(
        "Loaded %d active-dev points and %d commit records (max date %s).",
        len(series),
        len(records),
        max_date,
    )
    if series_error:
        logger.warning("Active-dev series unavailable: %s", series_error)
    if ledger_error:
        logger.warning("Commit ledger unavailable: %s", ledger_error)

    return DashboardData(
        series=series,
        records=records,
        max_date=max_date,
        series_error=series_error,
        ledger_error=ledger_error,
    )


def initial_state(
    data: DashboardData,
    config: DevboardConfig = DEFAULT_CONFIG,
    dark_mode: bool = False,
) -> DashboardState:
    """Wrap loaded data in a DashboardState with the configured defaults."""
    return DashboardState(
        records=tuple(data.records),
        series=tuple(data.series),
        max_date=data.max_date,
        window=TimeWindow(config.default_window),
        category=RepoCategory(config.default_category),
        slider_value=config.default_slider_value,
        dark_mode=dark_mode,
        series_error=data.series_error,
        ledger_error=data.ledger_error,
        config=config,
    )
