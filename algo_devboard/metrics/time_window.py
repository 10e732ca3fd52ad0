"""
algo_devboard/metrics/time_window.py — Time-Window Filter.

Decides which ledger rows fall inside a named window. Windows are anchored on
the ledger's own max date rather than on "today", so a feed that lags by a few
days still shows a full window.

Windows:
    last30d  → date >= max_date - 30 days
    last90d  → date >= max_date - 90 days
    last1y   → date >= max_date - 365 days
    allTime  → every row

The developer deny-list (config.excluded_developers) is applied first, for
every window including allTime.
"""

import logging
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional

from algo_devboard.config import DEFAULT_CONFIG, DevboardConfig
from algo_devboard.ingestion.ledger_parser import CommitRecord

logger = logging.getLogger(__name__)


class TimeWindow(str, Enum):
    LAST_30D = "last30d"
    LAST_90D = "last90d"
    LAST_1Y = "last1y"
    ALL_TIME = "allTime"


WINDOW_LABELS = {
    TimeWindow.LAST_30D: "Last 30d",
    TimeWindow.LAST_90D: "Last 90d",
    TimeWindow.LAST_1Y: "Last 1Y",
    TimeWindow.ALL_TIME: "All Time",
}


def window_cutoff(
    window: TimeWindow,
    max_date: date,
    config: DevboardConfig = DEFAULT_CONFIG,
) -> Optional[date]:
    """Inclusive lower bound for *window*, or None for allTime."""
    window = TimeWindow(window)
    if window is TimeWindow.ALL_TIME:
        return None
    return max_date - timedelta(days=dict(config.window_days)[window.value])


def is_excluded(developer: str, config: DevboardConfig = DEFAULT_CONFIG) -> bool:
    return developer in config.excluded_developers


def filter_by_window(
    records: Iterable[CommitRecord],
    window: TimeWindow,
    max_date: Optional[date],
    config: DevboardConfig = DEFAULT_CONFIG,
) -> list[CommitRecord]:
    """
    Keep the records inside *window*, relative to *max_date*.

    Args:
        records:  Canonical ledger rows. Not modified.
        window:   TimeWindow (or its string value).
        max_date: Reference date, normally get_max_date() of the full ledger.
                  None means the ledger has no dates: the result is empty.
        config:   Uses excluded_developers, window_days, clamp_future_records.

    Returns:
        A new list, in input order.
    """
    if max_date is None:
        return []

    cutoff = window_cutoff(window, max_date, config)
    clamp = config.clamp_future_records and cutoff is not None

    kept: list[CommitRecord] = []
    for record in records:
        if is_excluded(record.developer, config):
            continue
        if cutoff is not None and record.date < cutoff:
            continue
        if clamp and record.date > max_date:
            continue
        kept.append(record)

    logger.debug(
        "Window %s (cutoff=%s): %d records retained.",
        TimeWindow(window).value,
        cutoff,
        len(kept),
    )
    return kept
