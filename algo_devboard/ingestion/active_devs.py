"""
Active-Dev Series Loader — {date: count} JSON to a sorted time series.

The series feed carries one entry per day for which the upstream job produced
an active-developer count. Dates need not be contiguous.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveDevPoint:
    """Active developer count on a single day."""

    date: date
    active_dev_count: int


def load_active_dev_series(raw: Optional[Mapping]) -> list[ActiveDevPoint]:
    """Convert a date → count mapping into an ascending ActiveDevPoint list.

    Args:
        raw: Mapping of ISO date string to integer count. None or an empty
             mapping yields an empty series.

    Returns:
        Points sorted ascending by date. Keys that are not ISO dates and
        values that are not non-negative integers are skipped.
    """
    if not raw:
        return []

    points: list[ActiveDevPoint] = []
    skipped = 0
    for key, value in raw.items():
        try:
            point_date = date.fromisoformat(str(key)[:10])
            count = int(value)
        except (TypeError, ValueError):
            skipped += 1
            continue
        if count < 0:
            skipped += 1
            continue
        points.append(ActiveDevPoint(date=point_date, active_dev_count=count))

    points.sort(key=lambda p: p.date)

    if skipped:
        logger.debug("Active-dev series: skipped %d malformed entries.", skipped)
    logger.debug("Active-dev series loaded: %d points.", len(points))
    return points
