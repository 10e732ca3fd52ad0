"""
algo_devboard/metrics/chart_range.py — Chart Range Selector.

The active-dev chart has a zoom slider (0–100, continuous). The slider sets
how much of the series domain is hidden, measured back from the end date:

    visible = 1 - slider / 100
    cutoff  = end - (end - start) × visible

and a point is shown iff cutoff <= point.date <= end. Slider 0 shows the
whole series; slider 100 collapses the cutoff onto `end`, leaving only the
final point.

Month-end helpers drive the value labels drawn on the chart.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from algo_devboard.ingestion.active_devs import ActiveDevPoint

logger = logging.getLogger(__name__)

SLIDER_MIN = 0.0
SLIDER_MAX = 100.0

# Slider positions from which month-end values are labelled.
LABEL_THRESHOLD = 50.0
LABEL_THRESHOLD_COMPACT = 90.0


def series_domain(points: Sequence[ActiveDevPoint]) -> Optional[tuple[date, date]]:
    """(first date, last date) of a sorted series, or None if empty."""
    if not points:
        return None
    return points[0].date, points[-1].date


def slider_cutoff(domain: tuple[date, date], slider_value: float) -> datetime:
    """Earliest visible instant for *slider_value* over *domain*."""
    start, end = domain
    slider_value = min(max(float(slider_value), SLIDER_MIN), SLIDER_MAX)
    visible = 1.0 - slider_value / SLIDER_MAX
    end_dt = datetime.combine(end, time.min)
    span = end_dt - datetime.combine(start, time.min)
    return end_dt - timedelta(seconds=span.total_seconds() * visible)


def select_chart_range(
    points: Sequence[ActiveDevPoint],
    domain: Optional[tuple[date, date]],
    slider_value: float,
) -> list[ActiveDevPoint]:
    """
    Points of the series visible at *slider_value*.

    Args:
        points:       Canonical series, ascending by date.
        domain:       Fixed (start, end) of the chart. None → series_domain().
        slider_value: Zoom position, clamped to [0, 100].

    Returns:
        New list of points with cutoff <= date <= end.
    """
    if not points:
        return []
    if domain is None:
        domain = series_domain(points)

    cutoff = slider_cutoff(domain, slider_value)
    end = domain[1]
    visible = [
        p for p in points
        if cutoff <= datetime.combine(p.date, time.min) and p.date <= end
    ]
    logger.debug(
        "Chart range slider=%.1f cutoff=%s: %d/%d points.",
        slider_value,
        cutoff.date(),
        len(visible),
        len(points),
    )
    return visible


def is_month_end(day: date) -> bool:
    """True if *day* is the last day of its month."""
    return (day + timedelta(days=1)).month != day.month


def month_end_points(points: Sequence[ActiveDevPoint]) -> list[ActiveDevPoint]:
    """Month-end points of the series, plus its final point."""
    ordered = sorted(points, key=lambda p: p.date)
    return [
        p for i, p in enumerate(ordered)
        if is_month_end(p.date) or i == len(ordered) - 1
    ]


def should_show_labels(slider_value: float, compact: bool = False) -> bool:
    """Month-end labels only once the view is zoomed in far enough to read them."""
    threshold = LABEL_THRESHOLD_COMPACT if compact else LABEL_THRESHOLD
    return slider_value >= threshold
