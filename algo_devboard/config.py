"""
algo_devboard/config.py — All tunable parameters for the dashboard.

Window lengths, the developer deny-list, repository namespaces and feed URLs
live here so that a change of ecosystem layout is a single-file diff.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class DevboardConfig:
    """
    Immutable configuration for the aggregation pipeline and its feeds.

    Override by constructing a new DevboardConfig with the desired values,
    or with dataclasses.replace(DEFAULT_CONFIG, ...).
    """

    # ── Feeds ─────────────────────────────────────────────────────────────────
    data_url: Optional[str] = None
    # JSON object {ISO date: active developer count}. URL or local path.

    csv_url: Optional[str] = None
    # Commit ledger CSV (date, developer, repository, commits). URL or local path.

    http_timeout_s: float = 30.0

    # ── Time windows ──────────────────────────────────────────────────────────
    window_days: tuple = (("last30d", 30), ("last90d", 90), ("last1y", 365))
    # (window, lookback days) pairs relative to the ledger's max date.
    # allTime is unbounded.

    clamp_future_records: bool = False
    # When True, records dated after the ledger's max date are dropped from
    # bounded windows. Off by default: only a lower bound is checked.

    # ── Exclusions ────────────────────────────────────────────────────────────
    excluded_developers: tuple = ("forosuru",)
    # Bot/service accounts removed from every window before the date check.

    # ── Repository namespaces ─────────────────────────────────────────────────
    foundation_prefixes: tuple = ("algorandfoundation/", "algorand-devrel/")
    core_prefixes: tuple = ("algorand/",)
    # Foundation is checked before core; everything else is ecosystem.

    # ── Dashboard defaults ────────────────────────────────────────────────────
    default_window: str = "last30d"
    default_category: str = "all"
    default_slider_value: float = 80.0
    # Zoom position of the active-dev chart (0 = whole series).

    podium_size: int = 3
    leaderboard_limit: Optional[int] = None
    # None lists every ranked developer in scope.


# Shared default instance.
DEFAULT_CONFIG = DevboardConfig()


def config_from_env(base: DevboardConfig = DEFAULT_CONFIG) -> DevboardConfig:
    """Return *base* with feed URLs overridden from the environment.

    Reads DEVBOARD_DATA_URL and DEVBOARD_CSV_URL. Unset variables leave the
    corresponding field untouched.
    """
    overrides = {}
    data_url = os.environ.get("DEVBOARD_DATA_URL")
    if data_url:
        overrides["data_url"] = data_url
    csv_url = os.environ.get("DEVBOARD_CSV_URL")
    if csv_url:
        overrides["csv_url"] = csv_url
    timeout = os.environ.get("DEVBOARD_HTTP_TIMEOUT")
    if timeout:
        overrides["http_timeout_s"] = float(timeout)
    return replace(base, **overrides) if overrides else base
