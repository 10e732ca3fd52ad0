"""
algo_devboard/tests/conftest.py — Shared pytest fixtures.

The synthetic ledger is generated from a fixed seed so every property test
sees the same rows.

Fixtures:
    ledger_text       — small hand-written CSV covering every category.
    ledger_records    — ledger_text parsed.
    synthetic_ledger  — ~2,000 seeded random records over one year.
    january_series    — 31 daily active-dev points for January 2024.
    feed_files        — the two feeds written to tmp_path (series, ledger).
"""

import json
import random
from datetime import date, timedelta

import pytest

from algo_devboard.ingestion.active_devs import ActiveDevPoint
from algo_devboard.ingestion.ledger_parser import CommitRecord, parse_ledger_csv


# ── Pytest configuration hooks ────────────────────────────────────────────────

def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Also run tests that download the live DEVBOARD_* feeds.",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: needs network access to the live feeds; skipped unless "
        "--run-integration is given or selected with -m integration",
    )


def _integration_requested(config) -> bool:
    return config.getoption("--run-integration") or "integration" in (
        config.getoption("-m", default="") or ""
    )


def pytest_collection_modifyitems(config, items):
    """Live-feed tests are opt-in; mark them skipped otherwise."""
    if _integration_requested(config):
        return
    skip_live = pytest.mark.skip(reason="live feed test; use --run-integration")
    for item in items:
        if item.get_closest_marker("integration") is not None:
            item.add_marker(skip_live)


SEED = 7

DEVELOPERS = ["alice", "bob", "carol", "dave", "erin", "frank", "grace", "forosuru"]

REPOSITORIES = [
    "algorand/go-algorand",
    "algorand/indexer",
    "algorandfoundation/algokit-cli",
    "algorandfoundation/tools",
    "algorand-devrel/examples",
    "someoneelse/wallet",
    "pera/mobile",
    "algorand-community/docs",
]

LEDGER_TEXT = """date,developer,repository,commits
2024-03-01,alice,algorand/go-algorand,5
2024-02-20,bob,algorandfoundation/algokit-cli,4
2024-02-15,alice,algorand-devrel/examples,2
2024-01-01,alice,algorand/go-algorand,3
2024-02-28,carol,someoneelse/wallet,7
2024-02-28,forosuru,algorand/go-algorand,100
2023-06-01,dave,pera/mobile,9
2024-02-10,bob,algorand/indexer,1
"""


@pytest.fixture
def ledger_text() -> str:
    return LEDGER_TEXT


@pytest.fixture
def ledger_records() -> list[CommitRecord]:
    return parse_ledger_csv(LEDGER_TEXT)


def _build_synthetic_ledger(n: int = 2000) -> list[CommitRecord]:
    rng = random.Random(SEED)
    end = date(2024, 6, 30)
    return [
        CommitRecord(
            date=end - timedelta(days=rng.randint(0, 400)),
            developer=rng.choice(DEVELOPERS),
            repository=rng.choice(REPOSITORIES),
            commit_count=rng.randint(0, 12),
        )
        for _ in range(n)
    ]


@pytest.fixture(scope="session")
def synthetic_ledger() -> list[CommitRecord]:
    """Seeded ledger over ~13 months, including deny-listed rows."""
    return _build_synthetic_ledger()


@pytest.fixture
def january_series() -> list[ActiveDevPoint]:
    start = date(2024, 1, 1)
    return [
        ActiveDevPoint(date=start + timedelta(days=i), active_dev_count=100 + i)
        for i in range(31)
    ]


@pytest.fixture
def feed_files(tmp_path, january_series):
    """Write both feeds to disk; returns (series_path, ledger_path) as strings."""
    series_path = tmp_path / "active_devs.json"
    series_path.write_text(
        json.dumps({p.date.isoformat(): p.active_dev_count for p in reversed(january_series)})
    )
    ledger_path = tmp_path / "commits.csv"
    ledger_path.write_text(LEDGER_TEXT)
    return str(series_path), str(ledger_path)
