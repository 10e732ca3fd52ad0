"""
algo_devboard/cli.py — Command-line interface.

Loads both feeds once, applies the requested controls to a DashboardState and
prints or exports the resulting views.

Usage:
    python -m algo_devboard leaderboard --window last90d --category core
    python -m algo_devboard table --search alice --sort repo --order asc
    python -m algo_devboard export --output-dir out/
    python -m algo_devboard dashboard

Feed locations come from --data-url / --csv-url, else from DEVBOARD_DATA_URL /
DEVBOARD_CSV_URL (a .env file in the working tree is loaded first).
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import pandas as pd

from algo_devboard.config import DevboardConfig, config_from_env
from algo_devboard.metrics.ranking import SortDirection, SortKey, SortState, ranked_leaderboard
from algo_devboard.metrics.repo_classifier import CATEGORY_LABELS, RepoCategory
from algo_devboard.metrics.time_window import WINDOW_LABELS, TimeWindow
from algo_devboard.pipeline import initial_state, load_dashboard_data
from algo_devboard.state import DashboardState


# ── .env loader (stdlib only, no python-dotenv) ──────────────────────────────

def _find_env_file() -> Optional[Path]:
    """Nearest .env in the working directory or one of its parents."""
    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _parse_env_line(line: str) -> Optional[tuple[str, str]]:
    """`KEY=value` (optionally `export`-prefixed, value optionally quoted)."""
    line = line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, _, value = line.partition("=")
    key, value = key.strip(), value.strip()
    if value[:1] in ('"', "'") and len(value) >= 2 and value[-1] == value[0]:
        value = value[1:-1]
    return (key, value) if key else None


def _load_dotenv(env_file: Optional[str] = None) -> dict[str, str]:
    """Export DEVBOARD_* (and any other) settings from a .env file.

    Variables already present in the environment win over the file, so a
    shell export always overrides a checked-in .env.

    Args:
        env_file: Path to read. None means the nearest .env above the
                  working directory; a missing file loads nothing.

    Returns:
        The variables this call added to os.environ.
    """
    path = Path(env_file) if env_file else _find_env_file()
    if path is None or not path.is_file():
        return {}

    loaded: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        pair = _parse_env_line(raw_line)
        if pair is None or pair[0] in os.environ:
            continue
        os.environ[pair[0]] = pair[1]
        loaded[pair[0]] = pair[1]
    if loaded:
        logger.debug("Loaded %s from %s", ", ".join(sorted(loaded)), path)
    return loaded


# ── Logging setup ─────────────────────────────────────────────────────────────

def _setup_logging(level: str = "INFO") -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    fmt = "%(asctime)s  %(levelname)-8s  %(name)s — %(message)s"
    logging.basicConfig(level=numeric, format=fmt, datefmt="%H:%M:%S", stream=sys.stderr)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


logger = logging.getLogger("algo_devboard.cli")


# ── Shared helpers ────────────────────────────────────────────────────────────

def _config(args: argparse.Namespace) -> DevboardConfig:
    _load_dotenv(args.env_file)
    _setup_logging(args.log_level)
    config = config_from_env()
    overrides = {}
    if args.data_url:
        overrides["data_url"] = args.data_url
    if args.csv_url:
        overrides["csv_url"] = args.csv_url
    return replace(config, **overrides) if overrides else config


def _load_state(args: argparse.Namespace) -> DashboardState:
    config = _config(args)
    state = initial_state(load_dashboard_data(config), config)
    state = state.with_window(args.window).with_category(args.category)
    return state.with_search(getattr(args, "search", "") or "")


def _scope_label(state: DashboardState) -> str:
    return f"{WINDOW_LABELS[state.window]} · {CATEGORY_LABELS[state.category]}"


# ── Subcommand: leaderboard ───────────────────────────────────────────────────

def cmd_leaderboard(args: argparse.Namespace) -> int:
    """Print ranked developers for a window/category, optionally searched."""
    state = _load_state(args)
    if state.ledger_error:
        logger.error("%s", state.ledger_error)
        return 1

    aggregation = state.aggregate()
    rows = ranked_leaderboard(aggregation.dev_totals, search=state.search, limit=args.limit)

    print(f"Developer leaderboard ({_scope_label(state)}, max date {state.max_date})")
    if not rows:
        print("  (no commits in scope)")
        return 0
    df = pd.DataFrame(
        [(r.rank, r.developer, r.total_commits) for r in rows],
        columns=["rank", "developer", "commits"],
    )
    print(df.to_string(index=False))
    print(f"\nTotal commits in scope: {aggregation.total_commits:,}")
    return 0


# ── Subcommand: table ─────────────────────────────────────────────────────────

def cmd_table(args: argparse.Namespace) -> int:
    """Print developer × repository totals with the requested ordering."""
    state = _load_state(args)
    if state.ledger_error:
        logger.error("%s", state.ledger_error)
        return 1

    state = replace(
        state, sort=SortState(key=SortKey(args.sort), direction=SortDirection(args.order))
    )
    rows = state.table_rows(state.aggregate())[: args.limit]

    print(f"Commits by developer and repository ({_scope_label(state)})")
    if not rows:
        print("  (no matching rows)")
        return 0
    df = pd.DataFrame(
        [(r.rank, r.developer, r.repository, r.total_commits) for r in rows],
        columns=["rank", "developer", "repository", "commits"],
    )
    print(df.to_string(index=False))
    return 0


# ── Subcommand: export ────────────────────────────────────────────────────────

def cmd_export(args: argparse.Namespace) -> int:
    """Write both projections as CSV plus the static figures."""
    state = _load_state(args)
    os.makedirs(args.output_dir, exist_ok=True)

    if state.ledger_error:
        logger.error("Commit ledger unavailable: %s", state.ledger_error)
    else:
        aggregation = state.aggregate()
        stem = f"{state.window.value}_{state.category.value}"
        dev_path = os.path.join(args.output_dir, f"dev_totals_{stem}.csv")
        pair_path = os.path.join(args.output_dir, f"dev_repo_totals_{stem}.csv")
        aggregation.dev_totals_frame().to_csv(dev_path, index=False)
        aggregation.dev_repo_totals_frame().to_csv(pair_path, index=False)
        logger.info("Wrote %s and %s", dev_path, pair_path)

    if state.series_error:
        logger.error("Active-dev series unavailable: %s", state.series_error)

    if not args.no_figures:
        from algo_devboard.viz.figures import generate_all_figures

        generate_all_figures(state.with_slider(args.slider), args.output_dir)

    return 1 if state.ledger_error and state.series_error else 0


# ── Subcommand: dashboard ─────────────────────────────────────────────────────

def cmd_dashboard(args: argparse.Namespace) -> int:
    """Launch the streamlit dashboard with the resolved feed configuration."""
    config = _config(args)
    env = dict(os.environ)
    if config.data_url:
        env["DEVBOARD_DATA_URL"] = config.data_url
    if config.csv_url:
        env["DEVBOARD_CSV_URL"] = config.csv_url

    script = os.path.join(os.path.dirname(__file__), "viz", "dashboard.py")
    cmd = [sys.executable, "-m", "streamlit", "run", script]
    if args.port:
        cmd += ["--server.port", str(args.port)]
    logger.info("Starting dashboard: %s", " ".join(cmd))
    return subprocess.call(cmd, env=env)


# ── Argument parser ───────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="algo-devboard",
        description=(
            "Algorand developer activity: leaderboard, commit table, trend chart.\n"
            "Reads DEVBOARD_DATA_URL / DEVBOARD_CSV_URL from .env automatically."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Top contributors to core repos over the last 90 days
  python -m algo_devboard leaderboard --window last90d --category core

  # Table sorted by repository, filtered to developers matching "ali"
  python -m algo_devboard table --search ali --sort repo --order asc

  # CSV + PNG export from local files
  python -m algo_devboard --data-url devs.json --csv-url commits.csv export -o out/
        """,
    )

    parser.add_argument(
        "--env-file",
        default=None,
        metavar="PATH",
        help="Path to .env file (default: auto-detect .env from the working directory)",
    )
    parser.add_argument(
        "--data-url",
        default=None,
        metavar="URL",
        help="Active-dev series JSON (URL or path; overrides DEVBOARD_DATA_URL)",
    )
    parser.add_argument(
        "--csv-url",
        default=None,
        metavar="URL",
        help="Commit ledger CSV (URL or path; overrides DEVBOARD_CSV_URL)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    def add_scope_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--window",
            default=TimeWindow.LAST_30D.value,
            choices=[w.value for w in TimeWindow],
            help="Time window (default: last30d)",
        )
        p.add_argument(
            "--category",
            default=RepoCategory.ALL.value,
            choices=[c.value for c in RepoCategory],
            help="Repository category (default: all)",
        )

    p_board = subparsers.add_parser("leaderboard", help="Ranked developers by commits")
    add_scope_flags(p_board)
    p_board.add_argument("--search", default="", help="Developer substring (ranks unchanged)")
    p_board.add_argument("--limit", type=int, default=25, metavar="N")
    p_board.set_defaults(func=cmd_leaderboard)

    p_table = subparsers.add_parser("table", help="Developer × repository commit totals")
    add_scope_flags(p_table)
    p_table.add_argument("--search", default="", help="Developer substring")
    p_table.add_argument(
        "--sort", default=SortKey.COMMITS.value, choices=[k.value for k in SortKey]
    )
    p_table.add_argument(
        "--order", default=SortDirection.DESC.value, choices=[d.value for d in SortDirection]
    )
    p_table.add_argument("--limit", type=int, default=50, metavar="N")
    p_table.set_defaults(func=cmd_table)

    p_export = subparsers.add_parser("export", help="Write CSV projections and PNG figures")
    add_scope_flags(p_export)
    p_export.add_argument("-o", "--output-dir", default="devboard_export", metavar="PATH")
    p_export.add_argument(
        "--slider", type=float, default=0.0, metavar="0-100",
        help="Chart zoom for the trend figure (default: 0, whole series)",
    )
    p_export.add_argument("--no-figures", action="store_true", help="Skip figure generation")
    p_export.set_defaults(func=cmd_export)

    p_dash = subparsers.add_parser("dashboard", help="Launch the streamlit dashboard")
    p_dash.add_argument("--port", type=int, default=None)
    p_dash.set_defaults(func=cmd_dashboard)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
