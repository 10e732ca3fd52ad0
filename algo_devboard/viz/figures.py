"""
algo_devboard/viz/figures.py — Static figure export.

Writes PNG versions of the dashboard charts for a given DashboardState, for
reports and for environments without a browser.

Usage:
    from algo_devboard.viz.figures import generate_all_figures
    paths = generate_all_figures(state, output_dir="figures")
    # {"active_devs.png": "/abs/path/...", "leaderboard.png": "/abs/path/..."}
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import matplotlib
try:
    matplotlib.use("Agg")
except Exception:
    pass  # backend already set

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import numpy as np

from algo_devboard.metrics.repo_classifier import CATEGORY_LABELS
from algo_devboard.metrics.time_window import WINDOW_LABELS

if TYPE_CHECKING:
    from algo_devboard.state import DashboardState, DashboardView
    from algo_devboard.viz.theme import ThemeTokens

logger = logging.getLogger(__name__)

DPI = 150


def _style_axes(ax, theme: "ThemeTokens") -> None:
    ax.set_facecolor(theme.chart_bg)
    ax.tick_params(colors=theme.text, labelsize=8)
    for spine in ax.spines.values():
        spine.set_color(theme.table_border)
    ax.grid(True, color=theme.grid, linewidth=0.8)
    ax.set_axisbelow(True)


def plot_active_devs(view: "DashboardView", path: str) -> str:
    """Active developer trend over the visible chart range."""
    theme = view.theme
    fig, ax = plt.subplots(figsize=(10, 4), facecolor=theme.bg)
    _style_axes(ax, theme)

    if view.chart_points:
        ax.plot(
            [p.date for p in view.chart_points],
            [p.active_dev_count for p in view.chart_points],
            color=theme.primary,
            linewidth=2,
            label="Active Developers",
        )
        for p in view.chart_labels:
            ax.scatter([p.date], [p.active_dev_count], color=theme.marker, s=12, zorder=3)
            ax.annotate(
                str(p.active_dev_count),
                (p.date, p.active_dev_count),
                textcoords="offset points",
                xytext=(0, 6),
                ha="center",
                fontsize=7,
                color=theme.text,
            )
        ax.xaxis.set_major_formatter(mdates.DateFormatter("%Y-%m-%d"))
        ax.legend(loc="upper left", fontsize=8)
    else:
        ax.text(0.5, 0.5, "No data", ha="center", va="center",
                transform=ax.transAxes, color=theme.text)

    ax.set_xlabel("Date", color=theme.text)
    ax.set_ylabel("Active Devs", color=theme.text)
    fig.autofmt_xdate()
    fig.tight_layout()
    fig.savefig(path, dpi=DPI, facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


def plot_leaderboard(view: "DashboardView", path: str, title: str, top_n: int = 20) -> str:
    """Horizontal bar chart of the top *top_n* developers."""
    theme = view.theme
    rows = view.leaderboard[:top_n]
    fig, ax = plt.subplots(figsize=(8, max(3.0, 0.32 * len(rows) + 1)), facecolor=theme.bg)
    _style_axes(ax, theme)

    if rows:
        y = np.arange(len(rows))
        ax.barh(y, [r.total_commits for r in rows], color=theme.primary)
        ax.set_yticks(y)
        ax.set_yticklabels([f"#{r.rank} {r.developer}" for r in rows])
        ax.invert_yaxis()
    else:
        ax.text(0.5, 0.5, "No commits in scope", ha="center", va="center",
                transform=ax.transAxes, color=theme.text)

    ax.set_xlabel("Commits", color=theme.text)
    ax.set_title(title, color=theme.primary, fontsize=10)
    fig.tight_layout()
    fig.savefig(path, dpi=DPI, facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


def generate_all_figures(state: "DashboardState", output_dir: str) -> dict[str, str]:
    """
    Render every static figure for *state* into *output_dir*.

    Returns:
        Dict of file name → absolute path of each written figure.
    """
    os.makedirs(output_dir, exist_ok=True)
    view = state.view()
    title = (
        f"Commits: {WINDOW_LABELS[state.window]} · {CATEGORY_LABELS[state.category]}"
    )

    paths: dict[str, str] = {}
    for name, render in (
        ("active_devs.png", lambda p: plot_active_devs(view, p)),
        ("leaderboard.png", lambda p: plot_leaderboard(view, p, title)),
    ):
        path = os.path.abspath(os.path.join(output_dir, name))
        paths[name] = render(path)
        logger.info("Figure written: %s", path)
    return paths
