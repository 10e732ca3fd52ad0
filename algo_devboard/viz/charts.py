"""
algo_devboard/viz/charts.py — Interactive Plotly figures for the dashboard.

Pure figure builders: they take derived views and theme tokens and return a
plotly Figure, so they can be rendered by streamlit or written to HTML. The
profile helpers link each contributor to their GitHub page and avatar.
"""

import logging
from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from algo_devboard.ingestion.active_devs import ActiveDevPoint
from algo_devboard.metrics.ranking import RankedDeveloper
from algo_devboard.viz.theme import LIGHT, ThemeTokens

logger = logging.getLogger(__name__)

GITHUB_BASE_URL = "https://github.com"


def _base_layout(theme: ThemeTokens, **kwargs) -> go.Layout:
    return go.Layout(
        paper_bgcolor=theme.chart_bg,
        plot_bgcolor=theme.chart_bg,
        font=dict(color=theme.text, size=11),
        margin=dict(l=40, r=20, t=40, b=40),
        **kwargs,
    )


def active_devs_figure(
    points: Sequence[ActiveDevPoint],
    labels: Sequence[ActiveDevPoint] = (),
    theme: ThemeTokens = LIGHT,
) -> go.Figure:
    """
    Line chart of active developers over the visible range.

    Args:
        points: Visible slice of the series (select_chart_range()).
        labels: Points to annotate with their value (month ends).
        theme:  Design tokens for colours.
    """
    fig = go.Figure(
        layout=_base_layout(
            theme,
            xaxis=dict(title="Date", gridcolor=theme.grid),
            yaxis=dict(title="Active Devs", gridcolor=theme.grid),
            showlegend=True,
            legend=dict(orientation="h", y=-0.2),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[p.date for p in points],
            y=[p.active_dev_count for p in points],
            mode="lines",
            name="Active Developers",
            line=dict(color=theme.primary, width=2),
        )
    )
    if labels:
        fig.add_trace(
            go.Scatter(
                x=[p.date for p in labels],
                y=[p.active_dev_count for p in labels],
                mode="markers+text",
                text=[str(p.active_dev_count) for p in labels],
                textposition="top center",
                marker=dict(color=theme.marker, size=6),
                showlegend=False,
                hoverinfo="skip",
            )
        )
    return fig


def leaderboard_figure(
    rows: Sequence[RankedDeveloper],
    theme: ThemeTokens = LIGHT,
    title: str = "Top Contributors",
) -> go.Figure:
    """Horizontal bar chart of leaderboard rows, highest rank on top."""
    ordered = list(reversed(rows))
    fig = go.Figure(
        data=[
            go.Bar(
                x=[r.total_commits for r in ordered],
                y=[f"#{r.rank} {r.developer}" for r in ordered],
                orientation="h",
                marker_color=theme.primary,
            )
        ],
        layout=_base_layout(
            theme,
            title=title,
            xaxis=dict(title="Commits", gridcolor=theme.grid),
            height=max(300, 22 * len(ordered) + 80),
        ),
    )
    return fig


# ── Contributor profiles ──────────────────────────────────────────────────────

def profile_url(developer: str) -> str:
    """GitHub profile page for a ledger developer login."""
    return f"{GITHUB_BASE_URL}/{developer}"


def avatar_url(developer: str, size: int = 80) -> str:
    """GitHub avatar image for a developer login, *size* pixels square."""
    return f"{GITHUB_BASE_URL}/{developer}.png?size={size}"


def leaderboard_frame(rows: Sequence[RankedDeveloper]) -> pd.DataFrame:
    """Leaderboard rows as a table with avatar and profile columns."""
    return pd.DataFrame(
        {
            "Rank": [r.rank for r in rows],
            "Avatar": [avatar_url(r.developer, size=40) for r in rows],
            "Developer": [r.developer for r in rows],
            "Commits": [r.total_commits for r in rows],
            "Profile": [profile_url(r.developer) for r in rows],
        },
        columns=["Rank", "Avatar", "Developer", "Commits", "Profile"],
    )
