"""
algo_devboard/viz/dashboard.py — Streamlit dashboard.

Sections:
    1. Active Developers  — trend chart with a zoom slider
    2. Leaderboard        — top-3 podium + remaining contributors
    3. Commits by Developer and Repository — searchable, sortable table

All controls live in one DashboardState kept in st.session_state; every
widget callback replaces it with a new state, and the page renders
state.view(). The two feeds report their errors independently.

Usage:
    streamlit run algo_devboard/viz/dashboard.py
    python -m algo_devboard dashboard
"""

import logging

import pandas as pd
import streamlit as st

from algo_devboard.config import DevboardConfig, config_from_env
from algo_devboard.metrics.ranking import SortDirection, SortKey
from algo_devboard.metrics.repo_classifier import CATEGORY_LABELS, RepoCategory
from algo_devboard.metrics.time_window import WINDOW_LABELS, TimeWindow
from algo_devboard.pipeline import DashboardData, initial_state, load_dashboard_data
from algo_devboard.state import DashboardState, DashboardView
from algo_devboard.viz.charts import (
    active_devs_figure,
    avatar_url,
    leaderboard_figure,
    leaderboard_frame,
    profile_url,
)

logger = logging.getLogger(__name__)

STATE_KEY = "devboard_state"
COMPACT_KEY = "compact_layout"

SORT_COLUMNS = {
    SortKey.DEV: "Developer",
    SortKey.REPO: "Repository",
    SortKey.COMMITS: "Commits",
}


@st.cache_data(show_spinner="Loading developer data...")
def _load(data_url, csv_url, timeout) -> DashboardData:
    config = DevboardConfig(data_url=data_url, csv_url=csv_url, http_timeout_s=timeout)
    return load_dashboard_data(config)


def _state() -> DashboardState:
    return st.session_state[STATE_KEY]


def _update(method: str, *args) -> None:
    st.session_state[STATE_KEY] = getattr(_state(), method)(*args)


def _on_widget(method: str, widget_key: str) -> None:
    _update(method, st.session_state[widget_key])


def _render_sidebar(state: DashboardState) -> None:
    st.sidebar.toggle(
        "Dark mode",
        value=state.dark_mode,
        key="dark_mode",
        on_change=_on_widget,
        args=("with_dark_mode", "dark_mode"),
    )
    st.sidebar.toggle(
        "Compact layout",
        key=COMPACT_KEY,
        help="Month-end labels appear only when zoomed in further.",
    )
    windows = list(TimeWindow)
    st.sidebar.radio(
        "Time period",
        windows,
        index=windows.index(state.window),
        format_func=lambda w: WINDOW_LABELS[w],
        key="window",
        on_change=_on_widget,
        args=("with_window", "window"),
    )
    categories = list(RepoCategory)
    st.sidebar.radio(
        "Repositories",
        categories,
        index=categories.index(state.category),
        format_func=lambda c: CATEGORY_LABELS[c],
        key="category",
        on_change=_on_widget,
        args=("with_category", "category"),
    )


def _render_active_devs(state: DashboardState, view: DashboardView) -> None:
    st.header("Active Developers")
    if state.series_error:
        st.error(state.series_error)
        return
    if not state.series:
        st.info("No active developer data available.")
        return

    st.plotly_chart(
        active_devs_figure(view.chart_points, view.chart_labels, view.theme),
        use_container_width=True,
    )
    st.slider(
        "Zoom",
        min_value=0.0,
        max_value=100.0,
        step=0.1,
        value=float(state.slider_value),
        key="slider",
        on_change=_on_widget,
        args=("with_slider", "slider"),
    )
    start, end = state.chart_domain
    st.caption(f"Series covers {start:%Y-%m-%d} to {end:%Y-%m-%d}.")


def _render_leaderboard(state: DashboardState, view: DashboardView) -> None:
    st.header("Developer Leaderboard")
    if state.ledger_error:
        st.error(state.ledger_error)
        return
    if not view.leaderboard:
        st.info("No commits in the selected period.")
        return

    columns = st.columns(len(view.podium))
    for col, entry in zip(columns, view.podium):
        col.image(avatar_url(entry.developer), width=64)
        col.metric(f"#{entry.rank} {entry.developer}", f"{entry.total_commits:,} commits")
        col.markdown(f"[GitHub profile]({profile_url(entry.developer)})")

    if view.runners_up:
        st.subheader("Other Top Contributors")
        st.plotly_chart(
            leaderboard_figure(view.runners_up, view.theme, title=""),
            use_container_width=True,
        )
        st.dataframe(
            leaderboard_frame(view.runners_up),
            use_container_width=True,
            hide_index=True,
            column_config={
                "Avatar": st.column_config.ImageColumn("Avatar", width="small"),
                "Profile": st.column_config.LinkColumn("Profile", display_text="GitHub"),
            },
        )


def _render_commit_table(state: DashboardState, view: DashboardView) -> None:
    st.header("Commits by Developer and Repository")
    if state.ledger_error:
        st.error(state.ledger_error)
        return

    st.text_input(
        "Search Developer",
        value=state.search,
        key="search",
        on_change=_on_widget,
        args=("with_search", "search"),
    )

    buttons = st.columns(len(SORT_COLUMNS))
    for col, (key, label) in zip(buttons, SORT_COLUMNS.items()):
        if state.sort.key is key:
            arrow = "▲" if state.sort.direction is SortDirection.ASC else "▼"
            label = f"{label} {arrow}"
        col.button(label, key=f"sort_{key.value}", on_click=_update, args=("with_sort", key))

    if not view.table:
        st.info("No matching rows.")
        return

    df = pd.DataFrame(
        [(r.rank, r.developer, r.repository, r.total_commits) for r in view.table],
        columns=["Rank", "Developer", "Repository", "Commits"],
    )
    st.dataframe(df, use_container_width=True, hide_index=True)


def run_dashboard(config: DevboardConfig = None) -> None:
    """
    Launch the dashboard page.

    Args:
        config: DevboardConfig; defaults to config_from_env().
    """
    config = config or config_from_env()

    st.set_page_config(page_title="Algorand Developer Dashboard", layout="wide")

    if STATE_KEY not in st.session_state:
        data = _load(config.data_url, config.csv_url, config.http_timeout_s)
        st.session_state[STATE_KEY] = initial_state(data, config)

    state = _state()
    view = state.view(compact=st.session_state.get(COMPACT_KEY, False))

    st.title("Algorand Developer Activity")
    _render_sidebar(state)
    _render_active_devs(state, view)
    _render_leaderboard(state, view)
    _render_commit_table(state, view)


if __name__ == "__main__":
    # `streamlit run dashboard.py` executes the module as __main__.
    run_dashboard()
