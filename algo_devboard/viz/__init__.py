"""
algo_devboard.viz — Presentation layer.

Modules:
    theme      — light/dark design tokens (ThemeTokens).
    charts     — Plotly figures for the active-dev trend and leaderboard.
    figures    — matplotlib PNG export of the same charts.
    dashboard  — Streamlit app; run with `python -m algo_devboard dashboard`.

Everything here consumes DashboardState.view(); no aggregation happens in
this package.
"""
