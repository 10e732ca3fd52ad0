"""
algo_devboard/viz/theme.py — Design tokens for the light and dark themes.

A closed set of named colours. Consumers take a ThemeTokens instance from the
dashboard state (theme_for(state.dark_mode)) instead of looking colours up by
string key.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeTokens:
    bg: str
    primary: str
    secondary: str
    text: str
    chart_bg: str
    controls_bg: str
    table_border: str
    table_header: str
    table_row_even: str
    table_row_odd: str
    button_active: str
    button_inactive: str
    button_active_text: str
    grid: str
    marker: str


LIGHT = ThemeTokens(
    bg="#ffffff",
    primary="#2d2df1",
    secondary="#001324",
    text="#001324",
    chart_bg="#f9fafb",
    controls_bg="#f3f4f6",
    table_border="#e5e7eb",
    table_header="#f3f4f6",
    table_row_even="#ffffff",
    table_row_odd="#f9fafb",
    button_active="#2d2df1",
    button_inactive="#e5e7e9",
    button_active_text="#ffffff",
    grid="#e2e8f0",
    marker="#001324",
)

DARK = ThemeTokens(
    bg="#001324",
    primary="#17cac6",
    secondary="#ffffff",
    text="#ffffff",
    chart_bg="#0a192f",
    controls_bg="#0f2942",
    table_border="#1e3a5f",
    table_header="#0f2942",
    table_row_even="#0a192f",
    table_row_odd="#112240",
    button_active="#17cac6",
    button_inactive="#99a1a7",
    button_active_text="#ffffff",
    grid="#2d3748",
    marker="#2d2df1",
)


def theme_for(dark_mode: bool) -> ThemeTokens:
    return DARK if dark_mode else LIGHT
