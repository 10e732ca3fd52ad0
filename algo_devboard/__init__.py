"""
algo_devboard — Contributor activity dashboard for the Algorand ecosystem.

Turns two public feeds into dashboard views:
- the daily active-developer series (trend chart),
- the per-commit ledger (leaderboard + developer/repository table).

The aggregation pipeline lives in algo_devboard.metrics; everything under
algo_devboard.viz is a thin consumer of its output.
"""

__version__ = "0.1.0"
