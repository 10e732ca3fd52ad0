"""
algo_devboard.ingestion — Raw feed loading and parsing.

Modules:
    feeds          — fetch the JSON series and the CSV ledger (URL or path).
    ledger_parser  — CSV ledger text → CommitRecord list + max date.
    active_devs    — {date: count} mapping → sorted ActiveDevPoint list.
"""

from algo_devboard.ingestion.active_devs import ActiveDevPoint, load_active_dev_series
from algo_devboard.ingestion.ledger_parser import (
    CommitRecord,
    NoValidDatesError,
    get_max_date,
    parse_ledger_csv,
    require_max_date,
)
