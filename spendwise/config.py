"""Configuration for the budget tracker.

Values can be overridden through environment variables so the app can be
pointed at another data directory (e.g. for a demo dataset).
"""

from __future__ import annotations

import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("SPENDWISE_DATA_DIR", _PROJECT_ROOT / "data"))

TRANSACTIONS_FILE = "transactions.json"
CATEGORIES_FILE = "categories.json"
GOALS_FILE = "goals.json"

CURRENCY = os.getenv("SPENDWISE_CURRENCY", "Rs")
LOG_LEVEL = os.getenv("SPENDWISE_LOG_LEVEL", "INFO").upper()

# number of y-axis gradations on the category chart
CHART_TICKS = 5
RECENT_LIMIT = 10

REPORT_FILENAME = "SpendWise_Budget_Report.pdf"


def format_money(value: float, signed: bool = False) -> str:
    text = f"{CURRENCY} {abs(value):,.2f}"
    if signed:
        return ("-" if value < 0 else "+") + text
    return f"-{text}" if value < 0 else text
