from __future__ import annotations

from pathlib import Path
from typing import List


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"
DB_PATH = OUT_DIR / "history.db"

LOG_LEVEL = "INFO"

# Unknown or unsupported template ids render with this descriptor.
GENERIC_TEMPLATE_ID = "standard"

# Offered when there is not enough render history to suggest a tax rate.
COMMON_TAX_RATES: List[float] = [8, 10, 15, 20, 25]

MONEY_PLACES = 2

# Inputs a user must fill in before an invoice counts as complete.
REQUIRED_INPUTS = ["company.name", "client.name", "invoice_number"]


def set_out_dir(path: Path) -> None:
    global OUT_DIR, DB_PATH
    OUT_DIR = path
    DB_PATH = OUT_DIR / "history.db"
