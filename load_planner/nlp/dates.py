# dates.py
from __future__ import annotations

from typing import Optional

import dateparser


def normalize_date(raw: Optional[str]) -> Optional[str]:
    """ISO date (``YYYY-MM-DD``) for a raw US-style date string, or None.

    Dates without a year resolve to the next occurrence, as pickup and
    delivery dates in a quote request lie ahead.
    """
    if not raw:
        return None
    dt = dateparser.parse(
        raw,
        languages=["en"],
        settings={"PREFER_DATES_FROM": "future", "DATE_ORDER": "MDY"},
    )
    if dt is None:
        return None
    return dt.date().isoformat()
