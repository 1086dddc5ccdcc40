"""Display strings for bond figures. Presentation only."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Optional

from backend.core.valuation import parse_amount, parse_date

MISSING = "-"


def format_amount(value: Any, unit: str = "원") -> str:
    """Floor to the unit and group thousands: 1150000.7 -> "1,150,000원"."""
    number = parse_amount(value)
    if number is None:
        return MISSING
    return f"{math.floor(number):,}{unit}"


def format_rate(value: Any) -> str:
    number = parse_amount(value)
    if number is None:
        return MISSING
    return f"{number:g}%"


def format_period_date(value: Any, now: Optional[datetime] = None) -> str:
    """ISO calendar date; the dynamic marker renders as the evaluation date."""
    moment = parse_date(value, now)
    if moment is None:
        return MISSING
    return moment.date().isoformat()
