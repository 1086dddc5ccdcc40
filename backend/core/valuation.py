"""Bond valuation: simple interest over up to two periods plus flat expenses."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DYNAMIC = "dynamic"
MS_PER_YEAR = 1000 * 60 * 60 * 24 * 365.25


class BondValuation(BaseModel):
    """Derived figures for one bond at one evaluation moment."""

    principal: float
    interest1: float
    interest2: float
    expenses: float
    total: float
    totalOwed: int
    evaluatedAt: datetime


def parse_amount(value: Any) -> Optional[float]:
    """
    Strict numeric coercion. Returns None for anything that is not a plain
    number or a plain numeric string ("10,000" and "" both fail).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float, Decimal)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        logger.debug("unparseable amount %r treated as zero", value)
        return None
    if not math.isfinite(number):
        return None
    return number


def amount_or_zero(value: Any) -> float:
    number = parse_amount(value)
    return 0.0 if number is None else number


def finite_or_zero(number: float) -> float:
    return number if math.isfinite(number) else 0.0


def safe_sum(values: Iterable[float]) -> float:
    """Exact float sum; a sum that overflows counts as 0."""
    try:
        return math.fsum(values)
    except OverflowError:
        logger.debug("sum overflowed, treated as zero")
        return 0.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value: Any, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Aware UTC datetime for a date-like value, or None.

    Plain dates are UTC midnight, naive datetimes are taken as UTC and the
    dynamic marker resolves to ``now``.
    """
    if value is None or value == "":
        return None
    if value == DYNAMIC:
        value = now or utc_now()
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            logger.debug("unparseable date %r treated as missing", value)
            return None
    else:
        return None
    try:
        return _as_utc(moment)
    except OverflowError:
        # offsets at the edge of the calendar cannot be shifted to UTC
        logger.debug("out-of-range date %r treated as missing", value)
        return None


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def years_between(start: datetime, end: datetime) -> float:
    elapsed_ms = (end - start).total_seconds() * 1000
    return max(0.0, elapsed_ms / MS_PER_YEAR)


def compute_interest(
    principal: Any,
    rate_percent: Any,
    start_date: Any,
    end_date: Any,
    now: Optional[datetime] = None,
) -> float:
    """
    Simple interest on ``principal`` at ``rate_percent`` a year between the two dates.

    ``end_date`` may be the dynamic marker, in which case it resolves to ``now``
    (wall clock when omitted). Missing dates or non-numeric operands give 0,
    as does a start after the end.
    """
    amount = parse_amount(principal)
    rate = parse_amount(rate_percent)
    if amount is None or rate is None:
        return 0.0

    start = parse_date(start_date, now)
    end = parse_date(end_date, now)
    if start is None or end is None:
        return 0.0

    return finite_or_zero(amount * (rate / 100) * years_between(start, end))


def sum_expenses(expenses: Any) -> float:
    """Sum of expense amounts; bad or missing amounts count as 0."""
    if not isinstance(expenses, (list, tuple)):
        return 0.0
    return safe_sum(_expense_amount(expense) for expense in expenses)


def _expense_amount(expense: Any) -> float:
    if isinstance(expense, Mapping):
        return amount_or_zero(expense.get("amount"))
    return amount_or_zero(getattr(expense, "amount", None))


def _field(bond: Any, name: str) -> Any:
    if isinstance(bond, Mapping):
        return bond.get(name)
    return getattr(bond, name, None)


def _period_interest(bond: Any, index: int, principal: float, now: datetime) -> float:
    return compute_interest(
        principal,
        _field(bond, f"interest_{index}_rate"),
        _field(bond, f"interest_{index}_start_date"),
        _field(bond, f"interest_{index}_end_date"),
        now,
    )


def value_bond(bond: Any, now: Optional[datetime] = None) -> BondValuation:
    """
    Full breakdown for a bond row (mapping or model using the bonds table
    column names). A missing bond values to zero throughout.
    """
    moment = _as_utc(now or utc_now())
    if bond is None:
        return BondValuation(
            principal=0.0,
            interest1=0.0,
            interest2=0.0,
            expenses=0.0,
            total=0.0,
            totalOwed=0,
            evaluatedAt=moment,
        )

    principal = amount_or_zero(_field(bond, "principal"))
    interest1 = _period_interest(bond, 1, principal, moment)
    interest2 = _period_interest(bond, 2, principal, moment)
    expenses = sum_expenses(_field(bond, "expenses"))
    total = finite_or_zero(principal + interest1 + interest2 + expenses)

    return BondValuation(
        principal=principal,
        interest1=interest1,
        interest2=interest2,
        expenses=expenses,
        total=total,
        totalOwed=math.floor(total),
        evaluatedAt=moment,
    )


def total_owed(bond: Any, now: Optional[datetime] = None) -> int:
    """Principal plus both interest periods plus expenses, floored to the unit."""
    return value_bond(bond, now).totalOwed
