from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from backend.core.valuation import DYNAMIC, parse_amount, parse_date


class BondFormValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class InterestBlock(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start_date: Optional[Union[datetime, date]] = None
    end_date: Optional[Union[datetime, date]] = None
    rate: Optional[Union[float, str]] = None
    dynamic_end: bool = False


class ExpenseEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    item: str = ""
    amount: Optional[Union[float, str]] = None


class BondForm(BaseModel):
    """What staff submit from the bond dialog."""

    model_config = ConfigDict(extra="forbid")

    assignment_id: Optional[Union[int, str]] = None
    principal: Optional[Union[float, str]] = None
    interest1: InterestBlock = Field(default_factory=InterestBlock)
    interest2: InterestBlock = Field(default_factory=InterestBlock)
    expenses: List[ExpenseEntry] = Field(default_factory=list)


def _iso(value: Optional[Union[datetime, date]]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _end_value(block: InterestBlock) -> Optional[str]:
    if block.dynamic_end:
        return DYNAMIC
    return _iso(block.end_date)


def validate_form(form: BondForm) -> List[str]:
    errors: List[str] = []

    principal = parse_amount(form.principal)
    if form.principal is None or form.principal == "":
        errors.append("principal is required")
    elif principal is None:
        errors.append("principal must be a number")
    elif principal < 0:
        errors.append("principal must not be negative")

    for label, block in (("interest1", form.interest1), ("interest2", form.interest2)):
        if block.rate not in (None, "") and parse_amount(block.rate) is None:
            errors.append(f"{label} rate must be a number")
        if block.dynamic_end or block.start_date is None or block.end_date is None:
            continue
        if parse_date(block.end_date) < parse_date(block.start_date):
            errors.append(f"{label} end date is before its start date")

    for index, expense in enumerate(form.expenses):
        amount = parse_amount(expense.amount)
        if not expense.item.strip() or amount is None or amount <= 0:
            errors.append(f"expense {index + 1} needs an item and an amount above zero")

    return errors


def build_bond_record(form: BondForm) -> Dict[str, Any]:
    """Validate the form and turn it into a bonds table row."""
    errors = validate_form(form)
    if errors:
        raise BondFormValidationError(errors)

    record: Dict[str, Any] = {
        "principal": parse_amount(form.principal),
        "interest_1_start_date": _iso(form.interest1.start_date),
        "interest_1_end_date": _end_value(form.interest1),
        "interest_1_rate": parse_amount(form.interest1.rate),
        "interest_2_start_date": _iso(form.interest2.start_date),
        "interest_2_end_date": _end_value(form.interest2),
        "interest_2_rate": parse_amount(form.interest2.rate),
        "expenses": [
            {"item": expense.item.strip(), "amount": parse_amount(expense.amount)}
            for expense in form.expenses
        ],
    }
    if form.assignment_id is not None:
        record["assignment_id"] = form.assignment_id
    return record
