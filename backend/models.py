from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Row shapes of the hosted database tables. Numeric and date columns stay
# loosely typed: the valuation coerces them itself and treats junk as zero.


class ExpenseRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    item: Optional[str] = None
    amount: Any = None


class BondRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[Any] = None
    assignment_id: Optional[Any] = None
    principal: Any = None

    interest_1_rate: Any = None
    interest_1_start_date: Any = None
    interest_1_end_date: Any = None

    interest_2_rate: Any = None
    interest_2_start_date: Any = None
    interest_2_end_date: Any = None

    expenses: Optional[List[ExpenseRow]] = Field(default_factory=list)


class EnforcementRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[Any] = None
    status: Optional[str] = None
    amount: Any = None


class DebtorRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None


class AssignmentRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Any
    created_at: Optional[str] = None
    bonds: List[BondRow] = Field(default_factory=list)
    enforcements: List[EnforcementRow] = Field(default_factory=list)
    assignment_debtors: List[DebtorRow] = Field(default_factory=list)

    @property
    def bond(self) -> Optional[BondRow]:
        return self.bonds[0] if self.bonds else None
