"""Data contracts for bond valuation endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from backend.core.valuation import BondValuation
from backend.models import BondRow


class ValuationRequest(BaseModel):
    """A single bond row and, optionally, the moment to value it at."""

    bond: Optional[BondRow] = Field(None, description="Row of the bonds table.")
    now: Optional[datetime] = Field(
        None,
        description="Evaluation moment; dynamic end dates resolve to it. Defaults to the server clock.",
    )


class BatchValuationRequest(BaseModel):
    bonds: List[Optional[BondRow]] = Field(default_factory=list)
    now: Optional[datetime] = None


class ValuationDisplay(BaseModel):
    """Pre-formatted strings for the bond details panel."""

    principal: str
    interest1: str
    interest2: str
    expenses: str
    totalOwed: str
    period1: str
    period2: str
    rate1: str
    rate2: str


class ValuationResponse(BondValuation):
    display: ValuationDisplay


class BatchValuationResponse(BaseModel):
    valuations: List[ValuationResponse]
