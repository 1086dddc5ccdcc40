"""Collection figures for assignments: what is owed, what was recovered."""

from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import BaseModel

from backend.core.valuation import amount_or_zero, finite_or_zero, safe_sum, utc_now, value_bond
from backend.models import AssignmentRow

CLOSED = "closed"
DEFAULT_PAGE_SIZE = 10


class AssignmentRecovery(BaseModel):
    assignmentId: str
    debtors: List[str]
    principal: float
    totalOwed: int
    collected: float
    collectionRate: float


class RecoveryOverview(BaseModel):
    assignmentCount: int
    totalPrincipal: float
    totalCollected: float
    outstanding: float
    averageCollectionRate: float


class RecoveryPage(BaseModel):
    page: int
    pageSize: int
    totalPages: int
    rows: List[AssignmentRecovery]


class RecoverySummary(BaseModel):
    overview: RecoveryOverview
    page: RecoveryPage


def collected_amount(assignment: AssignmentRow) -> float:
    """Sum of closed enforcement amounts."""
    return safe_sum(
        amount_or_zero(enforcement.amount)
        for enforcement in assignment.enforcements
        if enforcement.status == CLOSED
    )


def principal_of(assignment: AssignmentRow) -> float:
    bond = assignment.bond
    return amount_or_zero(bond.principal) if bond else 0.0


def rate_percent(part: float, whole: float) -> float:
    return finite_or_zero((part / whole) * 100) if whole > 0 else 0.0


def assignment_recovery(assignment: AssignmentRow, now: Optional[datetime] = None) -> AssignmentRecovery:
    owed = value_bond(assignment.bond, now).totalOwed
    collected = collected_amount(assignment)
    return AssignmentRecovery(
        assignmentId=str(assignment.id),
        debtors=[debtor.name or "" for debtor in assignment.assignment_debtors],
        principal=principal_of(assignment),
        totalOwed=owed,
        collected=collected,
        collectionRate=rate_percent(collected, owed),
    )


def recovery_overview(assignments: Sequence[AssignmentRow]) -> RecoveryOverview:
    """
    Portfolio totals. The average rate is measured against principal, not
    against the interest-bearing total.
    """
    total_principal = safe_sum(principal_of(a) for a in assignments)
    total_collected = safe_sum(collected_amount(a) for a in assignments)
    return RecoveryOverview(
        assignmentCount=len(assignments),
        totalPrincipal=total_principal,
        totalCollected=total_collected,
        outstanding=total_principal - total_collected,
        averageCollectionRate=rate_percent(total_collected, total_principal),
    )


def paginate(items: Sequence, page: int, page_size: int) -> tuple[list, int]:
    """Slice for a 1-based page; returns (items, total_pages)."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total_pages = math.ceil(len(items) / page_size)
    if page < 1:
        return [], total_pages
    start = (page - 1) * page_size
    return list(items[start : start + page_size]), total_pages


def summarize_assignments(
    assignments: Sequence[AssignmentRow],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    now: Optional[datetime] = None,
) -> RecoverySummary:
    moment = now or utc_now()
    page_items, total_pages = paginate(assignments, page, page_size)
    return RecoverySummary(
        overview=recovery_overview(assignments),
        page=RecoveryPage(
            page=page,
            pageSize=page_size,
            totalPages=total_pages,
            rows=[assignment_recovery(a, moment) for a in page_items],
        ),
    )
