"""Data contracts for the assignment recovery summary."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from backend.models import AssignmentRow


class SummaryRequest(BaseModel):
    assignments: List[AssignmentRow] = Field(default_factory=list)
    page: int = Field(1, ge=1, description="1-based page number.")
    pageSize: Optional[int] = Field(None, ge=1, le=200, description="Rows per page; server default when omitted.")
    now: Optional[datetime] = None
