"""Leave request models and per-day expansion."""

import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import field_validator

from hr_portal.models.base import BaseDataModel, coerce_date


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LeaveCategory(str, Enum):
    SICK = "SICK"
    CASUAL = "CASUAL"
    PLANNED = "PLANNED"
    UNPLANNED = "UNPLANNED"


class LeaveRequest(BaseDataModel):
    """A leave request as returned by the leave summary endpoint."""

    leave_id: Optional[str] = None
    employee_id: Optional[str] = None
    leave_category_type: Optional[str] = None
    from_date: Optional[dt.date] = None
    to_date: Optional[dt.date] = None
    leave_duration: Optional[float] = None
    status: Optional[str] = None
    subject: str = ""

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def _trim_date(cls, v):
        return coerce_date(v)

    @field_validator("subject", mode="before")
    @classmethod
    def _null_text(cls, v):
        return "" if v is None else v


class LeaveDay(BaseDataModel):
    """One calendar day covered by an approved leave request."""

    date: dt.date
    leave_category: str
    duration: float = 0.0


def expand_leave_days(requests: List[LeaveRequest]) -> List[LeaveDay]:
    """Expand approved leave requests into one LeaveDay per covered date.

    Requests that are not APPROVED, lack either date, have an unrecognised
    category, or end before they start are skipped. The request's duration is
    spread evenly over its days.
    """
    valid_categories = {category.value for category in LeaveCategory}
    days: List[LeaveDay] = []

    for request in requests:
        if request.status != LeaveStatus.APPROVED.value:
            continue
        if request.from_date is None or request.to_date is None:
            continue
        if request.leave_category_type not in valid_categories:
            continue
        if request.to_date < request.from_date:
            continue

        span = (request.to_date - request.from_date).days + 1
        daily_duration = (request.leave_duration or 0.0) / span

        for offset in range(span):
            days.append(
                LeaveDay(
                    date=request.from_date + dt.timedelta(days=offset),
                    leave_category=request.leave_category_type,
                    duration=daily_duration,
                )
            )

    return days
