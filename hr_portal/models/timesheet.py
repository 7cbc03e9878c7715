"""Timesheet models.

``TimesheetRecord`` is the strict view model produced from the backend's
timesheet list DTO; ``TimesheetDraft`` is the create/update payload.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from hr_portal.models.base import BaseDataModel, blank_to_none, coerce_date


class TimesheetStatus(str, Enum):
    """Status values the backend is known to use.

    The backend field itself is free-form, so models keep ``status`` as a
    plain string and compare against these values.
    """

    DRAFT = "Draft"
    PENDING = "Pending"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class TimesheetRecord(BaseDataModel):
    """A persisted timesheet entry for one employee, one day and one task.

    Attributes:
        timesheet_id: Backend identifier; None until persisted
        work_date: Day the hours were worked
        hours_worked: Hours worked (backend field ``workedHours``)
        task_name: Task label the register groups rows by
        task_description: Free text
        status: Backend status (see TimesheetStatus)
        employee_id: Owning employee, when the endpoint includes it
        employee_name: Owning employee's display name
        client_name: Client the work was billed to
        project_name: Project, when known

    Example:
        >>> record = TimesheetRecord.model_validate({
        ...     "timesheetId": "ts-1",
        ...     "workDate": "2024-01-01",
        ...     "workedHours": 8,
        ...     "taskName": "Build",
        ... })
        >>> record.hours_worked, record.status
        (8.0, 'Draft')
    """

    timesheet_id: Optional[str] = None
    work_date: dt.date
    hours_worked: float = Field(
        default=0.0, validation_alias=AliasChoices("workedHours", "hoursWorked")
    )
    task_name: str = ""
    task_description: str = ""
    status: str = TimesheetStatus.DRAFT.value
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    client_name: Optional[str] = None
    project_name: Optional[str] = None

    @field_validator("timesheet_id", "employee_id", mode="before")
    @classmethod
    def _blank_ids(cls, v):
        return blank_to_none(v)

    @field_validator("work_date", mode="before")
    @classmethod
    def _trim_date(cls, v):
        return coerce_date(v)

    @field_validator("hours_worked", mode="before")
    @classmethod
    def _null_hours(cls, v):
        return 0.0 if v is None else v

    @field_validator("task_name", "task_description", mode="before")
    @classmethod
    def _null_text(cls, v):
        return "" if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return TimesheetStatus.DRAFT.value
        return v

    @property
    def is_submitted(self) -> bool:
        """Whether this entry has been handed to the manager."""
        return self.status == TimesheetStatus.SUBMITTED.value


class TimesheetDraft(BaseDataModel):
    """Payload for creating or updating a single timesheet entry.

    ``client_ref`` is a client-generated correlation id. The create endpoint
    echoes it back so created ids can be matched to the cell they came from.
    """

    work_date: dt.date
    hours_worked: float = Field(..., ge=0, allow_inf_nan=False)
    task_name: str
    task_description: str = ""
    timesheet_id: Optional[str] = None
    client_ref: Optional[str] = None


class CreatedTimesheet(BaseDataModel):
    """One item of the create endpoint's response."""

    timesheet_id: Optional[str] = None
    work_date: Optional[dt.date] = None
    task_name: Optional[str] = None
    client_ref: Optional[str] = None

    @field_validator("timesheet_id", "client_ref", mode="before")
    @classmethod
    def _blank_ids(cls, v):
        return blank_to_none(v)

    @field_validator("work_date", mode="before")
    @classmethod
    def _trim_date(cls, v):
        return coerce_date(v)
