"""Data models for the HR portal client.

This package contains Pydantic view models for backend resources:
- BaseDataModel: camelCase-aware base class
- WebResponse: the response envelope every endpoint returns
- TimesheetRecord / TimesheetDraft / CreatedTimesheet: timesheet entries
- HolidayCalendarEntry / HolidayScheme: holiday reference data
- LeaveRequest / LeaveDay: approved leave, expanded per day
- Employee / Client / User / Notification: people and inbox
- AuthSession: credentials injected into the API client
"""

from hr_portal.models.auth import AuthSession
from hr_portal.models.base import BaseDataModel
from hr_portal.models.envelope import WebResponse
from hr_portal.models.holiday import (
    HolidayCalendarEntry,
    HolidayCalendarModel,
    HolidayScheme,
    HolidaySchemeModel,
    HolidayType,
    RecurrenceRule,
)
from hr_portal.models.leave import (
    LeaveCategory,
    LeaveDay,
    LeaveRequest,
    LeaveStatus,
    expand_leave_days,
)
from hr_portal.models.people import (
    Address,
    Client,
    ClientModel,
    Employee,
    EmployeeUpdate,
    Notification,
    Role,
    User,
)
from hr_portal.models.timesheet import (
    CreatedTimesheet,
    TimesheetDraft,
    TimesheetRecord,
    TimesheetStatus,
)

__all__ = [
    "Address",
    "AuthSession",
    "BaseDataModel",
    "Client",
    "ClientModel",
    "CreatedTimesheet",
    "Employee",
    "EmployeeUpdate",
    "HolidayCalendarEntry",
    "HolidayCalendarModel",
    "HolidayScheme",
    "HolidaySchemeModel",
    "HolidayType",
    "LeaveCategory",
    "LeaveDay",
    "LeaveRequest",
    "LeaveStatus",
    "Notification",
    "RecurrenceRule",
    "Role",
    "TimesheetDraft",
    "TimesheetRecord",
    "TimesheetStatus",
    "User",
    "WebResponse",
    "expand_leave_days",
]
