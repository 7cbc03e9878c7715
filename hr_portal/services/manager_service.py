"""Manager timesheet review service.

A reporting manager lists their team, reviews one employee's week of
timesheet entries (every status), and approves or rejects them in bulk.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List

import pandas as pd

from hr_portal.models.base import parse_many
from hr_portal.models.envelope import WebResponse, page_items
from hr_portal.models.people import Employee
from hr_portal.models.timesheet import TimesheetRecord
from hr_portal.services.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


@dataclass
class WeekReview:
    """One employee's entries for one week, ready for review.

    Attributes:
        entries: Entries whose work date falls in the week, any status
        matrix: Hours per task (rows) and ISO date (columns), zero-filled,
            with a trailing ``Total`` row
    """

    entries: List[TimesheetRecord] = field(default_factory=list)
    matrix: pd.DataFrame = field(default_factory=pd.DataFrame)

    @property
    def timesheet_ids(self) -> List[str]:
        return [entry.timesheet_id for entry in self.entries if entry.timesheet_id]

    @property
    def statuses(self) -> List[str]:
        return sorted({entry.status for entry in self.entries})


def build_review(records: List[TimesheetRecord], week) -> WeekReview:
    """Keep the week's entries and pivot them into a task-by-day matrix.

    Args:
        records: Entries as returned by ``employee_timesheets``
        week: The ``WeekWindow`` under review

    Returns:
        WeekReview with all seven ISO dates as matrix columns
    """
    entries = [record for record in records if week.contains(record.work_date)]
    columns = [day.isoformat() for day in week.dates]

    if not entries:
        return WeekReview(entries=[], matrix=pd.DataFrame(columns=["Task"] + columns))

    df = pd.DataFrame(
        {
            "Task": [entry.task_name or "Untitled" for entry in entries],
            "Date": [entry.work_date.isoformat() for entry in entries],
            "Hours": [entry.hours_worked for entry in entries],
        }
    )
    pivot = df.pivot_table(
        index="Task", columns="Date", values="Hours", aggfunc="sum", fill_value=0
    )

    # Ensure every day of the week is present
    pivot = pivot.reindex(columns=columns, fill_value=0)
    pivot.loc["Total"] = pivot.sum()

    pivot = pivot.reset_index()
    pivot.columns = ["Task"] + columns

    return WeekReview(entries=entries, matrix=pivot)


class ManagerService:
    """Endpoints available to a reporting manager."""

    TEAM_PATH = "/manager/view/employees"
    TIMESHEETS_PATH = "/manager/view/timesheet/{employee_id}"
    APPROVE_PATH = "/manager/timesheet/approve"
    REJECT_PATH = "/manager/timesheet/reject"

    def __init__(self, client: ApiClient):
        self.client = client

    def list_team(self) -> List[Employee]:
        envelope = self.client.query(
            self.TEAM_PATH, default_message="Failed to fetch employees"
        )
        return parse_many(Employee, page_items(envelope.response))

    def employee_timesheets(
        self, employee_id: str, page: int = 0, size: int = 50
    ) -> List[TimesheetRecord]:
        """Entries of one team member, all statuses."""
        if not employee_id:
            raise ApiError("Employee id is required", status=400)

        envelope = self.client.query(
            self.TIMESHEETS_PATH.format(employee_id=employee_id),
            params={"page": page, "size": size},
            default_message="Failed to fetch timesheets",
        )
        return parse_many(TimesheetRecord, page_items(envelope.response))

    def approve(self, timesheet_ids: List[str]) -> WebResponse[Any]:
        return self._review("APPROVE", self.APPROVE_PATH, timesheet_ids)

    def reject(self, timesheet_ids: List[str]) -> WebResponse[Any]:
        return self._review("REJECT", self.REJECT_PATH, timesheet_ids)

    def _review(self, action: str, path: str, timesheet_ids: List[str]) -> WebResponse[Any]:
        ids = [timesheet_id for timesheet_id in timesheet_ids if timesheet_id]
        if not ids:
            return WebResponse.failure("No timesheets found for this week", status=400)

        verb = "approved" if action == "APPROVE" else "rejected"
        logger.info(f"{action} {len(ids)} timesheet entries")
        return self.client.mutate(
            "PUT",
            path,
            params={"timesheetIds": ids},
            success_message=f"Timesheets {verb} successfully",
            failure_message="Failed to update timesheet status",
        )
