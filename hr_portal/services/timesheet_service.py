"""Timesheet service.

Wraps the employee timesheet endpoints: listing a date range, batch create,
per-id update and delete, and submission for manager approval.
"""

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

from hr_portal.models.base import parse_many
from hr_portal.models.envelope import WebResponse, page_items
from hr_portal.models.timesheet import CreatedTimesheet, TimesheetDraft, TimesheetRecord
from hr_portal.services.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


class TimesheetService:
    """Client for the logged-in employee's timesheet entries.

    Attributes:
        client: Authenticated API client

    Example:
        >>> service = TimesheetService(client)
        >>> records = service.list_timesheets(dt.date(2024, 1, 1), dt.date(2024, 1, 7))
        >>> records[0].task_name
        'Build'
    """

    LIST_PATH = "/employee/view/timesheet"
    DETAIL_PATH = "/employee/view/timesheet/{timesheet_id}"
    REGISTER_PATH = "/employee/timesheet/register"
    UPDATE_PATH = "/employee/timesheet/update"
    DELETE_PATH = "/employee/timesheet/delete"
    SUBMIT_PATH = "/employee/timesheet/approvaltomanager"

    def __init__(self, client: ApiClient):
        self.client = client

    def list_timesheets(
        self,
        start_date: Optional[dt.date] = None,
        end_date: Optional[dt.date] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
        order_by: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> List[TimesheetRecord]:
        """List entries whose work date falls in ``[start_date, end_date]``.

        Raises:
            ApiError: If the fetch fails or the backend rejects it
        """
        params: Dict[str, Any] = {
            "startDate": start_date.isoformat() if start_date else None,
            "endDate": end_date.isoformat() if end_date else None,
            "page": page,
            "size": size,
            "orderBy": order_by,
            "direction": direction,
        }
        params = {key: value for key, value in params.items() if value is not None}

        envelope = self.client.query(
            self.LIST_PATH, params=params, default_message="Failed to fetch timesheets"
        )
        records = parse_many(TimesheetRecord, page_items(envelope.response))
        logger.debug(f"Fetched {len(records)} timesheet entries for {params}")
        return records

    def get_timesheet(self, timesheet_id: str) -> TimesheetRecord:
        if not timesheet_id:
            raise ApiError("Timesheet id is required", status=400)

        envelope = self.client.query(
            self.DETAIL_PATH.format(timesheet_id=timesheet_id),
            default_message="Failed to fetch timesheet",
        )
        return TimesheetRecord.model_validate(envelope.response)

    def create_timesheets(self, drafts: List[TimesheetDraft]) -> WebResponse[Any]:
        """Create several entries in one batch.

        On success ``response`` holds the created records as
        ``CreatedTimesheet`` items, each echoing the draft's ``client_ref``
        when the backend supports it.
        """
        if not drafts:
            return WebResponse.failure("No timesheet entries to create", status=400)

        envelope = self.client.mutate(
            "POST",
            self.REGISTER_PATH,
            json=[draft.to_payload() for draft in drafts],
            success_message="Timesheets created successfully",
            failure_message="Failed to create timesheets",
        )
        if envelope.flag:
            envelope.response = parse_many(CreatedTimesheet, page_items(envelope.response))
            logger.info(f"Created {len(envelope.response)} of {len(drafts)} timesheet entries")
        return envelope

    def update_timesheet(self, timesheet_id: str, draft: TimesheetDraft) -> WebResponse[Any]:
        """Update one persisted entry.

        The endpoint takes the id as a query parameter and a single-element
        array body.
        """
        if not timesheet_id:
            return WebResponse.failure("Timesheet id is required", status=400)

        return self.client.mutate(
            "PUT",
            self.UPDATE_PATH,
            params={"timesheetIds": timesheet_id},
            json=[draft.to_payload()],
            success_message="Timesheet updated successfully",
            failure_message="Failed to update timesheet",
        )

    def delete_timesheet(self, timesheet_id: str) -> WebResponse[Any]:
        if not timesheet_id:
            return WebResponse.failure("Timesheet id is required", status=400)

        return self.client.mutate(
            "DELETE",
            self.DELETE_PATH,
            params={"timesheetId": timesheet_id},
            success_message="Timesheet deleted successfully",
            failure_message="Failed to delete timesheet",
        )

    def submit_for_approval(self, timesheet_ids: List[str]) -> WebResponse[Any]:
        """Hand entries to the reporting manager.

        The backend exposes this as a GET with the ids as a repeated
        ``timesheetIds`` query parameter.
        """
        ids = [timesheet_id for timesheet_id in timesheet_ids if timesheet_id]
        if not ids:
            return WebResponse.failure("No timesheet ids to submit", status=400)

        return self.client.mutate(
            "GET",
            self.SUBMIT_PATH,
            params={"timesheetIds": ids},
            success_message="Timesheets submitted for approval",
            failure_message="Failed to submit timesheets",
        )
