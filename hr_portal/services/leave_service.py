"""Leave summary service."""

import logging
from typing import Any, List, Optional

from hr_portal.models.base import parse_many
from hr_portal.models.envelope import page_items
from hr_portal.models.leave import LeaveDay, LeaveRequest, LeaveStatus, expand_leave_days
from hr_portal.services.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

MAX_PAGES = 50


class LeaveService:
    """Reads an employee's leave requests.

    The register only needs approved leave, expanded to individual days, to
    flag and disable grid cells.
    """

    SUMMARY_PATH = "/leave/view/summary"

    def __init__(self, client: ApiClient):
        self.client = client

    def _summary_page(
        self,
        employee_id: str,
        status: Optional[str],
        year: Optional[int],
        page: int,
        size: int,
    ) -> List[Any]:
        if not employee_id:
            raise ApiError("Employee id is required", status=400)

        params = {
            "employeeId": employee_id,
            "status": status,
            "year": year,
            "page": page,
            "size": size,
        }
        params = {key: value for key, value in params.items() if value is not None}

        envelope = self.client.query(
            self.SUMMARY_PATH, params=params, default_message="Failed to fetch leaves"
        )
        return page_items(envelope.response)

    def leave_summary(
        self,
        employee_id: str,
        status: Optional[str] = LeaveStatus.APPROVED.value,
        year: Optional[int] = None,
        page: int = 0,
        size: int = 100,
    ) -> List[LeaveRequest]:
        """Fetch one page of leave requests.

        Raises:
            ApiError: If the fetch fails or the backend rejects it
        """
        items = self._summary_page(employee_id, status, year, page, size)
        return parse_many(LeaveRequest, items)

    def all_leave_requests(
        self,
        employee_id: str,
        status: Optional[str] = LeaveStatus.APPROVED.value,
        year: Optional[int] = None,
        size: int = 100,
    ) -> List[LeaveRequest]:
        """Fetch every page of leave requests, stopping at the first short page.

        Raises:
            ApiError: If any page fails
        """
        requests: List[LeaveRequest] = []
        for page in range(MAX_PAGES):
            items = self._summary_page(employee_id, status, year, page, size)
            requests.extend(parse_many(LeaveRequest, items))
            if len(items) < size:
                return requests

        logger.warning(
            f"Stopped reading leave for {employee_id} after {MAX_PAGES} pages of {size}"
        )
        return requests

    def approved_leave_days(
        self, employee_id: str, year: Optional[int] = None
    ) -> List[LeaveDay]:
        """Approved leave expanded to one LeaveDay per covered date.

        When ``year`` is given only days within that year are kept.
        """
        requests = self.all_leave_requests(
            employee_id, status=LeaveStatus.APPROVED.value, year=year
        )
        days = expand_leave_days(requests)
        if year is not None:
            days = [day for day in days if day.date.year == year]

        logger.debug(
            f"Employee {employee_id} has {len(days)} approved leave day(s)"
            + (f" in {year}" if year is not None else "")
        )
        return days
