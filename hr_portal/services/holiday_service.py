"""Holiday calendar and holiday scheme service."""

import datetime as dt
import logging
from typing import Any, Dict, Iterable, List, Optional

from hr_portal.models.base import parse_many
from hr_portal.models.envelope import WebResponse, page_items
from hr_portal.models.holiday import (
    HolidayCalendarEntry,
    HolidayCalendarModel,
    HolidayScheme,
    HolidaySchemeModel,
)
from hr_portal.services.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


def active_holiday_map(
    holidays: Iterable[HolidayCalendarEntry],
) -> Dict[dt.date, HolidayCalendarEntry]:
    """Index active holidays by date.

    When two active entries share a date the first one wins.
    """
    by_date: Dict[dt.date, HolidayCalendarEntry] = {}
    for holiday in holidays:
        if holiday.holiday_active and holiday.holiday_date not in by_date:
            by_date[holiday.holiday_date] = holiday
    return by_date


class HolidayService:
    """Client for holiday calendars and the regional schemes grouping them."""

    CALENDAR_LIST_PATH = "/holidays/view/calendar"
    CALENDAR_DETAIL_PATH = "/holidays/view/calendar/{holiday_id}"
    CALENDAR_REGISTER_PATH = "/holidays/calendar/register"
    CALENDAR_UPDATE_PATH = "/holidays/calendar/update/{holiday_id}"
    CALENDAR_DELETE_PATH = "/holidays/calendar/delete"

    SCHEME_LIST_PATH = "/holidays/view/scheme"
    SCHEME_DETAIL_PATH = "/holidays/view/scheme/{scheme_id}"
    SCHEME_REGISTER_PATH = "/holidays/scheme/register"
    SCHEME_UPDATE_PATH = "/holidays/scheme/update/{scheme_id}"
    SCHEME_DELETE_PATH = "/holidays/scheme/delete"

    def __init__(self, client: ApiClient):
        self.client = client

    # Calendars

    def list_calendars(self) -> List[HolidayCalendarEntry]:
        envelope = self.client.query(
            self.CALENDAR_LIST_PATH, default_message="Failed to fetch holidays"
        )
        holidays = parse_many(HolidayCalendarEntry, page_items(envelope.response))
        logger.debug(f"Fetched {len(holidays)} holiday calendar entries")
        return holidays

    def get_calendar(self, holiday_id: str) -> HolidayCalendarEntry:
        if not holiday_id:
            raise ApiError("Holiday id is required", status=400)
        envelope = self.client.query(
            self.CALENDAR_DETAIL_PATH.format(holiday_id=holiday_id),
            default_message="Failed to fetch holiday",
        )
        return HolidayCalendarEntry.model_validate(envelope.response)

    def create_holiday(self, holiday: HolidayCalendarModel) -> WebResponse[Any]:
        return self.client.mutate(
            "POST",
            self.CALENDAR_REGISTER_PATH,
            json=holiday.to_payload(),
            success_message="Holiday created successfully",
            failure_message="Failed to create holiday",
        )

    def update_holiday(self, holiday_id: str, holiday: HolidayCalendarModel) -> WebResponse[Any]:
        if not holiday_id:
            return WebResponse.failure("Holiday id is required", status=400)
        return self.client.mutate(
            "PUT",
            self.CALENDAR_UPDATE_PATH.format(holiday_id=holiday_id),
            json=holiday.to_payload(),
            success_message="Holiday updated successfully",
            failure_message="Failed to update holiday",
        )

    def delete_holiday(self, holiday_id: str) -> WebResponse[Any]:
        if not holiday_id:
            return WebResponse.failure("Holiday id is required", status=400)
        return self.client.mutate(
            "DELETE",
            self.CALENDAR_DELETE_PATH,
            params={"id": holiday_id},
            success_message="Holiday deleted successfully",
            failure_message="Failed to delete holiday",
        )

    # Schemes

    def list_schemes(
        self,
        country_code: Optional[str] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
        sort_by: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> List[HolidayScheme]:
        """List holiday schemes, optionally filtered by country code.

        Missing text fields come back as ``""``, ``holiday_calendar_id`` is
        always a list, and ``scheme_active`` defaults to True.
        """
        params = {
            "schemeCountryCode": country_code,
            "page": page,
            "size": size,
            "sortBy": sort_by,
            "direction": direction,
        }
        params = {key: value for key, value in params.items() if value is not None}

        envelope = self.client.query(
            self.SCHEME_LIST_PATH, params=params, default_message="Failed to fetch schemes"
        )
        return parse_many(HolidayScheme, page_items(envelope.response))

    def get_scheme(self, scheme_id: str) -> HolidayScheme:
        if not scheme_id:
            raise ApiError("Scheme id is required", status=400)
        envelope = self.client.query(
            self.SCHEME_DETAIL_PATH.format(scheme_id=scheme_id),
            default_message="Failed to fetch scheme",
        )
        return HolidayScheme.model_validate(envelope.response)

    def create_scheme(self, scheme: HolidaySchemeModel) -> WebResponse[Any]:
        return self.client.mutate(
            "POST",
            self.SCHEME_REGISTER_PATH,
            json=scheme.to_payload(),
            success_message="Scheme created successfully",
            failure_message="Failed to create scheme",
        )

    def update_scheme(self, scheme_id: str, scheme: HolidaySchemeModel) -> WebResponse[Any]:
        if not scheme_id:
            return WebResponse.failure("Scheme id is required", status=400)
        return self.client.mutate(
            "PUT",
            self.SCHEME_UPDATE_PATH.format(scheme_id=scheme_id),
            json=scheme.to_payload(),
            success_message="Scheme updated successfully",
            failure_message="Failed to update scheme",
        )

    def delete_scheme(self, scheme_id: str) -> WebResponse[Any]:
        if not scheme_id:
            return WebResponse.failure("Scheme id is required", status=400)
        return self.client.mutate(
            "DELETE",
            self.SCHEME_DELETE_PATH,
            params={"id": scheme_id},
            success_message="Scheme deleted successfully",
            failure_message="Failed to delete scheme",
        )
