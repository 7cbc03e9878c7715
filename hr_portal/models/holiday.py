"""Holiday calendar and holiday scheme models."""

import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from hr_portal.models.base import BaseDataModel, coerce_date


class HolidayType(str, Enum):
    PUBLIC = "PUBLIC"
    RELIGIOUS = "RELIGIOUS"
    REGIONAL = "REGIONAL"
    COMPANY_SPECIFIC = "COMPANY_SPECIFIC"


class RecurrenceRule(str, Enum):
    ANNUAL = "ANNUAL"
    ONE_TIME = "ONE_TIME"


class HolidayCalendarEntry(BaseDataModel):
    """A single holiday as returned by the calendar endpoints.

    Read-only reference data for the timesheet register: active entries
    flag and disable their date in the week grid.
    """

    holiday_calendar_id: Optional[str] = None
    holiday_date: dt.date
    holiday_name: str
    holiday_type: str = HolidayType.PUBLIC.value
    recurrence_rule: str = RecurrenceRule.ONE_TIME.value
    location_region: str = ""
    calendar_country_code: str = ""
    calendar_description: str = ""
    holiday_active: bool = Field(
        default=True, validation_alias=AliasChoices("holidayActive", "activeStatus")
    )

    @field_validator("holiday_date", mode="before")
    @classmethod
    def _trim_date(cls, v):
        return coerce_date(v)

    @field_validator(
        "location_region", "calendar_country_code", "calendar_description", mode="before"
    )
    @classmethod
    def _null_text(cls, v):
        return "" if v is None else v


class HolidayCalendarModel(BaseDataModel):
    """Create/update payload for a holiday calendar entry."""

    holiday_name: str = Field(..., min_length=1)
    holiday_date: dt.date
    holiday_type: HolidayType = HolidayType.PUBLIC
    recurrence_rule: RecurrenceRule = RecurrenceRule.ONE_TIME
    location_region: str = ""
    calendar_country_code: str = ""
    calendar_description: str = ""
    active_status: bool = True

    @field_validator("holiday_name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("holiday_name cannot be empty or whitespace")
        return v.strip()


class HolidayScheme(BaseDataModel):
    """Regional grouping of holiday calendar entries."""

    holiday_scheme_id: str
    scheme_name: str = ""
    scheme_description: str = ""
    created_by_admin_id: Optional[str] = None
    city: str = ""
    state: str = ""
    scheme_country_code: str = ""
    scheme_create_at: Optional[str] = None
    scheme_update_at: Optional[str] = None
    holiday_calendar_id: List[str] = Field(default_factory=list)
    scheme_active: bool = True

    @field_validator(
        "scheme_name", "scheme_description", "city", "state", "scheme_country_code",
        mode="before",
    )
    @classmethod
    def _null_text(cls, v):
        return "" if v is None else v

    @field_validator("holiday_calendar_id", mode="before")
    @classmethod
    def _as_list(cls, v):
        return v if isinstance(v, list) else []

    @field_validator("scheme_active", mode="before")
    @classmethod
    def _default_active(cls, v):
        return True if v is None else v


class HolidaySchemeModel(BaseDataModel):
    """Create/update payload for a holiday scheme."""

    scheme_name: str = Field(..., min_length=1)
    scheme_description: str = ""
    city: str = ""
    state: str = ""
    scheme_country_code: str = ""
    active_status: bool = True
    holiday_calendar_id: Optional[str] = None
