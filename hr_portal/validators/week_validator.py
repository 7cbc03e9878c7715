"""Pre-submit validation of a timesheet week.

Validation gates submission for approval only; saving is always allowed.
"""

import datetime as dt
import logging
import math
from typing import Dict, List, Mapping, Optional

from hr_portal.models.holiday import HolidayCalendarEntry
from hr_portal.models.leave import LeaveDay
from hr_portal.register.grid import TaskRow
from hr_portal.register.week import WeekWindow, is_weekend
from hr_portal.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)

MAX_DAILY_HOURS = 24.0
HOURS_INCREMENT = 0.5


class TimesheetWeekValidator:
    """Checks a week of task rows against the business rules.

    Rules (errors):
    - A row with any hours must have a task name
    - Every cell is a number within [0, 24]
    - No hours on an active holiday, a weekend or an approved leave day
    - Every working day (not holiday, leave or weekend) has a positive total

    Hours that are not a multiple of 0.5 only produce a warning.

    Example:
        >>> validator = TimesheetWeekValidator()
        >>> report = validator.validate(rows, week, holidays={}, leaves={})
        >>> report.error_messages()
        ['2024-01-03: total hours are 0']
    """

    def validate(
        self,
        rows: List[TaskRow],
        week: WeekWindow,
        holidays: Optional[Mapping[dt.date, HolidayCalendarEntry]] = None,
        leaves: Optional[Mapping[dt.date, LeaveDay]] = None,
    ) -> ValidationReport:
        """Collect every violation in ``rows``.

        Args:
            rows: The grid's task rows, in display order
            week: The week the rows belong to
            holidays: Active holidays by date
            leaves: Approved leave days by date

        Returns:
            ValidationReport; valid iff it holds no errors
        """
        holidays = holidays or {}
        leaves = leaves or {}
        report = ValidationReport()

        for index, row in enumerate(rows):
            self._validate_row(index + 1, row, holidays, leaves, report)

        self._validate_day_totals(rows, week, holidays, leaves, report)

        if report.has_errors():
            logger.info(f"Week {week.start} failed validation: {report.summary()}")
        return report

    @staticmethod
    def _validate_row(
        row_number: int,
        row: TaskRow,
        holidays: Mapping[dt.date, HolidayCalendarEntry],
        leaves: Mapping[dt.date, LeaveDay],
        report: ValidationReport,
    ) -> None:
        context = {"row": row_number}

        if row.has_hours and not row.task_name.strip():
            report.add_error(
                "task_name",
                f"Row {row_number}: task name required when hours present",
                row.task_name,
                context,
            )

        for day in sorted(row.hours):
            hours = row.hours[day]
            cell = {"row": row_number, "date": day.isoformat()}

            if not 0 <= hours <= MAX_DAILY_HOURS:
                report.add_error(
                    "hours", f"{day.isoformat()}: invalid hours in row {row_number}", hours, cell
                )
            elif hours % HOURS_INCREMENT != 0:
                report.add_warning(
                    "hours",
                    f"{day.isoformat()}: {hours:g} hours in row {row_number} "
                    f"is not a multiple of {HOURS_INCREMENT:g}",
                    hours,
                    cell,
                )

            if not math.isfinite(hours) or hours <= 0:
                continue

            holiday = holidays.get(day)
            if holiday is not None:
                report.add_error(
                    "hours",
                    f"{day.isoformat()}: entries present on holiday {holiday.holiday_name}",
                    hours,
                    cell,
                )
            if is_weekend(day):
                report.add_error(
                    "hours", f"{day.isoformat()}: entries present on weekend", hours, cell
                )
            leave = leaves.get(day)
            if leave is not None:
                report.add_error(
                    "hours",
                    f"{day.isoformat()}: entries present on leave ({leave.leave_category})",
                    hours,
                    cell,
                )

    @staticmethod
    def _validate_day_totals(
        rows: List[TaskRow],
        week: WeekWindow,
        holidays: Mapping[dt.date, HolidayCalendarEntry],
        leaves: Mapping[dt.date, LeaveDay],
        report: ValidationReport,
    ) -> None:
        totals: Dict[dt.date, float] = {
            day: sum(row.hours_on(day) for row in rows) for day in week.dates
        }
        for day, total in totals.items():
            if day in holidays or day in leaves or is_weekend(day):
                continue
            if total == 0:
                report.add_error(
                    "day_total",
                    f"{day.isoformat()}: total hours are 0",
                    total,
                    {"date": day.isoformat()},
                )
