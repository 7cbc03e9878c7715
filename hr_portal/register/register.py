"""
Timesheet register: one employee's editable week.

The register composes the week grid from the timesheet, holiday and leave
services, applies cell edits in memory, and reconciles with the backend on
an explicit save. Submission for approval is gated by validation and locks
the week.

Every operation reports its outcome as ``RegisterMessage`` items instead of
raising; service failures never escape an operation. Only programming errors
(an unknown row index, a date outside the week) raise.
"""

import datetime as dt
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from hr_portal.models.holiday import HolidayCalendarEntry
from hr_portal.models.leave import LeaveDay
from hr_portal.register.grid import TaskRow, WeekGrid, build_week_grid
from hr_portal.register.reconciler import SaveResult, merge_created, plan_save
from hr_portal.register.week import WeekWindow, is_weekend
from hr_portal.services.api_client import ApiError
from hr_portal.services.holiday_service import HolidayService, active_holiday_map
from hr_portal.services.leave_service import LeaveService
from hr_portal.services.timesheet_service import TimesheetService
from hr_portal.utils.logging_utils import LogContext, log_function_call
from hr_portal.validators.validation_report import ValidationReport
from hr_portal.validators.week_validator import TimesheetWeekValidator

logger = logging.getLogger(__name__)


class RegisterState(str, Enum):
    """Submission state of the visible week."""

    UNLOCKED = "Unlocked"
    LOCKED = "Locked"


class MessageLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class RegisterMessage:
    """An inline, user-visible outcome of a register operation."""

    level: MessageLevel
    text: str


class TimesheetRegister:
    """
    Editable weekly timesheet of one employee.

    Features:
    - Week grid grouped by task, with holiday/leave/weekend day status
    - Local cell edits; refused silently once the week is locked
    - Save: batch create, per-id updates, then re-fetch from the backend
    - Submit: validate, save, hand persisted entries to the manager, lock
    - Row delete with rollback when a backend delete fails

    Example:
        >>> register = TimesheetRegister(timesheets, holidays, leaves, "E-17")
        >>> register.select_date(dt.date(2024, 1, 3))
        >>> register.set_task_name(0, "Build")
        >>> register.set_hours(0, dt.date(2024, 1, 1), 8)
        >>> register.save()
        >>> [m.text for m in register.drain_messages()]
        ['Save successful']
    """

    def __init__(
        self,
        timesheet_service: TimesheetService,
        holiday_service: HolidayService,
        leave_service: LeaveService,
        employee_id: str,
        week: Optional[WeekWindow] = None,
        validator: Optional[TimesheetWeekValidator] = None,
    ):
        """
        Initialize the register on ``week`` (default: the current week).

        Nothing is fetched until ``load`` or a navigation call.
        """
        self.timesheet_service = timesheet_service
        self.holiday_service = holiday_service
        self.leave_service = leave_service
        self.employee_id = employee_id
        self.validator = validator or TimesheetWeekValidator()

        self.week = week or WeekWindow.containing(dt.date.today())
        self.grid = self._blank_grid(self.week)
        self.loaded = False
        self.holidays: Dict[dt.date, HolidayCalendarEntry] = {}
        self.leaves: Dict[dt.date, LeaveDay] = {}
        self.messages: List[RegisterMessage] = []

    @staticmethod
    def _blank_grid(week: WeekWindow) -> WeekGrid:
        return WeekGrid(week=week, rows=[TaskRow.empty(week.dates)], locked=False)

    def _context(self) -> LogContext:
        return LogContext(employee_id=self.employee_id, week_start=self.week.start.isoformat())

    def _notify(self, level: MessageLevel, text: str) -> None:
        self.messages.append(RegisterMessage(level=level, text=text))
        log_level = logging.ERROR if level == MessageLevel.ERROR else logging.INFO
        logger.log(log_level, f"[{level.value}] {text}")

    def drain_messages(self) -> List[RegisterMessage]:
        """Return the pending messages and clear them."""
        messages, self.messages = self.messages, []
        return messages

    # State

    @property
    def rows(self) -> List[TaskRow]:
        return self.grid.rows

    @property
    def locked(self) -> bool:
        return self.grid.locked

    @property
    def state(self) -> RegisterState:
        return RegisterState.LOCKED if self.grid.locked else RegisterState.UNLOCKED

    def day_status(self, day: dt.date) -> Optional[str]:
        """Header label for ``day``: holiday name, leave category or "Weekend"."""
        holiday = self.holidays.get(day)
        if holiday is not None:
            return holiday.holiday_name
        leave = self.leaves.get(day)
        if leave is not None:
            return leave.leave_category
        if is_weekend(day):
            return "Weekend"
        return None

    def is_cell_disabled(self, day: dt.date) -> bool:
        return self.locked or self.day_status(day) is not None

    # Loading and navigation

    @log_function_call
    def load(self) -> bool:
        """Fetch the week's entries, holidays and approved leave.

        Each failed fetch reports its own error message.

        Returns:
            True if the timesheet fetch succeeded
        """
        with self._context():
            loaded = self.refresh()
            self._load_holidays()
            self._load_leaves()
        return loaded

    def refresh(self) -> bool:
        """Replace the grid with the backend's entries for the week.

        On failure the grid is kept (and unlocked), ``loaded`` turns False
        and an error is reported.
        """
        try:
            records = self.timesheet_service.list_timesheets(self.week.start, self.week.end)
        except ApiError as e:
            logger.error(f"Failed to fetch timesheets for {self.week}: {e}")
            self._notify(MessageLevel.ERROR, "Failed to fetch timesheets")
            self.grid.locked = False
            self.loaded = False
            return False

        self.grid = build_week_grid(records, self.week)
        self.loaded = True
        return True

    def _load_holidays(self) -> None:
        try:
            self.holidays = active_holiday_map(self.holiday_service.list_calendars())
        except ApiError as e:
            logger.error(f"Failed to fetch holidays: {e}")
            self._notify(MessageLevel.ERROR, "Failed to fetch holidays")

    def _load_leaves(self) -> None:
        leaves: Dict[dt.date, LeaveDay] = {}
        try:
            for year in self.week.years:
                for day in self.leave_service.approved_leave_days(self.employee_id, year):
                    leaves.setdefault(day.date, day)
        except ApiError as e:
            logger.error(f"Failed to fetch leaves for {self.employee_id}: {e}")
            self._notify(MessageLevel.ERROR, "Failed to fetch leaves")
            return
        self.leaves = leaves

    def _go_to(self, week: WeekWindow) -> bool:
        self.week = week
        self.grid = self._blank_grid(week)
        self.loaded = False
        return self.load()

    def select_date(self, day: dt.date) -> bool:
        """Show the week containing ``day`` and reload."""
        return self._go_to(WeekWindow.containing(day))

    def next_week(self) -> bool:
        return self._go_to(self.week.next())

    def previous_week(self) -> bool:
        return self._go_to(self.week.previous())

    # Cell mutation

    def _check_day(self, day: dt.date) -> None:
        if not self.week.contains(day):
            raise ValueError(f"{day} is outside the week {self.week}")

    def set_hours(self, row_index: int, day: dt.date, hours: float) -> bool:
        """Set one cell's hours and mark its row dirty.

        Returns:
            False (and nothing changes) when the week is locked

        Raises:
            ValueError: If ``day`` is outside the week or ``hours`` is not finite
        """
        self._check_day(day)
        hours = float(hours)
        if not math.isfinite(hours):
            raise ValueError(f"Hours must be a finite number, got {hours}")
        if self.locked:
            logger.debug(f"Ignoring edit of {day} on a locked week")
            return False

        row = self.rows[row_index]
        row.hours[day] = hours
        row.dirty = True
        return True

    def set_task_name(self, row_index: int, task_name: str) -> bool:
        if self.locked:
            logger.debug("Ignoring task rename on a locked week")
            return False

        row = self.rows[row_index]
        row.task_name = task_name
        row.dirty = True
        return True

    def add_row(self) -> Optional[TaskRow]:
        """Append a blank row with every date zeroed; None when locked."""
        if self.locked:
            return None
        row = TaskRow.empty(self.week.dates)
        self.rows.append(row)
        return row

    def find_row(self, task_name: str) -> Optional[int]:
        """Index of the first row named ``task_name`` (case-insensitive)."""
        wanted = task_name.strip().lower()
        for index, row in enumerate(self.rows):
            if row.task_name.strip().lower() == wanted:
                return index
        return None

    # Save

    @log_function_call
    def save(self) -> SaveResult:
        """Reconcile the grid with the backend.

        Creates go out as one batch; if it fails nothing else happens. Created
        ids are merged into the rows, then each dirty persisted cell is updated
        one call at a time (a failed update does not stop the others), and
        finally the week is re-fetched.
        """
        with self._context():
            return self._save()

    def _save(self) -> SaveResult:
        plan = plan_save(self.rows)
        result = SaveResult(ok=True, stale_ids=list(plan.stale_ids))

        if plan.creates:
            envelope = self.timesheet_service.create_timesheets(
                [pending.draft for pending in plan.creates]
            )
            if not envelope.flag:
                logger.error(f"Create batch of {len(plan.creates)} failed: {envelope.message}")
                self._notify(MessageLevel.ERROR, "Save failed")
                result.ok = False
                return result

            created = envelope.response or []
            result.created = len(created)
            merged = merge_created(self.rows, plan.creates, created)
            if merged < len(plan.creates):
                logger.warning(
                    f"Only {merged} of {len(plan.creates)} created entries could be "
                    f"matched to their cells"
                )

        for update in plan.updates:
            envelope = self.timesheet_service.update_timesheet(
                update.timesheet_id, update.draft
            )
            if envelope.flag:
                result.updated_ids.append(update.timesheet_id)
            else:
                logger.error(f"Update failed for {update.timesheet_id}: {envelope.message}")
                result.failed_ids.append(update.timesheet_id)

        result.refreshed = self.refresh()

        if result.failed_ids:
            self._notify(
                MessageLevel.WARNING,
                f"Save completed with {len(result.failed_ids)} failed update(s)",
            )
        else:
            self._notify(MessageLevel.SUCCESS, "Save successful")
        return result

    # Validation and submission

    def validate(self) -> ValidationReport:
        return self.validator.validate(self.rows, self.week, self.holidays, self.leaves)

    @log_function_call
    def submit(self) -> bool:
        """Validate, save and submit the week's persisted entries for approval.

        Returns:
            True if the week was submitted and is now locked
        """
        if self.locked:
            self._notify(MessageLevel.INFO, "Already submitted")
            return False

        report = self.validate()
        if not report.is_valid():
            for message in report.error_messages():
                self._notify(MessageLevel.ERROR, message)
            return False

        with self._context():
            result = self._save()
            if not result.ok:
                self._notify(MessageLevel.ERROR, "Submit failed")
                return False

            timesheet_ids = self.grid.submittable_ids()
            if not timesheet_ids:
                self._notify(MessageLevel.INFO, "No timesheet entries to submit")
                return False

            envelope = self.timesheet_service.submit_for_approval(timesheet_ids)
            if not envelope.flag:
                logger.error(f"Submit for approval failed: {envelope.message}")
                self._notify(MessageLevel.ERROR, "Submit failed")
                return False

            self.grid.locked = True
            self._notify(MessageLevel.SUCCESS, "Submitted for approval")
            self.refresh()
            return True

    # Row delete

    @log_function_call
    def delete_row(self, row_index: int) -> bool:
        """Remove a row and delete its persisted entries.

        The row disappears immediately. Every persisted id is attempted; if any
        delete fails the row is put back at its index, minus the ids that were
        deleted, and nothing is re-fetched.
        """
        if self.locked:
            self._notify(MessageLevel.INFO, "Timesheet is locked")
            return False

        with self._context():
            row = self.rows.pop(row_index)
            deleted_days: List[dt.date] = []
            failed_ids: List[str] = []

            for day in sorted(row.timesheet_ids):
                timesheet_id = row.timesheet_ids[day]
                envelope = self.timesheet_service.delete_timesheet(timesheet_id)
                if envelope.flag:
                    deleted_days.append(day)
                else:
                    logger.error(f"Delete failed for {timesheet_id}: {envelope.message}")
                    failed_ids.append(timesheet_id)

            if failed_ids:
                restored = row.copy()
                for day in deleted_days:
                    del restored.timesheet_ids[day]
                self.rows.insert(row_index, restored)
                self._notify(MessageLevel.ERROR, "Delete failed - changes rolled back")
                return False

            if row.timesheet_ids:
                self.refresh()
                self._notify(MessageLevel.SUCCESS, "Row and entries deleted successfully")
            else:
                self._notify(MessageLevel.SUCCESS, "Unsaved row deleted")
            return True
