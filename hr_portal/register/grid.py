"""Week grid state: task rows built from a week's persisted entries.

Entries sharing a task name are grouped into one ``TaskRow``. Hours and
backing timesheet ids are kept in sparse per-date maps; a date missing from
``hours`` counts as zero.
"""

import datetime as dt
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import pandas as pd

from hr_portal.models.timesheet import TimesheetRecord, TimesheetStatus
from hr_portal.register.week import WeekWindow

logger = logging.getLogger(__name__)

UNTITLED_TASK = "Untitled"


def new_row_id() -> str:
    return f"row-{uuid.uuid4().hex[:8]}"


@dataclass
class TaskRow:
    """One task's hours across the week.

    Attributes:
        row_id: Local identifier, stable while the row is on screen
        task_name: Task label; may be blank on a freshly added row
        hours: Hours per date (sparse)
        timesheet_ids: Backend id per date, only for persisted cells
        dirty: Edited since it was last loaded from the backend

    Example:
        >>> row = TaskRow(row_id="row-1", task_name="Build",
        ...               hours={dt.date(2024, 1, 1): 8.0})
        >>> row.hours_on(dt.date(2024, 1, 2))
        0.0
    """

    row_id: str = field(default_factory=new_row_id)
    task_name: str = ""
    hours: Dict[dt.date, float] = field(default_factory=dict)
    timesheet_ids: Dict[dt.date, str] = field(default_factory=dict)
    dirty: bool = False

    @classmethod
    def empty(cls, dates: Iterable[dt.date]) -> "TaskRow":
        """A blank row with every date explicitly zeroed."""
        return cls(hours={day: 0.0 for day in dates})

    def hours_on(self, day: dt.date) -> float:
        return self.hours.get(day, 0.0)

    @property
    def total_hours(self) -> float:
        return sum(self.hours.values())

    @property
    def has_hours(self) -> bool:
        return any(value > 0 for value in self.hours.values())

    @property
    def persisted_ids(self) -> List[str]:
        """Backend ids of this row's cells, in date order."""
        return [self.timesheet_ids[day] for day in sorted(self.timesheet_ids)]

    def copy(self) -> "TaskRow":
        return TaskRow(
            row_id=self.row_id,
            task_name=self.task_name,
            hours=dict(self.hours),
            timesheet_ids=dict(self.timesheet_ids),
            dirty=self.dirty,
        )


@dataclass
class WeekGrid:
    """The register's in-memory grid for one week.

    Attributes:
        week: The week the grid covers
        rows: Task rows, in display order
        locked: Every fetched entry is ``Submitted``; edits are refused
    """

    week: WeekWindow
    rows: List[TaskRow] = field(default_factory=list)
    locked: bool = False

    def day_totals(self) -> Dict[dt.date, float]:
        """Hours per date summed across all rows; unset cells count as 0."""
        return {
            day: sum(row.hours_on(day) for row in self.rows) for day in self.week.dates
        }

    def total_hours(self) -> float:
        return sum(self.day_totals().values())

    def submittable_ids(self) -> List[str]:
        """Ids of persisted cells that carry positive hours."""
        ids: List[str] = []
        for row in self.rows:
            for day in sorted(row.timesheet_ids):
                timesheet_id = row.timesheet_ids[day]
                if timesheet_id and row.hours_on(day) > 0:
                    ids.append(timesheet_id)
        return ids

    def to_dataframe(self) -> pd.DataFrame:
        """Task-by-day matrix for display, with a Total column and row.

        Returns:
            DataFrame with columns ``Task``, one per ISO date, and ``Total``
        """
        columns = [day.isoformat() for day in self.week.dates]
        records = []
        for row in self.rows:
            record = {"Task": row.task_name}
            record.update({day.isoformat(): row.hours_on(day) for day in self.week.dates})
            records.append(record)

        df = pd.DataFrame(records, columns=["Task"] + columns)
        totals = {"Task": "Total"}
        totals.update({day.isoformat(): value for day, value in self.day_totals().items()})
        df = pd.concat([df, pd.DataFrame([totals])], ignore_index=True)
        df["Total"] = df[columns].sum(axis=1)
        return df


def is_week_locked(records: List[TimesheetRecord]) -> bool:
    """True iff there is at least one entry and every entry is ``Submitted``."""
    return bool(records) and all(
        record.status == TimesheetStatus.SUBMITTED.value for record in records
    )


def build_week_grid(records: List[TimesheetRecord], week: WeekWindow) -> WeekGrid:
    """Group a week's persisted entries into task rows.

    Args:
        records: Entries fetched for the week's date range
        week: The active week window

    Returns:
        WeekGrid whose rows follow first appearance of each task name. With no
        entries in the week, a single blank row with all seven dates zeroed.
    """
    grouped: Dict[str, TaskRow] = {}

    for record in records:
        if not week.contains(record.work_date):
            logger.debug(f"Ignoring entry outside {week}: {record.work_date}")
            continue

        task = record.task_name.strip() or UNTITLED_TASK
        row = grouped.get(task)
        if row is None:
            row = grouped[task] = TaskRow(task_name=task)

        if record.work_date in row.hours:
            logger.warning(
                f"Duplicate entry for task '{task}' on {record.work_date}; "
                f"keeping the last one"
            )
        row.hours[record.work_date] = float(record.hours_worked or 0.0)
        if record.timesheet_id:
            row.timesheet_ids[record.work_date] = record.timesheet_id

    rows = list(grouped.values())
    if not rows:
        rows = [TaskRow.empty(week.dates)]

    locked = is_week_locked(records)
    logger.debug(f"Built grid for {week}: {len(rows)} row(s), locked={locked}")
    return WeekGrid(week=week, rows=rows, locked=locked)
