"""Timesheet register core.

- WeekWindow: Monday-anchored seven-day window
- TaskRow / WeekGrid / build_week_grid: grid state built from persisted entries
- SavePlan / plan_save / merge_created: save reconciliation

The stateful ``TimesheetRegister`` lives in ``hr_portal.register.register``.
"""

from hr_portal.register.grid import TaskRow, WeekGrid, build_week_grid, is_week_locked
from hr_portal.register.reconciler import (
    PendingCreate,
    PendingUpdate,
    SavePlan,
    SaveResult,
    merge_created,
    plan_save,
)
from hr_portal.register.week import WeekWindow, is_weekend

__all__ = [
    "PendingCreate",
    "PendingUpdate",
    "SavePlan",
    "SaveResult",
    "TaskRow",
    "WeekGrid",
    "WeekWindow",
    "build_week_grid",
    "is_week_locked",
    "is_weekend",
    "merge_created",
    "plan_save",
]
