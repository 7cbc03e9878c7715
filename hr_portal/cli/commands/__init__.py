"""CLI commands."""

from hr_portal.cli.commands.holidays import holidays
from hr_portal.cli.commands.leaves import leaves
from hr_portal.cli.commands.notifications import notifications
from hr_portal.cli.commands.review import review
from hr_portal.cli.commands.salary import salary
from hr_portal.cli.commands.timesheet import timesheet

__all__ = ["holidays", "leaves", "notifications", "review", "salary", "timesheet"]
