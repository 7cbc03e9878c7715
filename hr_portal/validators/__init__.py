"""Validation for timesheet weeks.

This package provides:
- ValidationReport: Collects errors and warnings without failing fast
- TimesheetWeekValidator: The pre-submit rules for a week of task rows
"""

from hr_portal.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)
from hr_portal.validators.week_validator import TimesheetWeekValidator

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
    "TimesheetWeekValidator",
]
