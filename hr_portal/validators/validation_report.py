"""Validation report for collecting the violations of a timesheet week."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ValidationSeverity(IntEnum):
    """Severity levels for validation issues."""

    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """Represents a single validation issue.

    Attributes:
        severity: The severity level of the issue
        field: What the issue is about (``task_name``, ``hours``, ``day_total``)
        message: User-facing description, e.g. ``2024-01-01: total hours are 0``
        value: The value that caused the issue
        context: Optional context information (e.g., row, date)
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        context_str = ""
        if self.context:
            context_parts = [f"{k}={v}" for k, v in self.context.items()]
            context_str = f" ({', '.join(context_parts)})"

        return f"[{self.severity.name}] {self.field}: {self.message}{context_str}"


class ValidationReport:
    """Collects and manages validation issues.

    Every violation is collected (not fail-fast) so the user sees all
    problems in one pass. Only errors affect validity.

    Example:
        >>> report = ValidationReport()
        >>> report.add_error("day_total", "2024-01-01: total hours are 0", 0)
        >>> report.add_warning("hours", "2024-01-02: 7.3 is not a multiple of 0.5", 7.3)
        >>> report.is_valid()
        False
        >>> report.error_messages()
        ['2024-01-01: total hours are 0']
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def _count(self, severity: ValidationSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    @property
    def error_count(self) -> int:
        return self._count(ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(ValidationSeverity.WARNING)

    def is_valid(self) -> bool:
        """Check if validation passed (no errors).

        Warnings do not affect validity.
        """
        return self.error_count == 0

    def has_errors(self) -> bool:
        return self.error_count > 0

    def _add(
        self,
        severity: ValidationSeverity,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]],
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                field=field,
                message=message,
                value=value,
                context=context,
            )
        )

    def add_error(
        self,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add an error to the report.

        Args:
            field: What the error is about
            message: Human-readable error description
            value: The value that caused the error
            context: Optional context information
        """
        self._add(ValidationSeverity.ERROR, field, message, value, context)

    def add_warning(
        self,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._add(ValidationSeverity.WARNING, field, message, value, context)

    def get_errors(self) -> List[ValidationIssue]:
        return [
            issue for issue in self.issues if issue.severity == ValidationSeverity.ERROR
        ]

    def get_warnings(self) -> List[ValidationIssue]:
        return [
            issue
            for issue in self.issues
            if issue.severity == ValidationSeverity.WARNING
        ]

    def error_messages(self) -> List[str]:
        """The plain messages of every error, in the order they were found."""
        return [issue.message for issue in self.get_errors()]

    def warning_messages(self) -> List[str]:
        return [issue.message for issue in self.get_warnings()]

    def summary(self) -> str:
        """Get a summary of the validation report.

        Returns:
            Summary string with counts of errors and warnings
        """
        parts = []
        if self.error_count > 0:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")

        if not parts:
            return "No issues found"

        return ", ".join(parts)
