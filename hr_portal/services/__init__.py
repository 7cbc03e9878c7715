"""
Backend services for the HR portal client.

This package provides one service per backend resource family, all sharing a
single ``ApiClient`` with:
- Bearer-token authentication from an injected AuthSession
- Exponential backoff with jitter for idempotent requests
- Circuit breaker pattern for failure handling
- Envelope normalization into strict view models
"""

from .api_client import ApiClient, ApiError
from .auth_service import AuthService, open_session
from .employee_service import ClientService, EmployeeService
from .holiday_service import HolidayService, active_holiday_map
from .leave_service import LeaveService
from .manager_service import ManagerService, WeekReview, build_review
from .notification_service import NotificationService
from .retry_handler import CircuitBreakerError, RetryExhaustedException, RetryHandler
from .salary_service import SalaryService
from .timesheet_service import TimesheetService

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthService",
    "open_session",
    "RetryHandler",
    "RetryExhaustedException",
    "CircuitBreakerError",
    "TimesheetService",
    "HolidayService",
    "active_holiday_map",
    "LeaveService",
    "EmployeeService",
    "ClientService",
    "NotificationService",
    "SalaryService",
    "ManagerService",
    "WeekReview",
    "build_review",
]
