"""
Error classification for backend calls.

Turns transport exceptions into a retryable/fatal verdict and a short
description suitable for a user-facing failure message.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

import requests

from hr_portal.services.retry_handler import CircuitBreakerError, RetryExhaustedException

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Classification of error types."""

    RETRYABLE = "retryable"  # 429, 5xx, network errors
    FATAL = "fatal"  # other 4xx, auth errors
    UNKNOWN = "unknown"


def http_status_of(exception: Exception) -> Optional[int]:
    """Return the HTTP status carried by ``exception``, if there is one."""
    response = getattr(exception, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


class ErrorClassifier:
    """
    Classifies errors to distinguish between retryable and fatal errors.

    Features:
    - HTTP status classification
    - Network error detection
    - Error description generation
    - Statistics tracking
    """

    def __init__(self):
        self._stats: Dict[str, int] = {
            "retryable": 0,
            "fatal": 0,
            "unknown": 0,
            "total": 0,
        }

    def classify(self, exception: Exception) -> ErrorType:
        """
        Classify an exception into retryable, fatal, or unknown.

        Args:
            exception: The exception to classify

        Returns:
            ErrorType classification
        """
        self._stats["total"] += 1
        error_type = self._classify(exception)
        self._stats[error_type.value] += 1
        return error_type

    @staticmethod
    def _classify(exception: Exception) -> ErrorType:
        status_code = http_status_of(exception)
        if status_code is not None:
            if status_code == 429 or 500 <= status_code < 600:
                return ErrorType.RETRYABLE
            if 400 <= status_code < 500:
                return ErrorType.FATAL

        if isinstance(exception, (requests.ConnectionError, requests.Timeout)):
            return ErrorType.RETRYABLE

        # The retry budget is already spent; repeating immediately won't help
        if isinstance(exception, (RetryExhaustedException, CircuitBreakerError)):
            return ErrorType.FATAL

        return ErrorType.UNKNOWN

    def is_retryable(self, exception: Exception) -> bool:
        return self.classify(exception) == ErrorType.RETRYABLE

    def get_error_description(self, exception: Exception) -> str:
        """
        Get a human-readable error description.

        Args:
            exception: The exception to describe

        Returns:
            Error description string
        """
        error_type = self.classify(exception)
        status_code = http_status_of(exception)

        if status_code == 401:
            return "Authentication failed (HTTP 401)"
        if status_code == 403:
            return "Permission denied (HTTP 403)"
        if status_code == 429:
            return "Rate limit exceeded (HTTP 429)"
        if status_code is not None and 500 <= status_code < 600:
            return f"Server error (HTTP {status_code})"
        if status_code is not None and 400 <= status_code < 500:
            return f"Client error (HTTP {status_code})"

        if isinstance(exception, requests.Timeout):
            return "Network timeout"
        if isinstance(exception, requests.ConnectionError):
            return "Could not connect to the HR backend"
        if isinstance(exception, CircuitBreakerError):
            return "HR backend temporarily unavailable (circuit open)"

        return f"{type(exception).__name__}: {exception} - {error_type.value}"

    def get_statistics(self) -> Dict[str, Any]:
        return self._stats.copy()
