"""
Retry handler with exponential backoff, jitter, and circuit breaker pattern.
"""

import logging
import random
import threading
import time
from typing import Any, Callable, Optional

import requests

logger = logging.getLogger(__name__)


class RetryExhaustedException(Exception):
    """Raised when all retry attempts have been exhausted."""

    pass


class CircuitBreakerError(Exception):
    """Raised when circuit breaker is open."""

    pass


def is_transient_error(exception: Exception) -> bool:
    """
    Default retry condition: rate limiting, server errors and network faults.

    Args:
        exception: The exception raised by the wrapped call

    Returns:
        True if the call may succeed when repeated
    """
    if isinstance(exception, requests.HTTPError) and exception.response is not None:
        status_code = exception.response.status_code
        return status_code == 429 or 500 <= status_code < 600

    return isinstance(
        exception, (requests.ConnectionError, requests.Timeout)
    )


class RetryHandler:
    """
    Handles retries with exponential backoff, jitter, and circuit breaker pattern.

    Features:
    - Exponential backoff with configurable base and jitter
    - Circuit breaker to stop hammering a backend that keeps failing
    - Thread-safe statistics
    - Configurable retry condition
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_base: float = 2,
        jitter_factor: float = 0.1,
        circuit_breaker_threshold: int = 5,
        circuit_breaker_timeout: float = 30.0,
        retry_condition: Optional[Callable[[Exception], bool]] = None,
    ):
        """
        Initialize retry handler.

        Args:
            max_retries: Maximum number of retry attempts
            base_delay: Base delay for exponential backoff (seconds)
            max_delay: Maximum delay between retries (seconds)
            exponential_base: Base for exponential backoff calculation
            jitter_factor: Factor for random jitter (0.0 to 1.0)
            circuit_breaker_threshold: Consecutive failed calls before opening
            circuit_breaker_timeout: Time before a half-open attempt (seconds)
            retry_condition: Predicate deciding whether an exception is retried
        """
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter_factor = jitter_factor
        self.circuit_breaker_threshold = circuit_breaker_threshold
        self.circuit_breaker_timeout = circuit_breaker_timeout
        self.retry_condition = retry_condition or is_transient_error

        self._circuit_breaker_open = False
        self._circuit_breaker_opened_at = 0.0
        self._failure_count = 0

        self._total_calls = 0
        self._total_retries = 0
        self._total_failures = 0

        self._lock = threading.Lock()

    def _calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay for exponential backoff with jitter.

        Args:
            attempt: Current attempt number (0-based)

        Returns:
            Delay in seconds
        """
        delay = min(self.base_delay * (self.exponential_base**attempt), self.max_delay)
        jitter = random.uniform(-self.jitter_factor, self.jitter_factor) * delay
        return max(0, delay + jitter)

    def _is_circuit_breaker_open(self) -> bool:
        with self._lock:
            if not self._circuit_breaker_open:
                return False

            if (
                time.time() - self._circuit_breaker_opened_at
                >= self.circuit_breaker_timeout
            ):
                logger.info("Circuit breaker transitioning to half-open state")
                return False

            return True

    def _record_success(self):
        with self._lock:
            self._failure_count = 0
            if self._circuit_breaker_open:
                logger.info("Circuit breaker closed after successful execution")
                self._circuit_breaker_open = False

    def _record_failure(self):
        with self._lock:
            self._failure_count += 1
            self._total_failures += 1

            if (
                not self._circuit_breaker_open
                and self._failure_count >= self.circuit_breaker_threshold
            ):
                logger.warning(
                    f"Circuit breaker opened after {self._failure_count} failures"
                )
                self._circuit_breaker_open = True
                self._circuit_breaker_opened_at = time.time()

    def execute_with_retry(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute function with retry logic.

        Args:
            func: Function to execute
            *args: Positional arguments for function
            **kwargs: Keyword arguments for function

        Returns:
            Result of function execution

        Raises:
            CircuitBreakerError: If circuit breaker is open
            RetryExhaustedException: If all retries are exhausted
            Exception: Original exception if not retryable
        """
        with self._lock:
            self._total_calls += 1

        if self._is_circuit_breaker_open():
            raise CircuitBreakerError("Circuit breaker is open")

        func_name = getattr(func, "__name__", repr(func))

        for attempt in range(self.max_retries + 1):
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if not self.retry_condition(e):
                    logger.debug(
                        f"Not retrying - condition not met: {type(e).__name__}"
                    )
                    raise

                if attempt >= self.max_retries:
                    logger.warning(
                        f"Max retries ({self.max_retries}) exceeded for {func_name}"
                    )
                    with self._lock:
                        self._total_retries += attempt
                    self._record_failure()
                    raise RetryExhaustedException(
                        f"Max retries ({self.max_retries}) exceeded. "
                        f"Last error: {type(e).__name__}: {e}"
                    ) from e

                delay = self._calculate_delay(attempt)
                logger.debug(
                    f"Retrying {func_name} in {delay:.2f}s "
                    f"(attempt {attempt + 1}/{self.max_retries + 1}). "
                    f"Error: {type(e).__name__}: {e}"
                )
                time.sleep(delay)
                continue

            if attempt > 0:
                logger.info(f"Function {func_name} succeeded after {attempt} retries")
                with self._lock:
                    self._total_retries += attempt

            self._record_success()
            return result

    def get_retry_statistics(self) -> dict:
        """
        Get retry statistics.

        Returns:
            Dictionary with retry statistics
        """
        with self._lock:
            return {
                "total_calls": self._total_calls,
                "total_retries": self._total_retries,
                "total_failures": self._total_failures,
                "circuit_breaker_open": self._circuit_breaker_open,
                "failure_count": self._failure_count,
            }
