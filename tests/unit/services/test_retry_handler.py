"""
Unit tests for retry handler with exponential backoff and circuit breaker.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from hr_portal.services.retry_handler import (
    CircuitBreakerError,
    RetryExhaustedException,
    RetryHandler,
    is_transient_error,
)


def http_error(status: int) -> requests.HTTPError:
    """An HTTPError carrying a response with ``status``."""
    response = requests.Response()
    response.status_code = status
    return requests.HTTPError(f"{status} error", response=response)


class TestIsTransientError:
    """Default retry condition."""

    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_rate_limit_and_server_errors(self, status):
        assert is_transient_error(http_error(status))

    @pytest.mark.parametrize("status", [400, 401, 403, 404])
    def test_client_errors(self, status):
        assert not is_transient_error(http_error(status))

    def test_network_errors(self):
        assert is_transient_error(requests.ConnectionError("reset"))
        assert is_transient_error(requests.Timeout("slow"))

    def test_other_exceptions(self):
        assert not is_transient_error(ValueError("bad"))


class TestRetryHandler:
    """Test cases for RetryHandler."""

    @pytest.fixture
    def retry_handler(self):
        """RetryHandler instance with test configuration."""
        return RetryHandler(
            max_retries=3,
            base_delay=0.1,  # Short delay for testing
            max_delay=1.0,
            exponential_base=2,
            jitter_factor=0.1,
            circuit_breaker_threshold=5,
            circuit_breaker_timeout=2.0,
        )

    def test_initialization_with_defaults(self):
        """Test retry handler initializes with default values."""
        handler = RetryHandler()

        assert handler.max_retries == 3
        assert handler.base_delay == 1.0
        assert handler.max_delay == 30.0
        assert handler.exponential_base == 2
        assert handler.jitter_factor == 0.1
        assert handler.circuit_breaker_threshold == 5
        assert handler.circuit_breaker_timeout == 30.0

    def test_successful_execution_no_retry(self, retry_handler):
        """Test successful execution without retries."""
        mock_func = Mock(return_value="success")

        result = retry_handler.execute_with_retry(mock_func)

        assert result == "success"
        mock_func.assert_called_once()

    def test_retry_on_rate_limit_error(self, retry_handler):
        """Test retry behavior on rate limit (429) errors."""
        mock_func = Mock()
        mock_func.side_effect = [http_error(429), http_error(429), "success"]

        with patch("time.sleep") as mock_sleep:
            result = retry_handler.execute_with_retry(mock_func)

        assert result == "success"
        assert mock_func.call_count == 3
        assert mock_sleep.call_count == 2

    def test_no_retry_on_client_error(self, retry_handler):
        """Test no retry on client (4xx) errors except 429."""
        mock_func = Mock(side_effect=http_error(404))

        with pytest.raises(requests.HTTPError):
            retry_handler.execute_with_retry(mock_func)

        mock_func.assert_called_once()

    def test_exponential_backoff_calculation(self, retry_handler):
        """Test exponential backoff delay calculation."""
        delays = []

        with patch("time.sleep") as mock_sleep:
            mock_sleep.side_effect = lambda delay: delays.append(delay)

            mock_func = Mock(side_effect=[http_error(500)] * 4)

            with pytest.raises(RetryExhaustedException):
                retry_handler.execute_with_retry(mock_func)

        assert len(delays) == 3
        # Allow for jitter which can shift delay by up to 10%
        assert 0.09 <= delays[0] <= 0.11
        assert 0.18 <= delays[1] <= 0.22
        assert 0.36 <= delays[2] <= 0.44

    def test_max_delay_cap(self):
        """Test that delays are capped at max_delay."""
        handler = RetryHandler(
            max_retries=5,
            base_delay=10.0,
            max_delay=2.0,
            exponential_base=3,
        )

        delays = []
        with patch("time.sleep") as mock_sleep:
            mock_sleep.side_effect = lambda delay: delays.append(delay)

            mock_func = Mock(side_effect=[http_error(500)] * 6)

            with pytest.raises(RetryExhaustedException):
                handler.execute_with_retry(mock_func)

        assert all(delay <= 2.2 for delay in delays)  # max_delay (2.0) + 10% jitter

    def test_retry_exhausted_exception_keeps_cause(self, retry_handler):
        """Test RetryExhaustedException after max retries."""
        last_error = http_error(503)
        mock_func = Mock(side_effect=last_error)

        with patch("time.sleep"):
            with pytest.raises(RetryExhaustedException) as exc_info:
                retry_handler.execute_with_retry(mock_func)

        assert "Max retries (3) exceeded" in str(exc_info.value)
        assert exc_info.value.__cause__ is last_error
        assert mock_func.call_count == 4  # initial + 3 retries

    def _open_circuit(self, retry_handler, mock_func):
        for _ in range(5):
            with pytest.raises(RetryExhaustedException):
                retry_handler.execute_with_retry(mock_func)

    def test_circuit_breaker_opens_after_threshold(self, retry_handler):
        """Test circuit breaker opens after failure threshold."""
        mock_func = Mock(side_effect=http_error(500))

        with patch("time.sleep"):
            self._open_circuit(retry_handler, mock_func)

        assert retry_handler._circuit_breaker_open is True

        with pytest.raises(CircuitBreakerError):
            retry_handler.execute_with_retry(mock_func)

    def test_circuit_breaker_half_open_after_timeout(self, retry_handler):
        """Test circuit breaker closes after a successful half-open call."""
        mock_func = Mock(side_effect=http_error(500))
        with patch("time.sleep"):
            self._open_circuit(retry_handler, mock_func)

        with patch("time.time") as mock_time:
            mock_time.return_value = retry_handler._circuit_breaker_opened_at + 3.0

            mock_func.side_effect = None
            mock_func.return_value = "success"
            result = retry_handler.execute_with_retry(mock_func)

        assert result == "success"
        assert retry_handler._circuit_breaker_open is False
        assert retry_handler._failure_count == 0

    def test_custom_retry_conditions(self):
        """Test custom retry condition function."""
        handler = RetryHandler(retry_condition=lambda e: isinstance(e, ValueError))
        mock_func = Mock(side_effect=[ValueError("Custom error"), "success"])

        with patch("time.sleep"):
            result = handler.execute_with_retry(mock_func)

        assert result == "success"
        assert mock_func.call_count == 2

    def test_retry_with_function_arguments(self, retry_handler):
        """Test retry handler preserves function arguments."""
        mock_func = Mock(side_effect=[http_error(500), "success"])

        with patch("time.sleep"):
            result = retry_handler.execute_with_retry(mock_func, "arg1", kwarg1="value1")

        assert result == "success"
        mock_func.assert_any_call("arg1", kwarg1="value1")

    def test_retry_statistics_tracking(self, retry_handler):
        """Test that retry statistics are tracked correctly."""
        mock_func = Mock(side_effect=[http_error(500), http_error(500), "success"])

        with patch("time.sleep"):
            retry_handler.execute_with_retry(mock_func)

        stats = retry_handler.get_retry_statistics()
        assert stats["total_calls"] == 1
        assert stats["total_retries"] == 2
        assert stats["total_failures"] == 0
