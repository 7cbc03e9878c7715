"""Structured logging utilities with context support."""

import functools
import logging
import threading
import uuid
from typing import Any, Callable, Dict, Mapping, Optional

_thread_local = threading.local()

# Field names (substring match, case-insensitive) whose values are redacted
SENSITIVE_FIELDS = {
    "password",
    "token",
    "secret",
    "authorization",
    "credentials",
    "aadhar",
    "pan_number",
    "pannumber",
    "accountnumber",
}

REDACTED = "***REDACTED***"


def generate_correlation_id() -> str:
    """
    Generate a unique correlation ID.

    Used both to tag a CLI invocation's log records and as the client
    reference attached to each timesheet create.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    """
    Get the correlation ID of the active LogContext, if any.

    Returns:
        Current correlation ID or None if not set
    """
    context = getattr(_thread_local, "context", None)
    if context:
        return context.get("correlation_id")
    return None


class LogContext:
    """
    Context manager for adding structured fields to log records.

    Fields live in thread-local storage and are attached to every record
    passing through a handler configured by ``configure_logging``.

    Example:
        with LogContext(employee_id="E-17", week_start="2024-01-01"):
            logger.info("Saving week")
    """

    def __init__(self, **kwargs):
        self.fields = kwargs
        self.previous_context: Optional[Dict[str, Any]] = None

    def __enter__(self):
        if not hasattr(_thread_local, "context"):
            _thread_local.context = {}

        self.previous_context = _thread_local.context.copy()
        _thread_local.context.update(self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.previous_context is not None:
            _thread_local.context = self.previous_context
        else:
            _thread_local.context = {}


class _ContextFilter(logging.Filter):
    """Logging filter that copies LogContext fields onto log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in getattr(_thread_local, "context", {}).items():
            setattr(record, key, value)
        return True


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(sensitive in lowered for sensitive in SENSITIVE_FIELDS)


def sanitize_sensitive_data(data: Any) -> Any:
    """
    Redact sensitive values before they reach a log line.

    Mappings are processed recursively and lists element-wise, so request
    bodies (which are often arrays of objects) can be passed directly.

    Args:
        data: Mapping, list, or scalar to sanitize

    Returns:
        A sanitized copy; scalars are returned unchanged
    """
    if isinstance(data, Mapping):
        sanitized: Dict[str, Any] = {}
        for key, value in data.items():
            if _is_sensitive(str(key)):
                sanitized[key] = REDACTED if value is not None else None
            else:
                sanitized[key] = sanitize_sensitive_data(value)
        return sanitized

    if isinstance(data, (list, tuple)):
        return [sanitize_sensitive_data(item) for item in data]

    return data


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Decorator to log function entry and exit.

    Exceptions are logged with traceback and re-raised.

    Example:
        @log_function_call
        def save(self):
            ...

        @log_function_call(include_args=True, level="INFO")
        def generate_salary(self, year, month):
            ...
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())

            if include_args:
                args_repr = [repr(a) for a in args]
                kwargs_repr = [
                    f"{k}={REDACTED if _is_sensitive(k) else repr(v)}"
                    for k, v in kwargs.items()
                ]
                signature = ", ".join(args_repr + kwargs_repr)
                logger.log(log_level, f"Entering {f.__qualname__} with args: {signature}")
            else:
                logger.log(log_level, f"Entering {f.__qualname__}")

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Exception in {f.__qualname__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            logger.log(log_level, f"Exiting {f.__qualname__}")
            return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)
