"""
Shared REST client for the HR backend.

Every domain service talks to the backend through one ``ApiClient``. It owns
the HTTP session, attaches credentials from an injected ``AuthSession``,
retries idempotent requests, and normalizes the response envelope.

Two calling conventions mirror how the pages consume the backend:

* ``query`` (reads) raises ``ApiError`` unless the envelope's flag is true.
* ``mutate`` (writes) never raises for backend or transport failure; it
  returns an envelope with ``flag=False`` and a usable message instead.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import requests
from pydantic import ValidationError

from hr_portal.models.auth import AuthSession
from hr_portal.models.envelope import WebResponse
from hr_portal.services.error_classifier import ErrorClassifier, http_status_of
from hr_portal.services.retry_handler import (
    CircuitBreakerError,
    RetryExhaustedException,
    RetryHandler,
)
from hr_portal.utils.logging_utils import get_correlation_id, sanitize_sensitive_data

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "DELETE", "PATCH"})

_TRANSPORT_ERRORS = (
    requests.RequestException,
    RetryExhaustedException,
    CircuitBreakerError,
)


class ApiError(Exception):
    """A backend call failed or returned ``flag=False``.

    Attributes:
        message: User-presentable failure message
        status: HTTP (or envelope) status, when known
        payload: Decoded response body, when there was one
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status = status
        self.payload = payload
        super().__init__(message)


class ApiClient:
    """
    Configured HTTP client shared by all domain services.

    Features:
    - Base URL and default JSON headers
    - Bearer token from an injected AuthSession
    - Retry with backoff for idempotent verbs (never for POST)
    - Envelope normalization and failure messages
    - Correlation id forwarding (``X-Correlation-ID``)
    """

    DEFAULT_HEADERS = {
        "Content-Type": "application/json",
        "Accept": "*/*",
    }

    def __init__(
        self,
        base_url: str,
        session: Optional[AuthSession] = None,
        timeout: float = 30.0,
        verify: bool = True,
        retry_handler: Optional[RetryHandler] = None,
        http: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. ``http://host:8081/web/api/v1``
            session: Credentials to send; None for anonymous calls (login)
            timeout: Per-request timeout in seconds
            verify: Verify TLS certificates
            retry_handler: Custom retry handler instance
            http: Pre-built requests session (tests inject a mock here)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify = verify
        self.retry_handler = retry_handler or RetryHandler()
        self.error_classifier = ErrorClassifier()

        self._http = http if http is not None else requests.Session()
        self._http.headers.update(self.DEFAULT_HEADERS)
        self._session: Optional[AuthSession] = None
        self._closed = False

        if session is not None:
            self.attach_session(session)

    @classmethod
    def from_config(cls, config, session: Optional[AuthSession] = None) -> "ApiClient":
        """Build a client from ``HrPortalConfig``."""
        return cls(
            base_url=config.api_base_url,
            session=session,
            timeout=config.api_timeout,
            verify=config.verify_ssl,
            retry_handler=RetryHandler(
                max_retries=config.max_retries, base_delay=config.retry_delay
            ),
        )

    def attach_session(self, session: AuthSession) -> None:
        """Send ``session``'s bearer token on every subsequent request."""
        self._session = session
        if session.access_token:
            self._http.headers["Authorization"] = f"Bearer {session.access_token}"
        logger.info(f"API client authenticated as user {session.user.user_id}")

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Dispose the HTTP session and forget credentials (logout)."""
        self._http.headers.pop("Authorization", None)
        self._session = None
        self._http.close()
        self._closed = True
        logger.debug(
            f"API client closed; retries: {self.retry_handler.get_retry_statistics()}, "
            f"errors: {self.error_classifier.get_statistics()}"
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> requests.Response:
        if self._closed:
            raise ApiError("Client is closed; log in again", status=401)

        method = method.upper()
        headers = {}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id

        logger.debug(
            f"{method} {path} params={sanitize_sensitive_data(params)} "
            f"body={sanitize_sensitive_data(json)}"
        )

        def _request() -> requests.Response:
            response = self._http.request(
                method,
                self._url(path),
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
                verify=self.verify,
            )
            response.raise_for_status()
            return response

        if method in IDEMPOTENT_METHODS:
            return self.retry_handler.execute_with_retry(_request)
        return _request()

    @staticmethod
    def _decode(response: requests.Response) -> WebResponse[Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(
                "Backend returned a non-JSON response", status=response.status_code
            ) from e

        try:
            return WebResponse[Any].model_validate(body)
        except ValidationError as e:
            raise ApiError(
                "Backend returned an unexpected response shape",
                status=response.status_code,
            ) from e

    def _describe_failure(self, error: Exception, default: str) -> Tuple[str, int]:
        """Pick the message and status to surface for a failed call."""
        if isinstance(error, ApiError):
            return error.message or default, error.status or 500

        # Unwrap to the last underlying HTTP error so its status is reported
        if isinstance(error, RetryExhaustedException) and error.__cause__ is not None:
            error = error.__cause__

        status = http_status_of(error) or 500
        response = getattr(error, "response", None)
        if response is not None:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("message"):
                return str(body["message"]), status

        description = self.error_classifier.get_error_description(error)
        return description or default, status

    def query(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        default_message: str = "Failed to fetch data",
    ) -> WebResponse[Any]:
        """
        GET ``path`` and return the envelope.

        Raises:
            ApiError: On transport failure or ``flag=False``
        """
        try:
            envelope = self._decode(self._send("GET", path, params=params))
        except _TRANSPORT_ERRORS + (ApiError,) as e:
            message, status = self._describe_failure(e, default_message)
            logger.error(f"GET {path} failed: {message}")
            raise ApiError(message, status=status) from e

        if not envelope.flag:
            message = envelope.message or default_message
            logger.error(f"GET {path} rejected by backend: {message}")
            raise ApiError(message, status=envelope.status or 400)

        return envelope

    def mutate(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        success_message: str = "Operation successful",
        failure_message: str = "Operation failed",
    ) -> WebResponse[Any]:
        """
        Send a write request and return a normalized envelope.

        Never raises for backend or transport failure: the returned envelope
        has ``flag=False`` with the backend's message (or a description of
        the transport error, or ``failure_message``) and a status (HTTP
        status, else 500).
        """
        try:
            envelope = self._decode(
                self._send(method, path, params=params, json=json)
            )
        except _TRANSPORT_ERRORS + (ApiError,) as e:
            message, status = self._describe_failure(e, failure_message)
            logger.error(f"{method.upper()} {path} failed: {message}")
            return WebResponse.failure(message, status)

        if not envelope.message:
            envelope.message = success_message if envelope.flag else failure_message
        if not envelope.status:
            envelope.status = 200 if envelope.flag else 400

        if not envelope.flag:
            logger.warning(f"{method.upper()} {path} rejected: {envelope.message}")

        return envelope
