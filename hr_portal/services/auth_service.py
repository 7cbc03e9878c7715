"""Authentication service and session bootstrap.

Login produces an ``AuthSession`` that is attached to an ``ApiClient``;
logout disposes the client. There is no global session store.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from hr_portal.config.settings import HrPortalConfig, get_config
from hr_portal.models.auth import AuthSession
from hr_portal.models.envelope import WebResponse
from hr_portal.models.people import Role, User
from hr_portal.services.api_client import ApiClient, ApiError
from hr_portal.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

_KNOWN_ROLES = {role.value for role in Role}


def _inner_data(envelope: WebResponse[Any]) -> Optional[Dict[str, Any]]:
    """Auth endpoints nest their payload one level deeper, under ``data``."""
    response = envelope.response
    if isinstance(response, dict) and isinstance(response.get("data"), dict):
        return response["data"]
    return None


def _user_from_login(inner: Dict[str, Any]) -> User:
    """Build the unified User from a login payload.

    Admin logins carry ``userId``/``userName``; every other role is an
    employee identified by ``employeeId`` and a "first last" display name.
    """
    login_dto = inner.get("loginResponseDTO") or {}
    role = login_dto.get("role")
    is_admin = bool(inner.get("userId")) and role == Role.ADMIN.value

    if is_admin:
        user_id = inner.get("userId")
        user_name = inner.get("userName") or ""
        created_at = inner.get("createdAt")
        updated_at = inner.get("updatedAt") if isinstance(inner.get("updatedAt"), str) else ""
    else:
        user_id = inner.get("employeeId")
        first = inner.get("firstName") or ""
        last = inner.get("lastName") or ""
        user_name = f"{first} {last}".strip()
        created_at = inner.get("dateOfJoining")
        updated_at = inner.get("status")

    return User(
        user_id=str(user_id or ""),
        user_name=user_name,
        email=inner.get("email") or None,
        role=role if role in _KNOWN_ROLES else None,
        created_at=created_at,
        updated_at=updated_at,
    )


class AuthService:
    """Login, token refresh and device registration."""

    LOGIN_PATH = "/auth/login"
    REFRESH_PATH = "/auth/refreshToken"
    PRESET_DEVICE_PATH = "/auth/preset-device"

    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, input_key: str, password: str) -> AuthSession:
        """Exchange a login key (email or employee id) and password for a session.

        Raises:
            ApiError: If the backend rejects the credentials or the
                response carries no user data
        """
        params = {}
        if input_key:
            params["inputKey"] = input_key
        if password:
            params["password"] = password

        envelope = self.client.mutate(
            "POST",
            self.LOGIN_PATH,
            params=params,
            json={},
            success_message="Login successful",
            failure_message="Login failed",
        )
        inner = _inner_data(envelope) if envelope.flag else None
        if inner is None:
            raise ApiError(envelope.message or "Login failed", status=envelope.status or 401)

        login_dto = inner.get("loginResponseDTO") or {}
        session = AuthSession(
            user=_user_from_login(inner),
            access_token=login_dto.get("accessToken") or "",
            refresh_token=login_dto.get("refreshToken") or "",
        )
        logger.info(
            f"Logged in as {session.user.user_name or session.user.user_id} "
            f"(role={session.user.role.value if session.user.role else 'unknown'})"
        )
        return session

    def refresh(self, refresh_token: str) -> AuthSession:
        """Trade a refresh token for a new token pair."""
        if not refresh_token:
            raise ApiError("Refresh token is required", status=400)

        envelope = self.client.mutate(
            "POST",
            self.REFRESH_PATH,
            json={"refreshToken": refresh_token},
            failure_message="Refresh failed",
        )
        if not envelope.flag:
            raise ApiError(envelope.message or "Refresh failed", status=envelope.status)

        inner = _inner_data(envelope)
        if not inner or not isinstance(inner.get("user"), dict):
            raise ApiError("Refresh response missing user", status=envelope.status)

        try:
            user = User.model_validate(inner["user"])
        except ValidationError as e:
            raise ApiError("Refresh response has an invalid user", status=envelope.status) from e

        return AuthSession(
            user=user,
            access_token=inner.get("accessToken") or "",
            refresh_token=inner.get("refreshToken") or "",
        )

    def preset_device(self) -> WebResponse[Any]:
        return self.client.mutate(
            "POST",
            self.PRESET_DEVICE_PATH,
            success_message="Device registered",
            failure_message="Failed to register device",
        )

    @staticmethod
    def logout(client: ApiClient) -> None:
        """Dispose an authenticated client; its credentials are forgotten."""
        user_id = client.session.user.user_id if client.session else None
        client.close()
        logger.info(f"Logged out{f' user {user_id}' if user_id else ''}")


def open_session(config: Optional[HrPortalConfig] = None) -> ApiClient:
    """Build an authenticated client from configuration.

    A configured access token is used as is, and the user is resolved from
    the employee profile. Otherwise the configured login key and password
    are exchanged for a session.

    Raises:
        ValueError: If no credentials are configured
        ApiError: If login or the profile lookup fails
    """
    config = config or get_config()
    client = ApiClient.from_config(config)

    if config.access_token:
        client.attach_session(
            AuthSession(
                user=User(user_id=""),
                access_token=config.access_token,
                refresh_token=config.refresh_token,
            )
        )
        try:
            profile = EmployeeService(client).get_profile()
        except ApiError:
            client.close()
            raise
        client.attach_session(
            AuthSession(
                user=User(
                    user_id=profile.employee_id,
                    user_name=profile.full_name,
                    email=profile.company_email or None,
                    role=Role.EMPLOYEE,
                ),
                access_token=config.access_token,
                refresh_token=config.refresh_token,
            )
        )
        return client

    if config.login_key and config.login_password:
        try:
            session = AuthService(client).login(config.login_key, config.login_password)
        except ApiError:
            client.close()
            raise
        client.attach_session(session)
        return client

    client.close()
    raise ValueError(
        "No credentials configured: set HR_ACCESS_TOKEN or HR_LOGIN_KEY and HR_LOGIN_PASSWORD"
    )
