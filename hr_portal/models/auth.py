"""Authenticated session capability."""

from typing import Optional

from hr_portal.models.base import BaseDataModel
from hr_portal.models.people import User


class AuthSession(BaseDataModel):
    """Credentials of a logged-in user.

    Created by ``AuthService.login`` and injected into ``ApiClient``; there is
    no process-wide session store.
    """

    user: User
    access_token: str = ""
    refresh_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def __repr__(self) -> str:
        return f"AuthSession(user_id={self.user.user_id!r}, authenticated={self.is_authenticated})"
