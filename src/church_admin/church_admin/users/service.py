from __future__ import annotations

from werkzeug.security import check_password_hash

from ..access.model import SessionUser
from ..core.exceptions import AuthenticationError
from .model import User
from .repository import UserRepository

INVALID_CREDENTIALS = "E-mail ou senha inválidos"


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> User:
        email = (email or "").strip()
        if not email or not password:
            raise AuthenticationError(INVALID_CREDENTIALS)

        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # placeholder hashes like 'CHANGE_ME'
            ok = False
        if not ok:
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user

    @staticmethod
    def session_user(user: User) -> SessionUser:
        return SessionUser(user_id=user.user_id, email=user.email, role=user.role, church_id=user.church_id)
