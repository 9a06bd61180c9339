from __future__ import annotations

import logging
from typing import Optional

from ..core.database import ConnectionCache
from ..core.exceptions import (
    AuthenticationError,
    BadRequestError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from ..core.security import verify_password
from ..models.user import Identity
from .users import UserRepository

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """Checks an email/password pair against the stored user records.

    Callers only ever see one generic failure so they cannot tell an unknown
    email from a wrong password; the precise reason is logged.
    """

    def __init__(self, cache: ConnectionCache) -> None:
        self.cache = cache

    async def authenticate(self, email: Optional[str], password: Optional[str]) -> Identity:
        if not email or not password:
            raise BadRequestError("Missing email or password")

        try:
            return await self._verify(email, password)
        except AuthenticationError as exc:
            logger.warning("Login failed for %s: %s", email, exc)
            raise AuthenticationError() from exc
        except Exception as exc:
            logger.exception("Login failed for %s: %r", email, exc)
            raise AuthenticationError() from exc

    async def _verify(self, email: str, password: str) -> Identity:
        db = await self.cache.acquire()
        user = await UserRepository(db).find_by_email(email)
        if user is None:
            raise UserNotFoundError()

        if not verify_password(password, user.password):
            raise InvalidCredentialsError()

        return Identity(id=user.id, email=user.email)
