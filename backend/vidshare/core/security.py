import logging
from typing import Any, Dict, Optional

import bcrypt
from itsdangerous import BadSignature, URLSafeTimedSerializer

from .exceptions import BadRequestError

logger = logging.getLogger(__name__)

SESSION_SALT = "vidshare.session"


def hash_password(password: str, rounds: int = 10) -> str:
    try:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    except ValueError as exc:
        # bcrypt refuses inputs longer than 72 bytes
        raise BadRequestError("Password is too long") from exc
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed or input exceeds bcrypt limits")
        return False


class SessionSigner:
    """Issues and verifies tamper-evident session tokens carrying user claims."""

    def __init__(self, secret_key: str, max_age_seconds: int) -> None:
        self.max_age_seconds = max_age_seconds
        self._serializer = URLSafeTimedSerializer(secret_key, salt=SESSION_SALT)

    def issue(self, claims: Dict[str, Any]) -> str:
        return self._serializer.dumps(claims)

    def verify(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        if not token:
            return None
        try:
            claims, issued_at = self._serializer.loads(token, max_age=self.max_age_seconds, return_timestamp=True)
        except BadSignature:
            return None
        if not isinstance(claims, dict) or not claims.get("id"):
            return None
        # expiry follows from when the token was signed, not from when it is read
        return {**claims, "expires": int(issued_at.timestamp()) + self.max_age_seconds}
