"""Password hashing and JWT helpers."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import Settings
from .exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class PasswordHasher:
    """bcrypt hashing with a configurable cost factor."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return self._context.verify(password, hashed)
        except ValueError:
            # stored value is not a bcrypt hash
            return False


class TokenManager:
    """Issues and verifies the HS256 bearer tokens used by the API."""

    def __init__(self, secret_key: str, expire_minutes: Optional[int] = None):
        self.secret_key = secret_key
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenManager":
        return cls(settings.secret_key, settings.access_token_expire_minutes)

    def create_token(self, user: Dict[str, Any]) -> str:
        """Sign a token carrying the user's id and username."""
        payload: Dict[str, Any] = {
            "sub": user["username"],
            "username": user["username"],
            "user_id": user["id"],
        }
        if self.expire_minutes:
            payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self.secret_key, algorithm=ALGORITHM)

    def decode_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
        except JWTError as e:
            raise UnauthorizedError(f"Invalid token: {e}") from e
