"""Accessor for the users table."""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.exc import IntegrityError

from trailblazer.db import Database
from trailblazer.models.base import Store
from trailblazer.utils.exceptions import DuplicateNameError, NotFoundError, UnauthorizedError
from trailblazer.utils.security import PasswordHasher

logger = logging.getLogger(__name__)


class UserStore(Store):
    """
    Users, keyed by username for the public operations.

    No method ever returns the password hash.
    """

    table = "users"
    key = "username"
    columns = ("id", "username", "email", "first_name")
    updatable = {"password": "password_hash"}
    label = "user"

    def __init__(self, db: Database, hasher: PasswordHasher):
        super().__init__(db)
        self.hasher = hasher

    def not_found(self, key_value: Any) -> NotFoundError:
        return NotFoundError(f"No user: {key_value}")

    async def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        """
        Check a username/password pair.

        Returns:
            { id, username, email, first_name }

        Raises:
            UnauthorizedError: If the user does not exist or the password is wrong
        """
        row = await self.db.fetch_one(
            f"SELECT {self.projection}, password_hash FROM users WHERE username = $1",
            [username],
        )
        if row is not None:
            hashed = row.pop("password_hash")
            if self.hasher.verify(password, hashed):
                return row

        logger.warning(f"Failed login attempt for username: {username}")
        raise UnauthorizedError("Invalid username/password")

    async def register(
        self, *, username: str, password: str, email: str, first_name: str
    ) -> Dict[str, Any]:
        """
        Create a user, hashing the password first.

        Raises:
            DuplicateNameError: If the username is taken
        """
        existing = await self.db.fetch_one(
            "SELECT username FROM users WHERE username = $1", [username]
        )
        if existing is not None:
            raise DuplicateNameError(f"Duplicate username: {username}")

        hashed = self.hasher.hash(password)
        try:
            return await self.db.fetch_one(
                f"""INSERT INTO users (username, email, password_hash, first_name)
                    VALUES ($1, $2, $3, $4)
                    RETURNING {self.projection}""",
                [username, email, hashed, first_name],
            )
        except IntegrityError as e:
            raise DuplicateNameError(f"Duplicate username: {username}") from e

    add = register

    async def find_all(self) -> List[Dict[str, Any]]:
        return await self.db.fetch_all(
            f"SELECT {self.projection} FROM users ORDER BY username"
        )

    async def update(self, username: str, data: Mapping[str, Any], owner=None) -> Dict[str, Any]:
        """
        Partial update of a user's profile.

        ``data`` may contain first_name, email and password; a new password is
        hashed before it is stored.
        """
        data = dict(data)
        if data.get("password"):
            data["password"] = self.hasher.hash(data["password"])
        return await super().update(username, data, owner)
