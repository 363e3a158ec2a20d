"""Repository for user persistence."""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from rental_marketplace.db.connection import transaction
from rental_marketplace.domain.models import User, UserRole
from rental_marketplace.logging_config import get_logger
from rental_marketplace.repositories.mappers import user_from_row


class UserRepo:
    """CRUD operations for users."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def create(
        self,
        name: str,
        email: str,
        phone: Optional[str],
        role: UserRole,
    ) -> User:
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    """
                    INSERT INTO users (name, email, phone, role)
                    VALUES (?, ?, ?, ?)
                    """,
                    (name, email, phone, role.value),
                )
        except Exception:
            self._logger.exception("Failed to create user email=%s", email)
            raise
        return User(id=cursor.lastrowid, name=name, email=email, phone=phone, role=role)

    def delete(self, user_id: int) -> bool:
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    "DELETE FROM users WHERE user_id = ?",
                    (user_id,),
                )
        except Exception:
            self._logger.exception("Failed to delete user id=%s", user_id)
            raise
        return cursor.rowcount > 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        try:
            row = self._connection.execute(
                "SELECT * FROM users WHERE user_id = ?",
                (user_id,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get user id=%s", user_id)
            raise
        return user_from_row(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        try:
            row = self._connection.execute(
                "SELECT * FROM users WHERE LOWER(email) = LOWER(?)",
                (email.strip(),),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get user email=%s", email)
            raise
        return user_from_row(row) if row else None

    def list_all(self) -> List[User]:
        try:
            rows = self._connection.execute(
                "SELECT * FROM users ORDER BY name"
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list users")
            raise
        return [user_from_row(row) for row in rows]
