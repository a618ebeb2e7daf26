"""Repository for the ``users`` table."""

from __future__ import annotations

import logging
import sqlite3

from courseload.db.database import Database, is_unique_violation
from courseload.errors import NotFoundError, UniquenessViolation
from courseload.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Database):
        self._db = db

    def insert(self, username: str, password: str, classes: str) -> User:
        """Insert a new user. Raises ``UniquenessViolation`` on duplicate username."""
        try:
            with self._db.transaction() as conn:
                cur = conn.execute(
                    "INSERT INTO users (username, password, classes) VALUES (?, ?, ?)",
                    (username, password, classes),
                )
        except sqlite3.IntegrityError as exc:
            if is_unique_violation(exc):
                raise UniquenessViolation(str(exc)) from exc
            raise
        logger.info(f"Created user {username}")
        return User(username=username, password=password, classes=classes, id=cur.lastrowid)

    def get(self, username: str) -> User:
        row = self._db.fetchone(
            "SELECT id, username, password, classes FROM users WHERE username = ?",
            (username,),
        )
        if row is None:
            raise NotFoundError("user", username)
        return User.from_row(row)
