"""Core database connection with bounded-retry open and transaction support."""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from courseload.config import get_database_config
from courseload.db.schema import initialize
from courseload.errors import ConnectionFailure

logger = logging.getLogger(__name__)


def is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    return "UNIQUE constraint failed" in str(exc)


class Database:
    """
    SQLite database wrapper owning the single shared connection.

    Repositories take a ``Database`` in their constructor and borrow its
    connection; none of them open their own. Every aggregate mutation goes
    through ``transaction()``, which commits on success and rolls back on
    failure.
    """

    def __init__(
        self,
        path: Optional[Path | str] = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
    ):
        cfg = get_database_config()
        if path is None:
            self.path: Path = cfg.path
        elif isinstance(path, str):
            self.path = Path(path)
        else:
            self.path = path
        self.max_retries = cfg.max_retries if max_retries is None else max_retries
        self.base_delay = cfg.base_delay if base_delay is None else base_delay
        self._conn: Optional[sqlite3.Connection] = None
        # One connection is shared by every caller; a transaction owns it until
        # commit or rollback.
        self._lock = threading.RLock()

    # -- connection lifecycle --------------------------------------------------

    @property
    def is_memory(self) -> bool:
        return str(self.path) == ":memory:"

    def _ensure_dir(self) -> None:
        if not self.is_memory:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def _connect_once(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.path), check_same_thread=False)
        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            if not self.is_memory:
                conn.execute("PRAGMA journal_mode = WAL")
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def open(self) -> sqlite3.Connection:
        """
        Open the store, retrying up to ``max_retries`` times.

        After failed attempt ``i`` (counting from zero) the wait before the
        next attempt is ``base_delay * i``. When every attempt fails the last
        error is raised as the cause of ``ConnectionFailure``.
        """
        if self._conn is not None:
            return self._conn

        last_error: Optional[BaseException] = None
        for attempt in range(self.max_retries):
            try:
                self._ensure_dir()
                self._conn = self._connect_once()
            except (sqlite3.Error, OSError) as exc:
                last_error = exc
                logger.warning(
                    f"Opening {self.path} failed (attempt {attempt + 1}/{self.max_retries}): {exc}"
                )
                if attempt + 1 < self.max_retries:
                    time.sleep(self.base_delay * attempt)
                continue
            logger.info(f"Opened database {self.path} on attempt {attempt + 1}")
            return self._conn

        logger.error(f"Giving up on {self.path} after {self.max_retries} attempts")
        raise ConnectionFailure(str(self.path), self.max_retries, last_error) from last_error

    def connection(self) -> sqlite3.Connection:
        return self.open()

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def init(self) -> None:
        """Create all tables (idempotent)."""
        initialize(self)

    # -- transaction helpers ---------------------------------------------------

    @contextmanager
    def locked(self) -> Generator[sqlite3.Connection, None, None]:
        """Hold the connection exclusively, e.g. for a multi-statement read."""
        with self._lock:
            yield self.connection()

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Commits on success, rolls back on exception.

        Other threads wait until the transaction finishes.
        """
        with self._lock:
            conn = self.connection()
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    # -- low-level query helpers -----------------------------------------------

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        with self._lock:
            row = self.connection().execute(sql, params).fetchone()
        return dict(row) if row else None

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        with self._lock:
            rows = self.connection().execute(sql, params).fetchall()
        return [dict(r) for r in rows]
