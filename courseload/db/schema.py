"""Database schema DDL — the four tables of the course catalog."""

from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING

from courseload.errors import SchemaInitError

if TYPE_CHECKING:
    from courseload.db.database import Database

logger = logging.getLogger(__name__)

USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    username    TEXT NOT NULL UNIQUE,
    password    TEXT NOT NULL,
    classes     TEXT NOT NULL
);
"""

COURSES_DDL = """
CREATE TABLE IF NOT EXISTS courses (
    term_crn        TEXT PRIMARY KEY,
    title           TEXT NOT NULL,
    subject_code    TEXT NOT NULL,
    course_number   TEXT NOT NULL,
    description     TEXT NOT NULL
);
"""

# Child FKs are checked at commit so an aggregate can be written or removed
# course-first inside one transaction.
INSTRUCTORS_DDL = """
CREATE TABLE IF NOT EXISTS instructors (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    last_name   TEXT NOT NULL,
    first_name  TEXT NOT NULL,
    email       TEXT NOT NULL,
    term_crn    TEXT NOT NULL,
    FOREIGN KEY (term_crn) REFERENCES courses(term_crn)
        DEFERRABLE INITIALLY DEFERRED
);
CREATE INDEX IF NOT EXISTS idx_instructors_term_crn ON instructors(term_crn);
"""

MEETINGS_DDL = """
CREATE TABLE IF NOT EXISTS meetings (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    days        TEXT NOT NULL,
    building    TEXT NOT NULL,
    room        TEXT NOT NULL,
    time        TEXT NOT NULL,
    term_crn    TEXT NOT NULL,
    FOREIGN KEY (term_crn) REFERENCES courses(term_crn)
        DEFERRABLE INITIALLY DEFERRED
);
CREATE INDEX IF NOT EXISTS idx_meetings_term_crn ON meetings(term_crn);
"""

# Creation order matters: courses must exist before the tables that reference it.
SCHEMA_STATEMENTS: tuple[tuple[str, str], ...] = (
    ("users", USERS_DDL),
    ("courses", COURSES_DDL),
    ("instructors", INSTRUCTORS_DDL),
    ("meetings", MEETINGS_DDL),
)


def initialize(db: "Database") -> None:
    """Create all tables (idempotent).

    Any failure raises ``SchemaInitError``; callers are not expected to
    recover from it.
    """
    conn = db.connection()
    for table, ddl in SCHEMA_STATEMENTS:
        try:
            conn.executescript(ddl)
        except sqlite3.Error as exc:
            logger.critical(f"Schema initialization failed on table {table}: {exc}")
            raise SchemaInitError(table, exc) from exc
    logger.info(f"Schema ready at {db.path}")
