"""Repository for the course aggregate — ``courses`` plus its ``instructors`` and ``meetings``."""

from __future__ import annotations

import logging
import sqlite3

from courseload.db.database import Database, is_unique_violation
from courseload.errors import NotFoundError, UniquenessViolation
from courseload.models.course import Course, Instructor, Meeting

logger = logging.getLogger(__name__)


class CourseRepository:
    """Reads and writes a course together with its child rows as one unit."""

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def insert(self, course: Course) -> Course:
        """
        Write the course row, then each instructor, then each meeting.

        All rows commit together or not at all. A duplicate ``term_crn``
        raises ``UniquenessViolation`` and leaves the existing course as is.
        """
        try:
            with self._db.transaction() as conn:
                conn.execute(
                    """INSERT INTO courses
                       (term_crn, title, subject_code, course_number, description)
                       VALUES (?, ?, ?, ?, ?)""",
                    (course.term_crn, course.title, course.subject,
                     course.number, course.description),
                )
                for instructor in course.instructors:
                    conn.execute(
                        """INSERT INTO instructors
                           (last_name, first_name, email, term_crn)
                           VALUES (?, ?, ?, ?)""",
                        (instructor.last_name, instructor.first_name,
                         instructor.email, course.term_crn),
                    )
                for meeting in course.meetings:
                    conn.execute(
                        """INSERT INTO meetings
                           (days, building, room, time, term_crn)
                           VALUES (?, ?, ?, ?, ?)""",
                        (meeting.days, meeting.building, meeting.room,
                         meeting.time, course.term_crn),
                    )
        except sqlite3.IntegrityError as exc:
            if is_unique_violation(exc):
                raise UniquenessViolation(str(exc)) from exc
            raise
        logger.info(
            f"Inserted course {course.term_crn} with {len(course.instructors)} instructor(s) "
            f"and {len(course.meetings)} meeting(s)"
        )
        return course

    # -- Read ------------------------------------------------------------------

    def get(self, term_crn: str) -> Course:
        with self._db.locked():
            row = self._db.fetchone(
                """SELECT term_crn, title, subject_code, course_number, description
                   FROM courses WHERE term_crn = ?""",
                (term_crn,),
            )
            if row is None:
                raise NotFoundError("course", term_crn)

            instructors = [
                Instructor.from_row(r)
                for r in self._db.fetchall(
                    """SELECT id, last_name, first_name, email
                       FROM instructors WHERE term_crn = ? ORDER BY id""",
                    (term_crn,),
                )
            ]
            meetings = [
                Meeting.from_row(r)
                for r in self._db.fetchall(
                    """SELECT id, days, building, room, time
                       FROM meetings WHERE term_crn = ? ORDER BY id""",
                    (term_crn,),
                )
            ]
        return Course.from_row(row, instructors, meetings)

    def list_keys(self) -> list[str]:
        """All course keys in storage scan order (unsorted)."""
        rows = self._db.fetchall("SELECT term_crn FROM courses")
        return [r["term_crn"] for r in rows]

    # -- Delete ----------------------------------------------------------------

    def delete(self, term_crn: str) -> None:
        """
        Remove the course, its instructors and its meetings in one transaction.

        Raises ``NotFoundError`` (and changes nothing) when no course has
        this key.
        """
        with self._db.transaction() as conn:
            cur = conn.execute("DELETE FROM courses WHERE term_crn = ?", (term_crn,))
            if cur.rowcount == 0:
                raise NotFoundError("course", term_crn)
            removed_instructors = conn.execute(
                "DELETE FROM instructors WHERE term_crn = ?", (term_crn,)
            ).rowcount
            removed_meetings = conn.execute(
                "DELETE FROM meetings WHERE term_crn = ?", (term_crn,)
            ).rowcount
        logger.info(
            f"Deleted course {term_crn} ({removed_instructors} instructor(s), "
            f"{removed_meetings} meeting(s))"
        )
