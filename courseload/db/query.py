"""Ad-hoc course lookups over a fixed set of queryable fields.

Caller-supplied field names are only ever used to pick a member of
``QueryableKey``; the SQL text is chosen from literals below and every
compared value is a bound parameter.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from courseload.db.course_repo import CourseRepository
from courseload.db.database import Database
from courseload.errors import QueryArgumentError, UnsupportedQueryKey
from courseload.models.course import Course

logger = logging.getLogger(__name__)


class QueryableKey(str, Enum):
    TERM_CRN = "term_crn"
    TITLE = "title"
    SUBJECT_CODE = "subject_code"
    COURSE_NUMBER = "course_number"
    SUBJECT_NUMBER = "subject-number"

    @property
    def label(self) -> str:
        return QUERYABLE_KEYS[self.value]

    @property
    def arity(self) -> int:
        return 2 if self is QueryableKey.SUBJECT_NUMBER else 1


# Accepted key -> human-readable label.
QUERYABLE_KEYS: dict[str, str] = {
    QueryableKey.TERM_CRN.value: "CRN",
    QueryableKey.TITLE.value: "Title",
    QueryableKey.SUBJECT_CODE.value: "Subject",
    QueryableKey.COURSE_NUMBER.value: "Number",
    QueryableKey.SUBJECT_NUMBER.value: "Subject & Number",
}

_EXACT_COLUMNS: dict[QueryableKey, str] = {
    QueryableKey.TERM_CRN: "term_crn",
    QueryableKey.SUBJECT_CODE: "subject_code",
    QueryableKey.COURSE_NUMBER: "course_number",
}


def queryable_keys() -> dict[str, str]:
    """Return a copy of the key -> label listing of what can be queried."""
    return dict(QUERYABLE_KEYS)


def _contains(value: str) -> str:
    """LIKE pattern matching *value* literally anywhere in the column."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _predicate(key: QueryableKey, values: tuple[str, ...]) -> tuple[str, tuple[str, ...]]:
    if key is QueryableKey.TITLE:
        return "title LIKE ? ESCAPE '\\'", (_contains(values[0]),)
    if key is QueryableKey.SUBJECT_NUMBER:
        return (
            "subject_code = ? AND course_number LIKE ? ESCAPE '\\'",
            (values[0], _contains(values[1])),
        )
    return f"{_EXACT_COLUMNS[key]} = ?", (values[0],)


class CourseQuery:
    """Runs whitelisted lookups and expands each hit into a full ``Course``."""

    def __init__(self, db: Database, courses: Optional[CourseRepository] = None):
        self._db = db
        self._courses = courses or CourseRepository(db)

    def query(self, key: str, *values: str) -> list[Course]:
        """
        Find courses by *key*.

        ``title`` is a substring match, ``subject-number`` takes a subject
        code (exact) and a course number (substring), every other key is an
        exact match. Raises ``UnsupportedQueryKey`` before touching the store
        when *key* is not queryable.
        """
        try:
            qkey = QueryableKey(key)
        except ValueError:
            raise UnsupportedQueryKey(str(key)) from None
        if len(values) != qkey.arity:
            raise QueryArgumentError(qkey.value, qkey.arity, len(values))

        where, params = _predicate(qkey, values)
        rows = self._db.fetchall(f"SELECT term_crn FROM courses WHERE {where}", params)

        results = [self._courses.get(r["term_crn"]) for r in rows]
        logger.debug(f"Query {qkey.value}={values!r} matched {len(results)} course(s)")
        return results
