"""Structured errors raised by the persistence layer.

Anything not listed here is a raw ``sqlite3.Error`` and propagates as-is.
"""

from __future__ import annotations

from typing import Optional


class CourseloadError(Exception):
    """Base class for all persistence-layer errors."""


class ConnectionFailure(CourseloadError):
    """The store could not be opened within the retry limit."""

    def __init__(self, path: str, attempts: int, last_error: Optional[BaseException] = None):
        self.path = path
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"could not open database {path} after {attempts} attempts: {last_error}")


class SchemaInitError(CourseloadError):
    """Creating a table failed. Startup cannot continue."""

    def __init__(self, table: str, cause: BaseException):
        self.table = table
        super().__init__(f"failed to create table {table}: {cause}")


class NotFoundError(CourseloadError, LookupError):
    """No row exists for the requested key."""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key!r} not found")


class UniquenessViolation(CourseloadError):
    """Insert collided with an existing primary or unique key.

    The message is the store's own text, unchanged.
    """


class UnsupportedQueryKey(CourseloadError, ValueError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"key {key} is not queryable")


class QueryArgumentError(CourseloadError, ValueError):
    def __init__(self, key: str, expected: int, got: int):
        self.key = key
        self.expected = expected
        self.got = got
        super().__init__(f"key {key} takes {expected} value(s), got {got}")
