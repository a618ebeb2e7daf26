"""Database layer — SQLite with transactions and repository pattern."""

from courseload.db.database import Database
from courseload.db.schema import SCHEMA_STATEMENTS, initialize
from courseload.db.course_repo import CourseRepository
from courseload.db.user_repo import UserRepository
from courseload.db.query import CourseQuery, QueryableKey, QUERYABLE_KEYS, queryable_keys

__all__ = [
    "Database", "SCHEMA_STATEMENTS", "initialize",
    "CourseRepository", "UserRepository",
    "CourseQuery", "QueryableKey", "QUERYABLE_KEYS", "queryable_keys",
]
