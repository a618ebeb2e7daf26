"""User account record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class User:
    """A user account.

    ``password`` is stored as given (hashing happens upstream) and ``classes``
    is an opaque serialized blob of enrolled course references.
    """

    username: str
    password: str
    classes: str = ""
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            id=row.get("id"),
            username=row["username"],
            password=row["password"],
            classes=row["classes"],
        )
