"""Course aggregate — a course offering with its instructors and meetings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Instructor:
    last_name: str
    first_name: str
    email: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Instructor":
        return cls(
            last_name=row["last_name"],
            first_name=row["first_name"],
            email=row["email"],
        )


@dataclass
class Meeting:
    """One scheduled meeting. ``days`` and ``time`` are stored as encoded strings."""
    days: str
    building: str
    room: str
    time: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Meeting":
        return cls(
            days=row["days"],
            building=row["building"],
            room=row["room"],
            time=row["time"],
        )


@dataclass
class Course:
    """A course offering keyed by its term+CRN composite.

    Surrogate ids of child rows are storage-internal and never appear here.
    """

    term_crn: str
    title: str
    subject: str
    number: str
    description: str = ""
    instructors: list[Instructor] = field(default_factory=list)
    meetings: list[Meeting] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "term_crn": self.term_crn,
            "title": self.title,
            "subject_code": self.subject,
            "course_number": self.number,
            "description": self.description,
            "instructors": [
                {"last_name": i.last_name, "first_name": i.first_name, "email": i.email}
                for i in self.instructors
            ],
            "meetings": [
                {"days": m.days, "building": m.building, "room": m.room, "time": m.time}
                for m in self.meetings
            ],
        }

    @classmethod
    def from_row(
        cls,
        row: dict[str, Any],
        instructors: list[Instructor] | None = None,
        meetings: list[Meeting] | None = None,
    ) -> "Course":
        return cls(
            term_crn=row["term_crn"],
            title=row["title"],
            subject=row["subject_code"],
            number=row["course_number"],
            description=row["description"],
            instructors=list(instructors or []),
            meetings=list(meetings or []),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Course":
        """Build from the shape produced by ``to_dict`` (used for seed files)."""
        return cls(
            term_crn=str(data["term_crn"]),
            title=data["title"],
            subject=str(data["subject_code"]),
            number=str(data["course_number"]),
            description=data.get("description", ""),
            instructors=[Instructor(**i) for i in data.get("instructors", [])],
            meetings=[Meeting(**{k: str(v) for k, v in m.items()}) for m in data.get("meetings", [])],
        )
