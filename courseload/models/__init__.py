"""Domain models for the course catalog."""

from courseload.models.course import Course, Instructor, Meeting
from courseload.models.user import User

__all__ = ["Course", "Instructor", "Meeting", "User"]
