"""Shared builders for the DB tests."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from courseload.db.database import Database
from courseload.models.course import Course, Instructor, Meeting


def make_db(test: unittest.TestCase) -> Database:
    """Return an initialised Database in a temporary directory.

    The directory (with any WAL/SHM side files) is removed after the test,
    once ``tearDown`` has closed the connection.
    """
    tmp = tempfile.TemporaryDirectory()
    test.addCleanup(tmp.cleanup)
    db = Database(path=Path(tmp.name) / "test.db", max_retries=1, base_delay=0)
    test.addCleanup(db.close)
    db.init()
    return db


def sample_course(**overrides) -> Course:
    defaults = dict(
        term_crn="202410-12345",
        title="Intro to Systems",
        subject="CS",
        number="101",
        description="Processes, memory and files.",
        instructors=[Instructor("Doe", "Jane", "jdoe@x.edu")],
        meetings=[Meeting("MWF", "Hall", "101", "10:00-10:50")],
    )
    defaults.update(overrides)
    return Course(**defaults)
