#!/usr/bin/env python3
"""Initialize the database and optionally seed it with courses and users from a YAML file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from courseload.bootstrap import open_store
from courseload.config import get_log_level
from courseload.db.database import Database
from courseload.db.course_repo import CourseRepository
from courseload.db.user_repo import UserRepository
from courseload.errors import CourseloadError
from courseload.models.course import Course


def main():
    parser = argparse.ArgumentParser(description="Initialize the course database")
    parser.add_argument("--seed", type=str, help="YAML file with 'courses' and/or 'users' lists")
    parser.add_argument("--db-path", type=str, help="Override database path")
    args = parser.parse_args()

    logging.basicConfig(level=get_log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    db = open_store(args.db_path)
    print(f"Database initialized at: {db.path}")

    if args.seed:
        _seed(db, Path(args.seed))

    db.close()
    print("Done.")


def _seed(db: Database, path: Path):
    import yaml
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    courses = CourseRepository(db)
    for c in data.get("courses", []):
        try:
            course = Course.from_dict(c)
            courses.insert(course)
            print(f"  Created course: {course.term_crn} {course.subject} {course.number}")
        except (CourseloadError, KeyError, TypeError) as e:
            print(f"  Skipping course {c.get('term_crn', '?')}: {e}")

    users = UserRepository(db)
    for u in data.get("users", []):
        try:
            users.insert(u["username"], u["password"], u.get("classes", ""))
            print(f"  Created user: {u['username']}")
        except (CourseloadError, KeyError) as e:
            print(f"  Skipping user {u.get('username', '?')}: {e}")


if __name__ == "__main__":
    main()
