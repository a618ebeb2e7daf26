#!/usr/bin/env python3
"""Quick check of database state, with an optional course query."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from courseload.bootstrap import open_store
from courseload.config import get_log_level
from courseload.db.course_repo import CourseRepository
from courseload.db.query import CourseQuery, queryable_keys
from courseload.errors import CourseloadError


def main():
    parser = argparse.ArgumentParser(description="Inspect the course database")
    parser.add_argument("--db-path", type=str, help="Override database path")
    parser.add_argument("--key", type=str, help="Query key (see --list-keys)")
    parser.add_argument("values", nargs="*", help="Values for --key")
    parser.add_argument("--list-keys", action="store_true", help="Show queryable keys and exit")
    args = parser.parse_args()

    logging.basicConfig(level=get_log_level())

    if args.list_keys:
        for key, label in queryable_keys().items():
            print(f"  {key:<16} {label}")
        return

    db = open_store(args.db_path)
    try:
        if args.key:
            try:
                courses = CourseQuery(db).query(args.key, *args.values)
            except CourseloadError as e:
                print(f"Query failed: {e}")
                sys.exit(1)
            print(f"=== Query {args.key} {' '.join(args.values)} ===")
        else:
            repo = CourseRepository(db)
            courses = [repo.get(crn) for crn in repo.list_keys()]
            print("=== Courses ===")

        print(f"Total: {len(courses)}")
        for c in courses:
            print(
                f"  {c.term_crn:<16} | {c.subject} {c.number:<6} | {c.title[:40]:<40} "
                f"| {len(c.instructors)} instr, {len(c.meetings)} mtg"
            )
    finally:
        db.close()


if __name__ == "__main__":
    main()
