"""Tests for whitelisted course lookups."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from courseload.db.course_repo import CourseRepository
from courseload.db.database import Database
from courseload.db.query import CourseQuery, QueryableKey, QUERYABLE_KEYS, queryable_keys
from courseload.errors import NotFoundError, QueryArgumentError, UnsupportedQueryKey

from tests.helpers import make_db, sample_course


class TestQueryableKeys(unittest.TestCase):
    def test_listing(self):
        self.assertEqual(
            set(queryable_keys()),
            {"term_crn", "title", "subject_code", "course_number", "subject-number"},
        )
        self.assertEqual(queryable_keys()["subject-number"], "Subject & Number")

    def test_listing_is_a_copy(self):
        keys = queryable_keys()
        keys["description"] = "Description"
        self.assertNotIn("description", QUERYABLE_KEYS)

    def test_enum_labels_and_arity(self):
        self.assertEqual(QueryableKey.TERM_CRN.label, "CRN")
        self.assertEqual(QueryableKey.SUBJECT_NUMBER.arity, 2)
        self.assertEqual(QueryableKey.TITLE.arity, 1)


class TestQueryValidation(unittest.TestCase):
    def setUp(self):
        self.db = MagicMock(spec=Database)
        self.courses = MagicMock(spec=CourseRepository)
        self.engine = CourseQuery(self.db, self.courses)

    def _assert_untouched(self):
        self.db.fetchall.assert_not_called()
        self.db.fetchone.assert_not_called()
        self.db.connection.assert_not_called()
        self.courses.get.assert_not_called()

    def test_unsupported_key(self):
        with self.assertRaises(UnsupportedQueryKey) as ctx:
            self.engine.query("description", "x")
        self.assertEqual(ctx.exception.key, "description")
        self._assert_untouched()

    def test_injection_shaped_key(self):
        with self.assertRaises(UnsupportedQueryKey):
            self.engine.query("term_crn = term_crn OR 1=1 --", "x")
        self._assert_untouched()

    def test_wrong_value_count(self):
        with self.assertRaises(QueryArgumentError):
            self.engine.query("subject-number", "CS")
        with self.assertRaises(QueryArgumentError):
            self.engine.query("title")
        self._assert_untouched()


class TestCourseQuery(unittest.TestCase):
    def setUp(self):
        self.db = make_db(self)
        self.repo = CourseRepository(self.db)
        self.engine = CourseQuery(self.db, self.repo)
        self.repo.insert(sample_course(term_crn="T-1", title="Introduction to Systems", subject="CS", number="101"))
        self.repo.insert(sample_course(term_crn="T-2", title="Advanced Systems", subject="CS", number="2101"))
        self.repo.insert(sample_course(term_crn="T-3", title="Calculus I", subject="MATH", number="101"))
        self.repo.insert(sample_course(term_crn="T-4", title="Data Structures", subject="CS", number="416"))

    def tearDown(self):
        self.db.close()

    def _crns(self, courses) -> set[str]:
        return {c.term_crn for c in courses}

    def test_title_substring(self):
        found = self.engine.query("title", "Intro")
        self.assertEqual(self._crns(found), {"T-1"})

    def test_title_matches_anywhere(self):
        self.assertEqual(self._crns(self.engine.query("title", "Systems")), {"T-1", "T-2"})

    def test_title_wildcards_are_literal(self):
        self.assertEqual(self.engine.query("title", "%"), [])
        self.assertEqual(self.engine.query("title", "_"), [])

    def test_subject_number_substring(self):
        found = self.engine.query("subject-number", "CS", "101")
        self.assertEqual(self._crns(found), {"T-1", "T-2"})

    def test_subject_number_subject_is_exact(self):
        self.assertEqual(self.engine.query("subject-number", "C", "101"), [])

    def test_exact_match_keys(self):
        self.assertEqual(self._crns(self.engine.query("term_crn", "T-3")), {"T-3"})
        self.assertEqual(self._crns(self.engine.query("subject_code", "CS")), {"T-1", "T-2", "T-4"})
        self.assertEqual(self._crns(self.engine.query("course_number", "101")), {"T-1", "T-3"})
        self.assertEqual(self.engine.query("course_number", "10"), [])

    def test_enum_key_accepted(self):
        self.assertEqual(self._crns(self.engine.query(QueryableKey.SUBJECT_CODE, "MATH")), {"T-3"})

    def test_results_are_full_aggregates(self):
        (course,) = self.engine.query("term_crn", "T-1")
        self.assertEqual(course, sample_course(
            term_crn="T-1", title="Introduction to Systems", subject="CS", number="101",
        ))

    def test_value_is_bound_not_interpolated(self):
        self.assertEqual(self.engine.query("term_crn", "x' OR '1'='1"), [])

    def test_deleted_course_not_returned(self):
        self.repo.delete("T-1")
        self.assertEqual(self._crns(self.engine.query("subject_code", "CS")), {"T-2", "T-4"})
        self.assertEqual(self.engine.query("term_crn", "T-1"), [])

    def test_expansion_failure_aborts(self):
        courses = MagicMock(spec=CourseRepository)
        courses.get.side_effect = [sample_course(term_crn="T-1"), NotFoundError("course", "T-2")]
        engine = CourseQuery(self.db, courses)
        with self.assertRaises(NotFoundError):
            engine.query("subject_code", "CS")


class TestScenario(unittest.TestCase):
    def test_insert_get_delete(self):
        db = make_db(self)
        try:
            repo = CourseRepository(db)
            repo.insert(sample_course())
            fetched = repo.get("202410-12345")
            self.assertEqual(fetched.subject, "CS")
            self.assertEqual(fetched.number, "101")
            self.assertEqual(len(fetched.instructors), 1)
            self.assertEqual(len(fetched.meetings), 1)

            repo.delete("202410-12345")
            with self.assertRaises(NotFoundError):
                repo.get("202410-12345")
            self.assertEqual(CourseQuery(db, repo).query("title", "Intro"), [])
        finally:
            db.close()


if __name__ == "__main__":
    unittest.main()
