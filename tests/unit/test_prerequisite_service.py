# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for prerequisite validation."""

from decimal import Decimal

import pytest

from src.domains.prerequisite.exceptions import CourseNotFoundError
from src.domains.prerequisite.service import (
    PrerequisiteService,
    completed_subject_points,
    evaluate_prerequisites,
)
from src.infrastructure.database.models import Course, CoursePrerequisite
from src.models.academic import CourseEnrollmentStatus


def build_course(course_number: str, subject_code: str, title: str, prerequisites=()) -> Course:
    """Build a transient catalog course."""
    return Course(
        id=f"course-{course_number}",
        course_number=course_number,
        subject_code=subject_code,
        title=title,
        credit_hours=3,
        is_active=True,
        prerequisites=[
            CoursePrerequisite(required_course_number=number, minimum_grade=minimum)
            for number, minimum in prerequisites
        ],
    )


@pytest.fixture
def prerequisite_service(mock_db):
    """Create prerequisite service with mock database."""
    return PrerequisiteService(db=mock_db)


@pytest.fixture
def catalog():
    """Catalog courses keyed by course number."""
    return {
        "CS101": build_course("CS101", "CS101", "Intro to Programming"),
        "MATH120": build_course("MATH120", "MATH120", "Discrete Math"),
    }


class TestCompletedSubjectPoints:
    """Tests for completed_subject_points."""

    def test_best_grade_per_subject(self, make_enrollment) -> None:
        """Test a retaken subject keeps its best grade."""
        enrollments = [
            make_enrollment("CS101", letter="D"),
            make_enrollment("CS101", letter="B"),
            make_enrollment("MATH120", letter="A", status=CourseEnrollmentStatus.WITHDRAWN),
        ]

        points = completed_subject_points(enrollments)

        assert points == {"CS101": Decimal("3.0")}


class TestEvaluatePrerequisites:
    """Tests for evaluate_prerequisites."""

    def test_all_satisfied(self, catalog) -> None:
        """Test completed prerequisites pass."""
        course = build_course("CS201", "CS201", "Data Structures", [("CS101", None), ("MATH120", None)])

        result = evaluate_prerequisites(
            "student",
            course.id,
            course.prerequisites,
            catalog,
            {"CS101": Decimal("3.0"), "MATH120": Decimal("2.0")},
        )

        assert result.is_valid is True
        assert result.missing_prerequisites == []
        assert result.messages == ["All prerequisites satisfied"]

    def test_missing_prerequisite(self, catalog) -> None:
        """Test every unmet entry is reported (AND semantics)."""
        course = build_course("CS201", "CS201", "Data Structures", [("CS101", None), ("MATH120", None)])

        result = evaluate_prerequisites(
            "student", course.id, course.prerequisites, catalog, {"CS101": Decimal("4.0")}
        )

        assert result.is_valid is False
        assert result.missing_prerequisites == ["MATH120"]
        assert result.messages == ["Missing prerequisite: MATH120 - Discrete Math"]

    def test_minimum_grade_not_met(self, catalog) -> None:
        """Test a passing grade below the minimum does not satisfy the entry."""
        course = build_course("CS201", "CS201", "Data Structures", [("CS101", "B")])

        result = evaluate_prerequisites(
            "student", course.id, course.prerequisites, catalog, {"CS101": Decimal("2.7")}
        )

        assert result.is_valid is False
        assert result.messages == [
            "Prerequisite CS101 - Intro to Programming requires a minimum grade of B"
        ]

    def test_unresolved_course_number_is_missing(self, catalog) -> None:
        """Test a prerequisite that is not in the catalog counts as unmet."""
        course = build_course("CS301", "CS301", "Algorithms", [("CS999", None)])

        result = evaluate_prerequisites("student", course.id, course.prerequisites, catalog, {})

        assert result.is_valid is False
        assert result.messages == ["Missing prerequisite: CS999"]

    def test_no_prerequisites(self) -> None:
        """Test a course without prerequisites is always valid."""
        result = evaluate_prerequisites("student", "course", [], {}, {})

        assert result.is_valid is True


class TestPrerequisiteService:
    """Tests for PrerequisiteService."""

    @pytest.mark.asyncio
    async def test_validate(
        self,
        prerequisite_service,
        mock_db,
        catalog,
        make_enrollment,
        make_scalar_result,
        make_scalars_result,
    ):
        """Test the service resolves the catalog and student history."""
        course = build_course("CS201", "CS201", "Data Structures", [("CS101", None), ("MATH120", None)])
        mock_db.execute.side_effect = [
            make_scalar_result(course),
            make_scalars_result(list(catalog.values())),
            make_scalars_result([make_enrollment("CS101", letter="A")]),
        ]

        result = await prerequisite_service.validate_prerequisites("student", course.id)

        assert result.is_valid is False
        assert result.missing_prerequisites == ["MATH120"]

    @pytest.mark.asyncio
    async def test_course_without_prerequisites_skips_lookups(
        self, prerequisite_service, mock_db, make_scalar_result
    ):
        """Test no further queries run when there is nothing to check."""
        mock_db.execute.return_value = make_scalar_result(build_course("CS101", "CS101", "Intro"))

        result = await prerequisite_service.validate_prerequisites("student", "course-CS101")

        assert result.is_valid is True
        assert mock_db.execute.call_count == 1

    @pytest.mark.asyncio
    async def test_unknown_course(self, prerequisite_service, mock_db, make_scalar_result):
        """Test an unknown course raises."""
        mock_db.execute.return_value = make_scalar_result(None)

        with pytest.raises(CourseNotFoundError):
            await prerequisite_service.validate_prerequisites("student", "missing")
