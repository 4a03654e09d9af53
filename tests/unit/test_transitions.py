# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for status transition allow-lists."""

from decimal import Decimal

import pytest

from src.domains.enrollment.transitions import (
    STUDENT_STATUS_TRANSITIONS,
    can_transition_course_enrollment,
    can_transition_student,
    is_valid_academic_standing,
)
from src.models.academic import AcademicStanding, CourseEnrollmentStatus, EnrollmentStatus


class TestStudentTransitions:
    """Tests for student enrollment status transitions."""

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (EnrollmentStatus.APPLIED, EnrollmentStatus.ADMITTED),
            (EnrollmentStatus.ADMITTED, EnrollmentStatus.ENROLLED),
            (EnrollmentStatus.ENROLLED, EnrollmentStatus.GRADUATED),
            (EnrollmentStatus.ENROLLED, EnrollmentStatus.SUSPENDED),
            (EnrollmentStatus.SUSPENDED, EnrollmentStatus.ENROLLED),
            (EnrollmentStatus.APPLIED, EnrollmentStatus.WITHDRAWN),
        ],
    )
    def test_allowed(self, current: EnrollmentStatus, target: EnrollmentStatus) -> None:
        """Test transitions on the allow-list."""
        assert can_transition_student(current, target)

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (EnrollmentStatus.GRADUATED, EnrollmentStatus.ENROLLED),
            (EnrollmentStatus.WITHDRAWN, EnrollmentStatus.ENROLLED),
            (EnrollmentStatus.APPLIED, EnrollmentStatus.ENROLLED),
            (EnrollmentStatus.ENROLLED, EnrollmentStatus.ENROLLED),
        ],
    )
    def test_rejected(self, current: EnrollmentStatus, target: EnrollmentStatus) -> None:
        """Test transitions off the allow-list."""
        assert not can_transition_student(current, target)

    def test_terminal_states(self) -> None:
        """Test graduated and withdrawn students cannot move anywhere."""
        assert not STUDENT_STATUS_TRANSITIONS[EnrollmentStatus.GRADUATED]
        assert not STUDENT_STATUS_TRANSITIONS[EnrollmentStatus.WITHDRAWN]


class TestCourseEnrollmentTransitions:
    """Tests for course enrollment transitions."""

    def test_enrolled_can_close(self) -> None:
        """Test an active enrollment can complete, drop or withdraw."""
        for target in (
            CourseEnrollmentStatus.COMPLETED,
            CourseEnrollmentStatus.DROPPED,
            CourseEnrollmentStatus.WITHDRAWN,
        ):
            assert can_transition_course_enrollment(CourseEnrollmentStatus.ENROLLED, target)

    def test_closed_is_terminal(self) -> None:
        """Test a dropped enrollment cannot be withdrawn."""
        assert not can_transition_course_enrollment(
            CourseEnrollmentStatus.DROPPED, CourseEnrollmentStatus.WITHDRAWN
        )
        assert not can_transition_course_enrollment(
            CourseEnrollmentStatus.COMPLETED, CourseEnrollmentStatus.DROPPED
        )


class TestAcademicStandingThresholds:
    """Tests for is_valid_academic_standing."""

    def test_deans_list_requires_high_gpa(self) -> None:
        """Test a 2.0 GPA does not qualify for the dean's list."""
        assert not is_valid_academic_standing(Decimal("2.0"), AcademicStanding.DEANS_LIST)
        assert is_valid_academic_standing(Decimal("3.5"), AcademicStanding.DEANS_LIST)

    def test_presidents_list(self) -> None:
        """Test the president's list threshold."""
        assert is_valid_academic_standing(Decimal("3.95"), AcademicStanding.PRESIDENTS_LIST)
        assert not is_valid_academic_standing(Decimal("3.85"), AcademicStanding.PRESIDENTS_LIST)

    def test_bounded_ranges(self) -> None:
        """Test standings with an upper bound exclude it."""
        assert is_valid_academic_standing(Decimal("1.5"), AcademicStanding.WARNING)
        assert not is_valid_academic_standing(Decimal("2.0"), AcademicStanding.WARNING)
        assert is_valid_academic_standing(Decimal("1.0"), AcademicStanding.PROBATION)
        assert is_valid_academic_standing(Decimal("0.9"), AcademicStanding.ACADEMIC_SUSPENSION)
        assert not is_valid_academic_standing(Decimal("1.0"), AcademicStanding.ACADEMIC_SUSPENSION)

    def test_new_student_only_without_gpa(self) -> None:
        """Test NEW_STUDENT is tied to having no graded history."""
        assert is_valid_academic_standing(None, AcademicStanding.NEW_STUDENT)
        assert not is_valid_academic_standing(Decimal("3.0"), AcademicStanding.NEW_STUDENT)
        assert not is_valid_academic_standing(None, AcademicStanding.GOOD)
