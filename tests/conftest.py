# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- A mocked async database session
- Factories for transient ORM rows (students, enrollments, grades)
- Academic policy settings
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.core.config.settings import AcademicPolicySettings, clear_settings_cache
from src.domains.grading.conversion import LETTER_TO_NUMERIC, LETTER_TO_POINTS
from src.infrastructure.database.models import CourseEnrollment, Grade, Student, Subject
from src.models.academic import (
    AcademicStanding,
    CourseEnrollmentStatus,
    EnrollmentStatus,
    GradeStatus,
    GradeType,
    Semester,
)

BASE_GRADE_DATE = datetime(2025, 5, 20, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test against a real database"
    )


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reload settings for every test so env patches take effect."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def policy() -> AcademicPolicySettings:
    """Provide default academic policy settings."""
    return AcademicPolicySettings()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.add_all = MagicMock()
    db.delete = AsyncMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    return db


def scalar_result(value: Any) -> MagicMock:
    """Mock ``execute`` result whose ``scalar_one_or_none`` returns ``value``."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def scalars_result(values: list[Any]) -> MagicMock:
    """Mock ``execute`` result whose ``scalars()`` yields ``values``."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(values)
    result.scalars.return_value.first.return_value = values[0] if values else None
    return result


@pytest.fixture
def make_scalar_result() -> Callable[[Any], MagicMock]:
    """Provide the single-row result factory."""
    return scalar_result


@pytest.fixture
def make_scalars_result() -> Callable[[list[Any]], MagicMock]:
    """Provide the multi-row result factory."""
    return scalars_result


# =============================================================================
# Model Factories
# =============================================================================


@pytest.fixture
def sample_student_id() -> str:
    """Provide a sample student ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440001"


@pytest.fixture
def make_student(sample_student_id: str) -> Callable[..., Student]:
    """Factory for transient students."""

    def _make(**overrides: Any) -> Student:
        fields: dict[str, Any] = {
            "id": sample_student_id,
            "student_number": "S2025001",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "program": "Computer Science",
            "degree_code": "BS-CS",
            "enrollment_status": EnrollmentStatus.ENROLLED,
            "academic_standing": AcademicStanding.GOOD,
            "cumulative_gpa": Decimal("3.00"),
            "transfer_credit_hours": 0,
            "notes": None,
            "is_active": True,
        }
        fields.update(overrides)
        return Student(**fields)

    return _make


@pytest.fixture
def make_grade() -> Callable[..., Grade]:
    """Factory for transient grades."""

    def _make(letter: str = "A", credit_hours: int = 3, **overrides: Any) -> Grade:
        fields: dict[str, Any] = {
            "id": str(uuid4()),
            "grade_type": GradeType.FINAL,
            "letter_grade": letter,
            "numeric_grade": LETTER_TO_NUMERIC[letter],
            "grade_points": LETTER_TO_POINTS[letter],
            "credit_hours": credit_hours,
            "status": GradeStatus.ACTIVE,
            "is_final": True,
            "grade_date": BASE_GRADE_DATE,
        }
        fields.update(overrides)
        return Grade(**fields)

    return _make


@pytest.fixture
def make_enrollment(make_grade, sample_student_id: str) -> Callable[..., CourseEnrollment]:
    """Factory for transient course enrollments.

    ``letter`` attaches an active final grade; pass None for an ungraded
    enrollment.
    """

    def _make(
        subject_code: str = "CS101",
        credit_hours: int = 3,
        letter: str | None = "A",
        academic_year: int = 2025,
        semester: Semester = Semester.SPRING,
        status: CourseEnrollmentStatus | None = None,
        grades: list[Grade] | None = None,
        title: str | None = None,
        **overrides: Any,
    ) -> CourseEnrollment:
        if grades is None:
            grades = [make_grade(letter, credit_hours)] if letter else []
        if status is None:
            status = CourseEnrollmentStatus.COMPLETED if grades else CourseEnrollmentStatus.ENROLLED

        fields: dict[str, Any] = {
            "id": str(uuid4()),
            "student_id": sample_student_id,
            "subject_code": subject_code,
            "academic_year": academic_year,
            "semester": semester,
            "status": status,
            "enrollment_date": BASE_GRADE_DATE - timedelta(days=120),
            "credit_hours": credit_hours,
            "is_audit": False,
            "counts_toward_degree": True,
            "notes": None,
        }
        fields.update(overrides)
        enrollment = CourseEnrollment(**fields)
        enrollment.grades = grades
        enrollment.subject = Subject(code=subject_code, title=title or f"{subject_code} Course")
        return enrollment

    return _make
