# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for academic record ORM models."""

from decimal import Decimal

import pytest
from sqlalchemy import inspect
from sqlalchemy.orm import DeclarativeBase, configure_mappers

from src.infrastructure.database.models import (
    Base,
    CourseEnrollment,
    DegreeProgress,
    Grade,
    Student,
)
from src.infrastructure.database.models.student import coerce_gpa
from src.models.academic import GradeStatus


class TestBase:
    """Tests for the declarative base."""

    def test_base_inherits_declarative_base(self):
        """Test Base is a SQLAlchemy declarative base."""
        assert issubclass(Base, DeclarativeBase)

    def test_all_tables_registered(self):
        """Test every model table is on the shared metadata."""
        assert {
            "students",
            "subjects",
            "courses",
            "course_prerequisites",
            "course_enrollments",
            "grades",
            "academic_honors",
            "awards",
            "degree_requirement_templates",
            "requirement_categories",
            "degree_progress",
        } <= set(Base.metadata.tables)

    def test_mappers_configure(self):
        """Test every model maps, including foreign-keyed UUID columns."""
        configure_mappers()

        foreign_keys = Grade.__table__.c.course_enrollment_id.foreign_keys
        assert {fk.target_fullname for fk in foreign_keys} == {"course_enrollments.id"}
        assert CourseEnrollment.__table__.c.student_id.foreign_keys

    def test_ledger_rows_are_versioned(self):
        """Test grades and course enrollments carry an optimistic version counter."""
        assert inspect(Grade).version_id_col is Grade.__table__.c.version
        assert inspect(CourseEnrollment).version_id_col is CourseEnrollment.__table__.c.version

    def test_single_active_enrollment_index(self):
        """Test one ENROLLED row per student and subject is enforced by a partial index."""
        index = next(
            i for i in CourseEnrollment.__table__.indexes if i.name == "uq_active_course_enrollment"
        )
        assert index.unique is True
        assert [c.name for c in index.columns] == ["student_id", "subject_code"]
        assert "enrolled" in str(index.dialect_options["postgresql"]["where"])


class TestStudent:
    """Tests for the Student model."""

    def test_full_name(self, make_student):
        """Test full_name joins first and last name."""
        assert make_student(first_name="Grace", last_name="Hopper").full_name == "Grace Hopper"

    def test_gpa_validated(self, make_student):
        """Test cumulative GPA outside [0, 4] is rejected."""
        student = make_student()

        with pytest.raises(ValueError):
            student.cumulative_gpa = Decimal("4.10")

        student.cumulative_gpa = 3.5
        assert student.cumulative_gpa == Decimal("3.5")

    def test_append_note(self, make_student):
        """Test notes accumulate one line per entry."""
        student = make_student(notes=None)

        student.append_note("first")
        student.append_note("second")

        assert student.notes == "first\nsecond"

    def test_coerce_gpa_none(self):
        """Test a missing GPA stays missing."""
        assert coerce_gpa(None) is None


class TestGrade:
    """Tests for the Grade model."""

    def test_quality_points(self, make_grade):
        """Test quality points weight grade points by credit hours."""
        assert make_grade("B+", 4).quality_points == Decimal("13.2")

    def test_is_active(self, make_grade):
        """Test only ACTIVE rows are current."""
        assert make_grade().is_active
        assert not make_grade(status=GradeStatus.CHANGED).is_active

    def test_numeric_grade_range(self, make_grade):
        """Test numeric grades above 100 are rejected."""
        with pytest.raises(ValueError):
            make_grade(numeric_grade=Decimal("100.5"))

    def test_grade_points_range(self):
        """Test grade points above 4.0 are rejected."""
        with pytest.raises(ValueError):
            Grade(grade_points=Decimal("4.3"))


class TestCourseEnrollment:
    """Tests for the CourseEnrollment model."""

    def test_append_note(self, make_enrollment):
        """Test enrollment notes are separated by semicolons."""
        enrollment = make_enrollment(notes="Late add")

        enrollment.append_note("Dropped: Conflict")

        assert enrollment.notes == "Late add; Dropped: Conflict"

    def test_version_column(self):
        """Test optimistic concurrency is enabled."""
        assert CourseEnrollment.__mapper__.version_id_col is not None


class TestDegreeProgress:
    """Tests for the DegreeProgress model."""

    def test_unique_per_student_and_degree(self):
        """Test one snapshot row per student and degree."""
        constraint_names = {c.name for c in DegreeProgress.__table__.constraints}

        assert "uq_degree_progress_student_degree" in constraint_names


def test_student_table_name():
    """Test the students table name."""
    assert Student.__tablename__ == "students"
