# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Catalog and course enrollment ORM models.

- Subject: a catalog subject keyed by its code (e.g. ``CS101``)
- Course: an offering of a subject, the unit prerequisites attach to
- CoursePrerequisite: one required catalog code of a course
- CourseEnrollment: a student's enrollment in a subject for a term
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    enum_type,
    uuid_column,
)
from src.models.academic import CourseEnrollmentStatus, Semester

if TYPE_CHECKING:
    from src.infrastructure.database.models.grade import Grade
    from src.infrastructure.database.models.student import Student


class Subject(TimestampMixin, Base):
    """Catalog subject."""

    __tablename__ = "subjects"

    code: Mapped[str] = mapped_column(String(20), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    department_name: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    credit_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Subject(code={self.code})>"


class Course(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Course offering of a subject with its prerequisite list."""

    __tablename__ = "courses"

    course_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    subject_code: Mapped[str] = mapped_column(
        ForeignKey("subjects.code", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    credit_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    subject: Mapped[Subject] = relationship("Subject")
    prerequisites: Mapped[list[CoursePrerequisite]] = relationship(
        "CoursePrerequisite",
        back_populates="course",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, course_number={self.course_number})>"


class CoursePrerequisite(UUIDPrimaryKeyMixin, Base):
    """A required prior course, referenced by catalog code.

    The code is resolved to a course when prerequisites are validated, so
    a prerequisite may name a course that is not yet in the catalog.
    """

    __tablename__ = "course_prerequisites"
    __table_args__ = (
        UniqueConstraint("course_id", "required_course_number", name="uq_course_prerequisite"),
    )

    course_id: Mapped[str] = uuid_column(
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    required_course_number: Mapped[str] = mapped_column(String(20), nullable=False)
    minimum_grade: Mapped[str | None] = mapped_column(String(2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    course: Mapped[Course] = relationship("Course", back_populates="prerequisites")


class CourseEnrollment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A student's enrollment in a subject for one term.

    ``credit_hours`` is snapshotted from the subject when the record is
    created and is not changed afterwards. ``version`` guards concurrent
    updates. At most one ENROLLED row may exist per student and subject.
    """

    __tablename__ = "course_enrollments"
    __table_args__ = (
        Index(
            "uq_active_course_enrollment",
            "student_id",
            "subject_code",
            unique=True,
            postgresql_where=text("status = 'enrolled'"),
            sqlite_where=text("status = 'enrolled'"),
        ),
    )

    student_id: Mapped[str] = uuid_column(
        ForeignKey("students.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    subject_code: Mapped[str] = mapped_column(
        ForeignKey("subjects.code", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    section_id: Mapped[str | None] = mapped_column(String(20), nullable=True)
    academic_year: Mapped[int] = mapped_column(Integer, nullable=False)
    semester: Mapped[Semester] = mapped_column(enum_type(Semester, "semester"), nullable=False)

    status: Mapped[CourseEnrollmentStatus] = mapped_column(
        enum_type(CourseEnrollmentStatus, "course_enrollment_status"),
        nullable=False,
        default=CourseEnrollmentStatus.ENROLLED,
        index=True,
    )
    enrollment_date: Mapped[datetime] = mapped_column(nullable=False)
    drop_date: Mapped[datetime | None] = mapped_column(nullable=True)
    withdrawal_date: Mapped[datetime | None] = mapped_column(nullable=True)
    completion_date: Mapped[datetime | None] = mapped_column(nullable=True)

    credit_hours: Mapped[int] = mapped_column(Integer, nullable=False)
    is_audit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    counts_toward_degree: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    student: Mapped[Student] = relationship("Student", back_populates="enrollments")
    subject: Mapped[Subject] = relationship("Subject")
    grades: Mapped[list[Grade]] = relationship(
        "Grade",
        back_populates="enrollment",
        order_by="Grade.grade_date",
    )

    __mapper_args__ = {"version_id_col": version}

    def append_note(self, line: str) -> None:
        """Append to the enrollment notes, separated by ``"; "``."""
        self.notes = f"{self.notes}; {line}" if self.notes else line

    def __repr__(self) -> str:
        return f"<CourseEnrollment(id={self.id}, subject={self.subject_code}, status={self.status})>"
