# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade ledger ORM model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    enum_type,
    uuid_column,
)
from src.infrastructure.database.models.student import coerce_gpa
from src.models.academic import GradeStatus, GradeType

if TYPE_CHECKING:
    from src.infrastructure.database.models.course import CourseEnrollment


class Grade(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One grade entry for a course enrollment.

    Rows are append-only. A correction inserts a new ACTIVE row pointing
    at its predecessor through ``replaced_grade_id`` and marks the
    predecessor CHANGED. ``version`` makes a correction based on a stale
    read fail instead of writing a second ACTIVE row.
    """

    __tablename__ = "grades"

    course_enrollment_id: Mapped[str] = uuid_column(
        ForeignKey("course_enrollments.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    grade_type: Mapped[GradeType] = mapped_column(
        enum_type(GradeType, "grade_type"),
        nullable=False,
    )
    letter_grade: Mapped[str] = mapped_column(String(2), nullable=False)
    numeric_grade: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    grade_points: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False)
    credit_hours: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[GradeStatus] = mapped_column(
        enum_type(GradeStatus, "grade_status"),
        nullable=False,
        default=GradeStatus.ACTIVE,
        index=True,
    )
    is_final: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    grade_date: Mapped[datetime] = mapped_column(nullable=False)
    graded_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    replaced_grade_id: Mapped[str | None] = uuid_column(
        ForeignKey("grades.id", ondelete="SET NULL"),
        nullable=True,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    enrollment: Mapped[CourseEnrollment] = relationship("CourseEnrollment", back_populates="grades")

    __mapper_args__ = {"version_id_col": version}

    @validates("grade_points")
    def _validate_grade_points(self, key: str, value: Decimal | float) -> Decimal | None:
        return coerce_gpa(value)

    @validates("numeric_grade")
    def _validate_numeric_grade(self, key: str, value: Decimal | float) -> Decimal:
        grade = value if isinstance(value, Decimal) else Decimal(str(value))
        if grade < 0 or grade > 100:
            raise ValueError(f"Numeric grade must be between 0 and 100, got {grade}")
        return grade

    @property
    def quality_points(self) -> Decimal:
        """Grade points weighted by credit hours."""
        return self.grade_points * self.credit_hours

    @property
    def is_active(self) -> bool:
        """Whether this row is the current version of the grade."""
        return self.status == GradeStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<Grade(id={self.id}, letter={self.letter_grade}, status={self.status})>"
