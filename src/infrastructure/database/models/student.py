# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student ORM model."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    enum_type,
)
from src.models.academic import AcademicStanding, EnrollmentStatus

if TYPE_CHECKING:
    from src.infrastructure.database.models.course import CourseEnrollment
    from src.infrastructure.database.models.honor import AcademicHonor, Award

GPA_MIN = Decimal("0.00")
GPA_MAX = Decimal("4.00")


def coerce_gpa(value: Decimal | float | str | None) -> Decimal | None:
    """Validate a GPA value and normalize it to ``Decimal``.

    Raises:
        ValueError: If the value is outside [0.0, 4.0].
    """
    if value is None:
        return None
    gpa = value if isinstance(value, Decimal) else Decimal(str(value))
    if gpa < GPA_MIN or gpa > GPA_MAX:
        raise ValueError(f"GPA must be between {GPA_MIN} and {GPA_MAX}, got {gpa}")
    return gpa


class Student(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A student's institutional record.

    Students are never deleted; ``is_active`` is flipped instead so their
    academic history stays queryable. ``notes`` is an append-only audit
    trail of status and standing changes.
    """

    __tablename__ = "students"

    student_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    program: Mapped[str | None] = mapped_column(String(200), nullable=True)
    department_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    degree_code: Mapped[str | None] = mapped_column(String(32), nullable=True, index=True)

    enrollment_status: Mapped[EnrollmentStatus] = mapped_column(
        enum_type(EnrollmentStatus, "enrollment_status"),
        nullable=False,
        default=EnrollmentStatus.APPLIED,
    )
    enrollment_status_date: Mapped[datetime | None] = mapped_column(nullable=True)
    academic_standing: Mapped[AcademicStanding] = mapped_column(
        enum_type(AcademicStanding, "academic_standing"),
        nullable=False,
        default=AcademicStanding.NEW_STUDENT,
    )
    cumulative_gpa: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    transfer_credit_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_academic_review_date: Mapped[datetime | None] = mapped_column(nullable=True)

    admission_date: Mapped[date | None] = mapped_column(nullable=True)
    expected_graduation_date: Mapped[date | None] = mapped_column(nullable=True)
    actual_graduation_date: Mapped[datetime | None] = mapped_column(nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    enrollments: Mapped[list[CourseEnrollment]] = relationship(
        "CourseEnrollment",
        back_populates="student",
        order_by="CourseEnrollment.enrollment_date",
    )
    honors: Mapped[list[AcademicHonor]] = relationship(
        "AcademicHonor",
        back_populates="student",
    )
    awards: Mapped[list[Award]] = relationship(
        "Award",
        back_populates="student",
    )

    @validates("cumulative_gpa")
    def _validate_cumulative_gpa(self, key: str, value: Decimal | float | None) -> Decimal | None:
        return coerce_gpa(value)

    @property
    def full_name(self) -> str:
        """First and last name joined."""
        return f"{self.first_name} {self.last_name}"

    def append_note(self, line: str) -> None:
        """Append a line to the audit notes, never overwriting earlier entries."""
        self.notes = f"{self.notes}\n{line}" if self.notes else line

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, student_number={self.student_number})>"
