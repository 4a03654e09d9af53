# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic honor and award ORM models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    enum_type,
    uuid_column,
)
from src.models.academic import AwardType, HonorType, Semester

if TYPE_CHECKING:
    from src.infrastructure.database.models.student import Student


class AcademicHonor(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """An honor such as the dean's list, with the GPA it was earned at."""

    __tablename__ = "academic_honors"

    student_id: Mapped[str] = uuid_column(
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    honor_type: Mapped[HonorType] = mapped_column(enum_type(HonorType, "honor_type"), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    academic_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    semester: Mapped[Semester | None] = mapped_column(enum_type(Semester, "semester"), nullable=True)
    award_date: Mapped[datetime] = mapped_column(nullable=False)
    required_gpa: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    student_gpa: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    appears_on_transcript: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    student: Mapped[Student] = relationship("Student", back_populates="honors")


class Award(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """An award or scholarship granted to a student."""

    __tablename__ = "awards"

    student_id: Mapped[str] = uuid_column(
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    award_type: Mapped[AwardType] = mapped_column(enum_type(AwardType, "award_type"), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    monetary_value: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    award_date: Mapped[datetime] = mapped_column(nullable=False)
    academic_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    awarding_organization: Mapped[str | None] = mapped_column(String(200), nullable=True)
    appears_on_transcript: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    student: Mapped[Student] = relationship("Student", back_populates="awards")
