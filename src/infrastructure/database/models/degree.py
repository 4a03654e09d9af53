# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Degree requirement and degree progress ORM models."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    uuid_column,
)


class DegreeRequirementTemplate(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Requirements a student must satisfy to earn a degree."""

    __tablename__ = "degree_requirement_templates"

    degree_code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)
    degree_name: Mapped[str] = mapped_column(String(200), nullable=False)
    total_credits_required: Mapped[int] = mapped_column(Integer, nullable=False)
    minimum_gpa: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    categories: Mapped[list[RequirementCategory]] = relationship(
        "RequirementCategory",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="RequirementCategory.display_order",
    )

    def __repr__(self) -> str:
        return f"<DegreeRequirementTemplate(degree_code={self.degree_code})>"


class RequirementCategory(UUIDPrimaryKeyMixin, Base):
    """A bucket of credits within a degree (core, electives, ...).

    ``subject_codes`` lists the subjects that count toward the category.
    An empty list makes it an open category filled by any credit no other
    category claimed.
    """

    __tablename__ = "requirement_categories"

    template_id: Mapped[str] = uuid_column(
        ForeignKey("degree_requirement_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    credits_required: Mapped[int] = mapped_column(Integer, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    subject_codes: Mapped[list[str]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=list,
    )

    template: Mapped[DegreeRequirementTemplate] = relationship(
        "DegreeRequirementTemplate",
        back_populates="categories",
    )


class DegreeProgress(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Snapshot of a student's progress toward a degree.

    Recomputed wholesale by the degree audit; never updated incrementally.
    """

    __tablename__ = "degree_progress"
    __table_args__ = (
        UniqueConstraint("student_id", "degree_code", name="uq_degree_progress_student_degree"),
    )

    student_id: Mapped[str] = uuid_column(
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    degree_code: Mapped[str] = mapped_column(String(32), nullable=False)
    required_credit_hours: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_credit_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    remaining_credit_hours: Mapped[int] = mapped_column(Integer, nullable=False)
    completion_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    cumulative_gpa: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    required_gpa: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False)
    meets_gpa_requirement: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    expected_graduation_date: Mapped[date | None] = mapped_column(nullable=True)
    projected_graduation_term: Mapped[str | None] = mapped_column(String(32), nullable=True)
    last_updated: Mapped[datetime] = mapped_column(nullable=False)
