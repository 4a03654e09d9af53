# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Degree audit schemas.

Inputs (``StudentAcademicRecord``, ``DegreeTemplateDefinition``) are
plain snapshots so the audit itself can run without a database. Templates
validate directly from their ORM rows or from YAML documents.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.models.academic import Semester
from src.utils.datetime import utc_now


class CompletedCourse(BaseModel):
    """A course that counts toward the degree."""

    subject_code: str
    title: str | None = None
    credit_hours: int = Field(ge=0)
    grade_points: Decimal | None = Field(
        default=None,
        description="Final grade points; None for hypothetical courses",
    )
    academic_year: int | None = None
    semester: Semester | None = None


class StudentAcademicRecord(BaseModel):
    """Snapshot of a student's countable history used by the audit."""

    student_id: str
    degree_code: str | None = None
    cumulative_gpa: Decimal | None = None
    completed_courses: list[CompletedCourse] = Field(default_factory=list)
    transfer_credit_hours: int = Field(default=0, ge=0)


class RequirementCategoryDefinition(BaseModel):
    """A credit bucket of a degree template."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    credits_required: int = Field(ge=0)
    subject_codes: list[str] = Field(
        default_factory=list,
        description="Subjects counting toward the category; empty for open electives",
    )
    display_order: int = 0


class DegreeTemplateDefinition(BaseModel):
    """Requirements of a degree."""

    model_config = ConfigDict(from_attributes=True)

    degree_code: str
    degree_name: str
    total_credits_required: int = Field(gt=0)
    minimum_gpa: Decimal = Field(ge=0, le=4)
    categories: list[RequirementCategoryDefinition] = Field(default_factory=list)


class CategoryProgress(BaseModel):
    """Credit completion of one requirement category."""

    name: str
    credits_required: int
    credits_completed: int
    credits_remaining: int
    completion_percentage: Decimal
    is_complete: bool
    applied_courses: list[str] = Field(default_factory=list)


class DegreeAuditResult(BaseModel):
    """Full comparison of a student's record against a degree template."""

    student_id: str
    degree_code: str
    total_credits_required: int
    completed_credit_hours: int
    remaining_credit_hours: int
    completion_percentage: Decimal
    cumulative_gpa: Decimal | None
    required_gpa: Decimal
    meets_gpa_requirement: bool
    gpa_deficiency: Decimal = Decimal("0")
    expected_graduation_date: date | None = None
    projected_graduation_term: str | None = None
    category_progress: list[CategoryProgress] = Field(default_factory=list)
    unmet_requirements: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    is_eligible_for_graduation: bool = False
    audit_date: datetime = Field(default_factory=utc_now)


class DegreeProgressResponse(BaseModel):
    """Persisted degree progress snapshot."""

    model_config = ConfigDict(from_attributes=True)

    student_id: str
    degree_code: str
    required_credit_hours: int
    completed_credit_hours: int
    remaining_credit_hours: int
    completion_percentage: Decimal
    cumulative_gpa: Decimal | None
    required_gpa: Decimal
    meets_gpa_requirement: bool
    expected_graduation_date: date | None
    projected_graduation_term: str | None
    last_updated: datetime


class GraduationEligibility(BaseModel):
    """Whether a student may graduate and, if not, why."""

    student_id: str
    degree_code: str | None
    is_eligible: bool
    unmet_requirements: list[str] = Field(default_factory=list)
    completed_credit_hours: int = 0
    remaining_credit_hours: int | None = None
    cumulative_gpa: Decimal | None = None
    required_gpa: Decimal | None = None


class RemainingRequirements(BaseModel):
    """What a student still has to complete."""

    student_id: str
    degree_code: str
    remaining_credit_hours: int
    meets_gpa_requirement: bool
    incomplete_categories: list[CategoryProgress] = Field(default_factory=list)


class CategoryImpact(BaseModel):
    """Effect of prospective courses on one category."""

    name: str
    current_progress: Decimal
    projected_progress: Decimal
    progress_gain: Decimal


class WhatIfAnalysisResult(BaseModel):
    """Current versus projected audit if prospective courses were completed."""

    student_id: str
    prospective_subject_codes: list[str]
    current: DegreeAuditResult
    projected: DegreeAuditResult
    credit_impact: int
    progress_impact: Decimal
    categories_completed: int
    category_impacts: list[CategoryImpact] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
