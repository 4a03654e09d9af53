# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Degree audit service.

This module provides the DegreeAuditService class for:
- Recomputing and storing degree progress snapshots
- Graduation eligibility checks
- Remaining requirement listings and what-if projections

Every operation recomputes from the student's current graded history.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config.settings import AcademicPolicySettings, get_settings
from src.core.exceptions import StudentNotFoundError
from src.domains.degree_audit.audit import (
    compare_audits,
    perform_degree_audit,
    what_if_recommendations,
)
from src.domains.degree_audit.exceptions import (
    DegreeNotDeclaredError,
    DegreeTemplateNotFoundError,
)
from src.domains.degree_audit.schemas import (
    CompletedCourse,
    DegreeAuditResult,
    DegreeProgressResponse,
    DegreeTemplateDefinition,
    GraduationEligibility,
    RemainingRequirements,
    StudentAcademicRecord,
    WhatIfAnalysisResult,
)
from src.domains.grading.gpa import calculate_gpa, countable_grades
from src.infrastructure.database.models import (
    CourseEnrollment,
    DegreeProgress,
    DegreeRequirementTemplate,
    Student,
    Subject,
)
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class DegreeAuditService:
    """Service auditing students against degree requirement templates.

    Attributes:
        db: Async database session.
        policy: Academic policy settings.
    """

    def __init__(self, db: AsyncSession, policy: AcademicPolicySettings | None = None) -> None:
        """Initialize degree audit service.

        Args:
            db: Async database session.
            policy: Academic policy; defaults to the application settings.
        """
        self.db = db
        self.policy = policy or get_settings().academic

    async def perform_audit(
        self,
        student_id: str,
        degree_code: str | None = None,
    ) -> DegreeAuditResult:
        """Run a full audit without storing it.

        Args:
            student_id: Student identifier.
            degree_code: Degree to audit against; defaults to the student's.

        Raises:
            StudentNotFoundError: If the student does not exist.
            DegreeNotDeclaredError: If no degree code is given or declared.
            DegreeTemplateNotFoundError: If the degree has no active template.
        """
        student = await self._get_student(student_id)
        code = degree_code or student.degree_code
        if not code:
            raise DegreeNotDeclaredError(f"Student {student_id} has not declared a degree")

        template = await self._get_template(code)
        record = await self._build_record(student)
        return perform_degree_audit(record, template, self.policy)

    async def update_degree_progress(
        self,
        student_id: str,
        degree_code: str,
    ) -> DegreeProgressResponse:
        """Recompute and store a student's progress toward a degree.

        Args:
            student_id: Student identifier.
            degree_code: Degree to measure progress against.

        Returns:
            The stored progress snapshot.

        Raises:
            DegreeTemplateNotFoundError: If the degree has no active template.
            StudentNotFoundError: If the student does not exist.
        """
        template = await self._get_template(degree_code)
        student = await self._get_student(student_id)
        record = await self._build_record(student)
        audit = perform_degree_audit(record, template, self.policy)

        result = await self.db.execute(
            select(DegreeProgress).where(
                DegreeProgress.student_id == student_id,
                DegreeProgress.degree_code == degree_code,
            )
        )
        progress = result.scalar_one_or_none()
        if progress is None:
            progress = DegreeProgress(student_id=student_id, degree_code=degree_code)
            self.db.add(progress)

        progress.required_credit_hours = audit.total_credits_required
        progress.completed_credit_hours = audit.completed_credit_hours
        progress.remaining_credit_hours = audit.remaining_credit_hours
        progress.completion_percentage = audit.completion_percentage
        progress.cumulative_gpa = audit.cumulative_gpa
        progress.required_gpa = audit.required_gpa
        progress.meets_gpa_requirement = audit.meets_gpa_requirement
        progress.expected_graduation_date = audit.expected_graduation_date
        progress.projected_graduation_term = audit.projected_graduation_term
        progress.last_updated = utc_now()

        await self.db.commit()
        await self.db.refresh(progress)

        logger.info(
            "Updated degree progress: student=%s, degree=%s, completed=%d, remaining=%d, pct=%s",
            student_id,
            degree_code,
            audit.completed_credit_hours,
            audit.remaining_credit_hours,
            audit.completion_percentage,
        )
        return DegreeProgressResponse.model_validate(progress)

    async def check_graduation_eligibility(self, student_id: str) -> GraduationEligibility:
        """Check whether a student meets every graduation requirement.

        A student is eligible only when no credit hours remain and the
        cumulative GPA meets the degree minimum.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        student = await self._get_student(student_id)

        if not student.degree_code:
            return GraduationEligibility(
                student_id=student_id,
                degree_code=None,
                is_eligible=False,
                unmet_requirements=["No degree program declared"],
            )

        try:
            template = await self._get_template(student.degree_code)
        except DegreeTemplateNotFoundError:
            logger.warning(
                "No degree template for eligibility check: student=%s, degree=%s",
                student_id,
                student.degree_code,
            )
            return GraduationEligibility(
                student_id=student_id,
                degree_code=student.degree_code,
                is_eligible=False,
                unmet_requirements=[
                    f"No active degree requirements found for {student.degree_code}"
                ],
            )

        record = await self._build_record(student)
        audit = perform_degree_audit(record, template, self.policy)

        return GraduationEligibility(
            student_id=student_id,
            degree_code=student.degree_code,
            is_eligible=audit.is_eligible_for_graduation,
            unmet_requirements=audit.unmet_requirements,
            completed_credit_hours=audit.completed_credit_hours,
            remaining_credit_hours=audit.remaining_credit_hours,
            cumulative_gpa=audit.cumulative_gpa,
            required_gpa=audit.required_gpa,
        )

    async def get_degree_progress(self, student_id: str) -> list[DegreeProgressResponse]:
        """Stored progress snapshots of a student, most recent first."""
        result = await self.db.execute(
            select(DegreeProgress)
            .where(DegreeProgress.student_id == student_id)
            .order_by(DegreeProgress.last_updated.desc())
        )
        return [DegreeProgressResponse.model_validate(row) for row in result.scalars().all()]

    async def get_remaining_requirements(self, student_id: str) -> RemainingRequirements:
        """Credit hours and categories a student still has to complete."""
        audit = await self.perform_audit(student_id)
        return RemainingRequirements(
            student_id=student_id,
            degree_code=audit.degree_code,
            remaining_credit_hours=audit.remaining_credit_hours,
            meets_gpa_requirement=audit.meets_gpa_requirement,
            incomplete_categories=[c for c in audit.category_progress if not c.is_complete],
        )

    async def perform_what_if_analysis(
        self,
        student_id: str,
        prospective_subject_codes: list[str],
    ) -> WhatIfAnalysisResult:
        """Project the audit as if prospective subjects were completed.

        Subjects the student already completed or that are not in the
        catalog are ignored. Prospective courses add credit but carry no
        grade, so the GPA is unchanged.

        Raises:
            StudentNotFoundError: If the student does not exist.
            DegreeNotDeclaredError: If the student has not declared a degree.
            DegreeTemplateNotFoundError: If the degree has no active template.
        """
        student = await self._get_student(student_id)
        if not student.degree_code:
            raise DegreeNotDeclaredError(f"Student {student_id} has not declared a degree")

        template = await self._get_template(student.degree_code)
        record = await self._build_record(student)

        completed_codes = {course.subject_code for course in record.completed_courses}
        wanted = [
            code
            for code in dict.fromkeys(prospective_subject_codes)
            if code not in completed_codes
        ]
        subjects = await self._get_subjects(wanted)

        hypothetical = record.model_copy(
            update={
                "completed_courses": [
                    *record.completed_courses,
                    *(
                        CompletedCourse(
                            subject_code=subject.code,
                            title=subject.title,
                            credit_hours=subject.credit_hours or 0,
                        )
                        for subject in subjects
                    ),
                ]
            }
        )

        current = perform_degree_audit(record, template, self.policy)
        projected = perform_degree_audit(hypothetical, template, self.policy)

        impacts = compare_audits(current, projected)
        progress_impact = projected.completion_percentage - current.completion_percentage
        categories_completed = sum(1 for c in projected.category_progress if c.is_complete) - sum(
            1 for c in current.category_progress if c.is_complete
        )

        logger.info(
            "What-if analysis: student=%s, prospective=%d, credit_impact=%d",
            student_id,
            len(subjects),
            projected.completed_credit_hours - current.completed_credit_hours,
        )

        return WhatIfAnalysisResult(
            student_id=student_id,
            prospective_subject_codes=[subject.code for subject in subjects],
            current=current,
            projected=projected,
            credit_impact=projected.completed_credit_hours - current.completed_credit_hours,
            progress_impact=progress_impact,
            categories_completed=categories_completed,
            category_impacts=impacts,
            recommendations=what_if_recommendations(progress_impact, categories_completed, impacts),
        )

    async def _get_student(self, student_id: str) -> Student:
        result = await self.db.execute(select(Student).where(Student.id == student_id))
        student = result.scalar_one_or_none()
        if student is None:
            raise StudentNotFoundError(student_id)
        return student

    async def _get_template(self, degree_code: str) -> DegreeTemplateDefinition:
        result = await self.db.execute(
            select(DegreeRequirementTemplate)
            .options(selectinload(DegreeRequirementTemplate.categories))
            .where(
                DegreeRequirementTemplate.degree_code == degree_code,
                DegreeRequirementTemplate.is_active.is_(True),
            )
        )
        template = result.scalar_one_or_none()
        if template is None:
            raise DegreeTemplateNotFoundError(degree_code)
        return DegreeTemplateDefinition.model_validate(template)

    async def _get_subjects(self, codes: list[str]) -> list[Subject]:
        if not codes:
            return []
        result = await self.db.execute(select(Subject).where(Subject.code.in_(codes)))
        return list(result.scalars().all())

    async def _build_record(self, student: Student) -> StudentAcademicRecord:
        result = await self.db.execute(
            select(CourseEnrollment)
            .options(
                selectinload(CourseEnrollment.grades),
                selectinload(CourseEnrollment.subject),
            )
            .where(CourseEnrollment.student_id == student.id)
        )
        enrollments = list(result.scalars().all())

        completed = [
            CompletedCourse(
                subject_code=enrollment.subject_code,
                title=enrollment.subject.title if enrollment.subject is not None else None,
                credit_hours=enrollment.credit_hours,
                grade_points=grade.grade_points,
                academic_year=enrollment.academic_year,
                semester=enrollment.semester,
            )
            for enrollment, grade in countable_grades(enrollments)
        ]

        return StudentAcademicRecord(
            student_id=student.id,
            degree_code=student.degree_code,
            cumulative_gpa=calculate_gpa(enrollments),
            completed_courses=completed,
            transfer_credit_hours=student.transfer_credit_hours or 0,
        )
