# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""GPA calculator.

GPA is aggregated over *countable* enrollments only: the enrollment counts
toward the degree, is not audited, was not dropped or withdrawn, and
carries an active final grade. Values are recomputed on request and never
maintained incrementally.

Usage:
    service = GPAService(db)
    gpa = await service.calculate_cumulative_gpa(student_id)
    history = await service.get_gpa_history(student_id)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config.settings import AcademicPolicySettings, get_settings
from src.core.exceptions import StudentNotFoundError
from src.domains.grading.conversion import compute_gpa, determine_academic_standing
from src.domains.grading.schemas import GPAHistoryPoint
from src.infrastructure.database.models import CourseEnrollment, Grade, Student, Subject
from src.models.academic import AcademicStanding, CourseEnrollmentStatus, GradeStatus, Semester

logger = logging.getLogger(__name__)

EXCLUDED_STATUSES = frozenset({CourseEnrollmentStatus.DROPPED, CourseEnrollmentStatus.WITHDRAWN})


def active_final_grade(enrollment: CourseEnrollment) -> Grade | None:
    """The current final grade of an enrollment, if any."""
    finals = [
        grade
        for grade in enrollment.grades
        if grade.is_final and grade.status == GradeStatus.ACTIVE
    ]
    if not finals:
        return None
    return max(finals, key=lambda grade: grade.grade_date)


def is_countable(enrollment: CourseEnrollment) -> bool:
    """Whether an enrollment's credit contributes to GPA and degree progress."""
    return (
        enrollment.counts_toward_degree
        and not enrollment.is_audit
        and enrollment.status not in EXCLUDED_STATUSES
        and active_final_grade(enrollment) is not None
    )


def countable_grades(
    enrollments: Iterable[CourseEnrollment],
) -> list[tuple[CourseEnrollment, Grade]]:
    """Pair each countable enrollment with its active final grade."""
    pairs = []
    for enrollment in enrollments:
        if is_countable(enrollment):
            pairs.append((enrollment, active_final_grade(enrollment)))
    return pairs


def calculate_gpa(enrollments: Iterable[CourseEnrollment]) -> Decimal | None:
    """Credit-weighted GPA of the countable enrollments, or None."""
    return compute_gpa(
        (grade.grade_points, enrollment.credit_hours)
        for enrollment, grade in countable_grades(enrollments)
    )


def term_key(enrollment: CourseEnrollment) -> tuple[int, int]:
    """Chronological sort key of an enrollment's term."""
    return enrollment.academic_year, Semester(enrollment.semester).order


def build_gpa_history(enrollments: Iterable[CourseEnrollment]) -> list[GPAHistoryPoint]:
    """Term-by-term GPA with a running cumulative value.

    Terms without countable enrollments are omitted.
    """
    by_term: dict[tuple[int, int], list[tuple[CourseEnrollment, Grade]]] = {}
    for enrollment, grade in countable_grades(enrollments):
        by_term.setdefault(term_key(enrollment), []).append((enrollment, grade))

    history: list[GPAHistoryPoint] = []
    running: list[tuple[Decimal, int]] = []
    for key in sorted(by_term):
        pairs = by_term[key]
        term_entries = [(grade.grade_points, enrollment.credit_hours) for enrollment, grade in pairs]
        running.extend(term_entries)
        first = pairs[0][0]
        history.append(
            GPAHistoryPoint(
                academic_year=first.academic_year,
                semester=first.semester,
                term_gpa=compute_gpa(term_entries),
                cumulative_gpa=compute_gpa(running),
                term_credit_hours=sum(hours for _, hours in term_entries),
                cumulative_credit_hours=sum(hours for _, hours in running),
            )
        )
    return history


class GPAService:
    """Service computing GPA figures from the grade ledger.

    Attributes:
        db: Async database session.
        policy: Academic policy settings.
    """

    def __init__(self, db: AsyncSession, policy: AcademicPolicySettings | None = None) -> None:
        """Initialize GPA service.

        Args:
            db: Async database session.
            policy: Academic policy; defaults to the application settings.
        """
        self.db = db
        self.policy = policy or get_settings().academic

    async def calculate_cumulative_gpa(self, student_id: str) -> Decimal | None:
        """Compute and persist a student's cumulative GPA.

        The stored value is only overwritten when a GPA can be computed.

        Args:
            student_id: Student identifier.

        Returns:
            GPA rounded to two decimals, or None without countable credit.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        result = await self.db.execute(select(Student).where(Student.id == student_id))
        student = result.scalar_one_or_none()
        if student is None:
            raise StudentNotFoundError(student_id)

        enrollments = await self._load_enrollments(student_id)
        gpa = calculate_gpa(enrollments)

        if gpa is not None:
            student.cumulative_gpa = gpa
            await self.db.commit()
            logger.info("Updated cumulative GPA: student=%s, gpa=%s", student_id, gpa)

        return gpa

    async def calculate_term_gpa(
        self,
        student_id: str,
        academic_year: int,
        semester: Semester,
    ) -> Decimal | None:
        """GPA of a single term, or None without countable credit."""
        enrollments = await self._load_enrollments(
            student_id,
            CourseEnrollment.academic_year == academic_year,
            CourseEnrollment.semester == semester,
        )
        return calculate_gpa(enrollments)

    async def calculate_major_gpa(self, student_id: str, department_name: str) -> Decimal | None:
        """GPA over subjects offered by one department."""
        enrollments = await self._load_enrollments(
            student_id,
            CourseEnrollment.subject_code.in_(
                select(Subject.code).where(Subject.department_name == department_name)
            ),
        )
        return calculate_gpa(enrollments)

    async def get_gpa_history(self, student_id: str) -> list[GPAHistoryPoint]:
        """Chronological term and running cumulative GPA."""
        enrollments = await self._load_enrollments(student_id)
        return build_gpa_history(enrollments)

    def determine_academic_standing(
        self,
        gpa: Decimal | None,
        credit_hours: int,
    ) -> AcademicStanding:
        """Standing a GPA and term credit load would earn under current policy."""
        return determine_academic_standing(
            gpa,
            credit_hours,
            deans_list_min_credit_hours=self.policy.deans_list_min_credit_hours,
        )

    async def _load_enrollments(self, student_id: str, *criteria) -> list[CourseEnrollment]:
        query = (
            select(CourseEnrollment)
            .options(selectinload(CourseEnrollment.grades))
            .where(CourseEnrollment.student_id == student_id, *criteria)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
