# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade ledger service.

This module provides the GradeService class for:
- Recording grades against course enrollments
- Correcting grades without losing history
- Reading the grade ledger of an enrollment or a student

Grades are append-only. A correction inserts a new active row linked to
its predecessor through ``replaced_grade_id`` and marks the predecessor
as changed.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from src.domains.enrollment.exceptions import EnrollmentNotFoundError
from src.domains.grading.conversion import resolve_grade
from src.domains.grading.exceptions import GradeNotFoundError
from src.domains.grading.gpa import active_final_grade
from src.infrastructure.database.models import CourseEnrollment, Grade
from src.models.academic import CourseEnrollmentStatus, GradeStatus, GradeType, Semester
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class GradeService:
    """Service for recording and correcting grades.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize grade service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def record_grade(
        self,
        enrollment_id: str,
        grade_type: GradeType,
        letter_grade: str | None = None,
        numeric_grade: Decimal | float | None = None,
        graded_by: str | None = None,
        comments: str | None = None,
    ) -> Grade:
        """Record a grade for a course enrollment.

        The missing representation and the grade points are derived from
        the one supplied. A final grade supersedes any earlier active final
        grade and completes an enrollment that is still in progress.

        Args:
            enrollment_id: Course enrollment identifier.
            grade_type: Assessment kind.
            letter_grade: Letter on the grading scale.
            numeric_grade: Score between 0 and 100.
            graded_by: Who recorded the grade.
            comments: Free-form comments.

        Returns:
            The new grade row.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
            InvalidGradeError: If neither grade is given or a value is invalid.
        """
        enrollment = await self._get_enrollment_for_update(enrollment_id)
        letter, numeric, points = resolve_grade(letter_grade, numeric_grade)

        now = utc_now()
        is_final = grade_type == GradeType.FINAL
        replaced_grade_id = None

        if is_final:
            previous = active_final_grade(enrollment)
            if previous is not None:
                previous.status = GradeStatus.CHANGED
                replaced_grade_id = previous.id

        grade = Grade(
            course_enrollment_id=enrollment.id,
            grade_type=grade_type,
            letter_grade=letter,
            numeric_grade=numeric,
            grade_points=points,
            credit_hours=enrollment.credit_hours,
            status=GradeStatus.ACTIVE,
            is_final=is_final,
            grade_date=now,
            graded_by=graded_by,
            comments=comments,
            replaced_grade_id=replaced_grade_id,
        )

        if is_final and enrollment.status == CourseEnrollmentStatus.ENROLLED:
            enrollment.status = CourseEnrollmentStatus.COMPLETED
            enrollment.completion_date = now

        self.db.add(grade)
        await self.db.commit()
        await self.db.refresh(grade)

        logger.info(
            "Recorded grade: enrollment=%s, type=%s, letter=%s, points=%s, final=%s",
            enrollment_id,
            grade_type.value,
            letter,
            points,
            is_final,
        )
        return grade

    async def update_grade(
        self,
        grade_id: str,
        letter_grade: str | None = None,
        numeric_grade: Decimal | float | None = None,
        comments: str | None = None,
        graded_by: str | None = None,
    ) -> bool:
        """Correct an active grade.

        Args:
            grade_id: Identifier of the grade to correct.
            letter_grade: Corrected letter grade.
            numeric_grade: Corrected numeric grade.
            comments: Reason for the correction.
            graded_by: Who made the correction.

        Returns:
            True if a corrected row was written, False if the grade was
            already superseded, including by a concurrent correction.

        Raises:
            GradeNotFoundError: If the grade does not exist.
            InvalidGradeError: If neither grade is given or a value is invalid.
        """
        result = await self.db.execute(select(Grade).where(Grade.id == grade_id))
        grade = result.scalar_one_or_none()
        if grade is None:
            raise GradeNotFoundError(f"Grade {grade_id} not found", {"grade_id": grade_id})

        # Corrections of one enrollment are serialized on its row lock;
        # the grade is re-read once the lock is held.
        await self._get_enrollment_for_update(grade.course_enrollment_id)
        await self.db.refresh(grade)

        if grade.status != GradeStatus.ACTIVE:
            logger.warning("Grade %s was already superseded, not updating", grade_id)
            return False

        letter, numeric, points = resolve_grade(letter_grade, numeric_grade)

        corrected = Grade(
            course_enrollment_id=grade.course_enrollment_id,
            grade_type=grade.grade_type,
            letter_grade=letter,
            numeric_grade=numeric,
            grade_points=points,
            credit_hours=grade.credit_hours,
            status=GradeStatus.ACTIVE,
            is_final=grade.is_final,
            grade_date=utc_now(),
            graded_by=graded_by or grade.graded_by,
            comments=comments if comments is not None else grade.comments,
            replaced_grade_id=grade.id,
        )
        grade.status = GradeStatus.CHANGED

        self.db.add(corrected)
        try:
            await self.db.commit()
        except StaleDataError:
            await self.db.rollback()
            logger.warning("Grade %s was changed concurrently, not updating", grade_id)
            return False

        logger.info(
            "Updated grade: grade=%s, letter=%s -> %s, enrollment=%s",
            grade_id,
            grade.letter_grade,
            letter,
            grade.course_enrollment_id,
        )
        return True

    async def list_enrollment_grades(
        self,
        enrollment_id: str,
        include_history: bool = False,
    ) -> list[Grade]:
        """Grades of one enrollment, oldest first.

        Superseded rows are only returned with ``include_history``.
        """
        query = select(Grade).where(Grade.course_enrollment_id == enrollment_id)
        if not include_history:
            query = query.where(Grade.status == GradeStatus.ACTIVE)
        query = query.order_by(Grade.grade_date)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_final_grade(self, enrollment_id: str) -> Grade | None:
        """The active final grade of an enrollment, if recorded."""
        result = await self.db.execute(
            select(Grade)
            .where(
                Grade.course_enrollment_id == enrollment_id,
                Grade.is_final.is_(True),
                Grade.status == GradeStatus.ACTIVE,
            )
            .order_by(Grade.grade_date.desc())
        )
        return result.scalars().first()

    async def list_student_grades(
        self,
        student_id: str,
        academic_year: int | None = None,
        semester: Semester | None = None,
    ) -> list[Grade]:
        """Active grades across a student's enrollments."""
        query = (
            select(Grade)
            .join(CourseEnrollment, Grade.course_enrollment_id == CourseEnrollment.id)
            .where(
                CourseEnrollment.student_id == student_id,
                Grade.status == GradeStatus.ACTIVE,
            )
        )
        if academic_year is not None:
            query = query.where(CourseEnrollment.academic_year == academic_year)
        if semester is not None:
            query = query.where(CourseEnrollment.semester == semester)
        query = query.order_by(CourseEnrollment.academic_year, Grade.grade_date)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def _get_enrollment_for_update(self, enrollment_id: str) -> CourseEnrollment:
        result = await self.db.execute(
            select(CourseEnrollment)
            .options(selectinload(CourseEnrollment.grades))
            .where(CourseEnrollment.id == enrollment_id)
            .with_for_update()
        )
        enrollment = result.scalar_one_or_none()
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)
        return enrollment


