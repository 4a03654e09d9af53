# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course enrollment service.

This module provides the CourseEnrollmentService class for:
- Enrolling a student in a subject for a term
- Dropping and withdrawing course enrollments
- Listing a student's enrollment history
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.enrollment.exceptions import EnrollmentNotFoundError
from src.domains.enrollment.transitions import can_transition_course_enrollment
from src.infrastructure.database.models import CourseEnrollment, Student, Subject
from src.models.academic import CourseEnrollmentStatus, Semester
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_CREDIT_HOURS = 3
NO_REASON = "No reason provided"


class CourseEnrollmentService:
    """Service for managing student course enrollments.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize course enrollment service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def enroll_student_in_course(
        self,
        student_id: str,
        subject_code: str,
        section_id: str | None = None,
        academic_year: int | None = None,
        semester: Semester | None = None,
        is_audit: bool = False,
        credit_hours: int = DEFAULT_CREDIT_HOURS,
    ) -> CourseEnrollment | None:
        """Enroll a student in a subject.

        Credit hours are copied from the subject; ``credit_hours`` is only
        used for subjects that do not declare any. The term defaults to the
        one the current date falls in.

        Args:
            student_id: Student identifier.
            subject_code: Catalog code of the subject.
            section_id: Optional section identifier.
            academic_year: Calendar year of the term.
            semester: Term within the year.
            is_audit: Audited enrollments never count toward the degree.
            credit_hours: Fallback credit hours.

        Returns:
            The new enrollment, or None if the student or subject does not
            exist or the student is already enrolled in the subject.
        """
        student = await self._get_student(student_id)
        if student is None:
            logger.warning("Enrollment rejected, student not found: student=%s", student_id)
            return None

        subject = await self._get_subject(subject_code)
        if subject is None:
            logger.warning("Enrollment rejected, subject not found: subject=%s", subject_code)
            return None

        existing = await self._get_active_enrollment(student_id, subject_code)
        if existing is not None:
            logger.warning(
                "Enrollment rejected, already enrolled: student=%s, subject=%s",
                student_id,
                subject_code,
            )
            return None

        now = utc_now()
        enrollment = CourseEnrollment(
            student_id=student_id,
            subject_code=subject_code,
            section_id=section_id,
            academic_year=academic_year if academic_year is not None else now.year,
            semester=semester or Semester.for_month(now.month),
            status=CourseEnrollmentStatus.ENROLLED,
            enrollment_date=now,
            credit_hours=subject.credit_hours if subject.credit_hours is not None else credit_hours,
            is_audit=is_audit,
            counts_toward_degree=not is_audit,
        )

        self.db.add(enrollment)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(
                "Enrollment rejected, concurrent enrollment exists: student=%s, subject=%s",
                student_id,
                subject_code,
            )
            return None
        await self.db.refresh(enrollment)

        logger.info(
            "Enrolled student: student=%s, subject=%s, term=%s %s, audit=%s",
            student_id,
            subject_code,
            enrollment.semester.value,
            enrollment.academic_year,
            is_audit,
        )

        return enrollment

    async def drop_student_from_course(
        self,
        enrollment_id: str,
        reason: str | None = None,
    ) -> bool:
        """Drop a course enrollment.

        Args:
            enrollment_id: Course enrollment identifier.
            reason: Optional reason recorded in the enrollment notes.

        Returns:
            True if dropped, False if the enrollment is no longer active.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
        """
        return await self._close_enrollment(enrollment_id, CourseEnrollmentStatus.DROPPED, reason)

    async def withdraw_student_from_course(
        self,
        enrollment_id: str,
        reason: str | None = None,
    ) -> bool:
        """Withdraw from a course enrollment.

        Args:
            enrollment_id: Course enrollment identifier.
            reason: Optional reason recorded in the enrollment notes.

        Returns:
            True if withdrawn, False if the enrollment is no longer active.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
        """
        return await self._close_enrollment(enrollment_id, CourseEnrollmentStatus.WITHDRAWN, reason)

    async def get_enrollment(self, enrollment_id: str) -> CourseEnrollment:
        """Get a course enrollment by id.

        Raises:
            EnrollmentNotFoundError: If the enrollment does not exist.
        """
        result = await self.db.execute(
            select(CourseEnrollment).where(CourseEnrollment.id == enrollment_id)
        )
        enrollment = result.scalar_one_or_none()
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)
        return enrollment

    async def list_student_enrollments(
        self,
        student_id: str,
        academic_year: int | None = None,
        semester: Semester | None = None,
    ) -> list[CourseEnrollment]:
        """List a student's course enrollments, oldest first.

        Args:
            student_id: Student identifier.
            academic_year: Optional year filter.
            semester: Optional term filter.

        Returns:
            Enrollments matching the filters.
        """
        query = select(CourseEnrollment).where(CourseEnrollment.student_id == student_id)

        if academic_year is not None:
            query = query.where(CourseEnrollment.academic_year == academic_year)
        if semester is not None:
            query = query.where(CourseEnrollment.semester == semester)

        query = query.order_by(CourseEnrollment.academic_year, CourseEnrollment.enrollment_date)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def _close_enrollment(
        self,
        enrollment_id: str,
        target: CourseEnrollmentStatus,
        reason: str | None,
    ) -> bool:
        enrollment = await self.get_enrollment(enrollment_id)

        if not can_transition_course_enrollment(enrollment.status, target):
            logger.warning(
                "Cannot %s enrollment %s in status %s",
                "drop" if target == CourseEnrollmentStatus.DROPPED else "withdraw",
                enrollment_id,
                enrollment.status.value,
            )
            return False

        now = utc_now()
        enrollment.status = target
        if target == CourseEnrollmentStatus.DROPPED:
            enrollment.drop_date = now
            enrollment.append_note(f"Dropped: {reason or NO_REASON}")
        else:
            enrollment.withdrawal_date = now
            enrollment.append_note(f"Withdrawn: {reason or NO_REASON}")

        await self.db.commit()

        logger.info(
            "Closed enrollment: enrollment=%s, status=%s, student=%s",
            enrollment_id,
            target.value,
            enrollment.student_id,
        )
        return True

    async def _get_student(self, student_id: str) -> Student | None:
        result = await self.db.execute(
            select(Student).where(Student.id == student_id, Student.is_active.is_(True))
        )
        return result.scalar_one_or_none()

    async def _get_subject(self, subject_code: str) -> Subject | None:
        result = await self.db.execute(select(Subject).where(Subject.code == subject_code))
        return result.scalar_one_or_none()

    async def _get_active_enrollment(
        self,
        student_id: str,
        subject_code: str,
    ) -> CourseEnrollment | None:
        result = await self.db.execute(
            select(CourseEnrollment).where(
                CourseEnrollment.student_id == student_id,
                CourseEnrollment.subject_code == subject_code,
                CourseEnrollment.status == CourseEnrollmentStatus.ENROLLED,
            )
        )
        return result.scalars().first()
