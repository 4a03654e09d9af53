# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student lifecycle service.

This module provides the StudentService class for:
- Enrollment status transitions (applied through graduated)
- Academic standing updates gated by GPA
- Soft deactivation and academic review listings
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.enrollment.exceptions import (
    InvalidStandingError,
    InvalidTransitionError,
    StudentNotFoundError,
)
from src.domains.enrollment.transitions import can_transition_student, is_valid_academic_standing
from src.infrastructure.database.models import Student
from src.models.academic import AcademicStanding, EnrollmentStatus
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)

REVIEW_GPA_THRESHOLD = Decimal("2.0")
REVIEW_STANDINGS = (
    AcademicStanding.WARNING,
    AcademicStanding.PROBATION,
    AcademicStanding.ACADEMIC_SUSPENSION,
)


class StudentService:
    """Service for student lifecycle and standing.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize student service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def get_student(self, student_id: str) -> Student:
        """Get a student by id.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        result = await self.db.execute(select(Student).where(Student.id == student_id))
        student = result.scalar_one_or_none()
        if student is None:
            raise StudentNotFoundError(student_id)
        return student

    async def update_enrollment_status(
        self,
        student_id: str,
        new_status: EnrollmentStatus,
        notes: str | None = None,
    ) -> bool:
        """Move a student to a new enrollment status.

        Args:
            student_id: Student identifier.
            new_status: Target status.
            notes: Optional note appended to the student's audit trail.

        Returns:
            True once the change is committed.

        Raises:
            StudentNotFoundError: If the student does not exist.
            InvalidTransitionError: If the allow-list forbids the change.
        """
        student = await self.get_student(student_id)
        current = student.enrollment_status

        if not can_transition_student(current, new_status):
            logger.warning(
                "Rejected status transition: student=%s, from=%s, to=%s",
                student_id,
                current.value,
                new_status.value,
            )
            raise InvalidTransitionError(current, new_status)

        now = utc_now()
        student.enrollment_status = new_status
        student.enrollment_status_date = now
        if new_status == EnrollmentStatus.GRADUATED:
            student.actual_graduation_date = now

        line = f"[{now:%Y-%m-%d}] Status changed from {current.value} to {new_status.value}"
        student.append_note(f"{line}: {notes}" if notes else line)

        await self.db.commit()

        logger.info(
            "Updated enrollment status: student=%s, from=%s, to=%s",
            student_id,
            current.value,
            new_status.value,
        )
        return True

    async def update_academic_standing(
        self,
        student_id: str,
        new_standing: AcademicStanding,
        notes: str | None = None,
    ) -> bool:
        """Set a student's academic standing.

        The student's stored cumulative GPA must fall within the threshold
        of the requested standing.

        Args:
            student_id: Student identifier.
            new_standing: Target standing.
            notes: Optional note appended to the student's audit trail.

        Returns:
            True once the change is committed.

        Raises:
            StudentNotFoundError: If the student does not exist.
            InvalidStandingError: If the GPA does not satisfy the standing.
        """
        student = await self.get_student(student_id)
        gpa = student.cumulative_gpa

        if not is_valid_academic_standing(gpa, new_standing):
            logger.warning(
                "Rejected standing change: student=%s, standing=%s, gpa=%s",
                student_id,
                new_standing.value,
                gpa,
            )
            raise InvalidStandingError(
                f"GPA {gpa} does not qualify for standing {new_standing.value}",
                {"gpa": None if gpa is None else str(gpa), "standing": new_standing.value},
            )

        now = utc_now()
        previous = student.academic_standing
        student.academic_standing = new_standing
        student.last_academic_review_date = now

        line = f"[{now:%Y-%m-%d}] Academic standing changed from {previous.value} to {new_standing.value}"
        student.append_note(f"{line}: {notes}" if notes else line)

        await self.db.commit()

        logger.info(
            "Updated academic standing: student=%s, standing=%s, gpa=%s",
            student_id,
            new_standing.value,
            gpa,
        )
        return True

    async def deactivate_student(self, student_id: str, reason: str | None = None) -> bool:
        """Soft-delete a student record.

        Returns:
            True if deactivated, False if the student was already inactive.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        student = await self.get_student(student_id)
        if not student.is_active:
            return False

        student.is_active = False
        line = f"[{utc_now():%Y-%m-%d}] Record deactivated"
        student.append_note(f"{line}: {reason}" if reason else line)

        await self.db.commit()

        logger.info("Deactivated student: student=%s", student_id)
        return True

    async def list_students_requiring_review(self) -> list[Student]:
        """Active students below a 2.0 GPA or on a warning-level standing."""
        query = (
            select(Student)
            .where(
                Student.is_active.is_(True),
                or_(
                    Student.cumulative_gpa < REVIEW_GPA_THRESHOLD,
                    Student.academic_standing.in_(REVIEW_STANDINGS),
                ),
            )
            .order_by(Student.cumulative_gpa)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
