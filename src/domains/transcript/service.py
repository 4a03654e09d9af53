# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transcript generation service.

Transcripts are read-only views assembled from the enrollment and grade
ledger. Official transcripts list completed courses only; unofficial
ones also show courses still in progress. Totals only count lines that
contribute to GPA.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.exceptions import StudentNotFoundError
from src.domains.grading.gpa import (
    active_final_grade,
    build_gpa_history,
    calculate_gpa,
    is_countable,
    term_key,
)
from src.domains.transcript.schemas import (
    TranscriptAward,
    TranscriptCourseLine,
    TranscriptHonor,
    TranscriptResponse,
    TranscriptSummary,
)
from src.infrastructure.database.models import CourseEnrollment, Student
from src.models.academic import CourseEnrollmentStatus

logger = logging.getLogger(__name__)


def build_course_line(enrollment: CourseEnrollment) -> TranscriptCourseLine:
    """Transcript line for an enrollment with its current final grade."""
    grade = active_final_grade(enrollment)
    return TranscriptCourseLine(
        course_enrollment_id=enrollment.id,
        subject_code=enrollment.subject_code,
        title=enrollment.subject.title if enrollment.subject is not None else None,
        academic_year=enrollment.academic_year,
        semester=enrollment.semester,
        credit_hours=enrollment.credit_hours,
        status=enrollment.status,
        letter_grade=grade.letter_grade if grade else None,
        grade_points=grade.grade_points if grade else None,
        quality_points=grade.grade_points * enrollment.credit_hours if grade else None,
        is_audit=enrollment.is_audit,
        counts_toward_degree=enrollment.counts_toward_degree,
    )


class TranscriptService:
    """Service assembling transcripts.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize transcript service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def generate_transcript(
        self,
        student_id: str,
        include_in_progress: bool = False,
    ) -> TranscriptResponse:
        """Generate an official transcript.

        Args:
            student_id: Student identifier.
            include_in_progress: Also list courses that are still enrolled.

        Returns:
            Transcript with course lines in chronological term order.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        student = await self._get_student(student_id)

        shown = {CourseEnrollmentStatus.COMPLETED}
        if include_in_progress:
            shown.add(CourseEnrollmentStatus.ENROLLED)

        enrollments = sorted(
            (e for e in student.enrollments if e.status in shown),
            key=lambda e: (term_key(e), e.subject_code),
        )
        countable = [e for e in enrollments if is_countable(e)]

        total_credit_hours = sum(e.credit_hours for e in countable)
        total_quality_points = sum(
            (active_final_grade(e).grade_points * e.credit_hours for e in countable),
            Decimal("0"),
        )

        transcript = TranscriptResponse(
            student_id=student.id,
            student_number=student.student_number,
            student_name=student.full_name,
            program=student.program,
            degree_code=student.degree_code,
            enrollment_status=student.enrollment_status,
            academic_standing=student.academic_standing,
            courses=[build_course_line(e) for e in enrollments],
            honors=[
                TranscriptHonor(
                    honor_type=honor.honor_type,
                    title=honor.title,
                    academic_year=honor.academic_year,
                    semester=honor.semester,
                    award_date=honor.award_date,
                )
                for honor in sorted(student.honors, key=lambda h: h.award_date)
                if honor.is_active and honor.appears_on_transcript
            ],
            awards=[
                TranscriptAward(
                    award_type=award.award_type,
                    name=award.name,
                    awarding_organization=award.awarding_organization,
                    award_date=award.award_date,
                )
                for award in sorted(student.awards, key=lambda a: a.award_date)
                if award.is_active and award.appears_on_transcript
            ],
            cumulative_gpa=calculate_gpa(student.enrollments),
            total_credit_hours=total_credit_hours,
            total_quality_points=total_quality_points,
            is_official=True,
        )

        logger.info(
            "Generated transcript: student=%s, courses=%d, credit_hours=%d",
            student_id,
            len(transcript.courses),
            total_credit_hours,
        )
        return transcript

    async def generate_unofficial_transcript(self, student_id: str) -> TranscriptResponse:
        """Generate an unofficial transcript including in-progress courses."""
        transcript = await self.generate_transcript(student_id, include_in_progress=True)
        transcript.is_official = False
        return transcript

    async def get_transcript_summary(self, student_id: str) -> TranscriptSummary:
        """Course counts, totals and term GPA history of a student.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        student = await self._get_student(student_id)
        enrollments = student.enrollments

        def count(status: CourseEnrollmentStatus) -> int:
            return sum(1 for e in enrollments if e.status == status)

        return TranscriptSummary(
            student_id=student.id,
            cumulative_gpa=calculate_gpa(enrollments),
            total_credit_hours=sum(e.credit_hours for e in enrollments if is_countable(e)),
            completed_courses=count(CourseEnrollmentStatus.COMPLETED),
            in_progress_courses=count(CourseEnrollmentStatus.ENROLLED),
            dropped_courses=count(CourseEnrollmentStatus.DROPPED),
            withdrawn_courses=count(CourseEnrollmentStatus.WITHDRAWN),
            honors_count=sum(1 for h in student.honors if h.is_active),
            awards_count=sum(1 for a in student.awards if a.is_active),
            term_history=build_gpa_history(enrollments),
        )

    async def _get_student(self, student_id: str) -> Student:
        result = await self.db.execute(
            select(Student)
            .options(
                selectinload(Student.enrollments).selectinload(CourseEnrollment.grades),
                selectinload(Student.enrollments).selectinload(CourseEnrollment.subject),
                selectinload(Student.honors),
                selectinload(Student.awards),
            )
            .where(Student.id == student_id)
        )
        student = result.scalar_one_or_none()
        if student is None:
            raise StudentNotFoundError(student_id)
        return student
