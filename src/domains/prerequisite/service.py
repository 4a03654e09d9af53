# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Prerequisite validation service.

Prerequisites reference required courses by catalog code. A student
satisfies one when the required course's subject appears among their
countable, final-graded enrollments, at or above the entry's minimum
grade when one is set. All entries of a course must be satisfied.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.grading.conversion import letter_to_points
from src.domains.grading.gpa import countable_grades
from src.domains.prerequisite.exceptions import CourseNotFoundError
from src.domains.prerequisite.schemas import PrerequisiteValidationResult
from src.infrastructure.database.models import Course, CourseEnrollment, CoursePrerequisite

logger = logging.getLogger(__name__)

ALL_SATISFIED = "All prerequisites satisfied"


def completed_subject_points(enrollments: Iterable[CourseEnrollment]) -> dict[str, Decimal]:
    """Best final grade points per completed subject code."""
    best: dict[str, Decimal] = {}
    for enrollment, grade in countable_grades(enrollments):
        current = best.get(enrollment.subject_code)
        if current is None or grade.grade_points > current:
            best[enrollment.subject_code] = grade.grade_points
    return best


def evaluate_prerequisites(
    student_id: str,
    course_id: str,
    prerequisites: Iterable[CoursePrerequisite],
    catalog: Mapping[str, Course],
    completed: Mapping[str, Decimal],
) -> PrerequisiteValidationResult:
    """Check every prerequisite entry against the completed subjects.

    Args:
        student_id: Student being checked.
        course_id: Course being enrolled in.
        prerequisites: Entries of the course.
        catalog: Courses keyed by catalog code; codes missing here count
            as unsatisfied.
        completed: Best grade points per completed subject code.

    Returns:
        Validation result listing every unsatisfied entry.
    """
    result = PrerequisiteValidationResult(student_id=student_id, course_id=course_id)

    for prerequisite in prerequisites:
        code = prerequisite.required_course_number
        required = catalog.get(code)

        if required is None:
            result.missing_prerequisites.append(code)
            result.messages.append(f"Missing prerequisite: {code}")
            continue

        points = completed.get(required.subject_code)
        if points is None:
            result.missing_prerequisites.append(code)
            result.messages.append(f"Missing prerequisite: {code} - {required.title}")
            continue

        if prerequisite.minimum_grade and points < letter_to_points(prerequisite.minimum_grade):
            result.missing_prerequisites.append(code)
            result.messages.append(
                f"Prerequisite {code} - {required.title} requires a minimum grade of "
                f"{prerequisite.minimum_grade.upper()}"
            )

    result.is_valid = not result.missing_prerequisites
    if result.is_valid:
        result.messages.append(ALL_SATISFIED)
    return result


class PrerequisiteService:
    """Service validating course prerequisites for a student.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize prerequisite service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def validate_prerequisites(
        self,
        student_id: str,
        course_id: str,
    ) -> PrerequisiteValidationResult:
        """Check whether a student has completed a course's prerequisites.

        Args:
            student_id: Student identifier.
            course_id: Course identifier.

        Returns:
            Validation result with missing catalog codes and messages.

        Raises:
            CourseNotFoundError: If the course does not exist.
        """
        result = await self.db.execute(
            select(Course)
            .options(selectinload(Course.prerequisites))
            .where(Course.id == course_id)
        )
        course = result.scalar_one_or_none()
        if course is None:
            raise CourseNotFoundError(course_id)

        prerequisites = list(course.prerequisites)
        if not prerequisites:
            return evaluate_prerequisites(student_id, course_id, [], {}, {})

        catalog = await self._resolve_catalog(p.required_course_number for p in prerequisites)
        completed = await self._completed_subjects(student_id)

        validation = evaluate_prerequisites(student_id, course_id, prerequisites, catalog, completed)

        logger.info(
            "Validated prerequisites: student=%s, course=%s, valid=%s, missing=%s",
            student_id,
            course.course_number,
            validation.is_valid,
            validation.missing_prerequisites,
        )
        return validation

    async def _resolve_catalog(self, course_numbers: Iterable[str]) -> dict[str, Course]:
        result = await self.db.execute(
            select(Course).where(Course.course_number.in_(set(course_numbers)))
        )
        return {course.course_number: course for course in result.scalars().all()}

    async def _completed_subjects(self, student_id: str) -> dict[str, Decimal]:
        result = await self.db.execute(
            select(CourseEnrollment)
            .options(selectinload(CourseEnrollment.grades))
            .where(CourseEnrollment.student_id == student_id)
        )
        return completed_subject_points(result.scalars().all())
