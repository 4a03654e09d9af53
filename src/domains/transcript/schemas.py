# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transcript schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from src.domains.grading.schemas import GPAHistoryPoint
from src.models.academic import (
    AcademicStanding,
    AwardType,
    CourseEnrollmentStatus,
    EnrollmentStatus,
    HonorType,
    Semester,
)
from src.utils.datetime import utc_now


class TranscriptCourseLine(BaseModel):
    """One enrollment as printed on a transcript."""

    course_enrollment_id: str
    subject_code: str
    title: str | None = None
    academic_year: int
    semester: Semester
    credit_hours: int
    status: CourseEnrollmentStatus
    letter_grade: str | None = None
    grade_points: Decimal | None = None
    quality_points: Decimal | None = None
    is_audit: bool = False
    counts_toward_degree: bool = True


class TranscriptHonor(BaseModel):
    """An honor printed on a transcript."""

    honor_type: HonorType
    title: str
    academic_year: int | None = None
    semester: Semester | None = None
    award_date: datetime


class TranscriptAward(BaseModel):
    """An award printed on a transcript."""

    award_type: AwardType
    name: str
    awarding_organization: str | None = None
    award_date: datetime


class TranscriptResponse(BaseModel):
    """A student's academic transcript."""

    student_id: str
    student_number: str
    student_name: str
    program: str | None = None
    degree_code: str | None = None
    enrollment_status: EnrollmentStatus
    academic_standing: AcademicStanding
    courses: list[TranscriptCourseLine] = Field(default_factory=list)
    honors: list[TranscriptHonor] = Field(default_factory=list)
    awards: list[TranscriptAward] = Field(default_factory=list)
    cumulative_gpa: Decimal | None = None
    total_credit_hours: int = Field(default=0, description="Credit hours of countable graded courses")
    total_quality_points: Decimal = Decimal("0")
    is_official: bool = True
    generated_at: datetime = Field(default_factory=utc_now)


class TranscriptSummary(BaseModel):
    """Condensed view of a student's record."""

    student_id: str
    cumulative_gpa: Decimal | None = None
    total_credit_hours: int = 0
    completed_courses: int = 0
    in_progress_courses: int = 0
    dropped_courses: int = 0
    withdrawn_courses: int = 0
    honors_count: int = 0
    awards_count: int = 0
    term_history: list[GPAHistoryPoint] = Field(default_factory=list)
