# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Closed enumerations for academic records.

Every status in the system is one of these values. Transitions between
them are governed by the allow-lists in
``src.domains.enrollment.transitions``.
"""

from enum import Enum


class EnrollmentStatus(str, Enum):
    """Lifecycle status of a student in the institution."""

    APPLIED = "applied"
    ADMITTED = "admitted"
    ENROLLED = "enrolled"
    GRADUATED = "graduated"
    WITHDRAWN = "withdrawn"
    SUSPENDED = "suspended"


class AcademicStanding(str, Enum):
    """Academic standing derived from GPA.

    - NEW_STUDENT: No graded history yet
    - GOOD: GPA at or above 2.0
    - WARNING: GPA in [1.5, 2.0)
    - PROBATION: GPA in [1.0, 2.0)
    - ACADEMIC_SUSPENSION: GPA below 1.0
    - DEANS_LIST: GPA at or above 3.5
    - PRESIDENTS_LIST: GPA at or above 3.9
    """

    NEW_STUDENT = "new_student"
    GOOD = "good"
    WARNING = "warning"
    PROBATION = "probation"
    ACADEMIC_SUSPENSION = "academic_suspension"
    DEANS_LIST = "deans_list"
    PRESIDENTS_LIST = "presidents_list"


class CourseEnrollmentStatus(str, Enum):
    """Status of a single student-in-course record."""

    ENROLLED = "enrolled"
    COMPLETED = "completed"
    DROPPED = "dropped"
    WITHDRAWN = "withdrawn"


class GradeType(str, Enum):
    """Kind of assessment a grade was recorded for."""

    QUIZ = "quiz"
    ASSIGNMENT = "assignment"
    MIDTERM = "midterm"
    FINAL = "final"
    PROJECT = "project"
    EXAM = "exam"


class GradeStatus(str, Enum):
    """Ledger status of a grade row.

    Grades are never edited in place: a correction writes a new ACTIVE row
    and flips the old one to CHANGED.
    """

    ACTIVE = "active"
    CHANGED = "changed"


class Semester(str, Enum):
    """Academic term within a calendar year."""

    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"

    @property
    def order(self) -> int:
        """Chronological position of the term within its year."""
        return _SEMESTER_ORDER[self]

    @classmethod
    def for_month(cls, month: int) -> "Semester":
        """Term a calendar month falls in (Jan-May spring, Jun-Aug summer, else fall)."""
        if 1 <= month <= 5:
            return cls.SPRING
        if 6 <= month <= 8:
            return cls.SUMMER
        return cls.FALL


_SEMESTER_ORDER = {
    Semester.WINTER: 0,
    Semester.SPRING: 1,
    Semester.SUMMER: 2,
    Semester.FALL: 3,
}


class HonorType(str, Enum):
    """Academic honors recorded on a student's record."""

    DEANS_LIST = "deans_list"
    PRESIDENTS_LIST = "presidents_list"
    CUM_LAUDE = "cum_laude"
    MAGNA_CUM_LAUDE = "magna_cum_laude"
    SUMMA_CUM_LAUDE = "summa_cum_laude"
    HONOR_SOCIETY = "honor_society"


class AwardType(str, Enum):
    """Awards and scholarships granted to a student."""

    ACADEMIC_EXCELLENCE = "academic_excellence"
    LEADERSHIP = "leadership"
    RESEARCH = "research"
    SERVICE = "service"
    SCHOLARSHIP = "scholarship"
    ATHLETIC = "athletic"
