# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides the enrollment state machine:
- Student lifecycle transitions and academic standing
- Course enrollment, drop and withdrawal
"""

from src.domains.enrollment.exceptions import (
    EnrollmentNotFoundError,
    EnrollmentServiceError,
    InvalidStandingError,
    InvalidTransitionError,
    StudentNotFoundError,
)
from src.domains.enrollment.service import CourseEnrollmentService
from src.domains.enrollment.student_service import StudentService
from src.domains.enrollment.transitions import (
    can_transition_course_enrollment,
    can_transition_student,
    is_valid_academic_standing,
)

__all__ = [
    "CourseEnrollmentService",
    "StudentService",
    "EnrollmentServiceError",
    "EnrollmentNotFoundError",
    "InvalidStandingError",
    "InvalidTransitionError",
    "StudentNotFoundError",
    "can_transition_course_enrollment",
    "can_transition_student",
    "is_valid_academic_standing",
]
