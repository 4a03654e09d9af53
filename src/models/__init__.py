# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared value types for the academic records core.

Domain request/response schemas live beside their services in
``src.domains.<domain>.schemas``; this package only carries the closed
enumerations every domain agrees on.
"""

from src.models.academic import (
    AcademicStanding,
    AwardType,
    CourseEnrollmentStatus,
    EnrollmentStatus,
    GradeStatus,
    GradeType,
    HonorType,
    Semester,
)

__all__ = [
    "AcademicStanding",
    "AwardType",
    "CourseEnrollmentStatus",
    "EnrollmentStatus",
    "GradeStatus",
    "GradeType",
    "HonorType",
    "Semester",
]
