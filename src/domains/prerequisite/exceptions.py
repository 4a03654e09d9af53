# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for prerequisite validation."""

from src.core.exceptions import AcademicRecordError, RecordNotFoundError


class PrerequisiteServiceError(AcademicRecordError):
    """Base exception for prerequisite validation errors."""

    pass


class CourseNotFoundError(PrerequisiteServiceError, RecordNotFoundError):
    """Raised when the course being validated does not exist."""

    def __init__(self, course_id: str):
        super().__init__(f"Course {course_id} not found", {"course_id": course_id})
        self.course_id = course_id
