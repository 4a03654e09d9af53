# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for the enrollment state machine."""

from enum import Enum

from src.core.exceptions import AcademicRecordError, RecordNotFoundError, StudentNotFoundError


class EnrollmentServiceError(AcademicRecordError):
    """Base exception for enrollment errors."""

    pass


class EnrollmentNotFoundError(EnrollmentServiceError, RecordNotFoundError):
    """Raised when a course enrollment id does not resolve."""

    def __init__(self, enrollment_id: str):
        super().__init__(
            f"Course enrollment {enrollment_id} not found",
            {"enrollment_id": enrollment_id},
        )
        self.enrollment_id = enrollment_id


class InvalidTransitionError(EnrollmentServiceError):
    """Raised when a status change is not on the allow-list."""

    def __init__(self, current: Enum, target: Enum):
        super().__init__(
            f"Cannot transition from {current.value} to {target.value}",
            {"from": current.value, "to": target.value},
        )
        self.current = current
        self.target = target


class InvalidStandingError(EnrollmentServiceError):
    """Raised when a student's GPA does not satisfy the requested standing."""

    pass


__all__ = [
    "EnrollmentServiceError",
    "EnrollmentNotFoundError",
    "InvalidTransitionError",
    "InvalidStandingError",
    "StudentNotFoundError",
]
