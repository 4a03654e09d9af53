# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for the grade ledger and GPA calculator."""

from src.core.exceptions import AcademicRecordError, RecordNotFoundError


class GradingServiceError(AcademicRecordError):
    """Base exception for grading errors."""

    pass


class InvalidGradeError(GradingServiceError):
    """Raised when a letter is unknown, a numeric grade is outside 0-100,
    or neither representation was supplied."""

    pass


class GradeNotFoundError(GradingServiceError, RecordNotFoundError):
    """Raised when a grade id does not resolve."""

    pass
