# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for the degree audit engine."""

from src.core.exceptions import AcademicRecordError, RecordNotFoundError


class DegreeAuditServiceError(AcademicRecordError):
    """Base exception for degree audit errors."""

    pass


class DegreeTemplateNotFoundError(DegreeAuditServiceError, RecordNotFoundError):
    """Raised when no active requirement template exists for a degree code."""

    def __init__(self, degree_code: str):
        super().__init__(
            f"No active degree requirement template for {degree_code}",
            {"degree_code": degree_code},
        )
        self.degree_code = degree_code


class DegreeNotDeclaredError(DegreeAuditServiceError):
    """Raised when an audit needs the student's degree code and none is set."""

    pass
