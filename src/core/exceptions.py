# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Base exceptions shared by the academic record domains.

Each domain declares its own ``<Domain>ServiceError`` on top of
``AcademicRecordError``; not-found conditions additionally derive from
``RecordNotFoundError`` so callers can map them uniformly.

- AcademicRecordError: Base exception for every domain error
- RecordNotFoundError: A referenced record does not exist
- StudentNotFoundError: The student id does not resolve
"""


class AcademicRecordError(Exception):
    """Base exception for all academic record errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        """Initialize the error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class RecordNotFoundError(AcademicRecordError):
    """Raised when a referenced record does not exist."""

    pass


class StudentNotFoundError(RecordNotFoundError):
    """Raised when a student id does not resolve to a student."""

    def __init__(self, student_id: str):
        super().__init__(f"Student {student_id} not found", {"student_id": student_id})
        self.student_id = student_id
