# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for the honors and awards registry."""

from src.core.exceptions import AcademicRecordError, RecordNotFoundError


class HonorsServiceError(AcademicRecordError):
    """Base exception for honors and awards errors."""

    pass


class InvalidHonorError(HonorsServiceError):
    """Raised when an honor's GPA requirement is invalid or not met."""

    pass


class HonorNotFoundError(HonorsServiceError, RecordNotFoundError):
    """Raised when an honor id does not resolve."""

    def __init__(self, honor_id: str):
        super().__init__(f"Academic honor {honor_id} not found", {"honor_id": honor_id})
        self.honor_id = honor_id


class AwardNotFoundError(HonorsServiceError, RecordNotFoundError):
    """Raised when an award id does not resolve."""

    def __init__(self, award_id: str):
        super().__init__(f"Award {award_id} not found", {"award_id": award_id})
        self.award_id = award_id
