# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Prerequisite domain package.

This package validates that a student has completed every prerequisite
of a course before enrolling.
"""

from src.domains.prerequisite.exceptions import CourseNotFoundError, PrerequisiteServiceError
from src.domains.prerequisite.schemas import PrerequisiteValidationResult
from src.domains.prerequisite.service import PrerequisiteService, evaluate_prerequisites

__all__ = [
    "PrerequisiteService",
    "PrerequisiteValidationResult",
    "PrerequisiteServiceError",
    "CourseNotFoundError",
    "evaluate_prerequisites",
]
