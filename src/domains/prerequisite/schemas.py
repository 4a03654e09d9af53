# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Prerequisite validation schemas."""

from pydantic import BaseModel, Field


class PrerequisiteValidationResult(BaseModel):
    """Outcome of checking a student against a course's prerequisites."""

    student_id: str
    course_id: str
    is_valid: bool = True
    missing_prerequisites: list[str] = Field(
        default_factory=list,
        description="Catalog codes of prerequisites the student has not satisfied",
    )
    messages: list[str] = Field(default_factory=list)
