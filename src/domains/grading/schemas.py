# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grading schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.models.academic import Semester


class GPAHistoryPoint(BaseModel):
    """GPA snapshot at the end of one term."""

    academic_year: int
    semester: Semester
    term_gpa: Decimal | None = Field(description="GPA of this term's countable enrollments")
    cumulative_gpa: Decimal | None = Field(description="Running GPA through this term")
    term_credit_hours: int = 0
    cumulative_credit_hours: int = 0
