# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grading domain package.

This package provides the grade ledger and GPA calculator:
- Letter / numeric / grade point conversion tables
- Grade recording and append-only correction
- Cumulative, term, major GPA and GPA history
"""

from src.domains.grading.conversion import (
    compute_gpa,
    determine_academic_standing,
    letter_to_numeric,
    letter_to_points,
    numeric_to_letter,
    resolve_grade,
    round_gpa,
)
from src.domains.grading.exceptions import (
    GradeNotFoundError,
    GradingServiceError,
    InvalidGradeError,
)
from src.domains.grading.gpa import GPAService, calculate_gpa, is_countable
from src.domains.grading.schemas import GPAHistoryPoint
from src.domains.grading.service import GradeService

__all__ = [
    "GradeService",
    "GPAService",
    "GPAHistoryPoint",
    "GradingServiceError",
    "GradeNotFoundError",
    "InvalidGradeError",
    "calculate_gpa",
    "compute_gpa",
    "determine_academic_standing",
    "is_countable",
    "letter_to_numeric",
    "letter_to_points",
    "numeric_to_letter",
    "resolve_grade",
    "round_gpa",
]
