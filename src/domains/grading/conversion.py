# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade conversion tables and GPA arithmetic.

The tables are institution-wide constants. Every function here is pure:
the same input always yields the same output and nothing touches the
database.

Example:
    >>> numeric_to_letter(Decimal("87.5"))
    'B+'
    >>> letter_to_points("B+")
    Decimal('3.3')
    >>> compute_gpa([(Decimal("4.0"), 3), (Decimal("3.0"), 4)])
    Decimal('3.43')
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType

from src.domains.grading.exceptions import InvalidGradeError
from src.models.academic import AcademicStanding

GPA_QUANTUM = Decimal("0.01")
NUMERIC_MIN = Decimal("0")
NUMERIC_MAX = Decimal("100")

# Representative numeric value stored when only a letter is supplied.
LETTER_TO_NUMERIC = MappingProxyType({
    "A+": Decimal("97"),
    "A": Decimal("94"),
    "A-": Decimal("90"),
    "B+": Decimal("87"),
    "B": Decimal("84"),
    "B-": Decimal("80"),
    "C+": Decimal("77"),
    "C": Decimal("74"),
    "C-": Decimal("70"),
    "D+": Decimal("67"),
    "D": Decimal("64"),
    "D-": Decimal("60"),
    "F": Decimal("50"),
})

# Inclusive lower bounds, highest first.
NUMERIC_THRESHOLDS: tuple[tuple[Decimal, str], ...] = (
    (Decimal("97"), "A+"),
    (Decimal("93"), "A"),
    (Decimal("90"), "A-"),
    (Decimal("87"), "B+"),
    (Decimal("83"), "B"),
    (Decimal("80"), "B-"),
    (Decimal("77"), "C+"),
    (Decimal("73"), "C"),
    (Decimal("70"), "C-"),
    (Decimal("67"), "D+"),
    (Decimal("63"), "D"),
    (Decimal("60"), "D-"),
)

LETTER_TO_POINTS = MappingProxyType({
    "A+": Decimal("4.0"),
    "A": Decimal("4.0"),
    "A-": Decimal("3.7"),
    "B+": Decimal("3.3"),
    "B": Decimal("3.0"),
    "B-": Decimal("2.7"),
    "C+": Decimal("2.3"),
    "C": Decimal("2.0"),
    "C-": Decimal("1.7"),
    "D+": Decimal("1.3"),
    "D": Decimal("1.0"),
    "D-": Decimal("0.7"),
    "F": Decimal("0.0"),
})

VALID_LETTERS = frozenset(LETTER_TO_POINTS)


def normalize_letter_grade(letter: str) -> str:
    """Uppercase and strip a letter grade, rejecting unknown letters.

    Raises:
        InvalidGradeError: If the letter is not on the grading scale.
    """
    normalized = letter.strip().upper()
    if normalized not in VALID_LETTERS:
        raise InvalidGradeError(f"Unknown letter grade: {letter!r}", {"letter_grade": letter})
    return normalized


def validate_numeric_grade(value: Decimal | float | int) -> Decimal:
    """Coerce a numeric grade to ``Decimal`` and check it lies in [0, 100].

    Raises:
        InvalidGradeError: If the value is out of range.
    """
    numeric = value if isinstance(value, Decimal) else Decimal(str(value))
    if numeric < NUMERIC_MIN or numeric > NUMERIC_MAX:
        raise InvalidGradeError(
            f"Numeric grade must be between 0 and 100, got {numeric}",
            {"numeric_grade": str(numeric)},
        )
    return numeric


def letter_to_numeric(letter: str) -> Decimal:
    """Representative numeric value of a letter grade."""
    return LETTER_TO_NUMERIC[normalize_letter_grade(letter)]


def numeric_to_letter(value: Decimal | float | int) -> str:
    """Letter grade for a numeric score."""
    numeric = validate_numeric_grade(value)
    for lower_bound, letter in NUMERIC_THRESHOLDS:
        if numeric >= lower_bound:
            return letter
    return "F"


def letter_to_points(letter: str) -> Decimal:
    """Grade points (0.0-4.0) of a letter grade."""
    return LETTER_TO_POINTS[normalize_letter_grade(letter)]


def resolve_grade(
    letter_grade: str | None,
    numeric_grade: Decimal | float | int | None,
) -> tuple[str, Decimal, Decimal]:
    """Complete a grade from whichever representation was supplied.

    When both are supplied the letter wins for grade points and the
    numeric value is kept as recorded.

    Args:
        letter_grade: Letter on the grading scale, or None.
        numeric_grade: Score in [0, 100], or None.

    Returns:
        Tuple of (letter, numeric, grade points).

    Raises:
        InvalidGradeError: If neither is supplied or either is invalid.
    """
    if letter_grade is None and numeric_grade is None:
        raise InvalidGradeError("Either a letter grade or a numeric grade is required")

    if letter_grade is not None:
        letter = normalize_letter_grade(letter_grade)
        numeric = (
            validate_numeric_grade(numeric_grade)
            if numeric_grade is not None
            else LETTER_TO_NUMERIC[letter]
        )
    else:
        numeric = validate_numeric_grade(numeric_grade)
        letter = numeric_to_letter(numeric)

    return letter, numeric, LETTER_TO_POINTS[letter]


def quality_points(grade_points: Decimal, credit_hours: int) -> Decimal:
    """Grade points weighted by credit hours."""
    return grade_points * credit_hours


def round_gpa(value: Decimal) -> Decimal:
    """Round a GPA half-up to two decimals."""
    return value.quantize(GPA_QUANTUM, rounding=ROUND_HALF_UP)


def compute_gpa(entries: Iterable[tuple[Decimal, int]]) -> Decimal | None:
    """Credit-weighted GPA of (grade points, credit hours) pairs.

    Returns:
        GPA rounded to two decimals, or None when no credit hours were
        attempted.
    """
    total_quality = Decimal("0")
    total_hours = 0
    for points, hours in entries:
        total_quality += quality_points(points, hours)
        total_hours += hours

    if total_hours == 0:
        return None
    return round_gpa(total_quality / total_hours)


def determine_academic_standing(
    gpa: Decimal | None,
    credit_hours: int,
    deans_list_min_credit_hours: int = 12,
) -> AcademicStanding:
    """Standing a GPA and credit load would earn.

    Used for reporting; persisted standings go through
    ``StudentService.update_academic_standing``.
    """
    if gpa is None:
        return AcademicStanding.NEW_STUDENT
    if gpa >= Decimal("3.8") and credit_hours >= deans_list_min_credit_hours:
        return AcademicStanding.DEANS_LIST
    if gpa >= Decimal("2.0"):
        return AcademicStanding.GOOD
    if gpa >= Decimal("1.5"):
        return AcademicStanding.WARNING
    if gpa >= Decimal("1.0"):
        return AcademicStanding.PROBATION
    return AcademicStanding.ACADEMIC_SUSPENSION
