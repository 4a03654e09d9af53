# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Status transition allow-lists and standing thresholds.

Any transition not listed here is rejected. GRADUATED and WITHDRAWN are
terminal for students; every course enrollment status other than
ENROLLED is terminal.
"""

from decimal import Decimal
from types import MappingProxyType

from src.models.academic import AcademicStanding, CourseEnrollmentStatus, EnrollmentStatus

STUDENT_STATUS_TRANSITIONS = MappingProxyType({
    EnrollmentStatus.APPLIED: frozenset({EnrollmentStatus.ADMITTED, EnrollmentStatus.WITHDRAWN}),
    EnrollmentStatus.ADMITTED: frozenset({EnrollmentStatus.ENROLLED, EnrollmentStatus.WITHDRAWN}),
    EnrollmentStatus.ENROLLED: frozenset({
        EnrollmentStatus.SUSPENDED,
        EnrollmentStatus.WITHDRAWN,
        EnrollmentStatus.GRADUATED,
    }),
    EnrollmentStatus.SUSPENDED: frozenset({EnrollmentStatus.ENROLLED, EnrollmentStatus.WITHDRAWN}),
    EnrollmentStatus.GRADUATED: frozenset(),
    EnrollmentStatus.WITHDRAWN: frozenset(),
})

COURSE_ENROLLMENT_TRANSITIONS = MappingProxyType({
    CourseEnrollmentStatus.ENROLLED: frozenset({
        CourseEnrollmentStatus.COMPLETED,
        CourseEnrollmentStatus.DROPPED,
        CourseEnrollmentStatus.WITHDRAWN,
    }),
    CourseEnrollmentStatus.COMPLETED: frozenset(),
    CourseEnrollmentStatus.DROPPED: frozenset(),
    CourseEnrollmentStatus.WITHDRAWN: frozenset(),
})

# (inclusive lower bound, exclusive upper bound); None leaves a side open.
STANDING_GPA_RANGES = MappingProxyType({
    AcademicStanding.PRESIDENTS_LIST: (Decimal("3.9"), None),
    AcademicStanding.DEANS_LIST: (Decimal("3.5"), None),
    AcademicStanding.GOOD: (Decimal("2.0"), None),
    AcademicStanding.WARNING: (Decimal("1.5"), Decimal("2.0")),
    AcademicStanding.PROBATION: (Decimal("1.0"), Decimal("2.0")),
    AcademicStanding.ACADEMIC_SUSPENSION: (None, Decimal("1.0")),
})


def can_transition_student(current: EnrollmentStatus, target: EnrollmentStatus) -> bool:
    """Whether a student may move from ``current`` to ``target``."""
    return target in STUDENT_STATUS_TRANSITIONS.get(current, frozenset())


def can_transition_course_enrollment(
    current: CourseEnrollmentStatus,
    target: CourseEnrollmentStatus,
) -> bool:
    """Whether a course enrollment may move from ``current`` to ``target``."""
    return target in COURSE_ENROLLMENT_TRANSITIONS.get(current, frozenset())


def is_valid_academic_standing(gpa: Decimal | None, standing: AcademicStanding) -> bool:
    """Whether ``gpa`` satisfies the threshold of ``standing``.

    NEW_STUDENT is only valid without a GPA, and every other standing
    requires one.
    """
    if gpa is None:
        return standing == AcademicStanding.NEW_STUDENT
    if standing == AcademicStanding.NEW_STUDENT:
        return False

    lower, upper = STANDING_GPA_RANGES[standing]
    if lower is not None and gpa < lower:
        return False
    if upper is not None and gpa >= upper:
        return False
    return True
