# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models for academic records.

Importing this package registers every model on ``Base.metadata`` so that
string-based relationships resolve.
"""

from src.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.infrastructure.database.models.course import (
    Course,
    CourseEnrollment,
    CoursePrerequisite,
    Subject,
)
from src.infrastructure.database.models.degree import (
    DegreeProgress,
    DegreeRequirementTemplate,
    RequirementCategory,
)
from src.infrastructure.database.models.grade import Grade
from src.infrastructure.database.models.honor import AcademicHonor, Award
from src.infrastructure.database.models.student import Student

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "Student",
    "Subject",
    "Course",
    "CoursePrerequisite",
    "CourseEnrollment",
    "Grade",
    "AcademicHonor",
    "Award",
    "DegreeRequirementTemplate",
    "RequirementCategory",
    "DegreeProgress",
]
