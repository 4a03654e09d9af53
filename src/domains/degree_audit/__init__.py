# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Degree audit domain package.

This package compares student records against degree templates:
- Credit hour and category progress
- Graduation eligibility and projected graduation term
- What-if analysis for prospective courses
"""

from src.domains.degree_audit.audit import (
    allocate_categories,
    percentage,
    perform_degree_audit,
    project_graduation,
)
from src.domains.degree_audit.exceptions import (
    DegreeAuditServiceError,
    DegreeNotDeclaredError,
    DegreeTemplateNotFoundError,
)
from src.domains.degree_audit.schemas import (
    CategoryProgress,
    CompletedCourse,
    DegreeAuditResult,
    DegreeProgressResponse,
    DegreeTemplateDefinition,
    GraduationEligibility,
    RemainingRequirements,
    RequirementCategoryDefinition,
    StudentAcademicRecord,
    WhatIfAnalysisResult,
)
from src.domains.degree_audit.service import DegreeAuditService

__all__ = [
    "DegreeAuditService",
    "DegreeAuditServiceError",
    "DegreeNotDeclaredError",
    "DegreeTemplateNotFoundError",
    "CategoryProgress",
    "CompletedCourse",
    "DegreeAuditResult",
    "DegreeProgressResponse",
    "DegreeTemplateDefinition",
    "GraduationEligibility",
    "RemainingRequirements",
    "RequirementCategoryDefinition",
    "StudentAcademicRecord",
    "WhatIfAnalysisResult",
    "allocate_categories",
    "percentage",
    "perform_degree_audit",
    "project_graduation",
]
