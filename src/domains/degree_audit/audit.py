# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Degree audit engine.

Compares a student's countable history against a degree template. The
functions here take snapshots and return results; they never read or
write the database, so the same audit drives progress snapshots,
graduation checks and what-if projections.

Category allocation:
1. Categories that list subject codes claim matching courses in display
   order until their credit requirement is met.
2. Unclaimed course credit and transfer credit fill the open categories
   (no subject codes) in display order.
"""

import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from src.core.config.settings import AcademicPolicySettings
from src.domains.degree_audit.schemas import (
    CategoryImpact,
    CategoryProgress,
    CompletedCourse,
    DegreeAuditResult,
    DegreeTemplateDefinition,
    RequirementCategoryDefinition,
    StudentAcademicRecord,
)
from src.models.academic import Semester
from src.utils.datetime import add_months, utc_today

PERCENT_QUANTUM = Decimal("0.01")
HUNDRED = Decimal("100")


def percentage(completed: int, required: int) -> Decimal:
    """Completion percentage rounded to two decimals and capped at 100."""
    if required <= 0:
        return HUNDRED
    value = (Decimal(completed) / Decimal(required) * HUNDRED).quantize(
        PERCENT_QUANTUM, rounding=ROUND_HALF_UP
    )
    return min(value, HUNDRED)


def project_graduation(
    remaining_credit_hours: int,
    policy: AcademicPolicySettings,
    today: date | None = None,
) -> tuple[date | None, str | None]:
    """Estimate the graduation date and term at a full-time course load.

    Returns:
        Tuple of (expected date, term label such as ``"Fall 2027"``), or
        (None, None) when nothing remains.
    """
    if remaining_credit_hours <= 0:
        return None, None

    terms = math.ceil(remaining_credit_hours / policy.credits_per_term)
    expected = add_months(today or utc_today(), terms * policy.months_per_term)
    term = Semester.for_month(expected.month)
    return expected, f"{term.value.title()} {expected.year}"


def allocate_categories(
    courses: list[CompletedCourse],
    categories: list[RequirementCategoryDefinition],
    transfer_credit_hours: int = 0,
) -> list[CategoryProgress]:
    """Distribute completed credit across requirement categories."""
    ordered = sorted(categories, key=lambda category: category.display_order)
    claimed: set[int] = set()
    progress: dict[str, CategoryProgress] = {}

    for category in ordered:
        if not category.subject_codes:
            continue
        codes = set(category.subject_codes)
        credits = 0
        applied = []
        for index, course in enumerate(courses):
            if credits >= category.credits_required:
                break
            if index in claimed or course.subject_code not in codes:
                continue
            claimed.add(index)
            credits += course.credit_hours
            applied.append(course.subject_code)
        progress[category.name] = _category_progress(category, credits, applied)

    pool = transfer_credit_hours
    pool_courses = []
    for index, course in enumerate(courses):
        if index not in claimed:
            pool += course.credit_hours
            pool_courses.append(course.subject_code)

    for category in ordered:
        if category.subject_codes:
            continue
        credits = min(pool, category.credits_required)
        pool -= credits
        progress[category.name] = _category_progress(category, credits, pool_courses if credits else [])

    return [progress[category.name] for category in ordered]


def _category_progress(
    category: RequirementCategoryDefinition,
    credits: int,
    applied: list[str],
) -> CategoryProgress:
    completed = min(credits, category.credits_required)
    remaining = max(0, category.credits_required - completed)
    return CategoryProgress(
        name=category.name,
        credits_required=category.credits_required,
        credits_completed=completed,
        credits_remaining=remaining,
        completion_percentage=percentage(completed, category.credits_required),
        is_complete=remaining == 0,
        applied_courses=list(applied),
    )


def build_recommendations(result: DegreeAuditResult) -> list[str]:
    """Advising recommendations derived from an audit result."""
    recommendations = []

    if result.completion_percentage < 25:
        recommendations.append(
            "Focus on completing general education requirements early in your academic career."
        )
    elif result.completion_percentage < 50:
        recommendations.append(
            "Begin taking major-specific courses while completing remaining general education."
        )
    elif result.completion_percentage < 75:
        recommendations.append("Focus on upper-division major requirements and electives.")
    else:
        recommendations.append("Complete remaining requirements and consider applying for graduation.")

    if result.gpa_deficiency > 0:
        recommendations.append(
            f"Current GPA ({_format_gpa(result.cumulative_gpa)}) is below the minimum required "
            f"({_format_gpa(result.required_gpa)}). Consider academic support resources."
        )

    for category in result.category_progress:
        if not category.is_complete and category.completion_percentage < 50:
            recommendations.append(
                f"Prioritize completing {category.name} requirements "
                f"({category.credits_remaining} credits remaining)."
            )

    return recommendations


def perform_degree_audit(
    record: StudentAcademicRecord,
    template: DegreeTemplateDefinition,
    policy: AcademicPolicySettings,
    today: date | None = None,
) -> DegreeAuditResult:
    """Audit a student's record against a degree template.

    Args:
        record: Countable history of the student.
        template: Degree requirements.
        policy: Academic policy used for graduation projection.
        today: Reference date for the projection; defaults to today (UTC).

    Returns:
        The audit result, including graduation eligibility.
    """
    required = template.total_credits_required
    completed = sum(course.credit_hours for course in record.completed_courses)
    completed += record.transfer_credit_hours
    remaining = max(0, required - completed)

    gpa = record.cumulative_gpa
    meets_gpa = gpa is not None and gpa >= template.minimum_gpa
    deficiency = Decimal("0") if meets_gpa else template.minimum_gpa - (gpa or Decimal("0"))

    expected_date, projected_term = project_graduation(remaining, policy, today)

    unmet = []
    if remaining > 0:
        unmet.append(f"{remaining} credit hours remaining")
    if not meets_gpa:
        unmet.append(
            f"GPA below minimum (current: {_format_gpa(gpa)}, "
            f"required: {_format_gpa(template.minimum_gpa)})"
        )

    result = DegreeAuditResult(
        student_id=record.student_id,
        degree_code=template.degree_code,
        total_credits_required=required,
        completed_credit_hours=completed,
        remaining_credit_hours=remaining,
        completion_percentage=percentage(completed, required),
        cumulative_gpa=gpa,
        required_gpa=template.minimum_gpa,
        meets_gpa_requirement=meets_gpa,
        gpa_deficiency=deficiency,
        expected_graduation_date=expected_date,
        projected_graduation_term=projected_term,
        category_progress=allocate_categories(
            record.completed_courses,
            template.categories,
            record.transfer_credit_hours,
        ),
        unmet_requirements=unmet,
        is_eligible_for_graduation=remaining == 0 and meets_gpa,
    )
    result.recommendations = build_recommendations(result)
    return result


def compare_audits(current: DegreeAuditResult, projected: DegreeAuditResult) -> list[CategoryImpact]:
    """Per-category progress gain between two audits of the same template."""
    projected_by_name = {category.name: category for category in projected.category_progress}
    impacts = []
    for category in current.category_progress:
        after = projected_by_name.get(category.name, category)
        impacts.append(
            CategoryImpact(
                name=category.name,
                current_progress=category.completion_percentage,
                projected_progress=after.completion_percentage,
                progress_gain=after.completion_percentage - category.completion_percentage,
            )
        )
    return impacts


def what_if_recommendations(
    progress_impact: Decimal,
    categories_completed: int,
    impacts: list[CategoryImpact],
) -> list[str]:
    """Recommendations for a what-if projection."""
    recommendations = []
    if progress_impact > 10:
        recommendations.append("These courses would significantly advance your degree progress.")
    if categories_completed > 2:
        recommendations.append(
            "Taking these courses would satisfy multiple degree requirements efficiently."
        )
    high_impact = [impact.name for impact in impacts if impact.progress_gain > 20]
    if high_impact:
        recommendations.append(f"These courses would significantly impact: {', '.join(high_impact)}")
    return recommendations


def _format_gpa(gpa: Decimal | None) -> str:
    return "none" if gpa is None else f"{gpa:.2f}"
