# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Degree requirement template seed data.

Templates are declared in YAML (see ``src/config/degree_templates``).
Categories are written as a mapping keyed by category name so that a
program extending a shared fragment can override a single category:

    extends: _bachelor_defaults
    degree_code: BS-CS
    categories:
      Major Core:
        credits_required: 45
        subject_codes: [CS101, CS102]
"""

from pathlib import Path
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config.settings import AcademicPolicySettings, get_settings
from src.core.config.yaml_loader import YAMLLoadError, load_yaml_directory
from src.domains.degree_audit.schemas import (
    DegreeTemplateDefinition,
    RequirementCategoryDefinition,
)
from src.infrastructure.database.models import DegreeRequirementTemplate, RequirementCategory
from src.utils.logging import get_logger

logger = get_logger(__name__)


def parse_degree_template(
    document: dict[str, Any],
    policy: AcademicPolicySettings | None = None,
) -> DegreeTemplateDefinition:
    """Build a template definition from a resolved YAML document.

    Categories without an explicit ``display_order`` keep their position
    in the document. A template without ``total_credits_required`` or
    ``minimum_gpa`` takes the academic policy defaults.
    """
    policy = policy or get_settings().academic
    data = dict(document)
    data.setdefault("total_credits_required", policy.default_required_credit_hours)
    data.setdefault("minimum_gpa", policy.default_minimum_gpa)
    categories = data.pop("categories", None) or {}

    definitions = []
    for position, (name, fields) in enumerate(categories.items()):
        fields = dict(fields or {})
        fields.setdefault("display_order", position)
        definitions.append(RequirementCategoryDefinition(name=name, **fields))

    return DegreeTemplateDefinition(categories=definitions, **data)


def load_degree_template_definitions(directory: Path | None = None) -> list[DegreeTemplateDefinition]:
    """Load every degree template declared in a directory.

    Args:
        directory: Template directory; defaults to the configured one.

    Returns:
        Definitions sorted by degree code.

    Raises:
        YAMLLoadError: If a file cannot be loaded or a document is invalid.
    """
    policy = get_settings().academic
    directory = directory or policy.degree_templates_dir
    documents = load_yaml_directory(directory)

    definitions = []
    for stem, document in documents.items():
        try:
            definition = parse_degree_template(document, policy)
        except (TypeError, ValueError) as e:
            raise YAMLLoadError(directory / f"{stem}.yaml", f"Invalid degree template: {e}") from e
        logger.debug(
            "loaded_degree_template",
            degree_code=definition.degree_code,
            categories=len(definition.categories),
        )
        definitions.append(definition)

    return sorted(definitions, key=lambda definition: definition.degree_code)


async def seed_degree_templates(
    session: AsyncSession,
    directory: Path | None = None,
) -> list[DegreeRequirementTemplate]:
    """Insert or refresh degree requirement templates.

    Existing templates are matched by degree code and have their fields
    and categories replaced.

    Args:
        session: Database session.
        directory: Template directory; defaults to the configured one.

    Returns:
        List of seeded templates.
    """
    definitions = load_degree_template_definitions(directory)

    templates = []
    for definition in definitions:
        result = await session.execute(
            select(DegreeRequirementTemplate)
            .options(selectinload(DegreeRequirementTemplate.categories))
            .where(DegreeRequirementTemplate.degree_code == definition.degree_code)
        )
        template = result.scalar_one_or_none()
        if template is None:
            template = DegreeRequirementTemplate(degree_code=definition.degree_code)
            session.add(template)

        template.degree_name = definition.degree_name
        template.total_credits_required = definition.total_credits_required
        template.minimum_gpa = definition.minimum_gpa
        template.is_active = True
        template.categories = [
            RequirementCategory(
                name=category.name,
                credits_required=category.credits_required,
                display_order=category.display_order,
                subject_codes=list(category.subject_codes),
            )
            for category in definition.categories
        ]
        templates.append(template)

    await session.flush()
    logger.info(
        "degree_templates_seeded",
        count=len(templates),
        degree_codes=[template.degree_code for template in templates],
    )
    return templates
