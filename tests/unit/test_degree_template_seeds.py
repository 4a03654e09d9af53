# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for degree template seeding."""

from decimal import Decimal
from pathlib import Path

import pytest

from src.core.config.settings import AcademicPolicySettings
from src.core.config.yaml_loader import YAMLLoadError
from src.infrastructure.database.models import DegreeRequirementTemplate, RequirementCategory
from src.infrastructure.database.seeds.degree_templates import (
    load_degree_template_definitions,
    parse_degree_template,
    seed_degree_templates,
)


class TestParseDegreeTemplate:
    """Tests for parse_degree_template."""

    def test_categories_keep_document_order(self) -> None:
        """Test categories without display_order use their position."""
        definition = parse_degree_template(
            {
                "degree_code": "BA-X",
                "degree_name": "Bachelor of Arts",
                "minimum_gpa": "2.25",
                "categories": {
                    "Core": {"credits_required": 30, "subject_codes": ["X101"]},
                    "Electives": {"credits_required": 90},
                },
            }
        )

        assert definition.minimum_gpa == Decimal("2.25")
        assert [(c.name, c.display_order) for c in definition.categories] == [
            ("Core", 0),
            ("Electives", 1),
        ]
        assert definition.categories[1].subject_codes == []

    def test_missing_totals_use_policy_defaults(self) -> None:
        """Test a template without credit or GPA minimums takes the policy values."""
        policy = AcademicPolicySettings(
            default_required_credit_hours=128,
            default_minimum_gpa=Decimal("2.50"),
        )

        definition = parse_degree_template(
            {"degree_code": "BFA-ART", "degree_name": "Bachelor of Fine Arts"},
            policy,
        )

        assert definition.total_credits_required == 128
        assert definition.minimum_gpa == Decimal("2.50")
        assert definition.categories == []

    def test_missing_totals_use_configured_settings(self, monkeypatch) -> None:
        """Test the configured policy applies when none is passed."""
        monkeypatch.setenv("ACADEMIC_DEFAULT_REQUIRED_CREDIT_HOURS", "124")

        definition = parse_degree_template({"degree_code": "BA-X", "degree_name": "Bachelor of Arts"})

        assert definition.total_credits_required == 124
        assert definition.minimum_gpa == Decimal("2.00")


class TestLoadDegreeTemplateDefinitions:
    """Tests for the bundled template files."""

    def test_bundled_templates(self) -> None:
        """Test the shipped templates load with extends resolved."""
        definitions = {d.degree_code: d for d in load_degree_template_definitions()}

        assert set(definitions) == {"BA-HIST", "BS-CS"}

        cs = definitions["BS-CS"]
        assert cs.total_credits_required == 120
        assert cs.minimum_gpa == Decimal("2.00")
        assert sum(c.credits_required for c in cs.categories) == cs.total_credits_required
        assert [c.name for c in sorted(cs.categories, key=lambda c: c.display_order)] == [
            "General Education",
            "Major Core",
            "Mathematics",
            "Free Electives",
        ]

        history = definitions["BA-HIST"]
        assert sum(c.credits_required for c in history.categories) == history.total_credits_required

    def test_invalid_document(self, tmp_path: Path) -> None:
        """Test a document missing required fields raises."""
        (tmp_path / "broken.yaml").write_text("degree_name: No code\n")

        with pytest.raises(YAMLLoadError) as exc_info:
            load_degree_template_definitions(tmp_path)

        assert "Invalid degree template" in str(exc_info.value)


class TestSeedDegreeTemplates:
    """Tests for seed_degree_templates."""

    @pytest.mark.asyncio
    async def test_inserts_new_templates(self, mock_db, tmp_path: Path, make_scalar_result) -> None:
        """Test templates missing from the database are added."""
        (tmp_path / "bs.yaml").write_text(
            "degree_code: BS\n"
            "degree_name: Bachelor of Science\n"
            "categories:\n"
            "  Core:\n"
            "    credits_required: 60\n"
            "    subject_codes: [CS101]\n"
        )
        mock_db.execute.return_value = make_scalar_result(None)

        templates = await seed_degree_templates(mock_db, tmp_path)

        assert len(templates) == 1
        template = templates[0]
        assert isinstance(template, DegreeRequirementTemplate)
        assert template.degree_code == "BS"
        assert template.categories[0].subject_codes == ["CS101"]
        mock_db.add.assert_called_once_with(template)
        mock_db.flush.assert_called_once()

    @pytest.mark.asyncio
    async def test_refreshes_existing_template(self, mock_db, tmp_path: Path, make_scalar_result) -> None:
        """Test an existing template is updated in place."""
        (tmp_path / "bs.yaml").write_text(
            "degree_code: BS\ndegree_name: Bachelor of Science (revised)\ntotal_credits_required: 128\n"
        )
        existing = DegreeRequirementTemplate(
            degree_code="BS",
            degree_name="Bachelor of Science",
            total_credits_required=120,
            is_active=False,
            categories=[RequirementCategory(name="Old", credits_required=120, subject_codes=[])],
        )
        mock_db.execute.return_value = make_scalar_result(existing)

        templates = await seed_degree_templates(mock_db, tmp_path)

        assert templates == [existing]
        assert existing.degree_name == "Bachelor of Science (revised)"
        assert existing.total_credits_required == 128
        assert existing.is_active is True
        assert existing.categories == []
        mock_db.add.assert_not_called()
