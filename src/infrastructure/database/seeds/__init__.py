# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database seed package.

Degree requirement templates loaded from YAML.
"""

from src.infrastructure.database.seeds.degree_templates import (
    load_degree_template_definitions,
    parse_degree_template,
    seed_degree_templates,
)

__all__ = [
    "load_degree_template_definitions",
    "parse_degree_template",
    "seed_degree_templates",
]
