# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the academic records core.

This package provides centralized configuration management:
- Settings: Pydantic-based settings loaded from environment variables
- YAML loader: Utilities for loading YAML configuration files

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'

    >>> from src.core.config import load_yaml_directory
    >>> templates = load_yaml_directory(settings.academic.degree_templates_dir)
"""

from src.core.config.settings import (
    AcademicPolicySettings,
    DatabaseSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from src.core.config.yaml_loader import (
    YAMLLoadError,
    deep_merge,
    load_yaml,
    load_yaml_directory,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "AcademicPolicySettings",
    # YAML utilities
    "load_yaml",
    "load_yaml_directory",
    "deep_merge",
    "YAMLLoadError",
]
