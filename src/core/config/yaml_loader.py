# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""YAML configuration file loader utilities.

Degree requirement templates are declared as YAML documents, one per
degree. A document may name another document in the same directory under
``extends``; the parent is deep merged underneath it so that programs
sharing a core only declare their differences.

Files whose name starts with an underscore are fragments: they can be
extended but are not returned as standalone documents.

Example:
    >>> from pathlib import Path
    >>> from src.core.config.yaml_loader import load_yaml_directory
    >>> templates = load_yaml_directory(Path("src/config/degree_templates"))
    >>> templates["bs_computer_science"]["degree_code"]
    'BS-CS'
"""

from pathlib import Path
from typing import Any

import yaml

EXTENDS_KEY = "extends"


class YAMLLoadError(Exception):
    """Raised when a YAML file cannot be loaded, parsed or resolved."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize YAMLLoadError.

        Args:
            path: Path to the YAML file that failed to load.
            reason: Description of why the file failed to load.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load YAML file '{path}': {reason}")


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a single YAML file and return its contents as a dictionary.

    Args:
        path: Path to the YAML file to load.

    Returns:
        Dictionary containing the parsed YAML contents.
        Empty dict if file is empty.

    Raises:
        YAMLLoadError: If the file doesn't exist, cannot be read,
            or contains invalid YAML.
    """
    if not path.is_file():
        raise YAMLLoadError(path, "File does not exist")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise YAMLLoadError(path, f"Cannot read file: {e}") from e
    except yaml.YAMLError as e:
        raise YAMLLoadError(path, f"Invalid YAML syntax: {e}") from e

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise YAMLLoadError(
            path, f"YAML root must be a mapping, got {type(parsed).__name__}"
        )

    return parsed


def load_yaml_directory(path: Path) -> dict[str, dict[str, Any]]:
    """Load every YAML document in a directory with ``extends`` resolved.

    Args:
        path: Directory containing ``.yaml`` / ``.yml`` files.

    Returns:
        Mapping of file stem to resolved document, fragments excluded.

    Raises:
        YAMLLoadError: If the path is not a directory, a file fails to
            load, or an ``extends`` chain is unknown or circular.
    """
    if not path.is_dir():
        raise YAMLLoadError(path, "Path is not a directory")

    raw: dict[str, dict[str, Any]] = {}
    sources: dict[str, Path] = {}
    for yaml_file in sorted(path.glob("*.yaml")) + sorted(path.glob("*.yml")):
        raw[yaml_file.stem] = load_yaml(yaml_file)
        sources[yaml_file.stem] = yaml_file

    resolved: dict[str, dict[str, Any]] = {}
    for stem in raw:
        if stem.startswith("_"):
            continue
        resolved[stem] = _resolve(stem, raw, sources, chain=())

    return resolved


def _resolve(
    stem: str,
    raw: dict[str, dict[str, Any]],
    sources: dict[str, Path],
    chain: tuple[str, ...],
) -> dict[str, Any]:
    if stem in chain:
        raise YAMLLoadError(sources[stem], f"Circular extends: {' -> '.join((*chain, stem))}")

    document = dict(raw[stem])
    parent = document.pop(EXTENDS_KEY, None)
    if parent is None:
        return document

    if parent not in raw:
        raise YAMLLoadError(sources[stem], f"Unknown extends target '{parent}'")

    return deep_merge(_resolve(parent, raw, sources, (*chain, stem)), document)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Nested dictionaries are merged recursively. Lists and scalars in
    override replace the base value.

    Args:
        base: The base dictionary to merge into.
        override: The dictionary whose values take precedence.

    Returns:
        A new dictionary; neither input is modified.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result: dict[str, Any] = base.copy()

    for key, override_value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
        else:
            result[key] = override_value

    return result
