# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the CreatorGen workspace configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from creatorgen.generator.pipeline import DEFAULT_MARKER_NAMESPACE, GeneratorOptions
from creatorgen.generator.stand_in import STAND_IN_STRATEGIES

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".creatorgen.yaml"
DEFAULT_OUTPUT_DIRECTORY = "Generated"
DEFAULT_STAND_IN = "moq"


class WorkspaceConfigError(Exception):
    """Raised when a workspace configuration file is invalid or cannot be loaded."""


@dataclass
class WorkspaceConfig:
    """The parsed configuration for a CreatorGen workspace.

    Attributes:
        output_directory: Relative path (from the workspace root) receiving
            generated files.
        marker_namespace: Namespace of the generated marker attribute.
        stand_in: Name of the stand-in strategy for omitted dependencies.
        exclude_directories: Directory names skipped when collecting sources.
    """

    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    marker_namespace: str = DEFAULT_MARKER_NAMESPACE
    stand_in: str = DEFAULT_STAND_IN
    exclude_directories: list[str] = field(default_factory=lambda: ["bin", "obj"])

    def generator_options(self) -> GeneratorOptions:
        """Return the generator settings described by this configuration."""
        return GeneratorOptions(
            marker_namespace=self.marker_namespace,
            stand_in=STAND_IN_STRATEGIES[self.stand_in],
        )


def load_workspace_config(path: Path) -> WorkspaceConfig:
    """Load and parse a CreatorGen workspace configuration file.

    Args:
        path: Path to the `.creatorgen.yaml` file.

    Returns:
        A WorkspaceConfig instance populated from the file.

    Raises:
        WorkspaceConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise WorkspaceConfigError(f"Workspace config file not found: {path}") from None
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot read workspace config file: {exc}") from exc

    return _parse_workspace_config(text, source_label=str(path))


def default_config_text() -> str:
    """Return the YAML written by ``creatorgen init``."""
    return yaml.safe_dump(
        {
            "output-directory": DEFAULT_OUTPUT_DIRECTORY,
            "marker-namespace": DEFAULT_MARKER_NAMESPACE,
            "stand-in": DEFAULT_STAND_IN,
            "exclude-directories": ["bin", "obj"],
        },
        sort_keys=False,
    )


# ################
# Implementation
# ################


def _parse_workspace_config(text: str, source_label: str = "<string>") -> WorkspaceConfig:
    """Parse workspace config YAML text into a WorkspaceConfig.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Returns:
        A WorkspaceConfig instance.

    Raises:
        WorkspaceConfigError: If the YAML is invalid or required fields are missing.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"{source_label}: workspace config must be a YAML mapping")

    config = WorkspaceConfig(output_directory=_require_string(data, "output-directory", source_label))
    if "marker-namespace" in data:
        config.marker_namespace = _optional_namespace(data, "marker-namespace", source_label)
    if "stand-in" in data:
        config.stand_in = _require_string(data, "stand-in", source_label)
        if config.stand_in not in STAND_IN_STRATEGIES:
            known = ", ".join(sorted(STAND_IN_STRATEGIES))
            raise WorkspaceConfigError(
                f"{source_label}: unknown stand-in '{config.stand_in}' (expected one of: {known})"
            )
    if "exclude-directories" in data:
        raw = data["exclude-directories"]
        if not isinstance(raw, list) or not all(isinstance(entry, str) for entry in raw):
            raise WorkspaceConfigError(f"{source_label}: 'exclude-directories' must be a list of strings")
        config.exclude_directories = list(raw)
    return config


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising WorkspaceConfigError if missing."""
    if key not in mapping:
        raise WorkspaceConfigError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _optional_namespace(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a dotted namespace; an empty string or null selects the global namespace."""
    value = mapping[key]
    if value is None:
        return ""
    if not isinstance(value, str):
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be a string")
    if value and not all(part.isidentifier() for part in value.split(".")):
        raise WorkspaceConfigError(f"{source_label}: '{key}' is not a valid namespace: '{value}'")
    return value
