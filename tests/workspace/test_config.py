# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the workspace configuration module."""

from pathlib import Path

import pytest
import yaml

from creatorgen.generator.stand_in import MoqStandIn
from creatorgen.workspace import (
    CONFIG_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    default_config_text,
    load_workspace_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a workspace config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_minimal_config(tmp_path: Path) -> None:
    """A config with only output-directory uses the defaults for everything else."""
    config = load_workspace_config(_write_config(tmp_path, "output-directory: Generated\n"))

    assert isinstance(config, WorkspaceConfig)
    assert config.output_directory == "Generated"
    assert config.marker_namespace == "CreatorGen"
    assert config.stand_in == "moq"
    assert config.exclude_directories == ["bin", "obj"]


def test_full_config(tmp_path: Path) -> None:
    content = """\
output-directory: Tests/Generated
marker-namespace: CC.Generators
stand-in: moq
exclude-directories:
  - bin
  - obj
  - node_modules
"""
    config = load_workspace_config(_write_config(tmp_path, content))

    assert config.output_directory == "Tests/Generated"
    assert config.marker_namespace == "CC.Generators"
    assert config.exclude_directories == ["bin", "obj", "node_modules"]


def test_null_marker_namespace_selects_global_namespace(tmp_path: Path) -> None:
    """A null or empty marker-namespace declares the marker at global scope."""
    config = load_workspace_config(_write_config(tmp_path, "output-directory: G\nmarker-namespace:\n"))
    assert config.marker_namespace == ""
    assert config.generator_options().marker_type_name == "CreatorAttribute"


def test_generator_options(tmp_path: Path) -> None:
    content = "output-directory: G\nmarker-namespace: CC.Generators\n"
    options = load_workspace_config(_write_config(tmp_path, content)).generator_options()

    assert options.marker_namespace == "CC.Generators"
    assert options.marker_type_name == "CC.Generators.CreatorAttribute"
    assert isinstance(options.stand_in, MoqStandIn)


def test_empty_exclude_directories(tmp_path: Path) -> None:
    config = load_workspace_config(_write_config(tmp_path, "output-directory: G\nexclude-directories: []\n"))
    assert config.exclude_directories == []


def test_default_config_text_round_trips(tmp_path: Path) -> None:
    """The text written by init loads back into the default configuration."""
    text = default_config_text()
    assert yaml.safe_load(text)["output-directory"] == "Generated"
    assert load_workspace_config(_write_config(tmp_path, text)) == WorkspaceConfig()


def test_default_config_key_order() -> None:
    keys = list(yaml.safe_load(default_config_text()))
    assert keys == ["output-directory", "marker-namespace", "stand-in", "exclude-directories"]


# ###############
# Error Cases
# ###############


def test_file_not_found(tmp_path: Path) -> None:
    """Loading a non-existent file raises WorkspaceConfigError."""
    with pytest.raises(WorkspaceConfigError, match="not found"):
        load_workspace_config(tmp_path / "missing.yaml")


def test_invalid_yaml_syntax(tmp_path: Path) -> None:
    """A file with invalid YAML raises WorkspaceConfigError."""
    config_file = _write_config(tmp_path, "output-directory: [unclosed\n")
    with pytest.raises(WorkspaceConfigError, match="Invalid YAML"):
        load_workspace_config(config_file)


def test_not_a_mapping(tmp_path: Path) -> None:
    """A YAML file that is not a mapping raises WorkspaceConfigError."""
    config_file = _write_config(tmp_path, "- just\n- a list\n")
    with pytest.raises(WorkspaceConfigError, match="must be a YAML mapping"):
        load_workspace_config(config_file)


def test_missing_output_directory(tmp_path: Path) -> None:
    """A config without output-directory raises WorkspaceConfigError."""
    config_file = _write_config(tmp_path, "stand-in: moq\n")
    with pytest.raises(WorkspaceConfigError, match="missing required field 'output-directory'"):
        load_workspace_config(config_file)


def test_output_directory_not_a_string(tmp_path: Path) -> None:
    config_file = _write_config(tmp_path, "output-directory: 42\n")
    with pytest.raises(WorkspaceConfigError, match="'output-directory' must be a string"):
        load_workspace_config(config_file)


@pytest.mark.parametrize("namespace", ["CC..Generators", "1Bad", "CC.Generators.", "With Space"])
def test_invalid_marker_namespace(tmp_path: Path, namespace: str) -> None:
    """A marker-namespace must be a dotted list of identifiers."""
    config_file = _write_config(tmp_path, f"output-directory: G\nmarker-namespace: '{namespace}'\n")
    with pytest.raises(WorkspaceConfigError, match="not a valid namespace"):
        load_workspace_config(config_file)


def test_marker_namespace_not_a_string(tmp_path: Path) -> None:
    config_file = _write_config(tmp_path, "output-directory: G\nmarker-namespace: [A, B]\n")
    with pytest.raises(WorkspaceConfigError, match="'marker-namespace' must be a string"):
        load_workspace_config(config_file)


def test_unknown_stand_in(tmp_path: Path) -> None:
    """An unknown stand-in names the strategies that are available."""
    config_file = _write_config(tmp_path, "output-directory: G\nstand-in: nsubstitute\n")
    with pytest.raises(WorkspaceConfigError, match=r"unknown stand-in 'nsubstitute' \(expected one of: moq\)"):
        load_workspace_config(config_file)


@pytest.mark.parametrize("value", ["bin", "[bin, 3]", "{a: b}"])
def test_exclude_directories_not_a_list_of_strings(tmp_path: Path, value: str) -> None:
    config_file = _write_config(tmp_path, f"output-directory: G\nexclude-directories: {value}\n")
    with pytest.raises(WorkspaceConfigError, match="'exclude-directories' must be a list of strings"):
        load_workspace_config(config_file)
