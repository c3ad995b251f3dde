# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the CreatorGen command-line interface."""

import argparse
import sys
from collections.abc import Iterable
from pathlib import Path

from creatorgen.compiler.build import BuildWarning, CompilerError, build_model, generate_files, load_units
from creatorgen.generator.emitter import GENERATED_SUFFIX, factory_name
from creatorgen.generator.pipeline import generate_units
from creatorgen.workspace.config import (
    CONFIG_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    default_config_text,
    load_workspace_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the CreatorGen CLI."""
    parser = argparse.ArgumentParser(
        prog="creatorgen",
        description="CreatorGen - factory generator for C# test classes",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new CreatorGen workspace",
        description=f"Write a default {CONFIG_FILE_NAME} to a project directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to initialize the workspace in (default: current directory)",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate factory methods for annotated test classes",
        description="Scan C# sources and write one generated file per annotated class.",
    )
    generate_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the C# project (default: current directory)",
    )

    # list subcommand
    list_parser = subparsers.add_parser(
        "list",
        help="List annotated test classes and their targets",
        description="Show which factories would be generated, without writing files.",
    )
    list_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the C# project (default: current directory)",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


def collect_sources(directory: Path, config: WorkspaceConfig) -> list[Path]:
    """Return the ``.cs`` files under *directory* that take part in generation.

    Files inside excluded directories or the output directory and previously
    generated ``.g.cs`` files are skipped. The result is sorted.
    """
    output_dir = (directory / config.output_directory).resolve()
    excluded = set(config.exclude_directories)
    sources = []
    for path in directory.rglob("*.cs"):
        if path.name.endswith(GENERATED_SUFFIX) or not path.is_file():
            continue
        relative_parts = path.relative_to(directory).parts[:-1]
        if excluded.intersection(relative_parts):
            continue
        if output_dir == path.parent.resolve() or output_dir in path.resolve().parents:
            continue
        sources.append(path)
    return sorted(sources)


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "list":
        return _cmd_list(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(
            f"Error: workspace already exists at '{config_file}'.",
            file=sys.stderr,
        )
        return 1

    config_file.write_text(
        "# CreatorGen Workspace Configuration\n" + default_config_text(),
        encoding="utf-8",
    )
    print(f"Initialized CreatorGen workspace at '{config_file}'.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    loaded = _load_workspace(args.directory)
    if loaded is None:
        return 1
    directory, config = loaded

    sources = collect_sources(directory, config)
    if not sources:
        print("No .cs files found in the workspace.")
        return 0

    output_dir = directory / config.output_directory
    print(f"Generating factories from {len(sources)} source file(s)...")
    try:
        result = generate_files(sources, output_dir, config.generator_options())
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _print_warnings(result.warnings)
    for path in result.written:
        print(f"Wrote {path.relative_to(directory)}")
    print(
        f"Generated {len(result.outputs)} file(s): "
        f"{len(result.written)} written, {len(result.unchanged)} unchanged."
    )
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    """Handle the list subcommand."""
    loaded = _load_workspace(args.directory)
    if loaded is None:
        return 1
    directory, config = loaded

    sources = collect_sources(directory, config)
    options = config.generator_options()
    try:
        parsed = load_units(sources)
        model = build_model(parsed.units, options)
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _print_warnings(parsed.warnings)
    generation_units = generate_units(model, parsed.units, options)
    if not generation_units:
        print("No annotated classes found.")
        return 0

    for unit in generation_units:
        host = unit.declaration.name
        if unit.declaration.declared_namespace:
            host = f"{unit.declaration.declared_namespace}.{host}"
        parameter_count = len(unit.selected_constructor.parameters)
        print(f"{host}: {factory_name(unit)} -> {unit.target.display_name} ({parameter_count} parameter(s))")
    return 0


def _load_workspace(directory_arg: str) -> tuple[Path, WorkspaceConfig] | None:
    """Resolve the workspace directory and its configuration, reporting errors.

    A missing configuration file selects the defaults.
    """
    directory = Path(directory_arg).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return None

    config_file = directory / CONFIG_FILE_NAME
    if not config_file.exists():
        return directory, WorkspaceConfig()

    try:
        return directory, load_workspace_config(config_file)
    except WorkspaceConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _print_warnings(warnings: Iterable[BuildWarning]) -> None:
    for warning in warnings:
        print(f"Warning: {warning.message} (file skipped)", file=sys.stderr)
