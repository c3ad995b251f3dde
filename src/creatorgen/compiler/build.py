# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Build driver: C# source files in, generated factory files on disk.

Every run parses all given files together with the marker attribute
definition, checks the resulting symbol table, runs the generator and writes
each output to *output_dir*. A source file that cannot be parsed is left out
with a warning so the remaining files still generate. A file whose content is
already up to date is left untouched so its timestamp does not trigger a
rebuild of the consuming project.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from creatorgen.compiler.parser import ParseError, parse
from creatorgen.compiler.semantic_analysis import SemanticModel
from creatorgen.compiler.syntax import CompilationUnit
from creatorgen.generator.pipeline import GeneratorOptions, generate, marker_output
from creatorgen.model.entities import OutputUnit
from creatorgen.parser.lexer import LexerError

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when the build encounters any unrecoverable error.

    Covers unreadable files, semantic errors, and generated files that would
    overwrite each other.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class BuildWarning:
    """A source file that was left out of the build.

    Attributes:
        path: The skipped file.
        message: Human-readable description of the problem.
    """

    path: Path
    message: str


@dataclass
class LoadResult:
    """Parsed compilation units and the files that could not be parsed."""

    units: list[CompilationUnit] = field(default_factory=list)
    warnings: list[BuildWarning] = field(default_factory=list)


@dataclass(frozen=True)
class BuildResult:
    """Outcome of :func:`generate_files`.

    Attributes:
        outputs: Every generated unit, marker attribute first.
        written: Paths whose content was created or changed.
        unchanged: Paths that already held the generated content.
        warnings: Source files skipped because they could not be parsed.
    """

    outputs: tuple[OutputUnit, ...]
    written: tuple[Path, ...]
    unchanged: tuple[Path, ...]
    warnings: tuple[BuildWarning, ...] = ()


def load_units(files: list[Path]) -> LoadResult:
    """Read and parse C# source files.

    A file with lexer or parse errors does not stop the others; it is
    reported as a :class:`BuildWarning` instead.

    Raises:
        CompilerError: If a file cannot be read.
    """
    result = LoadResult()
    for source_file in files:
        try:
            source_text = source_file.read_text(encoding="utf-8-sig")
        except OSError as exc:
            raise CompilerError(f"Cannot read source file '{source_file}': {exc}") from exc
        try:
            result.units.append(parse(source_text, path=str(source_file)))
        except (LexerError, ParseError) as exc:
            result.warnings.append(BuildWarning(path=source_file, message=f"Parse error in '{source_file}': {exc}"))
    return result


def build_model(units: list[CompilationUnit], options: GeneratorOptions) -> SemanticModel:
    """Build the semantic model of *units* plus the marker attribute definition.

    Raises:
        CompilerError: If the symbol table has errors.
    """
    marker = marker_output(options)
    marker_unit = parse(marker.content, path=marker.file_key)
    model = SemanticModel([marker_unit, *units])
    errors = model.errors
    if errors:
        error_lines = "\n".join(f"  {e.message}" for e in errors)
        raise CompilerError(f"Semantic errors:\n{error_lines}")
    return model


def compile_units(
    units: list[CompilationUnit],
    options: GeneratorOptions | None = None,
) -> list[OutputUnit]:
    """Generate factory sources for already parsed *units*.

    Raises:
        CompilerError: On semantic errors or output key collisions.
    """
    options = options if options is not None else GeneratorOptions()
    model = build_model(units, options)
    outputs = generate(model, units, options)
    seen: set[str] = set()
    for output in outputs:
        if output.file_key in seen:
            raise CompilerError(f"Generated file '{output.file_key}' would be produced by more than one declaration")
        seen.add(output.file_key)
    return outputs


def generate_files(
    files: list[Path],
    output_dir: Path,
    options: GeneratorOptions | None = None,
) -> BuildResult:
    """Generate factories for *files* and write them to *output_dir*.

    Args:
        files: C# source files to scan, in a stable order.
        output_dir: Directory receiving one ``.g.cs`` file per output; created
            if missing.
        options: Generator settings; defaults apply when omitted.

    Returns:
        The generated outputs, which files were (re)written, and the source
        files skipped because they could not be parsed.

    Raises:
        CompilerError: On read or semantic errors, output key collisions, or
            when an output cannot be written.
    """
    loaded = load_units(files)
    outputs = compile_units(loaded.units, options)

    written: list[Path] = []
    unchanged: list[Path] = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for output in outputs:
            target = output_dir / output.file_key
            if target.is_file() and target.read_text(encoding="utf-8") == output.content:
                unchanged.append(target)
                continue
            target.write_text(output.content, encoding="utf-8")
            written.append(target)
    except OSError as exc:
        raise CompilerError(f"Cannot write generated files to '{output_dir}': {exc}") from exc

    return BuildResult(
        outputs=tuple(outputs),
        written=tuple(written),
        unchanged=tuple(unchanged),
        warnings=tuple(loaded.warnings),
    )
