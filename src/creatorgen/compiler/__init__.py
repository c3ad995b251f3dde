# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""C# front end: parsing, semantic analysis, and the build driver."""

from creatorgen.compiler.build import (
    BuildResult,
    BuildWarning,
    CompilerError,
    LoadResult,
    build_model,
    compile_units,
    generate_files,
    load_units,
)
from creatorgen.compiler.parser import ParseError, parse
from creatorgen.compiler.semantic_analysis import SemanticError, SemanticModel, analyze

__all__ = [
    "parse",
    "ParseError",
    "analyze",
    "SemanticError",
    "SemanticModel",
    "load_units",
    "LoadResult",
    "build_model",
    "compile_units",
    "generate_files",
    "BuildResult",
    "BuildWarning",
    "CompilerError",
]
