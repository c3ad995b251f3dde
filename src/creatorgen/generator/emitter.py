# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""C# source emission for generated factories and the marker attribute.

All functions here are pure: the same input always renders byte-identical
text, with four-space indentation and ``\\n`` line endings.
"""

from __future__ import annotations

from creatorgen.generator.classifier import ParameterPolicy, classify
from creatorgen.generator.stand_in import MoqStandIn, StandInStrategy
from creatorgen.model.entities import GenerationUnit
from creatorgen.model.types import ParameterDescriptor

# ###############
# Public Interface
# ###############

GENERATED_SUFFIX = ".g.cs"
MARKER_ATTRIBUTE_NAME = "CreatorAttribute"
FACTORY_PREFIX = "Create"
NULLABLE_DIRECTIVE = "#nullable enable"


def emit(unit: GenerationUnit, stand_in: StandInStrategy | None = None) -> str:
    """Render the partial class holding the factory for *unit*.

    Args:
        unit: The resolved generation record.
        stand_in: Strategy for dependencies the caller does not supply;
            defaults to Moq.

    Returns:
        The complete source text of the generated file.
    """
    strategy = stand_in if stand_in is not None else MoqStandIn()
    declaration = unit.declaration
    writer = _CodeWriter()

    writer.line(NULLABLE_DIRECTIVE)
    for namespace in unit.required_imports:
        writer.line(f"using {namespace};")
    writer.blank()

    has_namespace = bool(declaration.declared_namespace)
    if has_namespace:
        writer.open(f"namespace {declaration.declared_namespace}")

    accessibility = declaration.accessibility.strip() or "public"
    writer.open(f"{accessibility} partial class {declaration.name}")
    _write_factory(writer, unit, strategy)
    writer.close()

    if has_namespace:
        writer.close()
    return writer.text()


def emit_marker_attribute(namespace: str | None) -> str:
    """Render the definition of the marker attribute in *namespace*.

    The attribute may only be attached to classes and carries a single
    nullable ``Target`` field of type ``System.Type``.
    """
    writer = _CodeWriter()
    writer.line(NULLABLE_DIRECTIVE)
    writer.line("using System;")
    writer.blank()
    if namespace:
        writer.open(f"namespace {namespace}")
    writer.line("[AttributeUsage(AttributeTargets.Class)]")
    writer.open(f"public class {MARKER_ATTRIBUTE_NAME} : Attribute")
    writer.line("public Type? Target;")
    writer.close()
    if namespace:
        writer.close()
    return writer.text()


def factory_name(unit: GenerationUnit) -> str:
    """Return the name of the generated factory, e.g. ``CreateAccountsService``."""
    return FACTORY_PREFIX + unit.target.name


def file_key(unit: GenerationUnit) -> str:
    """Return the output file key for *unit*, e.g. ``AccountsServiceTests.g.cs``."""
    return unit.declaration.name + GENERATED_SUFFIX


def default_expression(parameter: ParameterDescriptor, stand_in: StandInStrategy) -> str:
    """Return the fallback expression used when the caller omits *parameter*."""
    policy = classify(parameter)
    if policy is ParameterPolicy.EMPTY_STRING:
        return "string.Empty"
    if policy is ParameterPolicy.VALUE_DEFAULT:
        return "default"
    return stand_in.expression(parameter.type.source_name)


def identifier(name: str) -> str:
    """Escape *name* with ``@`` when it collides with a reserved C# keyword."""
    return f"@{name}" if name in CSHARP_RESERVED_WORDS else name


CSHARP_RESERVED_WORDS: frozenset[str] = frozenset(
    {
        "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
        "checked", "class", "const", "continue", "decimal", "default", "delegate",
        "do", "double", "else", "enum", "event", "explicit", "extern", "false",
        "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
        "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
        "new", "null", "object", "operator", "out", "override", "params", "private",
        "protected", "public", "readonly", "ref", "return", "sbyte", "sealed",
        "short", "sizeof", "stackalloc", "static", "string", "struct", "switch",
        "this", "throw", "true", "try", "typeof", "uint", "ulong", "unchecked",
        "unsafe", "ushort", "using", "virtual", "void", "volatile", "while",
    }
)  # fmt: skip


# ################
# Implementation
# ################

_INDENT = "    "


class _CodeWriter:
    """Line-oriented text builder with brace-aware indentation."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._depth = 0

    def line(self, text: str) -> None:
        self._lines.append(_INDENT * self._depth + text)

    def blank(self) -> None:
        self._lines.append("")

    def open(self, header: str) -> None:
        """Write *header* followed by an opening brace and indent."""
        self.line(header)
        self.line("{")
        self._depth += 1

    def close(self) -> None:
        self._depth -= 1
        self.line("}")

    def indent(self) -> None:
        self._depth += 1

    def dedent(self) -> None:
        self._depth -= 1

    def text(self) -> str:
        return "\n".join(self._lines) + "\n"


def _write_factory(writer: _CodeWriter, unit: GenerationUnit, stand_in: StandInStrategy) -> None:
    parameters = unit.selected_constructor.parameters
    result_name = unit.result_type.source_name if unit.result_type is not None else "object"

    signature = [stand_in.behavior_parameter] if stand_in.behavior_parameter else []
    signature.extend(f"{p.type.source_name}? {identifier(p.name)} = null" for p in parameters)

    if signature:
        writer.line(f"private static {result_name} {factory_name(unit)}(")
        writer.indent()
        _write_list(writer, signature, ")")
        writer.dedent()
    else:
        writer.line(f"private static {result_name} {factory_name(unit)}()")

    writer.line("{")
    writer.indent()
    if parameters:
        writer.line(f"return new {unit.target.source_name}(")
        writer.indent()
        _write_list(
            writer,
            [f"{identifier(p.name)} ?? {default_expression(p, stand_in)}" for p in parameters],
            ");",
        )
        writer.dedent()
    else:
        writer.line(f"return new {unit.target.source_name}();")
    writer.close()


def _write_list(writer: _CodeWriter, items: list[str], terminator: str) -> None:
    """Write one item per line, comma separated, the last one followed by *terminator*."""
    for index, item in enumerate(items):
        writer.line(item + ("," if index < len(items) - 1 else terminator))
