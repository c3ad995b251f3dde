# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declaration syntax tree produced by the C# parser.

Nodes compare and hash by identity so the semantic model can attach scope
information to individual nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from creatorgen.model.types import TypeKind

# ###############
# Public Interface
# ###############


@dataclass(eq=False)
class TypeSyntax:
    """A written type such as ``int?``, ``Repo.IStore<T>`` or ``string[]``.

    Attributes:
        names: Dotted name segments; a single predefined keyword for built-ins.
        type_arguments: Generic arguments of the last segment.
        is_keyword: True for predefined types (``int``, ``string``, ...).
        is_global: True when written with the ``global::`` qualifier.
        is_tuple: True for tuple types; *type_arguments* hold the elements.
        nullable: True when followed by ``?``.
        array_rank: Number of array suffixes.
    """

    names: tuple[str, ...]
    type_arguments: tuple[TypeSyntax, ...] = ()
    is_keyword: bool = False
    is_global: bool = False
    is_tuple: bool = False
    nullable: bool = False
    array_rank: int = 0
    line: int = 0
    column: int = 0

    @property
    def arity(self) -> int:
        return 0 if self.is_tuple else len(self.type_arguments)

    @property
    def text(self) -> str:
        """Normalised source text of the type."""
        if self.is_tuple:
            base = "(" + ", ".join(arg.text for arg in self.type_arguments) + ")"
        else:
            base = ".".join(self.names)
            if self.is_global:
                base = "global::" + base
            if self.type_arguments:
                base += "<" + ", ".join(arg.text for arg in self.type_arguments) + ">"
        return base + ("?" if self.nullable else "") + "[]" * self.array_rank


@dataclass(eq=False)
class TypeOfExpression:
    """A ``typeof(T)`` expression."""

    type: TypeSyntax
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class ExpressionSyntax:
    """Any other expression, kept as normalised source text."""

    text: str
    line: int = 0
    column: int = 0


Expression = TypeOfExpression | ExpressionSyntax


@dataclass(eq=False)
class AttributeArgumentSyntax:
    """An attribute argument.

    Attributes:
        expression: The argument value.
        name_equals: Field or property name for ``Name = value`` arguments.
        name_colon: Parameter name for ``name: value`` arguments.
    """

    expression: Expression
    name_equals: str | None = None
    name_colon: str | None = None


@dataclass(eq=False)
class AttributeSyntax:
    """A single attribute inside an attribute list."""

    name: TypeSyntax
    arguments: tuple[AttributeArgumentSyntax, ...] = ()
    target: str | None = None
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class ParameterSyntax:
    """A constructor parameter."""

    name: str
    type: TypeSyntax
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class ConstructorSyntax:
    """A constructor declaration (bodies and initializers are not kept)."""

    parameters: tuple[ParameterSyntax, ...] = ()
    modifiers: tuple[str, ...] = ()
    line: int = 0
    column: int = 0

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers


@dataclass(eq=False)
class TypeDeclarationSyntax:
    """A class, struct, interface, record, enum or delegate declaration.

    Attributes:
        primary_parameters: Parameter list written after the type name
            (records and primary constructors), or None when absent.
        members: Nested type declarations.
    """

    kind: TypeKind
    name: str
    modifiers: tuple[str, ...] = ()
    type_parameters: tuple[str, ...] = ()
    attributes: tuple[AttributeSyntax, ...] = ()
    base_types: tuple[TypeSyntax, ...] = ()
    primary_parameters: tuple[ParameterSyntax, ...] | None = None
    constructors: list[ConstructorSyntax] = field(default_factory=list)
    members: list[TypeDeclarationSyntax] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(eq=False)
class UsingDirectiveSyntax:
    """A ``using`` directive.

    Attributes:
        target: The imported namespace or type.
        alias: Alias name for ``using A = B;`` directives.
        is_static: True for ``using static`` directives.
        is_global: True for ``global using`` directives.
    """

    target: TypeSyntax
    alias: str | None = None
    is_static: bool = False
    is_global: bool = False

    @property
    def text(self) -> str:
        """The directive as written between ``using`` and ``;`` (without ``global``)."""
        if self.alias is not None:
            return f"{self.alias} = {self.target.text}"
        if self.is_static:
            return f"static {self.target.text}"
        return self.target.text


@dataclass(eq=False)
class NamespaceDeclarationSyntax:
    """A block or file-scoped namespace declaration."""

    name: str
    usings: list[UsingDirectiveSyntax] = field(default_factory=list)
    members: list[NamespaceMember] = field(default_factory=list)
    file_scoped: bool = False
    line: int = 0
    column: int = 0


NamespaceMember = NamespaceDeclarationSyntax | TypeDeclarationSyntax


@dataclass(eq=False)
class CompilationUnit:
    """The parsed contents of a single source file."""

    usings: list[UsingDirectiveSyntax] = field(default_factory=list)
    members: list[NamespaceMember] = field(default_factory=list)
    path: str | None = None
