# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model over parsed C# compilation units.

Builds a symbol table of every declared type, binds written type names to
symbols using C# scoping rules (nested types, enclosing namespaces, using
directives and aliases), and answers the generator's provider queries.

Only declarations are modelled. Types from referenced assemblies are unknown
except for the predefined types and a small table of framework types; names
that cannot be bound are reported as unresolved rather than as errors.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from creatorgen.compiler.builtins import builtin_descriptors, predefined_reference
from creatorgen.compiler.syntax import (
    AttributeSyntax,
    CompilationUnit,
    NamespaceDeclarationSyntax,
    NamespaceMember,
    ParameterSyntax,
    TypeDeclarationSyntax,
    TypeOfExpression,
    TypeSyntax,
    UsingDirectiveSyntax,
)
from creatorgen.generator.provider import AnnotationArgument, AnnotationUsage, Declaration
from creatorgen.model.types import (
    Accessibility,
    ConstructorDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
    TypeKind,
    TypeReference,
)

# ###############
# Public Interface
# ###############

ATTRIBUTE_SUFFIX = "Attribute"


@dataclass(frozen=True)
class SemanticError:
    """A structural error detected during semantic analysis.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


class SemanticModel:
    """Symbol table and binder for a set of compilation units.

    Implements :class:`creatorgen.generator.provider.TypeDescriptorProvider`;
    the trees it accepts are the :class:`CompilationUnit` objects it was
    built from.
    """

    def __init__(self, units: Iterable[CompilationUnit]) -> None:
        self._units = list(units)
        self._symbols: dict[str, _TypeSymbol] = {}
        self._namespaces: set[str] = {""}
        self._hosts: dict[CompilationUnit, list[_Host]] = {}
        self._expression_scopes: dict[TypeOfExpression, _Scope] = {}
        self._descriptors: dict[_TypeSymbol, TypeDescriptor] = {}
        self._interface_cache: dict[_TypeSymbol, tuple[TypeReference, ...]] = {}
        self._errors: list[SemanticError] = []

        for descriptor in builtin_descriptors():
            self._add_builtin(descriptor)
        self._collect()

    @property
    def units(self) -> list[CompilationUnit]:
        return list(self._units)

    @property
    def errors(self) -> list[SemanticError]:
        """Errors found while building the symbol table, in source order."""
        return list(self._errors)

    # ------------------------------------------------------------------
    # Provider queries
    # ------------------------------------------------------------------

    def declarations_with_annotations(self, tree: Any) -> Iterator[Declaration]:
        """Yield the attributed top-level class declarations of *tree*."""
        for host in self._hosts.get(tree, []):
            yield Declaration(
                name=host.syntax.name,
                accessibility=self._accessibility(host.symbol).value,
                namespace=host.symbol.reference.namespace or None,
                imports=tuple(self._import_text(using, scope) for using, scope in host.imports),
                annotations=tuple(self._annotation(attribute, host.scope) for attribute in host.attributes),
            )

    def annotation_arguments(
        self,
        declaration: Declaration,
        annotation_type_name: str,
    ) -> Sequence[Sequence[AnnotationArgument]]:
        """Return the argument lists of the usages of *annotation_type_name*."""
        return [usage.arguments for usage in declaration.annotations if usage.type_name == annotation_type_name]

    def type_of_argument(self, expression: Any) -> TypeReference | None:
        """Bind the type of a ``typeof`` argument; None for other expressions or unknown types."""
        if not isinstance(expression, TypeOfExpression):
            return None
        scope = self._expression_scopes.get(expression)
        if scope is None:
            return None
        return self._bind(expression.type, scope)

    def resolve_type(self, reference: TypeReference) -> TypeDescriptor | None:
        """Return the descriptor of the declared or built-in type *reference* names."""
        symbol = self._symbols.get(reference.metadata_name)
        if symbol is None:
            return None
        return self._descriptor(symbol)

    def lookup(self, qualified_name: str, arity: int = 0) -> TypeDescriptor | None:
        """Return the descriptor for a dotted name such as ``Ns.Outer.Inner``."""
        names = tuple(qualified_name.split("."))
        entity = self._bind_names(names, arity, _Scope(parent=None), is_global=True)
        if isinstance(entity, _TypeSymbol):
            return self._descriptor(entity)
        return None

    # ------------------------------------------------------------------
    # Symbol table construction
    # ------------------------------------------------------------------

    def _add_builtin(self, descriptor: TypeDescriptor) -> None:
        symbol = _TypeSymbol(reference=descriptor.reference, kind=descriptor.kind)
        self._symbols[descriptor.reference.metadata_name] = symbol
        self._descriptors[symbol] = descriptor
        self._add_namespace(descriptor.reference.namespace)

    def _add_namespace(self, namespace: str) -> None:
        parts = namespace.split(".") if namespace else []
        for index in range(1, len(parts) + 1):
            self._namespaces.add(".".join(parts[:index]))

    def _collect(self) -> None:
        global_usings = [using for unit in self._units for using in unit.usings if using.is_global]
        for unit in self._units:
            usings = list(unit.usings)
            usings.extend(using for using in global_usings if all(using is not own for own in unit.usings))
            root = _Scope(parent=None, namespace="", usings=tuple(usings))
            imports: tuple[_Import, ...] = tuple((using, None) for using in unit.usings)
            self._hosts[unit] = []
            self._collect_members(unit, unit.members, root, imports)

    def _collect_members(
        self,
        unit: CompilationUnit,
        members: list[NamespaceMember],
        scope: _Scope,
        imports: tuple[_Import, ...],
    ) -> None:
        for member in members:
            if isinstance(member, NamespaceDeclarationSyntax):
                self._collect_namespace(unit, member, scope, imports)
            else:
                self._collect_type(unit, member, scope, (), imports)

    def _collect_namespace(
        self,
        unit: CompilationUnit,
        syntax: NamespaceDeclarationSyntax,
        scope: _Scope,
        imports: tuple[_Import, ...],
    ) -> None:
        # namespace A.B { } opens a scope for A and then one for A.B.
        for part in syntax.name.split("."):
            scope = _Scope(parent=scope, namespace=_join(scope.namespace, part))
        scope.usings = tuple(syntax.usings)
        self._add_namespace(scope.namespace)
        imports = imports + tuple((using, scope) for using in syntax.usings)
        self._collect_members(unit, syntax.members, scope, imports)

    def _collect_type(
        self,
        unit: CompilationUnit,
        syntax: TypeDeclarationSyntax,
        scope: _Scope,
        containing_types: tuple[str, ...],
        imports: tuple[_Import, ...],
    ) -> None:
        reference = TypeReference(
            name=syntax.name,
            namespace=scope.namespace,
            containing_types=containing_types,
            arity=len(syntax.type_parameters),
        )
        key = reference.metadata_name
        symbol = self._symbols.get(key)
        if symbol is None:
            symbol = _TypeSymbol(reference=reference, kind=syntax.kind, type_parameters=syntax.type_parameters)
            self._symbols[key] = symbol
        elif not (symbol.parts and symbol.is_partial and "partial" in syntax.modifiers):
            message = f"Duplicate type '{reference.display_name}' at line {syntax.line}, column {syntax.column}"
            self._errors.append(SemanticError(message))
            return

        type_scope = _Scope(parent=scope, namespace=scope.namespace, type_symbol=symbol)
        symbol.parts.append(_TypePart(syntax=syntax, scope=type_scope))

        attributes = [attribute for attribute in syntax.attributes if attribute.target in (None, "type")]
        for attribute in attributes:
            for argument in attribute.arguments:
                if isinstance(argument.expression, TypeOfExpression):
                    self._expression_scopes[argument.expression] = type_scope
        if not containing_types and syntax.kind == TypeKind.CLASS and attributes:
            self._hosts[unit].append(
                _Host(syntax=syntax, symbol=symbol, scope=type_scope, imports=imports, attributes=tuple(attributes))
            )

        for nested in syntax.members:
            self._collect_type(unit, nested, type_scope, (*containing_types, syntax.name), imports)

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def _bind(self, syntax: TypeSyntax, scope: _Scope) -> TypeReference | None:
        """Bind a written type to a reference, or None when it names no known type."""
        if syntax.is_keyword:
            reference = predefined_reference(syntax.names[0])
        elif syntax.is_tuple:
            reference = TypeReference(name="ValueTuple", namespace="System", arity=len(syntax.type_arguments))
        else:
            entity = self._bind_names(syntax.names, syntax.arity, scope, is_global=syntax.is_global)
            if isinstance(entity, _TypeSymbol):
                reference = entity.reference
            elif isinstance(entity, TypeReference):
                reference = entity
            else:
                return None
        return reference.model_copy(update={"nullable": syntax.nullable, "array_rank": syntax.array_rank})

    def _bind_names(
        self,
        names: tuple[str, ...],
        arity: int,
        scope: _Scope,
        *,
        is_global: bool = False,
    ) -> _Entity | None:
        first_arity = arity if len(names) == 1 else 0
        if is_global:
            entity: _Entity | None = self._global(names[0], first_arity)
        else:
            entity = self._lookup(names[0], first_arity, scope)
            if entity is None and len(names) > 1:
                # Leading segment of a namespace from a referenced assembly.
                entity = _NamespaceEntity(names[0])
        for index, name in enumerate(names[1:], start=1):
            if entity is None:
                return None
            entity = self._member(entity, name, arity if index == len(names) - 1 else 0)
        return entity

    def _lookup(self, name: str, arity: int, scope: _Scope) -> _Entity | None:
        """Look up a simple name from *scope* outwards."""
        current: _Scope | None = scope
        while current is not None:
            symbol = current.type_symbol
            if symbol is not None:
                if arity == 0 and name in symbol.type_parameters:
                    return TypeReference(name=name)
                nested = self._symbols.get(_nested_key(symbol.reference, name, arity))
                if nested is not None:
                    return nested
            else:
                found = self._lookup_in_namespace(name, arity, current)
                if found is not None:
                    return found
            current = current.parent
        return None

    def _lookup_in_namespace(self, name: str, arity: int, scope: _Scope) -> _Entity | None:
        declared = self._symbols.get(TypeReference(name=name, namespace=scope.namespace, arity=arity).metadata_name)
        if declared is not None:
            return declared
        if arity == 0 and _join(scope.namespace, name) in self._namespaces:
            return _NamespaceEntity(_join(scope.namespace, name))

        for using in scope.usings:
            if using.alias is not None and using.alias == name and arity == 0:
                return self._bind_using_target(using, scope)
        for using in scope.usings:
            if using.alias is not None:
                continue
            if using.is_static:
                target = self._bind_using_target(using, scope)
                if isinstance(target, _TypeSymbol):
                    nested = self._symbols.get(_nested_key(target.reference, name, arity))
                    if nested is not None:
                        return nested
                continue
            imported = self._symbols.get(
                TypeReference(name=name, namespace=self._using_namespace(using, scope), arity=arity).metadata_name
            )
            if imported is not None:
                return imported
        return None

    def _bind_using_target(self, using: UsingDirectiveSyntax, scope: _Scope) -> _Entity | None:
        """Bind the target of a using directive; other usings of the same scope are not visible."""
        target = using.target
        if target.is_keyword:
            return self._symbols.get(predefined_reference(target.names[0]).metadata_name)
        outer = scope.parent if scope.parent is not None else _Scope(parent=None, namespace="")
        bare = _Scope(parent=outer, namespace=scope.namespace)
        entity = self._bind_names(target.names, target.arity, bare, is_global=target.is_global)
        if entity is None and target.arity == 0:
            return _NamespaceEntity(".".join(target.names))
        return entity

    def _using_namespace(self, using: UsingDirectiveSyntax, scope: _Scope) -> str:
        """Return the namespace a plain using directive imports."""
        text = ".".join(using.target.names)
        if using.target.is_global:
            return text
        current: _Scope | None = scope
        while current is not None:
            if current.namespace and _join(current.namespace, text) in self._namespaces:
                return _join(current.namespace, text)
            current = current.parent
        return text

    def _import_text(self, using: UsingDirectiveSyntax, scope: _Scope | None) -> str:
        """Render *using* so it keeps its meaning at the top of a generated file.

        Directives written inside a namespace may name their target relative to
        that namespace; their target is rewritten fully qualified.
        """
        target = using.target
        if scope is None or target.is_global or target.is_keyword or target.is_tuple:
            return using.text
        if using.alias is None and not using.is_static:
            return self._using_namespace(using, scope)

        entity = self._bind_using_target(using, scope)
        if isinstance(entity, _TypeSymbol):
            qualified = entity.reference.display_name
        elif isinstance(entity, _NamespaceEntity):
            qualified = entity.name
        else:
            return using.text
        if target.type_arguments:
            qualified += "<" + ", ".join(argument.text for argument in target.type_arguments) + ">"
        if using.alias is not None:
            return f"{using.alias} = {qualified}"
        return f"static {qualified}"

    def _global(self, name: str, arity: int) -> _Entity:
        symbol = self._symbols.get(TypeReference(name=name, arity=arity).metadata_name)
        if symbol is not None:
            return symbol
        return _NamespaceEntity(name)

    def _member(self, entity: _Entity, name: str, arity: int) -> _Entity | None:
        if isinstance(entity, _NamespaceEntity):
            symbol = self._symbols.get(TypeReference(name=name, namespace=entity.name, arity=arity).metadata_name)
            if symbol is not None:
                return symbol
            return _NamespaceEntity(_join(entity.name, name)) if arity == 0 else None
        if isinstance(entity, _TypeSymbol):
            return self._symbols.get(_nested_key(entity.reference, name, arity))
        return None

    def _bind_or_unresolved(self, syntax: TypeSyntax, scope: _Scope) -> TypeReference:
        """Bind *syntax*; unknown types keep their written name and any written qualifier."""
        reference = self._bind(syntax, scope)
        if reference is not None:
            return reference
        return TypeReference(
            name=syntax.names[-1],
            namespace=".".join(syntax.names[:-1]),
            arity=syntax.arity,
            nullable=syntax.nullable,
            array_rank=syntax.array_rank,
        )

    # ------------------------------------------------------------------
    # Descriptors
    # ------------------------------------------------------------------

    def _descriptor(self, symbol: _TypeSymbol) -> TypeDescriptor:
        cached = self._descriptors.get(symbol)
        if cached is not None:
            return cached
        descriptor = TypeDescriptor(
            reference=symbol.reference,
            kind=symbol.kind,
            accessibility=self._accessibility(symbol),
            constructors=tuple(self._constructors(symbol)),
            interfaces=self._interfaces(symbol, frozenset({symbol})),
        )
        self._descriptors[symbol] = descriptor
        return descriptor

    def _accessibility(self, symbol: _TypeSymbol) -> Accessibility:
        """Declared accessibility taken from the first part that states one."""
        for part in symbol.parts:
            declared = _declared_accessibility(part.syntax.modifiers)
            if declared is not None:
                return declared
        if symbol.reference.containing_types:
            return Accessibility.PRIVATE
        return Accessibility.INTERNAL

    def _constructors(self, symbol: _TypeSymbol) -> list[ConstructorDescriptor]:
        constructors: list[ConstructorDescriptor] = []
        for part in symbol.parts:
            syntax = part.syntax
            if syntax.primary_parameters is not None:
                constructors.append(
                    ConstructorDescriptor(
                        parameters=tuple(self._parameter(p, part.scope) for p in syntax.primary_parameters),
                        line=syntax.line,
                        column=syntax.column,
                    )
                )
            for constructor in syntax.constructors:
                if constructor.is_static:
                    continue
                constructors.append(
                    ConstructorDescriptor(
                        parameters=tuple(self._parameter(p, part.scope) for p in constructor.parameters),
                        line=constructor.line,
                        column=constructor.column,
                    )
                )

        first = symbol.parts[0].syntax
        implicit = ConstructorDescriptor(line=first.line, column=first.column)
        if symbol.kind in (TypeKind.CLASS, TypeKind.RECORD):
            if not constructors and not symbol.is_static:
                constructors.append(implicit)
        elif symbol.kind in (TypeKind.STRUCT, TypeKind.RECORD_STRUCT):
            if all(constructor.parameters for constructor in constructors):
                constructors.append(implicit)
        return constructors

    def _parameter(self, syntax: ParameterSyntax, scope: _Scope) -> ParameterDescriptor:
        reference = self._bind_or_unresolved(syntax.type, scope)
        is_string = reference.array_rank == 0 and reference.metadata_name == "System.String"
        is_value = False
        if not is_string and reference.array_rank == 0:
            if syntax.type.is_tuple:
                is_value = True
            else:
                symbol = self._symbols.get(reference.metadata_name)
                is_value = symbol is not None and symbol.kind.is_value_type
        return ParameterDescriptor(
            name=syntax.name,
            type=reference,
            is_value_type=is_value,
            is_string_type=is_string,
        )

    def _interfaces(self, symbol: _TypeSymbol, visiting: frozenset[_TypeSymbol]) -> tuple[TypeReference, ...]:
        """All interfaces *symbol* implements, directly or through bases, first seen first."""
        cached = self._interface_cache.get(symbol)
        if cached is not None:
            return cached
        builtin = self._descriptors.get(symbol)
        if builtin is not None and not symbol.parts:
            return builtin.interfaces

        result: dict[str, TypeReference] = {}
        for part in symbol.parts:
            for base in part.syntax.base_types:
                reference = self._bind(base, part.scope)
                if reference is None:
                    if not base.is_keyword and _INTERFACE_NAME.match(base.names[-1]):
                        unresolved = self._bind_or_unresolved(base, part.scope)
                        result.setdefault(unresolved.metadata_name, unresolved)
                    continue
                reference = reference.element()
                base_symbol = self._symbols.get(reference.metadata_name)
                if base_symbol is None:
                    continue
                if base_symbol.kind == TypeKind.INTERFACE:
                    result.setdefault(reference.metadata_name, reference)
                if base_symbol in visiting:
                    continue
                for inherited in self._interfaces(base_symbol, visiting | {base_symbol}):
                    result.setdefault(inherited.metadata_name, inherited)

        interfaces = tuple(result.values())
        self._interface_cache[symbol] = interfaces
        return interfaces

    def _annotation(self, attribute: AttributeSyntax, scope: _Scope) -> AnnotationUsage:
        return AnnotationUsage(
            type_name=self._attribute_type_name(attribute, scope),
            arguments=tuple(
                AnnotationArgument(name=argument.name_equals, expression=argument.expression)
                for argument in attribute.arguments
            ),
        )

    def _attribute_type_name(self, attribute: AttributeSyntax, scope: _Scope) -> str | None:
        """Bind an attribute name, trying the ``Attribute`` suffixed form first."""
        name = attribute.name
        candidates = [name.names]
        if not name.names[-1].endswith(ATTRIBUTE_SUFFIX):
            candidates.insert(0, (*name.names[:-1], name.names[-1] + ATTRIBUTE_SUFFIX))
        for names in candidates:
            entity = self._bind_names(names, name.arity, scope, is_global=name.is_global)
            if isinstance(entity, _TypeSymbol):
                return entity.reference.display_name
        return None


def analyze(units: Iterable[CompilationUnit]) -> list[SemanticError]:
    """Check a set of compilation units for structural errors.

    Checks performed:
    - Duplicate type declarations (the same fully qualified name and arity
      declared twice without every part being ``partial``).

    Returns:
        A list of :class:`SemanticError` instances. An empty list means no
        semantic errors were found.
    """
    return SemanticModel(units).errors


# ################
# Implementation
# ################

_INTERFACE_NAME = re.compile(r"^I[A-Z]")


@dataclass(eq=False)
class _TypePart:
    """One declaration of a (possibly partial) type and its binding scope."""

    syntax: TypeDeclarationSyntax
    scope: _Scope


@dataclass(eq=False)
class _TypeSymbol:
    reference: TypeReference
    kind: TypeKind
    type_parameters: tuple[str, ...] = ()
    parts: list[_TypePart] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return all("partial" in part.syntax.modifiers for part in self.parts)

    @property
    def is_static(self) -> bool:
        return any("static" in part.syntax.modifiers for part in self.parts)


@dataclass(frozen=True)
class _NamespaceEntity:
    name: str


_Entity = _TypeSymbol | _NamespaceEntity | TypeReference


@dataclass(eq=False)
class _Scope:
    """A binding scope: a namespace with its usings, or the body of a type."""

    parent: _Scope | None
    namespace: str = ""
    usings: tuple[UsingDirectiveSyntax, ...] = ()
    type_symbol: _TypeSymbol | None = None


# A using directive and the namespace scope it appears in; None for the compilation unit.
_Import = tuple[UsingDirectiveSyntax, _Scope | None]


@dataclass(frozen=True)
class _Host:
    """An attributed top-level class, a candidate for generation."""

    syntax: TypeDeclarationSyntax
    symbol: _TypeSymbol
    scope: _Scope
    imports: tuple[_Import, ...]
    attributes: tuple[AttributeSyntax, ...]


def _join(namespace: str, name: str) -> str:
    return f"{namespace}.{name}" if namespace else name


def _nested_key(container: TypeReference, name: str, arity: int) -> str:
    return TypeReference(
        name=name,
        namespace=container.namespace,
        containing_types=(*container.containing_types, container.name),
        arity=arity,
    ).metadata_name


def _declared_accessibility(modifiers: tuple[str, ...]) -> Accessibility | None:
    present = set(modifiers)
    if {"protected", "internal"} <= present:
        return Accessibility.PROTECTED_INTERNAL
    if {"private", "protected"} <= present:
        return Accessibility.PRIVATE_PROTECTED
    for accessibility in (
        Accessibility.PUBLIC,
        Accessibility.INTERNAL,
        Accessibility.PROTECTED,
        Accessibility.PRIVATE,
        Accessibility.FILE,
    ):
        if accessibility.value in present:
            return accessibility
    return None
