# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Interface between the generator and a type introspection service.

The generator never parses source itself. Everything it knows about
declarations, annotations and types comes from a :class:`TypeDescriptorProvider`;
:class:`creatorgen.compiler.semantic_analysis.SemanticModel` is the bundled
implementation for C# sources.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from creatorgen.model.types import TypeDescriptor, TypeReference

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class AnnotationArgument:
    """One argument of an annotation usage.

    Attributes:
        name: The assigned name for ``Name = value`` arguments, None for
            positional ones.
        expression: Provider-specific expression handle, passed back to
            :meth:`TypeDescriptorProvider.type_of_argument`.
    """

    name: str | None
    expression: Any


@dataclass(frozen=True)
class AnnotationUsage:
    """An annotation attached to a declaration.

    Attributes:
        type_name: Qualified name of the resolved annotation type, or None when
            the provider cannot resolve it.
        arguments: Arguments in source order.
    """

    type_name: str | None
    arguments: tuple[AnnotationArgument, ...] = ()


@dataclass(frozen=True)
class Declaration:
    """A type declaration handle as reported by the provider.

    Attributes:
        name: Simple name of the declared type.
        accessibility: Declared accessibility as C# modifier text.
        namespace: Enclosing namespace, or None at global scope.
        imports: Using directives in effect at the declaration, in source order.
        annotations: Annotations attached to the declaration, in source order.
    """

    name: str
    accessibility: str
    namespace: str | None
    imports: tuple[str, ...] = ()
    annotations: tuple[AnnotationUsage, ...] = ()


class TypeDescriptorProvider(Protocol):
    """Synchronous, side-effect-free queries over an already analysed program."""

    def declarations_with_annotations(self, tree: Any) -> Iterable[Declaration]:
        """Yield the type declarations of *tree* that carry at least one annotation."""
        ...

    def annotation_arguments(
        self,
        declaration: Declaration,
        annotation_type_name: str,
    ) -> Sequence[Sequence[AnnotationArgument]]:
        """Return the argument lists of each *annotation_type_name* usage on *declaration*."""
        ...

    def type_of_argument(self, expression: Any) -> TypeReference | None:
        """Return the type named by a ``typeof(...)`` expression, None for anything else."""
        ...

    def resolve_type(self, reference: TypeReference) -> TypeDescriptor | None:
        """Return the descriptor for *reference*, or None if the type is unknown."""
        ...
