# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Annotation scanner: finds declarations carrying the marker annotation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from creatorgen.generator.provider import AnnotationArgument, Declaration, TypeDescriptorProvider
from creatorgen.model.entities import AnnotatedDeclaration
from creatorgen.model.types import TypeReference

# ###############
# Public Interface
# ###############

TARGET_ARGUMENT = "Target"


def scan(
    provider: TypeDescriptorProvider,
    trees: Iterable[Any],
    marker_type_name: str,
) -> Iterator[AnnotatedDeclaration]:
    """Yield one :class:`AnnotatedDeclaration` per declaration carrying the marker.

    Declarations are visited in the order the provider reports them. A
    declaration matches when one of its annotations resolves to exactly
    *marker_type_name* (qualified comparison) and that annotation's first
    ``Target`` argument is a ``typeof`` expression. Annotations failing either
    condition are treated as absent; at most one result is produced per
    declaration, from the first matching annotation.

    Args:
        provider: Source of declarations and argument resolution.
        trees: Declaration trees understood by *provider*.
        marker_type_name: Qualified name of the marker annotation type.
    """
    for tree in trees:
        for declaration in provider.declarations_with_annotations(tree):
            if not declaration.annotations:
                continue
            target = find_target(provider, declaration, marker_type_name)
            if target is None:
                continue
            yield AnnotatedDeclaration(
                name=declaration.name,
                accessibility=declaration.accessibility,
                declared_namespace=declaration.namespace,
                existing_imports=declaration.imports,
                target_type=target,
            )


def find_target(
    provider: TypeDescriptorProvider,
    declaration: Declaration,
    marker_type_name: str,
) -> TypeReference | None:
    """Return the ``Target`` type of the first well-formed marker usage, if any."""
    for arguments in provider.annotation_arguments(declaration, marker_type_name):
        target = _target_of(provider, arguments)
        if target is not None:
            return target
    return None


# ################
# Implementation
# ################


def _target_of(
    provider: TypeDescriptorProvider,
    arguments: Sequence[AnnotationArgument],
) -> TypeReference | None:
    """Resolve the first argument named ``Target``; later assignments are ignored."""
    for argument in arguments:
        if argument.name == TARGET_ARGUMENT:
            return provider.type_of_argument(argument.expression)
    return None
