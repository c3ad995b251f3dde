# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation records produced and consumed by the CreatorGen pipeline."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from creatorgen.model.types import ConstructorDescriptor, TypeReference

# ###############
# Public Interface
# ###############


class AnnotatedDeclaration(BaseModel):
    """A host type declaration carrying the marker annotation.

    Attributes:
        name: Simple name of the host type.
        accessibility: Declared accessibility as C# modifier text (may be blank).
        declared_namespace: Enclosing namespace, or None for the global namespace.
        existing_imports: Using directives in effect at the declaration, in
            source order. Duplicates are kept.
        target_type: The type named by the annotation's ``Target`` argument.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    accessibility: str = ""
    declared_namespace: str | None = None
    existing_imports: tuple[str, ...] = ()
    target_type: TypeReference


class GenerationUnit(BaseModel):
    """Everything needed to emit the factory for one annotated declaration."""

    model_config = ConfigDict(frozen=True)

    declaration: AnnotatedDeclaration
    target: TypeReference
    result_type: TypeReference | None = None
    selected_constructor: ConstructorDescriptor = ConstructorDescriptor()
    required_imports: tuple[str, ...] = ()


class OutputUnit(BaseModel):
    """A named piece of generated source text."""

    model_config = ConfigDict(frozen=True)

    file_key: str
    content: str
