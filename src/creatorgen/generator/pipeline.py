# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Pipeline driver: annotated declarations in, generated sources out.

Each declaration is processed independently of every other one, so units may
be built on separate workers without coordination. Provider exceptions are
not caught here; the caller decides whether one failure aborts the batch.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from creatorgen.generator.emitter import (
    GENERATED_SUFFIX,
    MARKER_ATTRIBUTE_NAME,
    emit,
    emit_marker_attribute,
    file_key,
)
from creatorgen.generator.imports import aggregate_imports
from creatorgen.generator.provider import TypeDescriptorProvider
from creatorgen.generator.scanner import scan
from creatorgen.generator.selector import select_constructor
from creatorgen.generator.stand_in import MoqStandIn, StandInStrategy
from creatorgen.model.entities import AnnotatedDeclaration, GenerationUnit, OutputUnit
from creatorgen.model.types import TypeDescriptor, TypeReference

# ###############
# Public Interface
# ###############

DEFAULT_MARKER_NAMESPACE = "CreatorGen"


@dataclass(frozen=True)
class GeneratorOptions:
    """Settings shared by every unit of a generation batch.

    Attributes:
        marker_namespace: Namespace the marker attribute is declared in; empty
            for the global namespace.
        stand_in: Strategy rendering stand-ins for omitted dependencies.
    """

    marker_namespace: str = DEFAULT_MARKER_NAMESPACE
    stand_in: StandInStrategy = field(default_factory=MoqStandIn)

    @property
    def marker_type_name(self) -> str:
        """Qualified name of the marker attribute type."""
        if not self.marker_namespace:
            return MARKER_ATTRIBUTE_NAME
        return f"{self.marker_namespace}.{MARKER_ATTRIBUTE_NAME}"


def marker_output(options: GeneratorOptions) -> OutputUnit:
    """Return the marker attribute definition, emitted once per batch."""
    return OutputUnit(
        file_key=MARKER_ATTRIBUTE_NAME + GENERATED_SUFFIX,
        content=emit_marker_attribute(options.marker_namespace),
    )


def result_type_for(descriptor: TypeDescriptor) -> TypeReference:
    """Return the type a factory for *descriptor* is declared to return.

    This is the first implemented interface named ``I<Name>``, or the type
    itself when there is none.
    """
    expected = "I" + descriptor.name
    for interface in descriptor.interfaces:
        if interface.name == expected:
            return interface
    return descriptor.reference


def build_unit(
    provider: TypeDescriptorProvider,
    declaration: AnnotatedDeclaration,
    stand_in: StandInStrategy,
) -> GenerationUnit | None:
    """Resolve *declaration* into a generation unit.

    Returns:
        The unit, or None when the target type cannot be resolved.
    """
    descriptor = provider.resolve_type(declaration.target_type)
    if descriptor is None:
        return None

    result_type = result_type_for(descriptor)
    constructor = select_constructor(descriptor)
    imports = aggregate_imports(
        declaration.existing_imports,
        result_type,
        descriptor.reference.enclosing_namespace,
        [parameter.type for parameter in constructor.parameters],
        stand_in.namespace,
    )
    return GenerationUnit(
        declaration=declaration,
        target=descriptor.reference,
        result_type=result_type,
        selected_constructor=constructor,
        required_imports=imports.to_tuple(),
    )


def generate_units(
    provider: TypeDescriptorProvider,
    trees: Iterable[Any],
    options: GeneratorOptions,
) -> list[GenerationUnit]:
    """Scan *trees* and resolve every annotated declaration into a unit."""
    units: list[GenerationUnit] = []
    for declaration in scan(provider, trees, options.marker_type_name):
        unit = build_unit(provider, declaration, options.stand_in)
        if unit is not None:
            units.append(unit)
    return units


def generate(
    provider: TypeDescriptorProvider,
    trees: Iterable[Any],
    options: GeneratorOptions | None = None,
) -> list[OutputUnit]:
    """Run the whole pipeline over *trees*.

    Returns:
        The marker attribute definition followed by one output per annotated
        declaration whose target could be resolved, in scan order.
    """
    options = options if options is not None else GeneratorOptions()
    outputs = [marker_output(options)]
    for unit in generate_units(provider, trees, options):
        outputs.append(OutputUnit(file_key=file_key(unit), content=emit(unit, options.stand_in)))
    return outputs
