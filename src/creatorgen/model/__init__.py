# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for CreatorGen (type descriptors and generation records)."""

from creatorgen.model.entities import AnnotatedDeclaration, GenerationUnit, OutputUnit
from creatorgen.model.types import (
    Accessibility,
    ConstructorDescriptor,
    ParameterDescriptor,
    TypeDescriptor,
    TypeKind,
    TypeReference,
)

__all__ = [
    # Type descriptors
    "Accessibility",
    "TypeKind",
    "TypeReference",
    "ParameterDescriptor",
    "ConstructorDescriptor",
    "TypeDescriptor",
    # Generation records
    "AnnotatedDeclaration",
    "GenerationUnit",
    "OutputUnit",
]
