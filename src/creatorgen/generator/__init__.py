# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Factory generation core: scanning, selection, classification, imports and emission."""

from creatorgen.generator.classifier import ParameterPolicy, classify
from creatorgen.generator.emitter import emit, emit_marker_attribute
from creatorgen.generator.imports import OrderedSet, aggregate_imports
from creatorgen.generator.pipeline import GeneratorOptions, build_unit, generate, generate_units
from creatorgen.generator.provider import (
    AnnotationArgument,
    AnnotationUsage,
    Declaration,
    TypeDescriptorProvider,
)
from creatorgen.generator.scanner import scan
from creatorgen.generator.selector import select_constructor
from creatorgen.generator.stand_in import STAND_IN_STRATEGIES, MoqStandIn, StandInStrategy

__all__ = [
    "AnnotationArgument",
    "AnnotationUsage",
    "Declaration",
    "TypeDescriptorProvider",
    "scan",
    "select_constructor",
    "ParameterPolicy",
    "classify",
    "OrderedSet",
    "aggregate_imports",
    "StandInStrategy",
    "MoqStandIn",
    "STAND_IN_STRATEGIES",
    "emit",
    "emit_marker_attribute",
    "GeneratorOptions",
    "build_unit",
    "generate_units",
    "generate",
]
