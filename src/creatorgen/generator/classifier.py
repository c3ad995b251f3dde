# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Override-default policy for factory parameters."""

from __future__ import annotations

from enum import Enum

from creatorgen.model.types import ParameterDescriptor

# ###############
# Public Interface
# ###############


class ParameterPolicy(Enum):
    """What a factory argument falls back to when the caller passes nothing."""

    VALUE_DEFAULT = "value-default"
    EMPTY_STRING = "empty-string"
    STAND_IN = "stand-in"


def classify(parameter: ParameterDescriptor) -> ParameterPolicy:
    """Classify *parameter* by its type alone; the parameter name never matters."""
    if parameter.is_string_type:
        return ParameterPolicy.EMPTY_STRING
    if parameter.is_value_type:
        return ParameterPolicy.VALUE_DEFAULT
    return ParameterPolicy.STAND_IN
