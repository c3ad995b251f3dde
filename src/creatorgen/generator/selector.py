# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constructor selection for generated factories."""

from __future__ import annotations

from creatorgen.model.types import ConstructorDescriptor, TypeDescriptor

# ###############
# Public Interface
# ###############


def select_constructor(descriptor: TypeDescriptor) -> ConstructorDescriptor:
    """Pick the constructor a factory for *descriptor* should call.

    The non-static constructor with the most parameters wins. Equal counts are
    decided by source position (line, then column) and finally by the order
    the provider listed them in. A type without constructors yields an empty
    parameter list so the factory falls back to parameterless construction.
    """
    candidates = [
        (index, ctor) for index, ctor in enumerate(descriptor.constructors) if not ctor.is_static
    ]
    if not candidates:
        return ConstructorDescriptor()
    _, best = min(candidates, key=_rank)
    return best


# ################
# Implementation
# ################


def _rank(entry: tuple[int, ConstructorDescriptor]) -> tuple[int, int, int, int]:
    index, ctor = entry
    return (-len(ctor.parameters), ctor.line, ctor.column, index)
