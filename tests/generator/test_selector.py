# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for constructor selection."""

import pytest
from fakes import constructor, parameter
from pydantic import ValidationError

from creatorgen.generator.selector import select_constructor
from creatorgen.model.types import ConstructorDescriptor, TypeDescriptor, TypeReference

# ###############
# Test Helpers
# ###############

TARGET = TypeReference(name="Target", namespace="Ns")


def _type(*constructors: ConstructorDescriptor) -> TypeDescriptor:
    return TypeDescriptor(reference=TARGET, constructors=constructors)


def _params(count: int) -> list:
    return [parameter(f"p{index}", "IDependency") for index in range(count)]


# ###############
# Selection
# ###############


class TestSelection:
    def test_most_parameters_wins(self) -> None:
        short = constructor(*_params(1), line=1)
        long = constructor(*_params(2), line=2)
        assert select_constructor(_type(short, long)) is long

    @pytest.mark.parametrize(("first", "second"), [(0, 1), (1, 3), (2, 5), (4, 2), (3, 0)])
    def test_longer_constructor_is_picked_in_any_order(self, first: int, second: int) -> None:
        a = constructor(*_params(first), line=1)
        b = constructor(*_params(second), line=2)
        selected = select_constructor(_type(a, b))
        assert len(selected.parameters) == max(first, second)

    def test_ties_go_to_earliest_source_position(self) -> None:
        later = constructor(*_params(2), line=9, column=5)
        earlier = constructor(*_params(2), line=4, column=5)
        assert select_constructor(_type(later, earlier)) is earlier

    def test_ties_on_same_line_use_column(self) -> None:
        right = constructor(*_params(1), line=3, column=40)
        left = constructor(*_params(1), line=3, column=5)
        assert select_constructor(_type(right, left)) is left

    def test_full_tie_uses_provider_order(self) -> None:
        first = constructor(parameter("a", "IA"))
        second = constructor(parameter("b", "IB"))
        assert select_constructor(_type(first, second)) is first

    def test_no_constructors_gives_empty_parameter_list(self) -> None:
        selected = select_constructor(_type())
        assert selected.parameters == ()

    def test_parameter_order_is_preserved(self) -> None:
        ctor = constructor(parameter("z", "IZ"), parameter("a", "IA"), parameter("m", "IM"))
        assert [p.name for p in select_constructor(_type(ctor)).parameters] == ["z", "a", "m"]


# ###############
# Static Constructors
# ###############


class TestStaticConstructors:
    def test_descriptor_rejects_static_constructors(self) -> None:
        with pytest.raises(ValidationError):
            _type(ConstructorDescriptor(is_static=True))

    def test_static_constructors_are_never_selected(self) -> None:
        static = ConstructorDescriptor(parameters=tuple(_params(3)), is_static=True)
        instance = constructor(*_params(1))
        descriptor = TypeDescriptor.model_construct(reference=TARGET, constructors=(static, instance))
        assert select_constructor(descriptor) is instance

    def test_only_static_constructors_gives_empty_parameter_list(self) -> None:
        static = ConstructorDescriptor(parameters=tuple(_params(2)), is_static=True)
        descriptor = TypeDescriptor.model_construct(reference=TARGET, constructors=(static,))
        assert select_constructor(descriptor).parameters == ()
