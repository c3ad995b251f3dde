# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptors for the CreatorGen semantic model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

# ###############
# Public Interface
# ###############


class TypeKind(Enum):
    """Kinds of C# type declarations known to the semantic model."""

    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"
    RECORD_STRUCT = "record struct"
    DELEGATE = "delegate"

    @property
    def is_value_type(self) -> bool:
        """Return True for kinds whose instances have value semantics."""
        return self in (TypeKind.STRUCT, TypeKind.ENUM, TypeKind.RECORD_STRUCT)


class Accessibility(Enum):
    """Declared accessibility, valued by its C# modifier text."""

    PUBLIC = "public"
    INTERNAL = "internal"
    PROTECTED = "protected"
    PROTECTED_INTERNAL = "protected internal"
    PRIVATE_PROTECTED = "private protected"
    PRIVATE = "private"
    FILE = "file"


class TypeReference(BaseModel):
    """An immutable handle naming a type.

    Generic arguments are not tracked; ``arity`` only disambiguates ``Foo``
    from ``Foo<T>``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = ""
    containing_types: tuple[str, ...] = ()
    arity: int = 0
    keyword: str | None = None
    nullable: bool = False
    array_rank: int = 0

    @property
    def metadata_name(self) -> str:
        """Identity key of the referenced type, e.g. ``Ns.Outer+Inner`1``."""
        simple = self.name if self.arity == 0 else f"{self.name}`{self.arity}"
        nested = "+".join((*self.containing_types, simple))
        return f"{self.namespace}.{nested}" if self.namespace else nested

    @property
    def display_name(self) -> str:
        """Fully qualified display name; predefined types display as their keyword."""
        if self.keyword is not None:
            return self.keyword
        return ".".join(part for part in (self.namespace, *self.containing_types, self.name) if part)

    @property
    def source_name(self) -> str:
        """The name written in generated code (namespace supplied by imports)."""
        base = self.keyword or ".".join((*self.containing_types, self.name))
        return base + "[]" * self.array_rank

    @property
    def enclosing_namespace(self) -> str | None:
        """Namespace that must be imported to use :attr:`source_name`, if any."""
        if self.keyword is not None or not self.namespace:
            return None
        return self.namespace

    def element(self) -> TypeReference:
        """Return this reference stripped of nullability and array ranks."""
        return self.model_copy(update={"nullable": False, "array_rank": 0})


class ParameterDescriptor(BaseModel):
    """A constructor parameter, classified by its type."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeReference
    is_value_type: bool = False
    is_string_type: bool = False

    @model_validator(mode="after")
    def _check_classification(self) -> ParameterDescriptor:
        if self.is_value_type and self.is_string_type:
            raise ValueError(f"parameter '{self.name}' cannot be both a value type and a string type")
        return self


class ConstructorDescriptor(BaseModel):
    """A constructor with its parameters in declaration order."""

    model_config = ConfigDict(frozen=True)

    parameters: tuple[ParameterDescriptor, ...] = ()
    is_static: bool = False
    line: int = 0
    column: int = 0


class TypeDescriptor(BaseModel):
    """Resolved metadata for a :class:`TypeReference`."""

    model_config = ConfigDict(frozen=True)

    reference: TypeReference
    kind: TypeKind = TypeKind.CLASS
    accessibility: Accessibility = Accessibility.PUBLIC
    constructors: tuple[ConstructorDescriptor, ...] = ()
    interfaces: tuple[TypeReference, ...] = ()

    @property
    def name(self) -> str:
        return self.reference.name

    @property
    def namespace(self) -> str:
        return self.reference.namespace

    @model_validator(mode="after")
    def _check_constructors(self) -> TypeDescriptor:
        if any(ctor.is_static for ctor in self.constructors):
            raise ValueError(f"type '{self.reference.display_name}' lists a static constructor")
        return self
