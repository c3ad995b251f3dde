# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Base class library types known without source."""

from creatorgen.model.types import Accessibility, TypeDescriptor, TypeKind, TypeReference

# ###############
# Public Interface
# ###############

SYSTEM_NAMESPACE = "System"

# Predefined keyword -> (System type name, kind)
PREDEFINED_TYPES: dict[str, tuple[str, TypeKind]] = {
    "bool": ("Boolean", TypeKind.STRUCT),
    "byte": ("Byte", TypeKind.STRUCT),
    "sbyte": ("SByte", TypeKind.STRUCT),
    "char": ("Char", TypeKind.STRUCT),
    "decimal": ("Decimal", TypeKind.STRUCT),
    "double": ("Double", TypeKind.STRUCT),
    "float": ("Single", TypeKind.STRUCT),
    "int": ("Int32", TypeKind.STRUCT),
    "uint": ("UInt32", TypeKind.STRUCT),
    "long": ("Int64", TypeKind.STRUCT),
    "ulong": ("UInt64", TypeKind.STRUCT),
    "short": ("Int16", TypeKind.STRUCT),
    "ushort": ("UInt16", TypeKind.STRUCT),
    "object": ("Object", TypeKind.CLASS),
    "string": ("String", TypeKind.CLASS),
    "void": ("Void", TypeKind.STRUCT),
}

# (namespace, name, kind) of commonly injected framework types
WELL_KNOWN_TYPES: tuple[tuple[str, str, TypeKind], ...] = (
    ("System", "DateTime", TypeKind.STRUCT),
    ("System", "DateTimeOffset", TypeKind.STRUCT),
    ("System", "DateOnly", TypeKind.STRUCT),
    ("System", "TimeOnly", TypeKind.STRUCT),
    ("System", "TimeSpan", TypeKind.STRUCT),
    ("System", "Guid", TypeKind.STRUCT),
    ("System", "IntPtr", TypeKind.STRUCT),
    ("System", "Half", TypeKind.STRUCT),
    ("System", "Type", TypeKind.CLASS),
    ("System", "Attribute", TypeKind.CLASS),
    ("System", "AttributeUsageAttribute", TypeKind.CLASS),
    ("System", "AttributeTargets", TypeKind.ENUM),
    ("System", "Uri", TypeKind.CLASS),
    ("System", "Exception", TypeKind.CLASS),
    ("System", "IDisposable", TypeKind.INTERFACE),
    ("System", "IServiceProvider", TypeKind.INTERFACE),
    ("System.Threading", "CancellationToken", TypeKind.STRUCT),
    ("System.Net.Http", "HttpClient", TypeKind.CLASS),
)


def predefined_reference(keyword: str) -> TypeReference:
    """Return the reference for a predefined type keyword such as ``int``.

    Raises:
        KeyError: If *keyword* is not a predefined type.
    """
    name, _ = PREDEFINED_TYPES[keyword]
    return TypeReference(name=name, namespace=SYSTEM_NAMESPACE, keyword=keyword)


def builtin_descriptors() -> list[TypeDescriptor]:
    """Return descriptors for every predefined and well-known framework type."""
    descriptors = [
        TypeDescriptor(reference=predefined_reference(keyword), kind=kind, accessibility=Accessibility.PUBLIC)
        for keyword, (_, kind) in PREDEFINED_TYPES.items()
    ]
    descriptors.extend(
        TypeDescriptor(
            reference=TypeReference(name=name, namespace=namespace),
            kind=kind,
            accessibility=Accessibility.PUBLIC,
        )
        for namespace, name, kind in WELL_KNOWN_TYPES
    )
    return descriptors
