# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Import aggregation for generated sources."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from creatorgen.model.types import TypeReference

# ###############
# Public Interface
# ###############


class OrderedSet:
    """Insertion-ordered collection of unique strings.

    Iteration order is the order in which items were first added; adding an
    existing item is a no-op.
    """

    def __init__(self, items: Iterable[str] = ()) -> None:
        self._items: dict[str, None] = {}
        self.update(items)

    def add(self, item: str) -> bool:
        """Add *item* and return True if it was not already present."""
        if item in self._items:
            return False
        self._items[item] = None
        return True

    def update(self, items: Iterable[str]) -> None:
        for item in items:
            self.add(item)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({list(self._items)!r})"

    def to_tuple(self) -> tuple[str, ...]:
        return tuple(self._items)


def aggregate_imports(
    existing_imports: Iterable[str],
    result_type: TypeReference | None,
    target_namespace: str | None,
    parameter_types: Iterable[TypeReference],
    mocking_namespace: str | None,
) -> OrderedSet:
    """Collect the imports a generated factory needs.

    Order: the host's existing imports (deduplicated), the mocking library's
    namespace, the result type's namespace, the target's namespace, then each
    parameter type's namespace in parameter order. Entries are only ever
    appended, so unchanged input always yields the same list.
    """
    imports = OrderedSet(existing_imports)
    if mocking_namespace:
        imports.add(mocking_namespace)
    if result_type is not None and result_type.enclosing_namespace:
        imports.add(result_type.enclosing_namespace)
    if target_namespace:
        imports.add(target_namespace)
    for parameter_type in parameter_types:
        if parameter_type.enclosing_namespace:
            imports.add(parameter_type.enclosing_namespace)
    return imports
