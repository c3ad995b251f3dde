# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Stand-in strategies: how generated factories fabricate missing dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

# ###############
# Public Interface
# ###############


class StandInStrategy(Protocol):
    """Renders the stand-in expression for dependencies the caller did not supply.

    Attributes:
        namespace: Namespace the generated file must import, or None.
        behavior_parameter: Declaration of the factory's leading
            behaviour-mode parameter, including its default value.
        behavior_name: Name of that parameter, as referenced in expressions.
    """

    namespace: str | None
    behavior_parameter: str
    behavior_name: str

    def expression(self, type_name: str) -> str:
        """Return the C# expression producing a stand-in of *type_name*."""
        ...


@dataclass(frozen=True)
class MoqStandIn:
    """Stand-ins built with ``Mock.Of<T>(behavior)`` from the Moq library."""

    namespace: str | None = "Moq"
    behavior_parameter: str = "MockBehavior defaultBehavior = MockBehavior.Loose"
    behavior_name: str = "defaultBehavior"

    def expression(self, type_name: str) -> str:
        return f"Mock.Of<{type_name}>({self.behavior_name})"


STAND_IN_STRATEGIES: dict[str, StandInStrategy] = {
    "moq": MoqStandIn(),
}
