"""Build-order stage model."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass
class VariableGroup:
    """
    One stage of the build order.

    Every variable in a group can be evaluated concurrently: none depends on
    another, and all of their dependencies belong to earlier groups.

    Attributes:
        variables: Variable names, in declaration order
    """

    variables: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.variables)

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def __contains__(self, name: object) -> bool:
        return name in self.variables

    def to_dict(self) -> dict[str, Any]:
        """Serialize the group for JSON output."""
        return {"variables": list(self.variables)}
