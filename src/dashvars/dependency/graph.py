"""Variable Graph - dependency graph and stage ordering for dashboard variables.

The graph is a flat mapping from variable name to the set of names it
references. There are no node objects and no back-pointers; dependents are
derived on demand.

Edge direction: ``v -> d`` means "v depends on d", so d must be evaluated
before v.
"""

from collections.abc import Iterable, Mapping

import structlog

from ..models.groups import VariableGroup
from ..utils.exceptions import (
    CircularDependencyError,
    DuplicateVariableError,
    UndefinedReferenceError,
)

logger = structlog.get_logger(__name__)


def find_duplicates(names: Iterable[str]) -> list[str]:
    """Return the sorted list of names that occur more than once."""
    seen: set[str] = set()
    dupes: set[str] = set()
    for name in names:
        if name in seen:
            dupes.add(name)
        seen.add(name)
    return sorted(dupes)


class VariableGraph:
    """
    Directed graph of variable references.

    Features:
    - Validation of declared names (no duplicates)
    - Validation of references (every referenced name is declared)
    - Stage ordering with cycle detection
    - DOT export for Graphviz
    """

    def __init__(
        self,
        names: Iterable[str],
        dependencies: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        """
        Build the graph.

        Args:
            names: Declared variable names, in declaration order
            dependencies: Map of variable name -> names it references. Names
                missing from the map have no dependencies.

        Raises:
            DuplicateVariableError: If a name is declared twice
            UndefinedReferenceError: If a referenced name is not declared
            ValueError: If the map has a key that is not a declared name
        """
        self.names: list[str] = list(names)
        dupes = find_duplicates(self.names)
        if dupes:
            raise DuplicateVariableError(dupes)

        self._dependencies: dict[str, set[str]] = {name: set() for name in self.names}

        for name, refs in (dependencies or {}).items():
            if name not in self._dependencies:
                raise ValueError(f"Dependent variable not declared: {name}")
            for ref in refs:
                if ref not in self._dependencies:
                    raise UndefinedReferenceError(ref, name)
                self._dependencies[name].add(ref)

        logger.debug(
            "Variable graph built",
            variables=len(self.names),
            edges=self.edge_count,
        )

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self._dependencies

    @property
    def edge_count(self) -> int:
        return sum(len(deps) for deps in self._dependencies.values())

    def dependencies_of(self, name: str) -> set[str]:
        """
        Names that ``name`` references (must be evaluated before it).

        Raises:
            KeyError: If the name is not declared
        """
        return set(self._dependencies[name])

    def dependents_of(self, name: str) -> set[str]:
        """
        Names that reference ``name`` (must be evaluated after it).

        Raises:
            KeyError: If the name is not declared
        """
        if name not in self._dependencies:
            raise KeyError(name)
        return {other for other, deps in self._dependencies.items() if name in deps}

    def build_order(self) -> list[VariableGroup]:
        """
        Group variables into stages for concurrent evaluation.

        ALGORITHM (iterative fixed point):
        1. Scan the unresolved variables in declaration order
        2. Every variable whose dependencies are all staged in EARLIER passes
           forms the next stage
        3. Repeat until nothing is left
        4. A pass that stages nothing while variables remain means a cycle

        A variable therefore lands in stage ``1 + max(stage(d) for d in deps)``,
        or stage 0 without dependencies, which is the earliest stage possible.

        Example:
            a -> c, f, b    b -> f    c -> f    g -> d    h -> b    e -> a, b

            Stages: [f, d], [c, b, g], [a, h], [e]

        Returns:
            Ordered list of stages; empty when the graph is empty

        Raises:
            CircularDependencyError: If any variable is part of, or depends
                on, a cycle (self-references included)
        """
        groups: list[VariableGroup] = []
        staged: set[str] = set()
        remaining = list(self.names)

        while remaining:
            ready = [name for name in remaining if self._dependencies[name] <= staged]

            if not ready:
                logger.error(
                    "Circular dependency detected",
                    unresolved=remaining,
                    stages_resolved=len(groups),
                )
                raise CircularDependencyError(remaining)

            groups.append(VariableGroup(variables=ready))
            staged.update(ready)
            remaining = [name for name in remaining if name not in staged]

            logger.debug("Stage resolved", stage=len(groups) - 1, variables=ready)

        logger.info(
            "Created build order",
            stage_count=len(groups),
            max_stage_size=max((len(group) for group in groups), default=0),
        )

        return groups

    def to_dot(self) -> str:
        """
        Generate DOT format representation of the graph.

        Edges point from dependency to dependent, i.e. in evaluation order.

        Returns:
            String containing the Graphviz DOT definition
        """
        lines = ["digraph VariableGraph {"]
        lines.append("    rankdir=LR;")
        lines.append("    node [shape=box style=filled fillcolor=\"#eeeeee\"];")

        for name in self.names:
            lines.append(f'    "{name}";')

        for name in self.names:
            for dep in sorted(self._dependencies[name]):
                lines.append(f'    "{dep}" -> "{name}";')

        lines.append("}")
        return "\n".join(lines)
