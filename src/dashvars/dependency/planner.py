"""Variable Planner - from declarations to an ordered build plan.

Purpose:
-------
Callers hand over the declared variables of a dashboard. The planner:

1. Scans every computed variable's spec for references (extractor)
2. Checks each reference against the declared names
3. Builds a VariableGraph and asks it for the stage ordering

Constant variables (TextVariable) are leaves: their spec is never scanned,
even if the constant value happens to contain "$something".

Example Workflow:
----------------
1. VariableLoader reads declarations from a dashboard file
2. build_variable_order() returns [VariableGroup, ...]
3. An external scheduler evaluates each group concurrently, waiting for a
   group to finish before starting the next
"""

from collections.abc import Sequence

import structlog

from ..models.groups import VariableGroup
from ..models.variables import VariableDeclaration
from ..utils.exceptions import DuplicateVariableError, UndefinedReferenceError
from .extractor import iter_references
from .graph import VariableGraph, find_duplicates

logger = structlog.get_logger(__name__)


def _declared_names(variables: Sequence[VariableDeclaration]) -> list[str]:
    names = [variable.name for variable in variables]
    dupes = find_duplicates(names)
    if dupes:
        raise DuplicateVariableError(dupes)
    return names


def build_variable_dependencies(
    variables: Sequence[VariableDeclaration],
) -> dict[str, list[str]]:
    """
    Map each computed variable to the variables it references.

    Only variables with at least one reference appear in the result. Each
    list is deduplicated and keeps first-seen order.

    Args:
        variables: Declared variables

    Returns:
        dict of variable name -> referenced names

    Raises:
        DuplicateVariableError: If a name is declared twice
        UndefinedReferenceError: On the first reference to an undeclared name
    """
    declared = set(_declared_names(variables))
    dependencies: dict[str, list[str]] = {}

    for variable in variables:
        if not variable.is_computed:
            continue

        refs = list(dict.fromkeys(iter_references(variable.spec)))
        for ref in refs:
            if ref not in declared:
                logger.warning(
                    "Undefined variable reference",
                    variable=variable.name,
                    reference=ref,
                )
                raise UndefinedReferenceError(ref, variable.name)

        if refs:
            dependencies[variable.name] = refs

    logger.debug(
        "Variable dependencies built",
        variables=len(variables),
        dependent_variables=len(dependencies),
    )

    return dependencies


def build_variable_graph(variables: Sequence[VariableDeclaration]) -> VariableGraph:
    """
    Build the reference graph for a list of declarations.

    Raises:
        DuplicateVariableError: If a name is declared twice
        UndefinedReferenceError: If a reference has no matching declaration
    """
    dependencies = build_variable_dependencies(variables)
    return VariableGraph([variable.name for variable in variables], dependencies)


def build_variable_order(variables: Sequence[VariableDeclaration]) -> list[VariableGroup]:
    """
    Compute the build order for a dashboard's variables.

    The result is rebuilt from scratch on every call; nothing is cached.

    Args:
        variables: Declared variables, in declaration order

    Returns:
        Ordered stages. Within a stage, names keep declaration order.

    Raises:
        DuplicateVariableError: If a name is declared twice
        UndefinedReferenceError: If a reference has no matching declaration
        CircularDependencyError: If the references form a cycle
    """
    logger.info("Resolving variable build order", variable_count=len(variables))

    graph = build_variable_graph(variables)
    return graph.build_order()
