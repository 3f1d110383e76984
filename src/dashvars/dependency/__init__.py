"""Dependency resolution for dashboard variables."""

from .extractor import extract_references, iter_references
from .graph import VariableGraph
from .planner import build_variable_dependencies, build_variable_graph, build_variable_order

__all__ = [
    "VariableGraph",
    "build_variable_dependencies",
    "build_variable_graph",
    "build_variable_order",
    "extract_references",
    "iter_references",
]
