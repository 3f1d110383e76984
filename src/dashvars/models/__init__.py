"""Data models for variable declarations and build-order stages."""

from .groups import VariableGroup
from .variables import VariableDeclaration, VariableKind

__all__ = [
    "VariableDeclaration",
    "VariableGroup",
    "VariableKind",
]
