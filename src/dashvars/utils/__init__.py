"""Utility functions and exceptions."""

from .exceptions import (
    CircularDependencyError,
    DashvarsError,
    DuplicateVariableError,
    UndefinedReferenceError,
    VariableDefinitionError,
)

__all__ = [
    "DashvarsError",
    "VariableDefinitionError",
    "DuplicateVariableError",
    "UndefinedReferenceError",
    "CircularDependencyError",
]
