"""Core input handling."""

from .loader import VariableLoader

__all__ = ["VariableLoader"]
