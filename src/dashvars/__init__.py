"""dashvars - Dashboard variable dependency resolution and build-order engine."""

__version__ = "0.3.0"

from .cli import app  # noqa: E402
from .config import DashvarsConfig  # noqa: E402
from .dependency import build_variable_order, extract_references  # noqa: E402

__all__ = ["app", "DashvarsConfig", "build_variable_order", "extract_references"]
