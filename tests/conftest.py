"""Pytest configuration and shared fixtures.

Fixtures are organized by category:
- Path fixtures: Sample dashboard files
- Data fixtures: Variable declarations built from query expressions
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from dashvars.models.variables import VariableDeclaration, VariableKind

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def sample_dir() -> Path:
    """Get path to sample documents directory."""
    return Path(__file__).parent.parent / "samples"


@pytest.fixture
def dashboard_yaml(sample_dir: Path) -> Path:
    """Get path to the full dashboard document sample."""
    return sample_dir / "dashboard.yaml"


@pytest.fixture
def variables_json(sample_dir: Path) -> Path:
    """Get path to the flat variable list sample."""
    return sample_dir / "variables.json"


# =============================================================================
# Data Fixtures
# =============================================================================


def query_variable(name: str, expr: str) -> VariableDeclaration:
    """Computed variable whose plugin runs a PromQL expression."""
    return VariableDeclaration(
        name=name,
        kind=VariableKind.LIST,
        spec={"plugin": {"kind": "PrometheusPromQLVariable", "spec": {"expr": expr}}},
    )


def text_variable(name: str, value: str = "myConstant") -> VariableDeclaration:
    """Constant variable."""
    return VariableDeclaration(name=name, kind=VariableKind.TEXT, spec={"value": value})


@pytest.fixture
def make_query_variable() -> Callable[[str, str], VariableDeclaration]:
    """Factory fixture for computed variables."""
    return query_variable


@pytest.fixture
def make_text_variable() -> Callable[..., VariableDeclaration]:
    """Factory fixture for constant variables."""
    return text_variable


@pytest.fixture
def prometheus_variables() -> list[VariableDeclaration]:
    """
    The canonical four-variable dashboard.

    myVariable -> doe, foo, bar
    bar        -> foo
    doe is a constant, foo has no references.
    """
    return [
        query_variable("myVariable", "sum by($doe) (rate($foo{label='$bar'}))"),
        query_variable("foo", "test"),
        query_variable("bar", "vector($foo)"),
        text_variable("doe"),
    ]
