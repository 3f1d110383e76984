"""Build Order Report Generator.

Generates JSON reports describing one resolution of a dashboard's variables.
"""

import json
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from ..models.groups import VariableGroup
from ..models.variables import VariableDeclaration

logger = structlog.get_logger(__name__)


@dataclass
class OrderReport:
    """
    Structured report data for a build-order resolution.

    Attributes:
        source: Where the declarations came from (file path or label)
        generated_at: ISO timestamp of report creation
        variable_count: Number of declared variables
        computed_count: Number of computed (scanned) variables
        stage_count: Number of stages in the build order
        max_parallelism: Size of the largest stage
        stages: Stage contents, in evaluation order
        dependencies: Variable name -> referenced names
    """

    source: str
    generated_at: str
    variable_count: int
    computed_count: int
    stage_count: int
    max_parallelism: int
    stages: list[list[str]] = field(default_factory=list)
    dependencies: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ReportGenerator:
    """Generate reports for build-order resolutions."""

    def generate_report(
        self,
        source: str,
        variables: Sequence[VariableDeclaration],
        groups: Sequence[VariableGroup],
        dependencies: dict[str, list[str]],
    ) -> OrderReport:
        """
        Generate report object from a resolution.

        Args:
            source: File path or label of the declarations
            variables: Declared variables
            groups: Resolved stages
            dependencies: Dependency map from build_variable_dependencies()

        Returns:
            Populated OrderReport
        """
        return OrderReport(
            source=source,
            generated_at=datetime.now(timezone.utc).isoformat(),
            variable_count=len(variables),
            computed_count=sum(1 for variable in variables if variable.is_computed),
            stage_count=len(groups),
            max_parallelism=max((len(group) for group in groups), default=0),
            stages=[list(group.variables) for group in groups],
            dependencies={name: list(refs) for name, refs in dependencies.items()},
        )

    def write_json_report(self, report: OrderReport, output_path: Path) -> None:
        """
        Write report as JSON.

        Args:
            report: Build order report
            output_path: Output file path
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w") as f:
            json.dump(report.to_dict(), f, indent=2)

        logger.info("JSON report written", path=str(output_path))
