"""Variable loader for dashboard documents.

Overview:
--------
Reads variable declarations from a YAML or JSON file and validates each one
into a VariableDeclaration. Three document shapes are accepted:

1. A bare list of variables:
```
- kind: TextVariable
  spec: {name: env, value: prod}
```

2. A mapping with a ``variables`` key:
```
variables:
  - {name: env, kind: TextVariable, spec: {value: prod}}
```

3. A full dashboard document, variables under ``spec.variables``:
```
kind: Dashboard
metadata: {name: node-exporter}
spec:
  variables: [...]
  panels: {...}
```

Error Handling:
--------------
- FileNotFoundError: file doesn't exist
- VariableDefinitionError: unreadable document, unknown shape, or an entry
  that fails validation
- strict=True stops at the first invalid entry; strict=False collects errors
  in ``self.errors`` and skips the entry
"""

import json
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from ..constants import SUPPORTED_FILE_SUFFIXES
from ..models.variables import VariableDeclaration
from ..utils.exceptions import VariableDefinitionError

logger = structlog.get_logger(__name__)


class VariableLoader:
    """Load and validate variable declarations from a dashboard file."""

    def __init__(self, path: Path) -> None:
        """
        Initialize loader.

        Args:
            path: Path to a .yaml, .yml or .json file
        """
        self.path = Path(path)
        self.errors: list[VariableDefinitionError] = []

    def load(self, strict: bool = True) -> list[VariableDeclaration]:
        """
        Read the file and validate every variable entry.

        Args:
            strict: Raise on the first invalid entry instead of collecting errors

        Returns:
            Valid declarations, in document order

        Raises:
            FileNotFoundError: If the file does not exist
            VariableDefinitionError: If the document cannot be used, or an
                entry is invalid in strict mode
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Variable file not found: {self.path}")

        self.errors = []
        entries = self._extract_entries(self._read_document())

        variables: list[VariableDeclaration] = []
        for index, entry in enumerate(entries):
            location = f"variables[{index}]"
            try:
                variables.append(VariableDeclaration.model_validate(entry))
            except ValidationError as e:
                error = VariableDefinitionError(
                    self._format_validation_error(e), location=location, original_error=e
                )
                if strict:
                    raise error from e
                self.errors.append(error)
                logger.warning("Skipping invalid variable", location=location, error=str(error))

        logger.info(
            "Variables loaded",
            path=str(self.path),
            variables=len(variables),
            errors=len(self.errors),
        )

        return variables

    def _read_document(self) -> Any:
        suffix = self.path.suffix.lower()
        if suffix not in SUPPORTED_FILE_SUFFIXES:
            raise VariableDefinitionError(
                f"Unsupported file type '{suffix}', expected one of "
                f"{sorted(SUPPORTED_FILE_SUFFIXES)}",
                location=str(self.path),
            )

        try:
            text = self.path.read_text(encoding="utf-8")
            if suffix == ".json":
                return json.loads(text)
            return yaml.safe_load(text)
        except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise VariableDefinitionError(
                f"Invalid document: {e}", location=str(self.path), original_error=e
            ) from e

    def _extract_entries(self, document: Any) -> list[Any]:
        """Locate the variable list in any of the supported document shapes."""
        if document is None:
            return []

        if isinstance(document, list):
            return document

        if isinstance(document, dict):
            if "variables" in document:
                entries = document["variables"]
            elif isinstance(document.get("spec"), dict):
                entries = document["spec"].get("variables")
            else:
                entries = None

            if entries is None:
                return []
            if isinstance(entries, list):
                return entries

        raise VariableDefinitionError(
            f"Invalid document structure: expected a list of variables, "
            f"got {type(document).__name__}",
            location=str(self.path),
        )

    def _format_validation_error(self, error: ValidationError) -> str:
        """
        Format Pydantic validation error into human-readable message.

        Args:
            error: Pydantic ValidationError

        Returns:
            Formatted error message
        """
        errors = error.errors()
        if not errors:
            return str(error)

        first_error = errors[0]
        field = ".".join(str(loc) for loc in first_error["loc"]) or "variable"
        msg = first_error["msg"]

        if len(errors) > 1:
            return f"{field}: {msg} (and {len(errors) - 1} more errors)"
        return f"{field}: {msg}"

    def get_error_summary(self) -> str:
        """
        Get a summary of all errors encountered during loading.

        Returns:
            Human-readable error summary
        """
        if not self.errors:
            return "No errors"

        summary = [f"Found {len(self.errors)} errors:"]
        for error in self.errors[:10]:
            summary.append(f"  - {error}")

        if len(self.errors) > 10:
            summary.append(f"  ... and {len(self.errors) - 10} more errors")

        return "\n".join(summary)
