"""Custom exceptions for the dashboard variable build-order engine.

Exception Hierarchy:
-------------------
DashvarsError (base)
├── VariableDefinitionError     # Malformed variable declaration document
├── DuplicateVariableError      # Two declarations share a name
├── UndefinedReferenceError     # A variable references a name nobody declares
└── CircularDependencyError     # Cycle (or self-reference) in the reference graph

Usage Guidelines:
----------------
1. All of these are deterministic, input-derived failures. Nothing here is
   worth retrying: the declaration list must change first.

2. Use DashvarsError as catch-all at the outer surface (CLI, API handlers).

3. The reference extractor never raises. Payloads it does not understand
   simply produce no references.
"""


class DashvarsError(Exception):
    """Base exception for all dashvars errors."""

    pass


class VariableDefinitionError(DashvarsError):
    """Raised when a variable declaration cannot be read or validated."""

    def __init__(
        self,
        message: str,
        location: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize VariableDefinitionError.

        Args:
            message: Error message.
            location: Optional position of the offending entry (e.g. "variables[2]").
            original_error: Optional original exception that caused this error.
        """
        super().__init__(message)
        self.location = location
        self.original_error = original_error

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.args[0]}"
        return str(self.args[0]) if self.args else "Invalid variable definition"


class DuplicateVariableError(DashvarsError):
    """Raised when the same variable name is declared more than once."""

    def __init__(self, names: list[str]) -> None:
        """
        Initialize DuplicateVariableError.

        Args:
            names: Sorted list of the names declared more than once.
        """
        super().__init__(f"Duplicate variable names found: {names}")
        self.names = names


class UndefinedReferenceError(DashvarsError):
    """
    Raised when a variable references a name with no matching declaration.

    Example:
        myVariable has the expression ``sum by($doe) (rate(up[5m]))`` but the
        dashboard declares no variable called ``doe``.
    """

    def __init__(self, name: str, referenced_by: str) -> None:
        """
        Initialize UndefinedReferenceError.

        Args:
            name: The referenced name that is not declared.
            referenced_by: Name of the variable whose spec holds the reference.
        """
        super().__init__(
            f'variable "{name}" is used in the variable "{referenced_by}" but not defined'
        )
        self.name = name
        self.referenced_by = referenced_by


class CircularDependencyError(DashvarsError):
    """
    Raised when the reference graph contains a cycle.

    Example cycles:
    1. a references $b, b references $a
    2. a references $a (self-reference)
    3. d references $d deep inside an otherwise valid graph

    The exact cycle path is not computed. ``remaining`` carries the names
    that could not be staged, which includes the cycle members and everything
    that depends on them.
    """

    def __init__(self, remaining: list[str] | None = None) -> None:
        """
        Initialize CircularDependencyError.

        Args:
            remaining: Names left unresolved when ordering stopped making progress.
        """
        super().__init__("circular dependency detected")
        self.remaining = remaining or []
