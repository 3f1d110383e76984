"""Variable declaration models with Pydantic v2 validation."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from ..constants import NON_PAYLOAD_SPEC_KEYS


def strip_whitespace(v: Any) -> Any:
    """
    Strip whitespace from string values.

    Hand-edited dashboard files frequently carry stray spaces around names
    ("myVar " would never match a "$myVar" reference).

    Args:
        v: The value to process.

    Returns:
        Any: The processed value with whitespace stripped.
    """
    if isinstance(v, str):
        return v.strip()
    return v


class VariableKind(str, Enum):
    """How a variable obtains its value."""

    TEXT = "TextVariable"  # Constant value typed by the dashboard author
    LIST = "ListVariable"  # Values computed by a plugin (usually a query)

    @property
    def is_computed(self) -> bool:
        """Whether the variable spec must be scanned for references."""
        return self is VariableKind.LIST


class VariableDeclaration(BaseModel):
    """
    A single declared dashboard variable.

    Two input shapes are accepted:

    Flat form:
        {"name": "job", "kind": "ListVariable", "spec": {"plugin": {...}}}

    Dashboard document form (name lives inside the spec):
        {"kind": "ListVariable", "spec": {"name": "job", "display": {...}, "plugin": {...}}}

    In both forms, ``name`` and ``display`` are removed from the spec so that
    only the plugin-owned payload is left for reference scanning. In the
    document form the nested ``name`` becomes the variable name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Annotated[
        str,
        Field(min_length=1, description="Unique variable name"),
        BeforeValidator(strip_whitespace),
    ]
    kind: Annotated[VariableKind, Field(description="Constant or computed variable")]
    spec: Annotated[
        dict[str, Any],
        Field(default_factory=dict, description="Opaque plugin-owned payload"),
    ]

    @model_validator(mode="before")
    @classmethod
    def separate_payload(cls, data: Any) -> Any:
        """Lift a nested name and drop UI-only keys from the spec in either shape."""
        if not isinstance(data, dict):
            return data

        spec = data.get("spec")
        if not isinstance(spec, dict):
            return data

        normalized = dict(data)
        if "name" not in normalized and "name" in spec:
            normalized["name"] = spec["name"]
        normalized["spec"] = {k: v for k, v in spec.items() if k not in NON_PAYLOAD_SPEC_KEYS}
        return normalized

    @property
    def is_computed(self) -> bool:
        return self.kind.is_computed
