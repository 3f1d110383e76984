"""Tests for variable and group models."""

import pytest
from pydantic import ValidationError

from dashvars.models.groups import VariableGroup
from dashvars.models.variables import VariableDeclaration, VariableKind


class TestVariableKind:
    """Test VariableKind enum."""

    def test_values(self):
        """Test wire values."""
        assert VariableKind.TEXT.value == "TextVariable"
        assert VariableKind.LIST.value == "ListVariable"

    def test_is_computed(self):
        """Test only list variables are computed."""
        assert VariableKind.LIST.is_computed is True
        assert VariableKind.TEXT.is_computed is False


class TestVariableDeclaration:
    """Test VariableDeclaration validation."""

    def test_flat_form(self):
        """Test name/kind/spec at top level."""
        variable = VariableDeclaration.model_validate(
            {"name": "job", "kind": "ListVariable", "spec": {"expr": "up"}}
        )

        assert variable.name == "job"
        assert variable.kind == VariableKind.LIST
        assert variable.spec == {"expr": "up"}
        assert variable.is_computed is True

    def test_document_form_lifts_name(self):
        """Test name nested in spec is lifted and UI-only keys dropped."""
        variable = VariableDeclaration.model_validate(
            {
                "kind": "ListVariable",
                "spec": {
                    "name": "instance",
                    "display": {"name": "Instance of $job"},
                    "allowMultiple": True,
                    "plugin": {"kind": "PrometheusLabelValuesVariable", "spec": {}},
                },
            }
        )

        assert variable.name == "instance"
        assert "name" not in variable.spec
        assert "display" not in variable.spec
        assert variable.spec["allowMultiple"] is True
        assert variable.spec["plugin"]["kind"] == "PrometheusLabelValuesVariable"

    def test_flat_form_drops_ui_keys(self):
        """Test display text is removed from a flat spec as well."""
        variable = VariableDeclaration.model_validate(
            {
                "name": "instance",
                "kind": "ListVariable",
                "spec": {"name": "ignored", "display": {"name": "Instance of $job"}, "expr": "up"},
            }
        )

        assert variable.name == "instance"
        assert variable.spec == {"expr": "up"}

    def test_name_whitespace_stripped(self):
        """Test stray whitespace around names."""
        variable = VariableDeclaration(name="  job ", kind=VariableKind.TEXT)

        assert variable.name == "job"

    def test_spec_defaults_to_empty(self):
        """Test spec is optional."""
        assert VariableDeclaration(name="a", kind=VariableKind.TEXT).spec == {}

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name):
        """Test names must be non-empty."""
        with pytest.raises(ValidationError):
            VariableDeclaration(name=name, kind=VariableKind.TEXT)

    def test_unknown_kind_rejected(self):
        """Test kind must be a known variable kind."""
        with pytest.raises(ValidationError):
            VariableDeclaration.model_validate({"name": "a", "kind": "MagicVariable"})

    def test_missing_name_rejected(self):
        """Test a declaration without any name."""
        with pytest.raises(ValidationError):
            VariableDeclaration.model_validate({"kind": "TextVariable", "spec": {"value": "x"}})

    def test_frozen(self):
        """Test declarations are immutable."""
        variable = VariableDeclaration(name="a", kind=VariableKind.TEXT)

        with pytest.raises(ValidationError):
            variable.name = "b"


class TestVariableGroup:
    """Test VariableGroup container behaviour."""

    def test_container_protocol(self):
        """Test len, iteration and membership."""
        group = VariableGroup(variables=["a", "b"])

        assert len(group) == 2
        assert list(group) == ["a", "b"]
        assert "a" in group
        assert "z" not in group

    def test_to_dict(self):
        """Test serialization."""
        assert VariableGroup(variables=["x"]).to_dict() == {"variables": ["x"]}

    def test_default_empty(self):
        """Test default group is empty."""
        assert len(VariableGroup()) == 0
