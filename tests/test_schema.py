"""Tests for schema construction and config loading."""

import json

import pytest

from formcheck.validators import (
    EqualsField,
    FieldRule,
    MaxLength,
    MaxValue,
    MinLength,
    MinValue,
    Required,
    Schema,
    SchemaError,
    TypeCheck,
    ValueKind,
    validate,
)


class TestSchemaConstruction:
    def test_preserves_insertion_order(self):
        schema = Schema([FieldRule(name="b"), FieldRule(name="a"), FieldRule(name="c")])
        assert schema.names == ["b", "a", "c"]
        assert [rule.name for rule in schema] == ["b", "a", "c"]
        assert len(schema) == 3
        assert "a" in schema

    def test_unknown_reference_rejected(self):
        with pytest.raises(SchemaError, match="unknown field 'password'"):
            Schema([FieldRule(name="confirm", constraints=[EqualsField(other="password")])])

    def test_self_reference_rejected(self):
        with pytest.raises(SchemaError, match="references itself"):
            Schema([FieldRule(name="x", kind=ValueKind.NUMBER, constraints=[MinValue(ref="x")])])

    def test_reference_may_point_forward(self):
        schema = Schema([
            FieldRule(name="confirm", constraints=[EqualsField(other="password")]),
            FieldRule(name="password"),
        ])
        assert schema.dependents("password") == ["confirm"]

    def test_duplicate_field_rejected(self):
        with pytest.raises(SchemaError, match="Duplicate"):
            Schema([FieldRule(name="a"), FieldRule(name="a")])

    def test_duplicate_required_rejected(self):
        with pytest.raises(SchemaError, match="more than once"):
            Schema([FieldRule(name="a", constraints=[Required(), Required(message="again")])])

    def test_bound_on_string_field_rejected(self):
        with pytest.raises(SchemaError, match="cannot apply"):
            Schema([FieldRule(name="a", constraints=[MinValue(value=3)])])

    def test_bound_of_wrong_kind_rejected(self):
        with pytest.raises(SchemaError, match="is not a date"):
            Schema([FieldRule(name="d", kind=ValueKind.DATE, constraints=[MinValue(value="soon")])])

    def test_literal_date_bound_uses_configured_formats(self):
        schema = Schema(
            [FieldRule(name="d", kind=ValueKind.DATE, constraints=[MinValue(value="10/01/2024")])],
            date_formats=["%d/%m/%Y"],
        )
        assert validate(schema, {"d": "2024-01-09"}).errors == {
            "d": "d must be greater than or equal to 10/01/2024"
        }
        assert validate(schema, {"d": "2024-01-10"})

    def test_literal_date_bound_defaults_to_settings_formats(self, monkeypatch):
        monkeypatch.setenv("DATE_FORMATS", '["%m.%d.%Y"]')
        schema = Schema([FieldRule(name="d", kind=ValueKind.DATE, constraints=[MaxValue(value="01.10.2024")])])
        assert schema["d"].constraints[0].value == "01.10.2024"

    def test_inverted_lengths_rejected(self):
        with pytest.raises(SchemaError, match="above max length"):
            Schema([FieldRule(name="a", constraints=[MinLength(n=10), MaxLength(n=5)])])

    def test_rule_helpers(self):
        rule = FieldRule(name="n", kind=ValueKind.NUMBER, constraints=[
            MinValue(value=1), Required(), TypeCheck(message="NaN"),
        ])
        assert rule.required is not None
        assert rule.type_check.message == "NaN"
        assert [c.kind for c in rule.chain] == ["min_value"]


class TestSchemaConfig:
    CONFIG = {
        "fields": [
            {"name": "password", "constraints": [
                {"kind": "required", "message": "Password is required"},
                {"kind": "min_length", "n": 6},
            ]},
            {"name": "confirmPassword", "constraints": [
                {"kind": "equals_field", "other": "password", "message": "Password does not match"},
            ]},
            {"name": "age", "kind": "number", "constraints": [
                {"kind": "min_value", "value": 18},
            ]},
        ]
    }

    def test_from_config(self):
        schema = Schema.from_config(self.CONFIG)
        assert schema.names == ["password", "confirmPassword", "age"]
        assert schema["age"].kind == ValueKind.NUMBER
        assert isinstance(schema["confirmPassword"].constraints[0], EqualsField)

    def test_from_json(self):
        schema = Schema.from_json(json.dumps(self.CONFIG))
        assert len(schema) == 3

    def test_config_round_trip(self):
        schema = Schema.from_config(self.CONFIG)
        again = Schema.from_config(schema.to_config())
        assert again.to_config() == schema.to_config()

    def test_invalid_json(self):
        with pytest.raises(SchemaError, match="Cannot parse"):
            Schema.from_json("{not json")

    def test_missing_fields_list(self):
        with pytest.raises(SchemaError, match="'fields'"):
            Schema.from_config({"rules": []})

    def test_bad_rule_reports_field_name(self):
        with pytest.raises(SchemaError, match="'age'"):
            Schema.from_config({"fields": [
                {"name": "age", "kind": "number", "constraints": [{"kind": "between"}]},
            ]})

    def test_unknown_kind(self):
        with pytest.raises(SchemaError):
            Schema.from_config({"fields": [{"name": "a", "kind": "colour"}]})
