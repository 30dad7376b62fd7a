"""Schema — ordered field rules, checked for consistency at construction.

A malformed schema (unknown referenced field, bad regex, constraint on the
wrong kind of field) is a configuration error and raises SchemaError here,
never during validation.
"""

import json
from typing import Any, Iterable, Iterator, Optional, Union

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from formcheck.config import get_settings
from formcheck.validators.coercion import coerce
from formcheck.validators.constraints import (
    Constraint,
    MaxLength,
    MaxValue,
    MinValue,
    MinLength,
    Required,
    TypeCheck,
)
from formcheck.validators.exceptions import CoercionError, SchemaError
from formcheck.validators.models import ValueKind


class FieldRule(BaseModel):
    """The set of constraints attached to one named input."""

    name: str = Field(min_length=1)
    kind: ValueKind = ValueKind.STRING
    constraints: list[Constraint] = Field(default_factory=list)
    default: Any = None

    model_config = {"frozen": True}

    @property
    def required(self) -> Optional[Required]:
        return next((c for c in self.constraints if isinstance(c, Required)), None)

    @property
    def type_check(self) -> Optional[TypeCheck]:
        return next((c for c in self.constraints if isinstance(c, TypeCheck)), None)

    @property
    def chain(self) -> list[Constraint]:
        """Constraints evaluated after the required and type checks, in declared order."""
        return [c for c in self.constraints if not isinstance(c, (Required, TypeCheck))]

    def references(self) -> set[str]:
        return {ref for c in self.constraints for ref in c.references()}

    def check_consistency(self, date_formats: Iterable[str] = ()) -> None:
        """Raise SchemaError for contradictions local to this rule.

        Literal date bounds are parsed with the same ``date_formats`` the
        validator accepts.
        """
        for tag in ("required", "type_check"):
            if sum(1 for c in self.constraints if c.kind == tag) > 1:
                raise SchemaError(f"Field '{self.name}' declares '{tag}' more than once")

        for constraint in self.constraints:
            if not constraint.supports(self.kind):
                raise SchemaError(
                    f"Constraint '{constraint.kind}' cannot apply to "
                    f"{self.kind.value} field '{self.name}'"
                )
            if isinstance(constraint, (MinValue, MaxValue)) and constraint.value is not None:
                try:
                    coerce(constraint.value, self.kind, date_formats)
                except CoercionError as e:
                    raise SchemaError(
                        f"Bound {constraint.value!r} on field '{self.name}' is not a {self.kind.value}"
                    ) from e

        mins = [c.n for c in self.constraints if isinstance(c, MinLength)]
        maxes = [c.n for c in self.constraints if isinstance(c, MaxLength)]
        if mins and maxes and max(mins) > min(maxes):
            raise SchemaError(
                f"Field '{self.name}' has min length {max(mins)} above max length {min(maxes)}"
            )


class Schema:
    """Ordered mapping of field name → FieldRule.

    Usage:
        schema = Schema([
            FieldRule(name="password", constraints=[Required(message="Password is required")]),
            FieldRule(name="confirm", constraints=[EqualsField(other="password")]),
        ])
    """

    def __init__(
        self,
        rules: Iterable[Union[FieldRule, dict]],
        date_formats: Optional[Iterable[str]] = None,
    ):
        if date_formats is None:
            date_formats = get_settings().DATE_FORMATS
        date_formats = tuple(date_formats)
        self._rules: dict[str, FieldRule] = {}
        for rule in rules:
            if isinstance(rule, dict):
                rule = _build_rule(rule)
            if rule.name in self._rules:
                raise SchemaError(f"Duplicate field '{rule.name}'")
            rule.check_consistency(date_formats)
            self._rules[rule.name] = rule

        for rule in self._rules.values():
            for ref in sorted(rule.references()):
                if ref not in self._rules:
                    raise SchemaError(f"Field '{rule.name}' references unknown field '{ref}'")
                if ref == rule.name:
                    raise SchemaError(f"Field '{rule.name}' references itself")

    @classmethod
    def from_config(cls, config: dict) -> "Schema":
        """Build from ``{"fields": [{"name": ..., "kind": ..., "constraints": [...]}]}``."""
        fields = config.get("fields")
        if not isinstance(fields, list):
            raise SchemaError("Schema config needs a 'fields' list")
        return cls(fields)

    @classmethod
    def from_json(cls, text: str) -> "Schema":
        try:
            config = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Cannot parse schema JSON: {e}") from e
        if not isinstance(config, dict):
            raise SchemaError("Schema JSON must be an object")
        return cls.from_config(config)

    def to_config(self) -> dict:
        return {"fields": [rule.model_dump(mode="json") for rule in self]}

    def dependents(self, name: str) -> list[str]:
        """Fields whose constraints reference ``name``, in schema order."""
        return [rule.name for rule in self if name in rule.references()]

    def __getitem__(self, name: str) -> FieldRule:
        return self._rules[name]

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[FieldRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def names(self) -> list[str]:
        return list(self._rules)


def _build_rule(config: dict) -> FieldRule:
    try:
        return FieldRule.model_validate(config)
    except PydanticValidationError as e:
        name = config.get("name", "<unnamed>")
        raise SchemaError(f"Invalid rule for field '{name}': {e}") from e
