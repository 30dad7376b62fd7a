"""Validator — evaluates a schema against a snapshot of raw form values.

This is the main entry point for field validation. Each field is checked
independently (except where a constraint references a sibling) and yields at
most one message: the first failing constraint in declared order.

Usage:
    result = validator.validate(schema, values)
    if not result:
        # render result.errors next to each control
"""

import time
from typing import Any, Iterable, Mapping, Optional

import structlog

from formcheck.config import get_settings
from formcheck.validators.coercion import coerce, is_empty
from formcheck.validators.constraints import FieldContext
from formcheck.validators.exceptions import CoercionError
from formcheck.validators.models import (
    ErrorCode,
    FieldError,
    Invalid,
    Valid,
    ValidationResult,
    ValueKind,
)
from formcheck.validators.schema import FieldRule, Schema

logger = structlog.get_logger()

_KIND_LABELS = {
    ValueKind.STRING: "string",
    ValueKind.NUMBER: "number",
    ValueKind.BOOLEAN: "boolean",
    ValueKind.DATE: "date",
}


class Validator:
    """Stateless evaluator of field rules.

    Design principles:
        - Pure: same schema and values → same result
        - Never raises for a well-formed schema
        - Cross-field constraints read raw sibling values, never coerced ones
    """

    def __init__(self, date_formats: Optional[Iterable[str]] = None):
        """Initialize with extra accepted date formats.

        Args:
            date_formats: strptime formats tried after ISO parsing. If None,
                uses the DATE_FORMATS setting.
        """
        if date_formats is None:
            date_formats = get_settings().DATE_FORMATS
        self.date_formats = tuple(date_formats)

    def validate(self, schema: Schema, values: Mapping[str, Any]) -> ValidationResult:
        """Validate every field of the schema.

        Args:
            schema: The field rules
            values: Field name → raw value as captured from the controls

        Returns:
            Valid with coerced values, or Invalid with one message per failing field
        """
        start_time = time.perf_counter()

        coerced: dict[str, Any] = {}
        field_errors: list[FieldError] = []

        for rule in schema:
            error, value = self._check_field(rule, values)
            if error is not None:
                field_errors.append(error)
            else:
                coerced[rule.name] = value

        result: ValidationResult
        if field_errors:
            result = Invalid.build(field_errors)
        else:
            result = Valid(values=coerced)

        logger.debug(
            "validation_complete",
            valid=result.valid,
            fields=len(schema),
            failed=[e.field for e in field_errors],
            duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
        )
        return result

    def validate_field(self, schema: Schema, values: Mapping[str, Any], name: str) -> Optional[str]:
        """Validate a single field against the full snapshot.

        Returns:
            The field's error message, or None if it passes

        Raises:
            KeyError: if the schema has no such field
        """
        error, _ = self._check_field(schema[name], values)
        return error.message if error is not None else None

    def _check_field(self, rule: FieldRule, values: Mapping[str, Any]) -> tuple[Optional[FieldError], Any]:
        """Run one field's checks. Returns (error, coerced value)."""
        raw = values.get(rule.name)
        if is_empty(raw) and rule.default is not None:
            raw = rule.default

        # 1. Required
        if is_empty(raw):
            required = rule.required
            if required is not None:
                return self._fail(rule, required.code, required.message_for(rule.name)), None
            return None, None

        # 2. Type
        try:
            value = coerce(raw, rule.kind, self.date_formats)
        except CoercionError as e:
            logger.debug("coercion_failed", field=rule.name, kind=rule.kind.value, error=str(e))
            type_check = rule.type_check
            message = (
                type_check.message_for(rule.name)
                if type_check is not None
                else f"{rule.name} must be a `{_KIND_LABELS[rule.kind]}` type"
            )
            return self._fail(rule, ErrorCode.TYPE_CHECK, message), None

        # 3. Remaining constraints, short-circuit
        ctx = FieldContext(
            name=rule.name,
            kind=rule.kind,
            raw=raw,
            value=value,
            values=values,
            date_formats=self.date_formats,
        )
        for constraint in rule.chain:
            try:
                passed = constraint.check(ctx)
            except Exception as e:
                logger.error(
                    "constraint_failed",
                    field=rule.name,
                    constraint=constraint.kind,
                    error=str(e),
                )
                # A crashing constraint counts as a failure of that constraint
                passed = False
            if not passed:
                return self._fail(rule, constraint.code, constraint.message_for(rule.name)), None

        return None, value

    @staticmethod
    def _fail(rule: FieldRule, code: ErrorCode, message: str) -> FieldError:
        return FieldError(field=rule.name, code=code, message=message)


# Module-level singleton
validator = Validator()


def validate(schema: Schema, values: Mapping[str, Any]) -> ValidationResult:
    """Validate ``values`` against ``schema`` with the default validator."""
    return validator.validate(schema, values)
