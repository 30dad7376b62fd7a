"""Field validation engine — declarative rules evaluated against raw form values.

Usage:
    from formcheck.validators import validate

    result = validate(schema, values)
    if not result:
        # show result.errors next to each control
"""

from formcheck.validators.constraints import (
    Constraint,
    Email,
    EqualsField,
    MaxLength,
    MaxValue,
    MinLength,
    MinValue,
    OneOf,
    Pattern,
    Required,
    TypeCheck,
)
from formcheck.validators.engine import Validator, validate, validator
from formcheck.validators.exceptions import CoercionError, SchemaError
from formcheck.validators.models import (
    ErrorCode,
    FieldError,
    Invalid,
    Valid,
    ValidationResult,
    ValueKind,
)
from formcheck.validators.schema import FieldRule, Schema

__all__ = [
    "Validator",
    "validator",
    "validate",
    "Schema",
    "FieldRule",
    "Constraint",
    "Required",
    "TypeCheck",
    "MinLength",
    "MaxLength",
    "MinValue",
    "MaxValue",
    "Pattern",
    "Email",
    "EqualsField",
    "OneOf",
    "ValidationResult",
    "Valid",
    "Invalid",
    "FieldError",
    "ErrorCode",
    "ValueKind",
    "SchemaError",
    "CoercionError",
]
