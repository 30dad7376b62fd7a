"""Validation models — value kinds, error codes, field errors and result structure.

All validation is deterministic: same input → same output, no hidden state.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ValueKind(str, Enum):
    """Semantic kind a raw form value is coerced to."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


class ErrorCode(str, Enum):
    """One code per constraint kind.

    Naming convention: the constraint tag, upper-cased.
    """

    REQUIRED = "REQUIRED"
    TYPE_CHECK = "TYPE_CHECK"
    MIN_LENGTH = "MIN_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"
    MIN_VALUE = "MIN_VALUE"
    MAX_VALUE = "MAX_VALUE"
    PATTERN = "PATTERN"
    EMAIL = "EMAIL"
    EQUALS_FIELD = "EQUALS_FIELD"
    ONE_OF = "ONE_OF"


class FieldError(BaseModel):
    """The first failing constraint of a single field."""

    field: str
    code: ErrorCode
    message: str

    model_config = {"use_enum_values": True}


class ValidationResult(BaseModel, ABC):
    """Common base for Valid / Invalid.

    Falsy when invalid, so callers can write ``if not result:``.
    """

    @property
    @abstractmethod
    def valid(self) -> bool:
        ...

    def __bool__(self) -> bool:
        return self.valid


class Valid(ValidationResult):
    """Every field passed; values are coerced to their declared kinds."""

    values: dict[str, Any] = Field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return True


class Invalid(ValidationResult):
    """At least one field failed. Only failing fields are present."""

    field_errors: list[FieldError] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return False

    @property
    def errors(self) -> dict[str, str]:
        """Field name → message, in schema order."""
        return {err.field: err.message for err in self.field_errors}

    @property
    def summary(self) -> dict[str, int]:
        """Count of failures by error code."""
        counts: dict[str, int] = {}
        for err in self.field_errors:
            counts[err.code] = counts.get(err.code, 0) + 1
        return counts

    @classmethod
    def build(cls, field_errors: list[FieldError]) -> "Invalid":
        return cls(field_errors=list(field_errors))
