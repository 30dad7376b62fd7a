"""Constraints — tagged variants, each a single pass/fail check with a message.

Every constraint is a pydantic model carrying a ``kind`` tag, so a field's
constraint chain can be declared in Python or loaded from plain config:

    {"kind": "min_length", "n": 6, "message": "Too short"}

Contract for check():
    - deterministic: same context → same outcome
    - receives the full raw values mapping for cross-field references
    - returns True when the value passes
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from formcheck.validators.coercion import is_empty, to_text, try_coerce
from formcheck.validators.models import ErrorCode, ValueKind

# Local part, @, dotted domain ending in a 2+ letter TLD
EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

_MISSING = object()


@dataclass(frozen=True)
class FieldContext:
    """Everything a constraint may look at while checking one field."""

    name: str
    kind: ValueKind
    raw: Any
    value: Any
    values: Mapping[str, Any] = field(default_factory=dict)
    date_formats: tuple[str, ...] = ()


class BaseConstraint(BaseModel, ABC):
    """Abstract base for all constraints."""

    kind: str
    message: Optional[str] = None

    model_config = {"frozen": True}

    @property
    @abstractmethod
    def code(self) -> ErrorCode:
        ...

    @abstractmethod
    def check(self, ctx: FieldContext) -> bool:
        """Return True when ``ctx.value`` satisfies the constraint."""
        ...

    def default_message(self, field_name: str) -> str:
        return f"{field_name} is invalid"

    def message_for(self, field_name: str) -> str:
        """Declared message, or a generic one naming the field."""
        return self.message if self.message is not None else self.default_message(field_name)

    def references(self) -> list[str]:
        """Names of other fields this constraint reads."""
        return []

    def supports(self, kind: ValueKind) -> bool:
        """Whether the constraint makes sense on a field of ``kind``."""
        return True


class Required(BaseConstraint):
    kind: Literal["required"] = "required"

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.REQUIRED

    def check(self, ctx: FieldContext) -> bool:
        return not is_empty(ctx.raw)

    def default_message(self, field_name: str) -> str:
        return f"{field_name} is a required field"


class TypeCheck(BaseConstraint):
    """Message used when coercion to the field's kind fails.

    Coercion happens before the constraint chain runs, so by the time check()
    is called the value is already of the right kind.
    """

    kind: Literal["type_check"] = "type_check"

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.TYPE_CHECK

    def check(self, ctx: FieldContext) -> bool:
        return True

    def default_message(self, field_name: str) -> str:
        return f"{field_name} has an invalid value"


class MinLength(BaseConstraint):
    """Character count of the raw string form, numeric fields included."""

    kind: Literal["min_length"] = "min_length"
    n: int = Field(ge=0)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.MIN_LENGTH

    def check(self, ctx: FieldContext) -> bool:
        return len(to_text(ctx.raw)) >= self.n

    def default_message(self, field_name: str) -> str:
        return f"{field_name} must be at least {self.n} characters"


class MaxLength(BaseConstraint):
    kind: Literal["max_length"] = "max_length"
    n: int = Field(ge=0)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.MAX_LENGTH

    def check(self, ctx: FieldContext) -> bool:
        return len(to_text(ctx.raw)) <= self.n

    def default_message(self, field_name: str) -> str:
        return f"{field_name} must be at most {self.n} characters"


class _Bound(BaseConstraint):
    """Shared logic for MinValue / MaxValue.

    The bound is either a literal (``value``) or another field (``ref``). A
    referenced field's raw value is coerced to this field's kind; while it is
    empty or unparseable the bound is unavailable and the check passes.
    """

    value: Union[int, float, date, str, None] = None
    ref: Optional[str] = None

    @model_validator(mode="after")
    def check_one_bound(self):
        if (self.value is None) == (self.ref is None):
            raise ValueError(f"{self.kind} needs exactly one of 'value' or 'ref'")
        return self

    def references(self) -> list[str]:
        return [self.ref] if self.ref else []

    def supports(self, kind: ValueKind) -> bool:
        return ValueKind(kind) in (ValueKind.NUMBER, ValueKind.DATE)

    def bound(self, ctx: FieldContext) -> Any:
        raw = ctx.values.get(self.ref) if self.ref else self.value
        return try_coerce(raw, ctx.kind, ctx.date_formats)

    def _describe(self) -> str:
        return f"'{self.ref}'" if self.ref else str(self.value)


class MinValue(_Bound):
    kind: Literal["min_value"] = "min_value"

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.MIN_VALUE

    def check(self, ctx: FieldContext) -> bool:
        bound = self.bound(ctx)
        return bound is None or ctx.value >= bound

    def default_message(self, field_name: str) -> str:
        return f"{field_name} must be greater than or equal to {self._describe()}"


class MaxValue(_Bound):
    kind: Literal["max_value"] = "max_value"

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.MAX_VALUE

    def check(self, ctx: FieldContext) -> bool:
        bound = self.bound(ctx)
        return bound is None or ctx.value <= bound

    def default_message(self, field_name: str) -> str:
        return f"{field_name} must be less than or equal to {self._describe()}"


class Pattern(BaseConstraint):
    """Anchored match over the whole string value."""

    kind: Literal["pattern"] = "pattern"
    regex: str
    _compiled: re.Pattern = PrivateAttr()

    @field_validator("regex")
    @classmethod
    def check_compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regular expression {v!r}: {e}") from e
        return v

    def model_post_init(self, __context: Any) -> None:
        self._compiled = re.compile(self.regex)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.PATTERN

    def check(self, ctx: FieldContext) -> bool:
        return self._compiled.fullmatch(to_text(ctx.value)) is not None

    def default_message(self, field_name: str) -> str:
        return f'{field_name} must match the following: "{self.regex}"'


class Email(BaseConstraint):
    kind: Literal["email"] = "email"

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.EMAIL

    def check(self, ctx: FieldContext) -> bool:
        return EMAIL_RE.fullmatch(to_text(ctx.value)) is not None

    def supports(self, kind: ValueKind) -> bool:
        return ValueKind(kind) == ValueKind.STRING

    def default_message(self, field_name: str) -> str:
        return f"{field_name} must be a valid email"


class EqualsField(BaseConstraint):
    """Coerced value must equal another field's raw submitted value."""

    kind: Literal["equals_field"] = "equals_field"
    other: str

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.EQUALS_FIELD

    def check(self, ctx: FieldContext) -> bool:
        other = ctx.values.get(self.other, _MISSING)
        if other is _MISSING:
            return False
        return ctx.value == other

    def references(self) -> list[str]:
        return [self.other]

    def default_message(self, field_name: str) -> str:
        return f"{field_name} must match '{self.other}'"


class OneOf(BaseConstraint):
    kind: Literal["one_of"] = "one_of"
    allowed: list[Any] = Field(min_length=1)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.ONE_OF

    def check(self, ctx: FieldContext) -> bool:
        # True == 1 in Python; booleans only match booleans
        return any(
            ctx.value == allowed and isinstance(ctx.value, bool) == isinstance(allowed, bool)
            for allowed in self.allowed
        )

    def default_message(self, field_name: str) -> str:
        choices = ", ".join(to_text(a) for a in self.allowed)
        return f"{field_name} must be one of the following values: {choices}"


Constraint = Annotated[
    Union[
        Required,
        TypeCheck,
        MinLength,
        MaxLength,
        MinValue,
        MaxValue,
        Pattern,
        Email,
        EqualsField,
        OneOf,
    ],
    Field(discriminator="kind"),
]
