"""Form — holds a snapshot of control values and the messages shown beside them.

The form itself never decides validity; it asks the validator and forwards
coerced values to a submit sink when the whole snapshot passes.
"""

from typing import Any, Callable, Literal, Optional

import structlog

from formcheck.config import get_settings
from formcheck.validators import Schema, ValidationResult, Validator, validator as default_validator

logger = structlog.get_logger()

# Type alias for submit sinks
SubmitSink = Callable[[dict], None]

FormMode = Literal["onSubmit", "onChange"]


def log_submission(data: dict) -> None:
    """Default sink: log the coerced values."""
    logger.info("form_submitted", data=data)


class Form:
    """In-memory form state bound to a schema.

    In ``onChange`` mode every change revalidates the changed field and the
    fields that reference it. In ``onSubmit`` mode changes are only
    revalidated once a submit has been attempted.
    """

    def __init__(
        self,
        schema: Schema,
        mode: Optional[FormMode] = None,
        on_submit: SubmitSink = log_submission,
        validator: Optional[Validator] = None,
    ):
        self.schema = schema
        self.mode: FormMode = mode or get_settings().FORM_MODE
        self.on_submit = on_submit
        self.validator = validator or default_validator
        self._values: dict[str, Any] = {}
        self._errors: dict[str, str] = {}
        self.submit_count = 0

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)

    @property
    def errors(self) -> dict[str, str]:
        """Messages currently displayed, in schema order."""
        return {name: self._errors[name] for name in self.schema.names if name in self._errors}

    def message_for(self, name: str) -> Optional[str]:
        return self._errors.get(name)

    def change(self, name: str, value: Any) -> Optional[str]:
        """Record a control's new raw value.

        Returns:
            The field's current message (None if it passes or was not revalidated)

        Raises:
            KeyError: if the schema has no such field
        """
        if name not in self.schema:
            raise KeyError(name)
        self._values[name] = value

        if self.mode == "onChange" or self.submit_count > 0:
            # Dependents are only revalidated once they hold a value
            touched = [d for d in self.schema.dependents(name) if d in self._values]
            for field_name in [name, *touched]:
                self._revalidate(field_name)

        return self._errors.get(name)

    def handle_submit(self) -> ValidationResult:
        """Validate the whole snapshot; forward coerced values when valid."""
        self.submit_count += 1
        result = self.validator.validate(self.schema, self._values)

        if result:
            self._errors = {}
            logger.debug("form_valid", submit_count=self.submit_count)
            self.on_submit(result.values)
        else:
            self._errors = result.errors
            logger.info(
                "form_invalid",
                submit_count=self.submit_count,
                summary=result.summary,
            )
        return result

    def reset(self) -> None:
        """Clear values, messages and the submit count."""
        self._values.clear()
        self._errors.clear()
        self.submit_count = 0

    def _revalidate(self, name: str) -> None:
        message = self.validator.validate_field(self.schema, self._values, name)
        if message is None:
            self._errors.pop(name, None)
        else:
            self._errors[name] = message
