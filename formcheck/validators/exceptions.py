"""Validation exceptions."""


class SchemaError(ValueError):
    """A schema is malformed. Raised at construction, never during validation."""


class CoercionError(ValueError):
    """A raw value cannot be converted to its declared kind."""
