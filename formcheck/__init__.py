"""formcheck — declarative validation of form fields."""

__version__ = "1.0.0"
