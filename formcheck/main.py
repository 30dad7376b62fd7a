"""formcheck — declarative form-field validation.

Logging setup and the signup form factory used by the presentation layer.
"""

import logging
from typing import Optional

import structlog

from formcheck.config import get_settings
from formcheck.form import Form, FormMode, SubmitSink, log_submission
from formcheck.signup import build_signup_schema


def configure_logging() -> None:
    """Configure structured logging from DEBUG / LOG_LEVEL."""
    settings = get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def create_signup_form(mode: Optional[FormMode] = None, on_submit: SubmitSink = log_submission) -> Form:
    """Signup form with the reference rules, ready to receive control values."""
    return Form(build_signup_schema(), mode=mode, on_submit=on_submit)
