"""Pytest configuration for formcheck tests."""

import pytest

from formcheck.config import get_settings
from formcheck.signup import build_signup_schema


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings for every test so monkeypatched env vars apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def signup_schema():
    return build_signup_schema()


@pytest.fixture
def valid_values():
    """A signup snapshot that passes every rule."""
    return {
        "date": "2024-01-10",
        "endDate": "2024-01-15",
        "select": "Company One",
        "radio": "yes",
        "mobPhone": "10",
        "invoice": "INV12",
        "strictInvoice": "12345.SD",
        "fullname": "Ada Lovelace",
        "username": "adalove",
        "email": "ada@example.com",
        "password": "abc123",
        "confirmPassword": "abc123",
        "acceptTerms": True,
    }
