"""Signup form — field rules and control options of the reference signup page.

Messages are shown to the user verbatim, typos included.
"""

from formcheck.validators import (
    Email,
    EqualsField,
    FieldRule,
    MaxLength,
    MaxValue,
    MinLength,
    MinValue,
    OneOf,
    Pattern,
    Required,
    Schema,
    TypeCheck,
    ValueKind,
)

# ──────────────────────────────────────────────────────────────────────
# CONTROL OPTIONS
# ──────────────────────────────────────────────────────────────────────

SELECT_OPTIONS: list[tuple[str, str]] = [
    ("", "Select..."),
    ("Company One", "Company One"),
    ("Company Two", "Company Two"),
]

RADIO_OPTIONS: list[tuple[str, str]] = [
    ("yes", "Yes"),
    ("no", "No"),
]

# 8+ characters containing five digits in a row, a dot and a capital letter,
# e.g. 12345.SD
STRICT_INVOICE_PATTERN = r"^(?=.{8,})(?=.*\d{5})(?=.*[.])(?=.*[A-Z]).*$"


# ──────────────────────────────────────────────────────────────────────
# FIELD RULES
# ──────────────────────────────────────────────────────────────────────

def build_signup_schema() -> Schema:
    """Rules for every control on the signup page, in page order."""
    return Schema([
        FieldRule(name="date", kind=ValueKind.DATE, constraints=[
            Required(message="Date Required"),
            TypeCheck(message="Invalid Date"),
        ]),
        FieldRule(name="endDate", kind=ValueKind.DATE, constraints=[
            MinValue(ref="date", message="Must be later than start date"),
            Required(message="End date must be selected"),
            TypeCheck(message="Invalid Date"),
        ]),
        FieldRule(name="select", constraints=[
            Required(message="A selection is required"),
        ]),
        FieldRule(name="radio", constraints=[
            Required(message="A selection is required"),
        ]),
        # Numeric bounds, not digit counts: 8 <= mobPhone <= 12
        FieldRule(name="mobPhone", kind=ValueKind.NUMBER, constraints=[
            Required(message="Phone number is required"),
            MinValue(value=8, message="Needs to be at least 8 digits"),
            MaxValue(value=12, message="Max of 12 digits"),
            TypeCheck(message="Phone number nust be a number"),
        ]),
        FieldRule(name="invoice", constraints=[
            Required(message="Invoice number is required"),
            MinLength(n=5, message="Needs to be at least 5 Characters"),
        ]),
        FieldRule(name="strictInvoice", constraints=[
            Required(message="invoice is required"),
            Pattern(regex=STRICT_INVOICE_PATTERN, message="Must follow format of 12345.SD"),
            MaxLength(n=8, message="Max length of 8"),
        ]),
        FieldRule(name="fullname", constraints=[
            Required(message="Fullname is required"),
        ]),
        FieldRule(name="username", constraints=[
            Required(message="Username is required"),
            MinLength(n=6, message="Username must be at least 6 characters"),
            MaxLength(n=20, message="Username must not exceed 20 characters"),
        ]),
        FieldRule(name="email", constraints=[
            Required(message="Email is required"),
            Email(message="Email is invalid"),
        ]),
        FieldRule(name="password", constraints=[
            Required(message="Password is required"),
            MinLength(n=6, message="Password must be at least 6 characters"),
            MaxLength(n=40, message="Password must not exceed 40 characters"),
        ]),
        FieldRule(name="confirmPassword", constraints=[
            Required(message="Confirm Password is required"),
            EqualsField(other="password", message="Password does not match"),
        ]),
        FieldRule(name="acceptTerms", kind=ValueKind.BOOLEAN, constraints=[
            OneOf(allowed=[True], message="Confirm you have read and understood the terms and conditions"),
        ]),
    ])
