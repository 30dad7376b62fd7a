"""Coercion of raw control values to their declared kinds.

Raw values arrive exactly as collected from the form: strings, booleans
(checkboxes) or unset. Coercion either returns the converted value or raises
CoercionError; it never guesses.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Iterable, Optional, Union

from formcheck.validators.exceptions import CoercionError
from formcheck.validators.models import ValueKind

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")

_TRUE_STRINGS = {"true", "1", "on", "yes"}
_FALSE_STRINGS = {"false", "0", "off", "no"}


def is_empty(raw: Any) -> bool:
    """Absent, null or the empty string. Whitespace is a value."""
    return raw is None or (isinstance(raw, str) and raw == "")


def to_text(raw: Any) -> str:
    """String form of a raw value, as a text control would hold it."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (date, datetime)):
        return raw.isoformat()
    return str(raw)


def parse_number(raw: Any) -> Union[int, float]:
    """Parse a number: '12', ' 12 ', '1.5', '-3e2'. Rejects NaN and infinities."""
    if isinstance(raw, bool):
        raise CoercionError(f"Boolean {raw!r} is not a number")
    if isinstance(raw, (int, float)):
        value = raw
    elif isinstance(raw, str):
        text = re.sub(r"\s", "", raw)
        if not _NUMBER_RE.fullmatch(text):
            raise CoercionError(f"'{raw}' is not a number")
        try:
            if re.fullmatch(r"[+-]?\d+", text):
                value = int(text)
            else:
                value = float(text)
        except ValueError as e:
            # int() refuses strings beyond the interpreter's digit limit
            raise CoercionError(f"'{raw[:20]}...' is too long to be a number") from e
    else:
        raise CoercionError(f"Cannot coerce {type(raw).__name__} to number")

    if isinstance(value, float) and not math.isfinite(value):
        raise CoercionError(f"'{raw}' is not a finite number")
    return value


def parse_boolean(raw: Any) -> bool:
    """Parse a checkbox value: True/False, 'true', 'on', '0', ..."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise CoercionError(f"{raw!r} is not a valid boolean")


def parse_date(raw: Any, formats: Iterable[str] = ()) -> date:
    """Parse a date picker value.

    ISO dates and datetimes are always accepted; ``formats`` adds strptime
    formats tried in order afterwards.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise CoercionError(f"Cannot coerce {type(raw).__name__} to date")

    text = raw.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise CoercionError(f"Could not parse date from '{raw}'")


def coerce(raw: Any, kind: ValueKind, date_formats: Iterable[str] = ()) -> Any:
    """Convert a non-empty raw value to ``kind``.

    Raises:
        CoercionError: if the value cannot be represented as ``kind``.
    """
    kind = ValueKind(kind)
    if kind == ValueKind.STRING:
        return to_text(raw)
    if kind == ValueKind.NUMBER:
        return parse_number(raw)
    if kind == ValueKind.BOOLEAN:
        return parse_boolean(raw)
    return parse_date(raw, date_formats)


def try_coerce(raw: Any, kind: ValueKind, date_formats: Iterable[str] = ()) -> Optional[Any]:
    """Like coerce(), but returns None for empty or unconvertible values."""
    if is_empty(raw):
        return None
    try:
        return coerce(raw, kind, date_formats)
    except CoercionError:
        return None
