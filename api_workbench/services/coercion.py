"""
Value coercion rules shared by assertions and scripts.

Assertions compare with *loose* equality: a number and a numeric string
are equal, booleans compare as 1/0, ``None`` only equals ``None``, and a
list or object compared with a primitive is compared through its text
form. Scripts use *strict* equality, which never crosses types (except
between int and float).
"""

import json
import math
from typing import Any


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_text(value: Any) -> str:
    """Render a value the way it should appear in messages and substring tests."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def to_number(value: Any) -> float:
    """Convert a value to a number; unconvertible values become NaN."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    if isinstance(value, (list, tuple)):
        return to_number(to_text(value))
    return math.nan


def loose_equals(actual: Any, expected: Any) -> bool:
    if actual is None or expected is None:
        return actual is None and expected is None

    actual_is_container = isinstance(actual, (list, tuple, dict))
    expected_is_container = isinstance(expected, (list, tuple, dict))
    if actual_is_container and expected_is_container:
        return actual == expected
    if actual_is_container:
        return loose_equals(to_text(actual), expected)
    if expected_is_container:
        return loose_equals(actual, to_text(expected))

    if isinstance(actual, str) and isinstance(expected, str):
        return actual == expected
    if isinstance(actual, bool) and isinstance(expected, bool):
        return actual == expected

    # Mixed primitives compare numerically
    return to_number(actual) == to_number(expected)


def strict_equals(actual: Any, expected: Any) -> bool:
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    if is_number(actual) and is_number(expected):
        return actual == expected
    if type(actual) is not type(expected):
        return False
    return actual == expected


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_json(text: str) -> Any:
    """Parse strict JSON; NaN, Infinity and -Infinity are rejected."""
    return json.loads(text, parse_constant=_reject_constant)
