"""
Assertion evaluation.

Checks one declarative ``TestAssertion`` against a captured response. An
assertion never raises: unexpected errors are reported as a failed outcome
carrying the exception message, so one broken assertion cannot abort the
evaluation of the others.
"""

import logging
import re
from typing import Any

from ..schemas.response import ResponseDescriptor
from ..schemas.testing import AssertionOutcome, TestAssertion
from .coercion import is_number, loose_equals, parse_json, to_number, to_text

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Response body is not valid JSON"

# "items[0]" style path segment
INDEXED_SEGMENT = re.compile(r'^(\w+)\[(\d+)\]$')


class _InvalidJSON(Exception):
    pass


def _child(container: Any, key: str | int) -> Any:
    if isinstance(container, dict):
        return container.get(key) if isinstance(key, str) else None
    if isinstance(container, list):
        if isinstance(key, str):
            if not key.isdigit():
                return None
            key = int(key)
        return container[key] if 0 <= key < len(container) else None
    return None


def get_value_from_path(data: Any, path: str) -> Any:
    """
    Traverse parsed JSON with a dot-separated path.

    Segments may index arrays either as ``name[index]`` or as a bare
    numeric segment. Missing keys yield ``None``.

    Example:
        >>> get_value_from_path({"items": [{"id": 7}]}, "items[0].id")
        7
    """
    current = data
    for part in path.split("."):
        if current is None:
            return None
        match = INDEXED_SEGMENT.match(part)
        if match:
            current = _child(_child(current, match.group(1)), int(match.group(2)))
        else:
            current = _child(current, part)
    return current


def get_header(headers: dict[str, str], name: str) -> str | None:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _actual_value(assertion: TestAssertion, response: ResponseDescriptor) -> Any:
    if assertion.type == "status":
        return response.status

    if assertion.type == "json":
        try:
            body = parse_json(response.body)
        except (TypeError, ValueError):
            raise _InvalidJSON() from None
        if assertion.property:
            return get_value_from_path(body, assertion.property)
        return body

    if assertion.type == "header":
        if not assertion.property:
            return None
        return get_header(response.headers, assertion.property)

    if assertion.type == "responseTime":
        return response.response_time

    raise ValueError(f"Unknown assertion type: {assertion.type}")


def _check(assertion: TestAssertion, actual: Any) -> str | None:
    """Apply the assertion operator. Returns a failure message or None."""
    kind = assertion.type
    expected = assertion.expected
    operator = assertion.operator

    if operator == "equals":
        if not loose_equals(actual, expected):
            return f"Expected {kind} to equal {to_text(expected)}, but got {to_text(actual)}"

    elif operator == "contains":
        if isinstance(actual, (list, tuple)):
            found = any(loose_equals(item, expected) for item in actual)
        else:
            found = to_text(expected) in to_text(actual)
        if not found:
            return f"Expected {kind} to contain {to_text(expected)}"

    elif operator == "exists":
        if actual is None:
            return f"Expected {kind} to exist"

    elif operator == "greaterThan":
        if not is_number(actual) or not actual > to_number(expected):
            return f"Expected {kind} to be greater than {to_text(expected)}, but got {to_text(actual)}"

    elif operator == "lessThan":
        if not is_number(actual) or not actual < to_number(expected):
            return f"Expected {kind} to be less than {to_text(expected)}, but got {to_text(actual)}"

    else:
        raise ValueError(f"Unknown assertion operator: {operator}")

    return None


def evaluate_assertion(assertion: TestAssertion, response: ResponseDescriptor) -> AssertionOutcome:
    """
    Evaluate a single assertion against a response.

    Args:
        assertion: The assertion to check
        response: Captured response

    Returns:
        AssertionOutcome with the assertion id, success flag and message
    """
    try:
        actual = _actual_value(assertion, response)
        failure = _check(assertion, actual)
    except _InvalidJSON:
        return AssertionOutcome(id=assertion.id, success=False, message=INVALID_JSON_MESSAGE)
    except Exception as e:
        logger.debug("Assertion %s raised during evaluation: %s", assertion.id, e)
        return AssertionOutcome(id=assertion.id, success=False, message=str(e) or "Unknown error")

    if failure is not None:
        return AssertionOutcome(id=assertion.id, success=False, message=failure)
    return AssertionOutcome(id=assertion.id, success=True, message=f"{assertion.type} assertion passed")
