"""
Variable substitution service for replacing {{variable}} placeholders.

Placeholders are resolved in a single left-to-right pass: substituted
values are never scanned again, so a value that itself contains
``{{other}}`` is inserted verbatim. Unknown placeholders are left in place
so that unresolved variables stay visible.
"""

import re
from typing import List, Mapping, Tuple

from ..schemas.environment import Environment


# Inner text is trimmed before lookup, so "{{ name }}" resolves "name"
VARIABLE_PATTERN = re.compile(r'\{\{([^{}]*)\}\}')


def extract_variables(template: str) -> List[str]:
    """
    Extract all variable names from a template string.

    Example:
        >>> extract_variables("Hello {{name}}, your id is {{ id }}")
        ['name', 'id']
    """
    if not template:
        return []

    names = (match.strip() for match in VARIABLE_PATTERN.findall(template))
    return [name for name in names if name]


def substitute(template: str, variables: Mapping[str, str]) -> Tuple[str, List[str]]:
    """
    Replace variable placeholders in a template with their values.

    Args:
        template: String containing {{variable}} placeholders
        variables: Mapping of variable names to their values

    Returns:
        Tuple of (substituted string, list of unmatched variable names)

    Example:
        >>> substitute("Hello {{name}}", {"name": "World"})
        ('Hello World', [])
        >>> substitute("Hello {{name}}", {})
        ('Hello {{name}}', ['name'])
    """
    if not template:
        return template, []

    unmatched: List[str] = []

    def replace_match(match: re.Match) -> str:
        var_name = match.group(1).strip()
        if var_name in variables:
            return str(variables[var_name])
        unmatched.append(var_name)
        return match.group(0)  # Keep original placeholder

    result = VARIABLE_PATTERN.sub(replace_match, template)
    return result, unmatched


def resolve(text: str, environment: Environment | None) -> str:
    """Resolve placeholders in ``text`` against ``environment`` (or none)."""
    variables = environment.variables if environment is not None else {}
    resolved, _ = substitute(text, variables)
    return resolved
