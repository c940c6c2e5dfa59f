"""
Property-based tests for the variable substitution service.

Covers placeholder extraction, substitution of defined variables, and
verbatim preservation of undefined ones.
"""

import pytest
from hypothesis import given, strategies as st, settings

from api_workbench.schemas.environment import Environment
from api_workbench.services.variable_substitution import (
    extract_variables,
    resolve,
    substitute,
)


# Strategy for generating valid variable names (alphanumeric + underscore)
variable_name_strategy = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"),
    min_size=1,
    max_size=20,
).filter(lambda s: s[0].isalpha() or s[0] == "_")  # Must start with letter or underscore

# Values never contain braces, so substituted output can be checked for leftovers
variable_value_strategy = st.text(min_size=0, max_size=100).filter(
    lambda v: "{" not in v and "}" not in v
)

plain_text_strategy = st.text(max_size=20).filter(lambda s: "{" not in s and "}" not in s)


class TestPlaceholderExtraction:
    """Extraction returns every placeholder name in a template."""

    @given(var_names=st.lists(variable_name_strategy, min_size=1, max_size=5, unique=True))
    @settings(max_examples=100)
    def test_extracts_all_variables_from_template(self, var_names: list[str]):
        template = " ".join("{{" + name + "}}" for name in var_names)

        extracted = extract_variables(template)

        assert set(extracted) == set(var_names)

    @given(text=st.text(min_size=0, max_size=100).filter(lambda s: "{{" not in s))
    @settings(max_examples=100)
    def test_returns_empty_for_no_placeholders(self, text: str):
        assert extract_variables(text) == []

    @given(var_name=variable_name_strategy, prefix=plain_text_strategy, suffix=plain_text_strategy)
    @settings(max_examples=100)
    def test_extracts_variable_regardless_of_surrounding_text(self, var_name: str, prefix: str, suffix: str):
        template = prefix + "{{" + var_name + "}}" + suffix

        assert var_name in extract_variables(template)

    def test_surrounding_whitespace_is_trimmed(self):
        assert extract_variables("{{  host }}/{{\tpath\t}}") == ["host", "path"]

    def test_empty_placeholder_is_ignored(self):
        assert extract_variables("{{}} and {{   }}") == []


class TestVariableSubstitution:
    """Defined placeholders are replaced by their values."""

    @given(var_name=variable_name_strategy, var_value=variable_value_strategy)
    @settings(max_examples=100)
    def test_defined_variable_is_replaced(self, var_name: str, var_value: str):
        result, unmatched = substitute("{{" + var_name + "}}", {var_name: var_value})

        assert result == var_value
        assert unmatched == []

    @given(
        variables=st.dictionaries(
            keys=variable_name_strategy,
            values=variable_value_strategy,
            min_size=1,
            max_size=5
        ),
        separator=plain_text_strategy
    )
    @settings(max_examples=100)
    def test_fully_resolvable_template_has_no_braces_left(self, variables: dict[str, str], separator: str):
        """
        Property: When every placeholder is defined and values carry no
        braces, the output contains no "{{" or "}}".
        """
        template = separator.join("{{" + name + "}}" for name in variables)

        result, unmatched = substitute(template, variables)

        assert unmatched == []
        assert "{{" not in result
        assert "}}" not in result

    @given(
        var_name=variable_name_strategy,
        var_value=variable_value_strategy,
        prefix=plain_text_strategy,
        suffix=plain_text_strategy
    )
    @settings(max_examples=100)
    def test_substitution_preserves_surrounding_text(self, var_name: str, var_value: str, prefix: str, suffix: str):
        template = prefix + "{{" + var_name + "}}" + suffix

        result, unmatched = substitute(template, {var_name: var_value})

        assert result == prefix + var_value + suffix
        assert unmatched == []

    def test_placeholder_with_whitespace_resolves(self):
        result, _ = substitute("{{ host }}/users", {"host": "https://api.example.com"})
        assert result == "https://api.example.com/users"

    def test_values_are_not_expanded_recursively(self):
        variables = {"outer": "{{inner}}", "inner": "secret"}

        result, unmatched = substitute("x={{outer}}", variables)

        assert result == "x={{inner}}"
        assert unmatched == []

    def test_each_occurrence_is_replaced(self):
        result, _ = substitute("{{a}}-{{a}}-{{ a }}", {"a": "1"})
        assert result == "1-1-1"


class TestUndefinedVariablePreservation:
    """Undefined placeholders stay verbatim and are reported."""

    @given(var_name=variable_name_strategy)
    @settings(max_examples=100)
    def test_undefined_variable_placeholder_is_preserved(self, var_name: str):
        template = "{{" + var_name + "}}"

        result, unmatched = substitute(template, {})

        assert result == template
        assert var_name in unmatched

    @given(
        defined_vars=st.dictionaries(
            keys=variable_name_strategy,
            values=variable_value_strategy,
            min_size=1,
            max_size=3
        ),
        undefined_var=variable_name_strategy
    )
    @settings(max_examples=100)
    def test_mixed_defined_and_undefined_variables(self, defined_vars: dict[str, str], undefined_var: str):
        if undefined_var in defined_vars:
            return  # Skip this case

        parts = ["{{" + name + "}}" for name in defined_vars]
        parts.append("{{" + undefined_var + "}}")
        template = " ".join(parts)

        result, unmatched = substitute(template, defined_vars)

        assert undefined_var in unmatched
        assert "{{" + undefined_var + "}}" in result
        for var_name in defined_vars:
            assert "{{" + var_name + "}}" not in result

    @given(template=st.text(max_size=100))
    @settings(max_examples=100)
    def test_template_is_unchanged_without_environment(self, template: str):
        """
        Property: With no environment, resolution is the identity.
        """
        assert resolve(template, None) == template

    def test_whitespace_inside_preserved_placeholder_is_kept(self):
        result, unmatched = substitute("{{ missing }}", {})
        assert result == "{{ missing }}"
        assert unmatched == ["missing"]


class TestResolveAgainstEnvironment:
    """resolve() looks placeholders up in an environment snapshot."""

    def test_resolves_from_environment(self):
        env = Environment(name="dev", variables={"base": "http://localhost:8000", "id": "42"})

        assert resolve("{{base}}/items/{{id}}", env) == "http://localhost:8000/items/42"

    def test_empty_value_is_defined(self):
        env = Environment(name="dev", variables={"token": ""})

        assert resolve("Bearer {{token}}", env) == "Bearer "

    def test_environment_snapshot_is_immutable(self):
        env = Environment(name="dev", variables={"a": "1"})

        with pytest.raises(Exception):
            env.name = "prod"
