"""
Pydantic schemas for test scripts, assertions and test results.
"""

from typing import Literal

from pydantic import BaseModel

AssertionType = Literal["status", "json", "header", "responseTime"]
AssertionOperator = Literal["equals", "contains", "exists", "greaterThan", "lessThan"]


class TestScript(BaseModel):
    """User-authored test code run in the script sandbox."""
    __test__ = False

    id: str
    name: str = ""
    code: str = ""
    enabled: bool = True


class TestAssertion(BaseModel):
    """
    Declarative expectation about one response attribute.

    ``property`` is the JSON path for ``json`` assertions and the header
    name for ``header`` assertions.
    """
    __test__ = False

    id: str
    type: AssertionType
    operator: AssertionOperator
    expected: bool | int | float | str | None = None
    property: str | None = None
    enabled: bool = True


class AssertionOutcome(BaseModel):
    id: str
    success: bool
    message: str


class ScriptOutcome(BaseModel):
    """Result of one ``test()`` call inside a script."""
    name: str
    success: bool
    message: str | None = None


class TestResult(BaseModel):
    """
    Outcome of one "run tests" invocation.

    A result always replaces any previous one for the same request.
    """
    __test__ = False

    success: bool = True
    duration: int = 0
    assertions: list[AssertionOutcome] = []
    script_results: list[ScriptOutcome] = []
    error: str | None = None
    script_id: str = ""
