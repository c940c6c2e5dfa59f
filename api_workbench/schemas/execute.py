"""
Pydantic schemas for request compilation, execution and test runs.
"""

from pydantic import BaseModel

from .request import KeyValue, RequestDescriptor, ResolvedRequest
from .response import ResponseDescriptor
from .testing import AssertionOutcome, TestAssertion, TestScript


class ExecuteRequest(BaseModel):
    """Schema for compiling or sending a request descriptor."""
    request: RequestDescriptor
    environment_id: int | None = None


class CompileResponse(BaseModel):
    """Resolved request plus warnings about undefined variables."""
    request: ResolvedRequest
    warnings: list[str] = []


class ExecuteResponse(BaseModel):
    """
    Schema for request execution response.

    Transport failures are reported in ``response.error`` rather than as an
    HTTP error status.
    """
    request: ResolvedRequest
    response: ResponseDescriptor
    warnings: list[str] = []


class RunTestsRequest(BaseModel):
    """Schema for running scripts and assertions against a captured response."""
    scripts: list[TestScript] = []
    assertions: list[TestAssertion] = []
    response: ResponseDescriptor


class EvaluateAssertionRequest(BaseModel):
    assertion: TestAssertion
    response: ResponseDescriptor


class EvaluateAssertionResponse(AssertionOutcome):
    pass


class UrlInspectRequest(BaseModel):
    url: str


class UrlInspectResponse(BaseModel):
    """Request name derived from the URL path and its query parameters."""
    name: str
    params: list[KeyValue] = []
