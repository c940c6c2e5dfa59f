"""
Pydantic schemas package.

Exports all schemas for API request/response validation.
"""

from .request import (
    HttpMethod,
    KeyValue,
    Cookie,
    NoAuth,
    BasicAuth,
    BearerAuth,
    ApiKeyAuth,
    AuthConfig,
    RequestDescriptor,
    ResolvedRequest,
)

from .response import (
    ResponseTiming,
    ResponseSize,
    RedirectHop,
    ResponseDescriptor,
)

from .testing import (
    AssertionType,
    AssertionOperator,
    TestScript,
    TestAssertion,
    AssertionOutcome,
    ScriptOutcome,
    TestResult,
)

from .environment import (
    VariableBase,
    VariableCreate,
    VariableUpdate,
    VariableResponse,
    EnvironmentBase,
    EnvironmentCreate,
    EnvironmentUpdate,
    EnvironmentResponse,
    EnvironmentWithVariables,
    Environment,
)

from .execute import (
    ExecuteRequest,
    CompileResponse,
    ExecuteResponse,
    RunTestsRequest,
    EvaluateAssertionRequest,
    EvaluateAssertionResponse,
    UrlInspectRequest,
    UrlInspectResponse,
)

__all__ = [
    # Request schemas
    "HttpMethod",
    "KeyValue",
    "Cookie",
    "NoAuth",
    "BasicAuth",
    "BearerAuth",
    "ApiKeyAuth",
    "AuthConfig",
    "RequestDescriptor",
    "ResolvedRequest",
    # Response schemas
    "ResponseTiming",
    "ResponseSize",
    "RedirectHop",
    "ResponseDescriptor",
    # Test schemas
    "AssertionType",
    "AssertionOperator",
    "TestScript",
    "TestAssertion",
    "AssertionOutcome",
    "ScriptOutcome",
    "TestResult",
    # Environment schemas
    "VariableBase",
    "VariableCreate",
    "VariableUpdate",
    "VariableResponse",
    "EnvironmentBase",
    "EnvironmentCreate",
    "EnvironmentUpdate",
    "EnvironmentResponse",
    "EnvironmentWithVariables",
    "Environment",
    # Execute schemas
    "ExecuteRequest",
    "CompileResponse",
    "ExecuteResponse",
    "RunTestsRequest",
    "EvaluateAssertionRequest",
    "EvaluateAssertionResponse",
    "UrlInspectRequest",
    "UrlInspectResponse",
]
