# Services package

from .variable_substitution import extract_variables, substitute, resolve
from .auth_encoder import apply_auth, append_query, resolve_auth
from .request_compiler import compile_request, compile_request_with_warnings
from .assertion_evaluator import evaluate_assertion, get_value_from_path
from .script_sandbox import AstevalScriptEngine, NullScriptEngine, ScriptEngine, ScriptExecution
from .result_aggregator import run_tests
from .http_executor import send_request
from .environment_store import EnvironmentStore
from .url_tools import parse_url_params, request_name_from_url

__all__ = [
    "extract_variables",
    "substitute",
    "resolve",
    "apply_auth",
    "append_query",
    "resolve_auth",
    "compile_request",
    "compile_request_with_warnings",
    "evaluate_assertion",
    "get_value_from_path",
    "AstevalScriptEngine",
    "NullScriptEngine",
    "ScriptEngine",
    "ScriptExecution",
    "run_tests",
    "send_request",
    "EnvironmentStore",
    "parse_url_params",
    "request_name_from_url",
]
