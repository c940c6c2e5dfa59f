"""
Test execution API routes.

Runs assertions and test scripts against a response that was captured
earlier, so tests can be re-run without sending the request again.
"""

from fastapi import APIRouter, Depends

from ..config import get_settings
from ..dependencies import get_script_engine
from ..exceptions import ValidationError
from ..schemas.execute import EvaluateAssertionRequest, EvaluateAssertionResponse, RunTestsRequest
from ..schemas.testing import TestResult
from ..services.assertion_evaluator import evaluate_assertion
from ..services.result_aggregator import run_tests
from ..services.script_sandbox import ScriptEngine


router = APIRouter(prefix="/api/tests", tags=["tests"])


@router.post("/run", response_model=TestResult)
async def run_test_suite(
    payload: RunTestsRequest,
    engine: ScriptEngine = Depends(get_script_engine)
):
    """
    Run all enabled assertions and scripts against the given response.

    Raises:
        ValidationError: 422 if a script exceeds the configured maximum length
    """
    max_length = get_settings().max_script_length
    for script in payload.scripts:
        if len(script.code) > max_length:
            raise ValidationError(
                f"Script '{script.name or script.id}' exceeds the maximum length of {max_length} characters"
            )

    return await run_tests(payload.scripts, payload.assertions, payload.response, engine=engine)


@router.post("/evaluate", response_model=EvaluateAssertionResponse)
def evaluate_single_assertion(payload: EvaluateAssertionRequest):
    """Evaluate one assertion, regardless of its enabled flag."""
    outcome = evaluate_assertion(payload.assertion, payload.response)
    return EvaluateAssertionResponse(**outcome.model_dump())
