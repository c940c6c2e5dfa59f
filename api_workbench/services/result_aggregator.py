"""
Test result aggregation.

Runs every enabled assertion and then every enabled script, strictly in
order, and folds the outcomes into a single ``TestResult``.
"""

import logging
import time

from ..schemas.response import ResponseDescriptor
from ..schemas.testing import TestAssertion, TestResult, TestScript
from .assertion_evaluator import evaluate_assertion
from .script_sandbox import AstevalScriptEngine, ScriptEngine

logger = logging.getLogger(__name__)


async def run_tests(
    scripts: list[TestScript],
    assertions: list[TestAssertion],
    response: ResponseDescriptor,
    engine: ScriptEngine | None = None,
) -> TestResult:
    """
    Evaluate assertions and run scripts against a captured response.

    Each script is awaited before the next one starts. A script that fails
    outside of ``test()`` sets ``error``, marks the run unsuccessful and
    stops the remaining scripts; outcomes collected before it are kept.
    The partial results of the failing script itself are discarded.

    Args:
        scripts: Test scripts in execution order
        assertions: Declarative assertions in evaluation order
        response: Response snapshot shared by all assertions and scripts
        engine: Script engine; defaults to the asteval engine

    Returns:
        A complete TestResult that replaces any previous result
    """
    if engine is None:
        engine = AstevalScriptEngine()

    start_time = time.perf_counter()
    result = TestResult()

    for assertion in assertions:
        if not assertion.enabled:
            continue
        outcome = evaluate_assertion(assertion, response)
        result.assertions.append(outcome)
        if not outcome.success:
            result.success = False

    for script in scripts:
        if not script.enabled:
            continue
        result.script_id = script.id
        execution = await engine.execute(script, response)
        if execution.error is not None:
            result.success = False
            result.error = execution.error
            break
        result.script_results.extend(execution.results)
        if any(not outcome.success for outcome in execution.results):
            result.success = False

    result.duration = max(0, round((time.perf_counter() - start_time) * 1000))

    logger.info(
        "Ran %d assertion(s) and %d script test(s) in %dms: %s",
        len(result.assertions),
        len(result.script_results),
        result.duration,
        "passed" if result.success else "failed",
    )
    return result
