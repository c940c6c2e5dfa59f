"""
Script sandbox for user-authored test scripts.

Scripts are written in a restricted Python dialect and evaluated with
``asteval``. Each script gets a fresh interpreter whose symbol table holds
only the response-inspection API:

    response    read-only view of the response (code, status, headers,
                body, response_time, json())
    test        test(name, fn) runs fn and records the outcome
    expect      expect(value).to.equal(...) / .to.contain(...) /
                .to.exist() / .to.be.greater_than(...) / .to.be.less_than(...)
    pm          namespace carrying the three names above

Example script::

    def status_is_ok():
        expect(response.code).to.equal(200)

    test("status is ok", status_is_ok)

A failure raised inside ``test()`` is recorded and the script continues.
A failure raised anywhere else is fatal for the script and is returned as
``ScriptExecution.error``.
"""

import asyncio
import io
import logging
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Callable, Protocol

from asteval import Interpreter

from ..schemas.response import ResponseDescriptor
from ..schemas.testing import ScriptOutcome, TestScript
from .coercion import is_number, parse_json, strict_equals, to_text

logger = logging.getLogger(__name__)

# Names removed from the default asteval symbol table
_BLOCKED_SYMBOLS = ("open",)

DISABLED_MESSAGE = "Test scripts are disabled"


@dataclass
class ScriptExecution:
    """Outcome of running one script."""
    results: list[ScriptOutcome] = field(default_factory=list)
    error: str | None = None


class ScriptEngine(Protocol):
    """Capability interface for executing test scripts."""

    async def execute(self, script: TestScript, response: ResponseDescriptor) -> ScriptExecution: ...


class ScriptResponse:
    """Read-only response view exposed to scripts."""

    def __init__(self, response: ResponseDescriptor):
        self.code = response.status
        self.status = response.status
        self.status_text = response.status_text
        self.headers = dict(response.headers)
        self.response_time = response.response_time
        self.responseTime = self.response_time
        self.text = response.body

        try:
            self._parsed = parse_json(response.body)
            self._is_json = True
        except (TypeError, ValueError):
            self._parsed = None
            self._is_json = False

        self.body = self._parsed if self._is_json else response.body

    def json(self) -> Any:
        if not self._is_json:
            raise ValueError("Response body is not valid JSON")
        return self._parsed


class Expectation:
    """
    Comparison object returned by ``expect(value)``.

    ``to`` and ``be`` are readability chains and return the same object.
    """

    def __init__(self, value: Any, fail: Callable[[str], None]):
        self.value = value
        self._fail = fail

    @property
    def to(self) -> "Expectation":
        return self

    @property
    def be(self) -> "Expectation":
        return self

    def equal(self, expected: Any) -> None:
        if not strict_equals(self.value, expected):
            self._fail(f"Expected {to_text(self.value)} to equal {to_text(expected)}")

    def contain(self, expected: Any) -> None:
        value = self.value
        if isinstance(value, str):
            found = to_text(expected) in value
        elif isinstance(value, (list, tuple)):
            found = any(strict_equals(item, expected) for item in value)
        else:
            found = False
        if not found:
            self._fail(f"Expected {to_text(value)} to contain {to_text(expected)}")

    def exist(self) -> None:
        if self.value is None:
            self._fail("Expected value to exist")

    def greater_than(self, expected: Any) -> None:
        if not is_number(self.value) or not self.value > expected:
            self._fail(f"Expected {to_text(self.value)} to be greater than {to_text(expected)}")

    def less_than(self, expected: Any) -> None:
        if not is_number(self.value) or not self.value < expected:
            self._fail(f"Expected {to_text(self.value)} to be less than {to_text(expected)}")

    greaterThan = greater_than
    lessThan = less_than


class ScriptContext:
    """Per-script results collector and the callables handed to the script."""

    def __init__(self, response: ResponseDescriptor, interpreter: Interpreter):
        self.response = ScriptResponse(response)
        self.results: list[ScriptOutcome] = []
        self._interpreter = interpreter
        self._failure: str | None = None

    def test(self, name: Any, fn: Callable[[], Any]) -> None:
        # A procedure that raises may leave its local scope installed
        symtable = self._interpreter.symtable
        calldepth = getattr(self._interpreter, "_calldepth", None)
        try:
            fn()
            failed = bool(self._interpreter.error)
            error = None
        except Exception as e:
            failed = True
            error = e
        finally:
            self._interpreter.symtable = symtable
            if calldepth is not None:
                self._interpreter._calldepth = calldepth

        if failed:
            message = self.failure_message(error)
            self._clear_interpreter_error()
            self.results.append(ScriptOutcome(name=to_text(name), success=False, message=message))
        else:
            self.results.append(ScriptOutcome(name=to_text(name), success=True))

    def expect(self, value: Any) -> Expectation:
        return Expectation(value, self._fail)

    def namespace(self) -> dict[str, Any]:
        """Symbols installed into the interpreter."""
        pm = SimpleNamespace(response=self.response, test=self.test, expect=self.expect)
        return {"pm": pm, "response": self.response, "test": self.test, "expect": self.expect}

    def failure_message(self, error: BaseException | None = None) -> str:
        """
        Message of the most recent failure.

        Expectation failures are recorded before they are raised because
        asteval may rewrap exceptions that cross a function call.
        """
        if self._failure is not None:
            message, self._failure = self._failure, None
            return message
        for holder in self._interpreter.error:
            msg = getattr(holder, "msg", None)
            if msg:
                return str(msg)
        if error is not None:
            return str(error) or type(error).__name__
        return "Test failed"

    def _fail(self, message: str) -> None:
        self._failure = message
        raise AssertionError(message)

    def _clear_interpreter_error(self) -> None:
        # asteval skips every following statement while errors are pending
        self._interpreter.error = []
        self._interpreter.error_msg = None
        if getattr(self._interpreter, "_interrupt", None) is not None:
            self._interpreter._interrupt = None


class AstevalScriptEngine:
    """Runs scripts with a fresh asteval interpreter per script."""

    def __init__(self, max_script_length: int = 20000):
        self.max_script_length = max_script_length

    async def execute(self, script: TestScript, response: ResponseDescriptor) -> ScriptExecution:
        return await asyncio.to_thread(self._execute, script, response)

    def _create_interpreter(self) -> Interpreter:
        interpreter = Interpreter(
            use_numpy=False,
            writer=io.StringIO(),
            err_writer=io.StringIO(),
            max_statement_length=self.max_script_length,
        )
        for name in _BLOCKED_SYMBOLS:
            interpreter.symtable.pop(name, None)
        return interpreter

    def _execute(self, script: TestScript, response: ResponseDescriptor) -> ScriptExecution:
        interpreter = self._create_interpreter()
        context = ScriptContext(response, interpreter)
        for name, value in context.namespace().items():
            interpreter.symtable[name] = value

        interpreter.eval(script.code, show_errors=False, raise_errors=False)

        if interpreter.error:
            message = context.failure_message()
            logger.warning("Script %r failed outside of test(): %s", script.name or script.id, message)
            return ScriptExecution(results=context.results, error=message)
        return ScriptExecution(results=context.results)


class NullScriptEngine:
    """Engine used when script execution is disabled."""

    async def execute(self, script: TestScript, response: ResponseDescriptor) -> ScriptExecution:
        return ScriptExecution(error=DISABLED_MESSAGE)
