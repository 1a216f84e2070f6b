import logging
from enum import Enum
from typing import Optional

from .errors import format_seconds
from .sandbox import LocalProcessSandbox, Outcome, SandboxPolicy
from .schemas import ExecutionResult, TestCase

logger = logging.getLogger(__name__)


class CaseState(str, Enum):
    STARTING = 'starting'
    RUNNING = 'running'
    COMPLETED = 'completed'
    TIMED_OUT = 'timed_out'
    RUNTIME_FAILED = 'runtime_failed'


def classify(outcome: Outcome) -> CaseState:
    # a process that exited before the deadline is never reported as timed out
    if outcome.timed_out:
        return CaseState.TIMED_OUT
    if outcome.exit_code != 0:
        return CaseState.RUNTIME_FAILED
    return CaseState.COMPLETED


def outputs_match(actual: str, expected: str) -> bool:
    expected = expected.strip()
    if expected == '':
        # no known answer: a clean exit is enough
        return True
    return actual.strip() == expected


def run_case(
    binary_path: str,
    case: TestCase,
    case_number: int,
    timeout_seconds: float,
    sandbox: Optional[SandboxPolicy] = None,
) -> ExecutionResult:
    sandbox = sandbox or LocalProcessSandbox()
    outcome = sandbox.execute(binary_path, case.input, timeout_seconds)
    state = classify(outcome)

    if state is CaseState.TIMED_OUT:
        logger.info('case %d timed out after %.0fms', case_number, outcome.duration_ms)
        return ExecutionResult(
            case_number=case_number,
            input=case.input,
            expected_output=case.expected_output,
            passed=False,
            error=f'Execution timeout ({format_seconds(timeout_seconds)}s limit exceeded)',
        )

    if state is CaseState.RUNTIME_FAILED:
        logger.info('case %d failed with exit code %s', case_number, outcome.exit_code)
        return ExecutionResult(
            case_number=case_number,
            input=case.input,
            expected_output=case.expected_output,
            passed=False,
            error=f'Runtime error: {outcome.stderr}',
        )

    actual = outcome.stdout.strip()
    return ExecutionResult(
        case_number=case_number,
        input=case.input,
        expected_output=case.expected_output,
        actual_output=actual,
        passed=outputs_match(actual, case.expected_output),
    )
