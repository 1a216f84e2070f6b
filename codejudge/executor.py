import json
import logging
import time
from typing import List, Optional

from .compiler import compile_source
from .config import EngineConfig
from .runner import run_case
from .sandbox import LocalProcessSandbox, SandboxPolicy
from .schemas import ExecutionRequest, ExecutionResult, ExecutionSummary, Mode, TestCase
from .staging import stage
from .validator import validate

logger = logging.getLogger(__name__)


class ExecutionEngine:
    """Validate, compile once, then run every test case in order.

    Validation and compile failures raise a JudgeError and produce no
    results. A failing case never stops the cases after it.
    """

    def __init__(self, config: Optional[EngineConfig] = None, sandbox: Optional[SandboxPolicy] = None):
        self.config = config or EngineConfig()
        self.sandbox = sandbox or LocalProcessSandbox()

    def execute(self, code: str, test_cases: List[TestCase], mode: Mode = Mode.run) -> List[ExecutionResult]:
        validate(code, self.config.entry_point_marker)

        with stage(code, self.config.work_dir, self.config.source_suffix) as staged:
            self._log_event(
                'execution.start',
                execution_id=staged.execution_id,
                mode=mode.value,
                cases=len(test_cases),
                code_bytes=len(code.encode('utf-8', errors='replace')),
            )
            start = time.monotonic()
            status = 'error'
            results: List[ExecutionResult] = []
            try:
                compile_source(staged, self.config)
                for i, case in enumerate(test_cases):
                    results.append(
                        run_case(
                            staged.binary_path,
                            case,
                            i + 1,
                            self.config.execution_timeout_seconds,
                            self.sandbox,
                        )
                    )
                status = 'ok'
                return results
            finally:
                self._log_event(
                    'execution.finish',
                    execution_id=staged.execution_id,
                    status=status,
                    passed=sum(1 for r in results if r.passed),
                    cases=len(results),
                    duration_ms=int((time.monotonic() - start) * 1000),
                )

    def run(self, request: ExecutionRequest) -> ExecutionSummary:
        results = self.execute(request.code, request.test_cases, request.mode)
        return ExecutionSummary.from_results(results)

    def _log_event(self, event: str, **fields) -> None:
        payload = {'event': event, **fields}
        logger.info(json.dumps(payload, sort_keys=True))


def execute(code: str, tests: List[TestCase], config: Optional[EngineConfig] = None) -> ExecutionSummary:
    engine = ExecutionEngine(config)
    return ExecutionSummary.from_results(engine.execute(code, tests))
