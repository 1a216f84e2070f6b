"""Compile a submission once and judge it against a batch of stdin/stdout test cases."""

from .config import EngineConfig, load_config
from .errors import (
    CompileError,
    CompileTimeoutError,
    EmptySourceError,
    JudgeError,
    MissingEntryPointError,
    SourceValidationError,
    StagingError,
)
from .executor import ExecutionEngine, execute
from .schemas import ExecutionRequest, ExecutionResult, ExecutionSummary, Mode, TestCase

__all__ = [
    'CompileError',
    'CompileTimeoutError',
    'EmptySourceError',
    'EngineConfig',
    'ExecutionEngine',
    'ExecutionRequest',
    'ExecutionResult',
    'ExecutionSummary',
    'JudgeError',
    'MissingEntryPointError',
    'Mode',
    'SourceValidationError',
    'StagingError',
    'TestCase',
    'execute',
    'load_config',
]
