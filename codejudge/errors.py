class JudgeError(Exception):
    """Request-level failure; no per-case results are produced."""

    kind = 'judge_error'


class SourceValidationError(JudgeError):
    kind = 'validation_error'


class EmptySourceError(SourceValidationError):
    kind = 'empty_source'

    def __init__(self, message: str = 'code cannot be empty'):
        super().__init__(message)


class MissingEntryPointError(SourceValidationError):
    kind = 'missing_entry_point'

    def __init__(self, message: str = 'code must contain a main function'):
        super().__init__(message)


class StagingError(JudgeError):
    kind = 'staging_error'


class CompileError(JudgeError):
    kind = 'compile_error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f'compilation failed: {self.message}'


class CompileTimeoutError(CompileError):
    kind = 'compile_timeout'

    def __init__(self, limit: float):
        super().__init__(f'compilation timed out ({format_seconds(limit)}s limit exceeded)')
        self.limit = limit

    def __str__(self) -> str:
        return self.message


def format_seconds(value: float) -> str:
    # 2.0 -> '2', 0.5 -> '0.5'
    return f'{value:g}'
