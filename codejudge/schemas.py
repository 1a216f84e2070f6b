from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _scrub(value):
    # lone surrogates cannot be written to a pipe, a file or a JSON response
    if isinstance(value, str):
        return value.encode('utf-8', errors='replace').decode('utf-8')
    return value


class Mode(str, Enum):
    run = 'run'
    submit = 'submit'


class TestCase(BaseModel):
    model_config = ConfigDict(frozen=True)

    input: str = ''
    expected_output: str = ''
    explanation: Optional[str] = None

    @field_validator('input', 'expected_output', 'explanation', mode='before')
    @classmethod
    def scrub_surrogates(cls, value):
        return _scrub(value)


class ExecutionRequest(BaseModel):
    code: str = Field(validation_alias=AliasChoices('code', 'source'))
    test_cases: List[TestCase] = Field(default_factory=list)
    mode: Mode = Mode.run

    @field_validator('code', mode='before')
    @classmethod
    def scrub_surrogates(cls, value):
        return _scrub(value)


class ExecutionResult(BaseModel):
    case_number: int = Field(ge=1)
    input: str
    expected_output: str
    actual_output: str = ''
    passed: bool
    error: Optional[str] = None


class ExecutionSummary(BaseModel):
    success: bool
    results: List[ExecutionResult]
    total_passed: int
    total_cases: int

    @classmethod
    def from_results(cls, results: List[ExecutionResult]) -> 'ExecutionSummary':
        total_passed = sum(1 for r in results if r.passed)
        return cls(
            success=total_passed == len(results),
            results=results,
            total_passed=total_passed,
            total_cases=len(results),
        )


class ErrorResponse(BaseModel):
    error: str
    kind: str
