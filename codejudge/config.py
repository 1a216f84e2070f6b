import os
import shlex
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_COMPILER = 'g++'
DEFAULT_COMPILE_FLAGS = '-O3'


class EngineConfig(BaseModel):
    """Knobs for one execution engine instance.

    Both timeouts are part of the caller-visible contract: a case that runs
    past ``execution_timeout_seconds`` is reported as timed out, and a
    compiler run past ``compile_timeout_seconds`` fails the whole request.
    """

    model_config = ConfigDict(frozen=True)

    compiler: str = DEFAULT_COMPILER
    compile_flags: List[str] = Field(default_factory=lambda: shlex.split(DEFAULT_COMPILE_FLAGS))
    compile_timeout_seconds: float = Field(default=10.0, gt=0)
    execution_timeout_seconds: float = Field(default=2.0, gt=0)
    work_dir: Optional[str] = None
    source_suffix: str = '.cpp'
    entry_point_marker: str = 'int main'

    def compile_command(self, source_path: str, binary_path: str) -> List[str]:
        return [self.compiler, *self.compile_flags, source_path, '-o', binary_path]


def load_config() -> EngineConfig:
    return EngineConfig(
        compiler=os.getenv('CODEJUDGE_COMPILER', DEFAULT_COMPILER),
        compile_flags=shlex.split(os.getenv('CODEJUDGE_COMPILE_FLAGS', DEFAULT_COMPILE_FLAGS)),
        compile_timeout_seconds=float(os.getenv('CODEJUDGE_COMPILE_TIMEOUT', '10')),
        execution_timeout_seconds=float(os.getenv('CODEJUDGE_EXECUTION_TIMEOUT', '2')),
        work_dir=os.getenv('CODEJUDGE_WORK_DIR') or None,
    )
