import logging
import os
import subprocess

from .config import EngineConfig
from .errors import CompileError, CompileTimeoutError
from .sandbox import kill_process_group, reap
from .staging import StagedSource

logger = logging.getLogger(__name__)


def _read_output(raw) -> str:
    if raw is None:
        return ''
    if isinstance(raw, str):
        return raw
    return raw.decode('utf-8', errors='replace')


def compile_source(staged: StagedSource, config: EngineConfig) -> None:
    """Compile the staged source into ``staged.binary_path``.

    Raises CompileError with the compiler's combined stdout and stderr on a
    non-zero exit, and CompileTimeoutError once the compile budget runs out.
    """
    cmd = config.compile_command(staged.source_path, staged.binary_path)
    logger.info('compiling execution %s: %s', staged.execution_id, ' '.join(cmd))
    try:
        # own session so a timeout takes down cc1plus and as along with the driver
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            start_new_session=os.name != 'nt',
        )
    except OSError as e:
        raise CompileError(f'could not start compiler {config.compiler!r}: {e}') from e

    try:
        out, _ = proc.communicate(timeout=config.compile_timeout_seconds)
    except subprocess.TimeoutExpired as e:
        kill_process_group(proc)
        reap(proc)
        logger.info('compile timeout for execution %s', staged.execution_id)
        raise CompileTimeoutError(config.compile_timeout_seconds) from e
    except BaseException:
        kill_process_group(proc)
        reap(proc)
        raise

    output = _read_output(out)
    if proc.returncode != 0:
        logger.info('compile failed for execution %s (exit %s)', staged.execution_id, proc.returncode)
        raise CompileError(output)
    if not os.path.isfile(staged.binary_path):
        raise CompileError(output or 'compiler produced no binary')
