"""
Process execution policy for compiled submissions.

Only wall-clock time is bounded here. Memory, CPU, filesystem and network
isolation are not provided; a stronger policy (cgroups, seccomp, containers)
can be plugged in by implementing ``SandboxPolicy``.
"""

import logging
import os
import signal
import subprocess
import time
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

DRAIN_SECONDS = 1.0


@dataclass
class Outcome:
    exit_code: Optional[int]
    stdout: str
    stderr: str
    timed_out: bool = False
    duration_ms: float = 0.0
    pid: Optional[int] = None


class SandboxPolicy(Protocol):
    def execute(self, binary_path: str, stdin: str, timeout_seconds: float) -> Outcome:
        ...


def _decode(raw: Optional[bytes]) -> str:
    if not raw:
        return ''
    return raw.decode('utf-8', errors='replace')


def kill_process_group(proc: subprocess.Popen) -> None:
    if os.name != 'nt':
        try:
            os.killpg(proc.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
        except OSError as e:
            logger.warning('killpg failed for pid %s: %s', proc.pid, e)
    proc.kill()


def reap(proc: subprocess.Popen, drain_seconds: float = DRAIN_SECONDS) -> Tuple[bytes, bytes]:
    """Wait for a killed child and collect whatever output is left.

    A process that escaped the group (setsid, double fork) can hold the pipes
    open indefinitely, so draining is bounded and the pipes are abandoned
    once ``drain_seconds`` runs out.
    """
    proc.wait()
    try:
        return proc.communicate(timeout=drain_seconds)
    except subprocess.TimeoutExpired:
        logger.warning('pid %s left its output pipes open; discarding output', proc.pid)
        for pipe in (proc.stdin, proc.stdout, proc.stderr):
            if pipe is not None:
                pipe.close()
        return b'', b''


class LocalProcessSandbox:
    """Run the binary as a direct child with no arguments.

    On timeout the child's whole process group is killed and then reaped.
    ``execute`` returns within ``DRAIN_SECONDS`` of the deadline even when a
    descendant has left the group and still holds the output pipes.
    """

    def execute(self, binary_path: str, stdin: str, timeout_seconds: float) -> Outcome:
        start = time.perf_counter()
        try:
            proc = subprocess.Popen(
                [binary_path],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=os.name != 'nt',
            )
        except OSError as e:
            return Outcome(
                exit_code=None,
                stdout='',
                stderr=str(e),
                duration_ms=(time.perf_counter() - start) * 1000,
            )

        try:
            out, err = proc.communicate(input=stdin.encode('utf-8', errors='replace'), timeout=timeout_seconds)
        except subprocess.TimeoutExpired:
            kill_process_group(proc)
            out, err = reap(proc)
            return Outcome(
                exit_code=proc.returncode,
                stdout=_decode(out),
                stderr=_decode(err),
                timed_out=True,
                duration_ms=(time.perf_counter() - start) * 1000,
                pid=proc.pid,
            )
        except BaseException:
            kill_process_group(proc)
            reap(proc)
            raise

        return Outcome(
            exit_code=proc.returncode,
            stdout=_decode(out),
            stderr=_decode(err),
            duration_ms=(time.perf_counter() - start) * 1000,
            pid=proc.pid,
        )

