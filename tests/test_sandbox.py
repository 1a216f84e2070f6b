import os
import shutil
import time

import pytest

from codejudge.sandbox import DRAIN_SECONDS, LocalProcessSandbox
from conftest import process_alive

pytestmark = pytest.mark.skipif(os.name == 'nt', reason='uses POSIX shell scripts')


def test_captures_stdout_and_stderr_separately(make_binary):
    binary = make_binary('read x\necho "out $x"\necho "err $x" >&2')
    outcome = LocalProcessSandbox().execute(binary, 'abc\n', 2)
    assert outcome.exit_code == 0
    assert outcome.stdout == 'out abc\n'
    assert outcome.stderr == 'err abc\n'
    assert outcome.timed_out is False


def test_nonzero_exit_code_reported(make_binary):
    outcome = LocalProcessSandbox().execute(make_binary('exit 3'), '', 2)
    assert outcome.exit_code == 3
    assert outcome.timed_out is False


def test_timeout_kills_and_reaps_process(make_binary):
    outcome = LocalProcessSandbox().execute(make_binary('exec sleep 30'), '', 0.5)
    assert outcome.timed_out is True
    assert outcome.pid is not None
    assert not process_alive(outcome.pid)


def test_timeout_kills_background_children(make_binary):
    binary = make_binary('sleep 30 &\necho started\nwait')
    start = time.monotonic()
    outcome = LocalProcessSandbox().execute(binary, '', 0.5)
    assert outcome.timed_out is True
    # the orphaned sleep would hold stdout open for 30s if it survived
    assert time.monotonic() - start < 10


def test_program_that_ignores_stdin(make_binary):
    outcome = LocalProcessSandbox().execute(make_binary('echo done'), 'x' * 1_000_000, 2)
    assert outcome.exit_code == 0
    assert outcome.stdout.strip() == 'done'


def test_spawn_failure(tmp_path):
    outcome = LocalProcessSandbox().execute(str(tmp_path / 'missing'), '', 2)
    assert outcome.exit_code is None
    assert outcome.timed_out is False
    assert outcome.stderr


@pytest.mark.skipif(shutil.which('setsid') is None, reason='setsid not available')
def test_timeout_returns_when_descendant_escapes_the_group(make_binary):
    # the setsid'd sleep survives killpg and keeps stdout open
    binary = make_binary('setsid sleep 8 &\nexec sleep 30')
    start = time.monotonic()
    outcome = LocalProcessSandbox().execute(binary, '', 0.5)
    assert outcome.timed_out is True
    assert time.monotonic() - start < 0.5 + DRAIN_SECONDS + 1.5
    assert not process_alive(outcome.pid)


def test_lone_surrogate_in_stdin_is_replaced(make_binary):
    outcome = LocalProcessSandbox().execute(make_binary('cat'), 'a\ud800b', 2)
    assert outcome.exit_code == 0
    assert outcome.stdout == 'a?b'
