import os
import shutil
import stat

import pytest


requires_gxx = pytest.mark.skipif(shutil.which('g++') is None, reason='g++ not available')


@pytest.fixture
def make_binary(tmp_path):
    """Write an executable shell script standing in for a compiled program."""

    def _make(body: str, name: str = 'prog') -> str:
        path = tmp_path / name
        path.write_text('#!/bin/sh\n' + body + '\n', encoding='utf-8')
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)

    return _make


def process_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


@pytest.fixture
def work_dir(tmp_path):
    path = tmp_path / 'work'
    path.mkdir()
    return path


@pytest.fixture
def fake_compiler(tmp_path):
    """A stand-in compiler invoked as ``cc -O3 <src> -o <bin>``.

    The default body "compiles" by copying the source, so submissions written
    as shell scripts become the binary.
    """
    tools = tmp_path / 'tools'
    tools.mkdir()

    def _make(body: str = 'cp "$2" "$4" && chmod +x "$4"') -> str:
        path = tools / 'cc'
        path.write_text('#!/bin/sh\n' + body + '\n', encoding='utf-8')
        path.chmod(0o755)
        return str(path)

    return _make


SUM_PROGRAM = '#!/bin/sh\n# int main\nread a b\necho $((a + b))\n'
