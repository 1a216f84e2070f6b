import logging
import os
import tempfile
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from .errors import StagingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StagedSource:
    execution_id: str
    source_path: str
    binary_path: str


def _remove(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning('failed to remove %s: %s', path, e)


@contextmanager
def stage(source: str, work_dir: Optional[str] = None, suffix: str = '.cpp') -> Iterator[StagedSource]:
    """Write ``source`` to a uniquely named file and reserve a binary path.

    Both files are removed when the block exits, however it exits.
    """
    base = work_dir or tempfile.gettempdir()
    execution_id = uuid.uuid4().hex
    staged = StagedSource(
        execution_id=execution_id,
        source_path=os.path.join(base, f'temp_{execution_id}{suffix}'),
        binary_path=os.path.join(base, f'bin_{execution_id}'),
    )
    try:
        try:
            with open(staged.source_path, 'w', encoding='utf-8', errors='replace') as f:
                f.write(source)
            os.chmod(staged.source_path, 0o644)
        except OSError as e:
            raise StagingError(f'failed to write source file: {e}') from e
        yield staged
    finally:
        _remove(staged.source_path)
        _remove(staged.binary_path)
