"""Scoped changes of the process working directory."""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


@contextmanager
def working_directory(path: str | Path) -> Iterator[Path]:
    """Run a block with ``path`` as the current working directory.

    The previous working directory is restored on every exit path. The working
    directory is process-wide, so two blocks must not run concurrently.

    Args:
        path: Directory to enter

    Yields:
        The entered directory
    """
    previous = Path.cwd()
    target = Path(path)
    logger.debug(f"Entering {target}")
    os.chdir(target)
    try:
        yield target
    finally:
        os.chdir(previous)
        logger.debug(f"Restored working directory {previous}")
