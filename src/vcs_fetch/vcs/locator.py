"""Helpers for making a VCS client reachable through the search path."""

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def search_path_entries() -> list[str]:
    """Get the entries of the process search path.

    Returns:
        Non-empty PATH entries in order
    """
    return [entry for entry in os.environ.get("PATH", "").split(os.pathsep) if entry]


def append_to_search_path(directory: str | Path) -> None:
    """Append a directory to the process search path.

    Args:
        directory: Directory to append
    """
    current = os.environ.get("PATH", "")
    os.environ["PATH"] = f"{current}{os.pathsep}{directory}" if current else str(directory)
    logger.debug(f"Added {directory} to PATH")


def derive_bin_candidates(executable: str, entries: Iterable[str]) -> list[str]:
    """Derive ``bin`` directories from ``<vendor>/<executable>/cmd`` search path entries.

    Some installers only put a ``cmd`` wrapper directory on the search path;
    the full client lives in the sibling ``bin`` directory. Matching is
    case-insensitive.

    Args:
        executable: Client executable name (e.g. ``git``)
        entries: Search path entries to inspect

    Returns:
        Candidate directories, in search path order
    """
    pattern = re.compile(rf"(.*){re.escape(executable.lower())}([\\/])cmd$")
    candidates: list[str] = []
    for entry in entries:
        match = pattern.match(entry.lower())
        if match:
            candidates.append(f"{match.group(1)}{executable}{match.group(2)}bin")
    return candidates
