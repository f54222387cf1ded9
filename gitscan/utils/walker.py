"""Discovery of repository working copies under a directory tree."""

import os
from typing import Iterator

GIT_MARKER = ".git"


def _raise(error: OSError) -> None:
    raise error


def find_repos(base_dir: str, marker: str = GIT_MARKER) -> Iterator[str]:
    """Find repository roots under a directory, depth first.

    A directory is a repository root when it contains ``marker`` either
    as a directory or as a file (submodules and linked worktrees). Nothing
    beneath a discovered root is visited, so nested repositories are not
    reported.

    Args:
        base_dir: Directory to search
        marker: Name of the version-control metadata entry

    Yields:
        Path of each repository root, in traversal order

    Raises:
        OSError: If any directory cannot be listed
    """
    for dirpath, dirnames, filenames in os.walk(base_dir, topdown=True, onerror=_raise):
        if marker in dirnames or marker in filenames:
            # Don't search inside found repos
            dirnames[:] = []
            yield os.path.normpath(dirpath)
            continue

        dirnames.sort()
