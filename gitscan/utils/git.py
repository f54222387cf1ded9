"""Git operations and utilities."""

import logging
import subprocess
from dataclasses import replace
from typing import List

from ..core.types import Status

logger = logging.getLogger('gitscan')

BRANCH_AB_PREFIX = "# branch.ab "
HEADER_PREFIX = "# "


class ProbeError(Exception):
    """Raised when the status of a repository cannot be obtained."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


def parse_status(report: str) -> Status:
    """Parse ``git status --porcelain=2 --branch`` output.

    Args:
        report: Raw status report

    Returns:
        Status built from the branch counters and changed entries
    """
    dirty = False
    ahead = 0
    behind = 0

    for line in report.splitlines():
        if not line:
            continue
        if line.startswith(BRANCH_AB_PREFIX):
            fields = line.split()
            ahead = _parse_counter(fields, 2)
            behind = _parse_counter(fields, 3)
        elif line.startswith(HEADER_PREFIX):
            continue
        else:
            dirty = True

    return Status(dirty=dirty, ahead=ahead, behind=behind)


def _parse_counter(fields: List[str], index: int) -> int:
    # Malformed counters count as zero
    try:
        return int(fields[index])
    except (IndexError, ValueError):
        return 0


class GitProber:
    """Query and fast-forward repositories through the git command line."""

    def __init__(self, git_binary: str = "git"):
        """Initialize prober.

        Args:
            git_binary: Git executable to invoke
        """
        self.git_binary = git_binary

    def _run(self, repo_path: str, args: List[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.git_binary, *args],
            cwd=repo_path,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True
        )

    def remote_update(self, repo_path: str) -> bool:
        """Refresh remote-tracking refs without touching the working tree.

        Args:
            repo_path: Path to the repository

        Returns:
            True if every remote was reached, False otherwise
        """
        try:
            self._run(repo_path, ["remote", "update"])
            return True
        except subprocess.CalledProcessError as e:
            logger.debug(f"Remote update failed for {repo_path}: {_describe(e)}")
            return False
        except OSError as e:
            logger.debug(f"Remote update failed for {repo_path}: {e}")
            return False

    def status_report(self, repo_path: str) -> str:
        """Get the machine-readable status report of a repository.

        Args:
            repo_path: Path to the repository

        Returns:
            Porcelain v2 status output including branch headers

        Raises:
            ProbeError: If git could not produce the report
        """
        try:
            result = self._run(repo_path, ["status", "--porcelain=2", "--branch"])
        except subprocess.CalledProcessError as e:
            raise ProbeError(repo_path, _describe(e)) from e
        except OSError as e:
            raise ProbeError(repo_path, str(e)) from e
        return result.stdout

    def probe(self, repo_path: str) -> Status:
        """Get the synchronization status of a repository.

        An unreachable remote does not abort the probe; the status is
        computed from the local tracking refs and flagged instead.

        Args:
            repo_path: Path to the repository

        Returns:
            Repository status

        Raises:
            ProbeError: If the status report could not be obtained
        """
        remote_ok = self.remote_update(repo_path)
        status = parse_status(self.status_report(repo_path))
        if not remote_ok:
            status = replace(status, remote_error=True)
        return status

    def pull(self, repo_path: str) -> bool:
        """Fast-forward the current branch from its upstream.

        Args:
            repo_path: Path to the repository

        Returns:
            True if successful, False otherwise
        """
        try:
            self._run(repo_path, ["pull", "--ff-only"])
            return True
        except subprocess.CalledProcessError as e:
            logger.debug(f"Fast-forward failed for {repo_path}: {_describe(e)}")
            return False
        except OSError as e:
            logger.debug(f"Fast-forward failed for {repo_path}: {e}")
            return False


def _describe(error: subprocess.CalledProcessError) -> str:
    """Summarize a failed git invocation as a single line."""
    stderr = (error.stderr or "").strip()
    if stderr:
        return stderr.splitlines()[0]
    return f"exit status {error.returncode}"
