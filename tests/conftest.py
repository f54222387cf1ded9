"""
Pytest configuration and shared fixtures for gitscan tests.
"""

import subprocess
import threading
from pathlib import Path
from typing import Dict, Generator, List, Optional

import pytest

from gitscan.core.types import Status
from gitscan.utils.git import ProbeError


class FakeProber:
    """In-memory stand-in for GitProber.

    ``statuses`` maps a path to the list of statuses returned by
    successive probes; the last entry repeats. Paths mapped to a string
    fail with that message.
    """

    def __init__(self, statuses: Optional[Dict[str, object]] = None, pull_result: bool = True):
        self.statuses = statuses or {}
        self.pull_result = pull_result
        self.probed: List[str] = []
        self.pulled: List[str] = []
        self._lock = threading.Lock()
        self._calls: Dict[str, int] = {}

    def probe(self, repo_path: str) -> Status:
        with self._lock:
            self.probed.append(repo_path)
            count = self._calls.get(repo_path, 0)
            self._calls[repo_path] = count + 1

        result = self.statuses.get(repo_path, Status())
        if isinstance(result, str):
            raise ProbeError(repo_path, result)
        if isinstance(result, list):
            item = result[min(count, len(result) - 1)]
            if isinstance(item, str):
                raise ProbeError(repo_path, item)
            return item
        return result

    def pull(self, repo_path: str) -> bool:
        with self._lock:
            self.pulled.append(repo_path)
        return self.pull_result


@pytest.fixture
def make_prober():
    """Factory for FakeProber instances."""
    return FakeProber


def make_repo_dir(path: Path, marker_is_file: bool = False) -> Path:
    """Create a directory that looks like a git working copy."""
    path.mkdir(parents=True, exist_ok=True)
    if marker_is_file:
        (path / ".git").write_text("gitdir: /elsewhere/.git/worktrees/x\n")
    else:
        (path / ".git").mkdir()
        (path / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    return path


@pytest.fixture
def repo_tree(tmp_path: Path) -> Path:
    """Create a tree of fake repositories.

    Layout::

        alpha/.git
        alpha/vendor/nested/.git    (nested, must not be found)
        group/beta/.git
        group/gamma/.git            (.git is a file)
        group/notes/readme.txt
        plain/sub/file.txt
    """
    make_repo_dir(tmp_path / "alpha")
    make_repo_dir(tmp_path / "alpha" / "vendor" / "nested")
    make_repo_dir(tmp_path / "group" / "beta")
    make_repo_dir(tmp_path / "group" / "gamma", marker_is_file=True)
    (tmp_path / "group" / "notes").mkdir()
    (tmp_path / "group" / "notes" / "readme.txt").write_text("notes\n")
    (tmp_path / "plain" / "sub").mkdir(parents=True)
    (tmp_path / "plain" / "sub" / "file.txt").write_text("data\n")
    return tmp_path


def _git(cwd: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True
    )


@pytest.fixture
def git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository with one commit."""
    repo_path = tmp_path / "test-repo"
    repo_path.mkdir()

    _git(repo_path, "init")
    _git(repo_path, "config", "user.email", "test@example.com")
    _git(repo_path, "config", "user.name", "Test User")
    _git(repo_path, "config", "commit.gpgsign", "false")

    readme = repo_path / "README.md"
    readme.write_text("# Test Repository\n")

    _git(repo_path, "add", ".")
    _git(repo_path, "commit", "-m", "Initial commit")

    yield repo_path


@pytest.fixture
def cloned_repo(git_repo: Path, tmp_path: Path) -> Generator[Path, None, None]:
    """Clone ``git_repo`` so the clone tracks it as upstream."""
    clone_path = tmp_path / "clone"
    _git(tmp_path, "clone", str(git_repo), str(clone_path))
    _git(clone_path, "config", "user.email", "test@example.com")
    _git(clone_path, "config", "user.name", "Test User")
    _git(clone_path, "config", "commit.gpgsign", "false")

    yield clone_path


@pytest.fixture
def commit_file():
    """Write a file into a repository and commit it."""
    def _commit(repo_path: Path, name: str, content: str) -> None:
        (repo_path / name).write_text(content)
        _git(repo_path, "add", name)
        _git(repo_path, "commit", "-m", f"Add {name}")
    return _commit
