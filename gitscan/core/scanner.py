"""Scanner for probing every repository under a directory tree."""

import os
import sys
import logging
import threading
from typing import Callable, Iterable, List, Optional

from .types import Status
from .work_queue import WorkQueue
from ..utils.git import GitProber, ProbeError
from ..utils.walker import find_repos

logger = logging.getLogger('gitscan')

_output_lock = threading.Lock()


def print_line(line: str) -> None:
    """Write a report line to standard output as a single write.

    Characters the stream cannot encode, such as undecodable bytes in a
    directory name, are written as backslash escapes.
    """
    encoding = getattr(sys.stdout, "encoding", None) or "utf-8"
    line = line.encode(encoding, errors="backslashreplace").decode(encoding)
    with _output_lock:
        sys.stdout.write(line + "\n")
        sys.stdout.flush()


class Scanner:
    """Discover repositories and probe them with a pool of workers.

    The discovery walk runs in the calling thread and feeds a bounded
    ``WorkQueue``; each worker thread takes paths off the queue until the
    walk has closed it and nothing is left.
    """

    def __init__(
        self,
        base_dir: str,
        max_workers: Optional[int] = None,
        show_all: bool = False,
        pull: bool = True,
        prober: Optional[GitProber] = None,
        walker: Callable[[str], Iterable[str]] = find_repos,
        output: Optional[Callable[[str], None]] = None
    ):
        """Initialize scanner.

        Args:
            base_dir: Directory to scan for repositories
            max_workers: Number of parallel workers (None = CPU count)
            show_all: Report clean repositories too
            pull: Fast-forward repositories that are behind upstream
            prober: Prober used for git queries
            walker: Callable yielding repository paths under a directory
            output: Callable receiving each report line
        """
        self.base_dir = base_dir
        self.show_all = show_all
        self.pull = pull
        self.prober = prober or GitProber()
        self.walker = walker
        self.output = output or print_line

        # Determine max workers
        if max_workers is None:
            self.max_workers = os.cpu_count() or 1
        else:
            self.max_workers = max_workers
        if self.max_workers < 1:
            raise ValueError(f"Number of workers must be positive, got {self.max_workers}")

        self.threads: List[threading.Thread] = []

    def run(self) -> int:
        """Scan the base directory and report every repository found.

        Returns only after every worker has drained the queue and exited.

        Returns:
            Number of repositories discovered

        Raises:
            OSError: If the directory walk fails
        """
        queue: WorkQueue[str] = WorkQueue(maxsize=self.max_workers)

        logger.info(f"Scanning {self.base_dir} with {self.max_workers} workers")
        self.threads = [
            threading.Thread(
                target=self._worker,
                args=(queue,),
                name=f"gitscan-worker-{i}",
                daemon=True
            )
            for i in range(self.max_workers)
        ]
        for thread in self.threads:
            thread.start()

        discovered = 0
        walk_failed = True
        try:
            for repo_path in self.walker(self.base_dir):
                logger.debug(f"Discovered {repo_path}")
                queue.put(repo_path)
                discovered += 1
            walk_failed = False
        finally:
            dropped = queue.close(discard_pending=walk_failed)
            if dropped:
                logger.debug(f"Dropped {dropped} queued repositories after walk failure")
            for thread in self.threads:
                thread.join()

        logger.info(f"Finished scanning {discovered} repositories")
        return discovered

    def _worker(self, queue: WorkQueue[str]) -> None:
        for repo_path in queue:
            try:
                self.process_repo(repo_path)
            except Exception as e:
                logger.exception(f"Unexpected error processing {repo_path!r}")
                try:
                    self.output(f"?? {repo_path}: {e}")
                except Exception:
                    logger.exception(f"Failed to report {repo_path!r}")

    def process_repo(self, repo_path: str) -> Optional[str]:
        """Probe a single repository and report it.

        A repository behind its upstream is fast-forwarded and probed
        again, whatever the outcome of the pull.

        Args:
            repo_path: Path to the repository

        Returns:
            The reported line, or None if the repository was clean and
            clean repositories are not shown
        """
        try:
            status = self.prober.probe(repo_path)

            if self.pull and status.behind < 0:
                logger.debug(f"{repo_path} is behind by {-status.behind}, pulling")
                self.prober.pull(repo_path)
                status = self.prober.probe(repo_path)
        except ProbeError as e:
            line = f"?? {repo_path}: {e}"
            self.output(line)
            return line

        return self._report(repo_path, status)

    def _report(self, repo_path: str, status: Status) -> Optional[str]:
        if not self.show_all and status.is_clean:
            logger.debug(f"{repo_path} is clean")
            return None

        line = status.format_line(repo_path)
        self.output(line)
        return line
