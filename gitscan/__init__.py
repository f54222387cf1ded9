"""gitscan: report the state of every git working copy under a directory."""

__version__ = "0.1.0"

from .core.types import Status
from .core.work_queue import WorkQueue, QueueClosed
from .core.scanner import Scanner
from .utils.git import GitProber, ProbeError, parse_status
from .utils.walker import find_repos

__all__ = [
    'Status',
    'WorkQueue',
    'QueueClosed',
    'Scanner',
    'GitProber',
    'ProbeError',
    'parse_status',
    'find_repos',
]
