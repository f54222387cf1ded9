"""Core package for gitscan."""

from .types import Status
from .work_queue import WorkQueue, QueueClosed
from .logger import setup_logging

__all__ = [
    # Types
    'Status',
    # Queue
    'WorkQueue',
    'QueueClosed',
    # Logging
    'setup_logging',
]
