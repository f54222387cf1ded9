"""Closable work queue shared by the discovery walker and the workers."""

import threading
from collections import deque
from typing import Deque, Generic, Iterator, Optional, Tuple, TypeVar

T = TypeVar('T')


class QueueClosed(Exception):
    """Raised when a closed queue is written to or closed again."""


class WorkQueue(Generic[T]):
    """FIFO handoff between one producer and many consumers.

    Unlike ``queue.Queue`` it has an explicit closed state: once the
    producer calls ``close()``, every consumer blocked in ``get()`` wakes
    up and, after the remaining items are drained, receives ``(None, False)``.

    Example:
        queue = WorkQueue(maxsize=4)
        for path in queue:  # in each consumer thread
            handle(path)
    """

    def __init__(self, maxsize: int = 0):
        """Initialize the queue.

        Args:
            maxsize: Maximum number of pending items (0 = unbounded)
        """
        self.maxsize = maxsize
        self._items: Deque[T] = deque()
        self._closed = False
        self._cond = threading.Condition()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def put(self, item: T) -> None:
        """Add an item, blocking while the queue is full.

        Raises:
            QueueClosed: If the queue is closed
        """
        with self._cond:
            while self._full() and not self._closed:
                self._cond.wait()
            if self._closed:
                raise QueueClosed("put on closed queue")
            self._items.append(item)
            self._cond.notify_all()

    def get(self) -> Tuple[Optional[T], bool]:
        """Take the next item, blocking while the queue is open and empty.

        Returns:
            ``(item, True)`` for a delivered item, ``(None, False)`` once
            the queue is closed and drained
        """
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            if not self._items:
                return None, False
            item = self._items.popleft()
            self._cond.notify_all()
            return item, True

    def close(self, discard_pending: bool = False) -> int:
        """Close the queue and wake every waiting producer and consumer.

        Args:
            discard_pending: Drop items that have not been delivered yet

        Returns:
            Number of discarded items

        Raises:
            QueueClosed: If the queue was already closed
        """
        with self._cond:
            if self._closed:
                raise QueueClosed("queue already closed")
            self._closed = True
            discarded = 0
            if discard_pending:
                discarded = len(self._items)
                self._items.clear()
            self._cond.notify_all()
            return discarded

    def __iter__(self) -> Iterator[T]:
        while True:
            item, ok = self.get()
            if not ok:
                return
            yield item

    def _full(self) -> bool:
        return self.maxsize > 0 and len(self._items) >= self.maxsize
