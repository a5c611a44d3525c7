"""
UI-thread delivery queue.

Background work never touches observable state directly. It posts a
callback here and the UI thread runs it on its next turn, which keeps a
single writer for everything the views observe.

Classes:
    MainThreadQueue: Thread-safe queue of callbacks drained by the UI thread
"""

import logging
import queue
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class MainThreadQueue:
    """
    Thread-safe FIFO of callbacks owned by one thread.

    Any thread may post. Only the owning thread (the one that created the
    queue unless another is given) may drain.

    Attributes:
        owner: Thread that is allowed to run the queued callbacks
    """

    def __init__(self, owner: Optional[threading.Thread] = None):
        self.owner = owner or threading.current_thread()
        self._queue: "queue.Queue[tuple]" = queue.Queue()

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule callback(*args) for the owning thread."""
        self._queue.put((callback, args))

    def is_owner_thread(self) -> bool:
        return threading.current_thread() is self.owner

    def process_pending(self, block: bool = False, timeout: Optional[float] = None) -> int:
        """
        Run queued callbacks on the calling thread.

        Args:
            block: Wait for at least one callback if the queue is empty
            timeout: Maximum seconds to wait when blocking

        Returns:
            Number of callbacks executed

        Raises:
            RuntimeError: If called from a thread other than the owner
        """
        if not self.is_owner_thread():
            raise RuntimeError("MainThreadQueue can only be drained by its owner thread")

        executed = 0
        try:
            item = self._queue.get(block=block, timeout=timeout)
        except queue.Empty:
            return executed

        while True:
            callback, args = item
            try:
                callback(*args)
            except Exception:
                logger.exception("Queued callback %r failed", callback)
            executed += 1
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return executed

    def __len__(self) -> int:
        return self._queue.qsize()
