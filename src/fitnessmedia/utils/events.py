"""
Change notification for observable application state.

Services own an EventEmitter per observable projection and emit after each
successful mutation. Views subscribe and re-read the projection.

Classes:
    EventEmitter: Minimal publish-subscribe channel
"""

import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class EventEmitter:
    """
    Publish-subscribe channel with synchronous delivery.

    Listeners run in subscription order on the emitting thread. A listener
    that raises is logged and skipped so that the remaining listeners still
    see the notification.

    Example:
        >>> changed = EventEmitter()
        >>> unsubscribe = changed.subscribe(lambda boxes: print(len(boxes)))
        >>> changed.emit([])
        0
        >>> unsubscribe()
    """

    def __init__(self, name: str = "changed"):
        self.name = name
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Args:
            listener: Callable invoked with the emitted arguments

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, *args: Any, **kwargs: Any) -> int:
        """
        Notify every listener.

        Returns:
            Number of listeners that completed without raising
        """
        delivered = 0
        for listener in list(self._listeners):
            try:
                listener(*args, **kwargs)
                delivered += 1
            except Exception:
                logger.exception("Listener for '%s' event failed", self.name)
        return delivered

    def __len__(self) -> int:
        return len(self._listeners)
