"""Host teardown notifications.

A host (a screen, a session, a request handler) that owns requirements
tells its :class:`TeardownNotifier` when it is gone for good. Requirements
built against that host register an observer at construction and destroy
themselves when the notification for their host arrives.
"""

from __future__ import annotations

from typing import Any, Protocol

from requisite.logging import get_logger

__all__ = [
    "TeardownNotifier",
    "TeardownObserver",
]

logger = get_logger(__name__)


class TeardownObserver(Protocol):
    def on_host_teardown(self, host: Any) -> None:
        """Called once per teardown notification with the torn-down host."""
        ...


class TeardownNotifier:
    """Registry of observers interested in host teardown.

    Observers may unregister themselves (or others) while being notified;
    notification always runs over the set registered when it started.
    """

    def __init__(self) -> None:
        self._observers: list[TeardownObserver] = []

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def register(self, observer: TeardownObserver) -> None:
        self._observers.append(observer)

    def unregister(self, observer: TeardownObserver) -> None:
        """Remove ``observer``. Unknown observers are ignored."""
        if observer in self._observers:
            self._observers.remove(observer)

    def notify_teardown(self, host: Any) -> None:
        """Tell every registered observer that ``host`` has been torn down."""
        observers = tuple(self._observers)
        logger.debug("host_teardown", observers=len(observers))
        for observer in observers:
            observer.on_host_teardown(host)
