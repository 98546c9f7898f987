"""Requirement listeners and the per-run listener registry."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

__all__ = [
    "RequirementListener",
    "CallbackListener",
    "ListenerRegistry",
]


class RequirementListener:
    """Observer of one resolution run.

    Every hook is optional. For a given run a listener receives either
    ``on_success`` or ``on_failure``, then always ``on_complete``.
    """

    def on_success(self) -> None:
        """All cases are satisfied."""

    def on_failure(self, payload: Any) -> None:
        """A case failed or the run was cancelled.

        Args:
            payload: Reason supplied by the failing case or by ``cancel``;
                None when no reason was given.
        """

    def on_complete(self) -> None:
        """The run is over, whatever the outcome."""


class CallbackListener(RequirementListener):
    """Listener assembled from plain callables.

    Example:
        >>> requirement.validate(CallbackListener(
        ...     on_success=proceed,
        ...     on_failure=lambda payload: show_error(payload),
        ... ))
    """

    def __init__(
        self,
        on_success: Callable[[], None] | None = None,
        on_failure: Callable[[Any], None] | None = None,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        self._on_success = on_success
        self._on_failure = on_failure
        self._on_complete = on_complete

    def on_success(self) -> None:
        if self._on_success is not None:
            self._on_success()

    def on_failure(self, payload: Any) -> None:
        if self._on_failure is not None:
            self._on_failure(payload)

    def on_complete(self) -> None:
        if self._on_complete is not None:
            self._on_complete()


class ListenerRegistry:
    """Listeners registered against one resolution run.

    Notifications iterate over a snapshot, so hooks may register or clear
    listeners without affecting the notification in progress.
    """

    def __init__(self) -> None:
        self._listeners: list[RequirementListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def __iter__(self) -> Iterator[RequirementListener]:
        return iter(tuple(self._listeners))

    def add(self, listener: RequirementListener) -> None:
        self._listeners.append(listener)

    def clear(self) -> None:
        self._listeners.clear()

    def notify_success(self) -> None:
        for listener in self:
            listener.on_success()

    def notify_failure(self, payload: Any) -> None:
        for listener in self:
            listener.on_failure(payload)

    def notify_complete(self) -> None:
        for listener in self:
            listener.on_complete()
