"""Result channel: fans host result events out to subscribers.

The host owns exactly one place where raw results arrive (an action
finished, a permission dialog was answered). It forwards each of them to a
:class:`ResultChannel`, which hands the event to every current subscriber,
most recently subscribed first, and reports whether anyone consumed it.

A channel is an ordinary object. Create one per host (or share one
explicitly); nothing in this module is process-global.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from requisite.logging import get_logger

__all__ = [
    "ResultChannel",
    "ResultListener",
    "Subscription",
]

logger = get_logger(__name__)


class ResultListener(Protocol):
    """Receiver of result events. Each method returns True if it consumed
    the event."""

    def on_action_result(self, token: int, outcome: Any) -> bool: ...

    def on_permission_result(
        self, token: int, permissions: Sequence[str], grants: Sequence[int]
    ) -> bool: ...


class Subscription:
    """Handle returned by :meth:`ResultChannel.subscribe`.

    Only the first :meth:`unsubscribe` call has an effect.
    """

    def __init__(self, channel: ResultChannel, listener: ResultListener) -> None:
        self._channel: ResultChannel | None = channel
        self._listener: ResultListener | None = listener

    @property
    def is_active(self) -> bool:
        return self._listener is not None

    def unsubscribe(self) -> None:
        if self._channel is None or self._listener is None:
            return
        channel, listener = self._channel, self._listener
        self._channel = None
        self._listener = None
        channel._remove(listener)


class ResultChannel:
    """Multiplexer for action and permission result events.

    Subscribers are kept in an immutable tuple that is replaced on every
    change, so subscribing or unsubscribing from inside a dispatch never
    disturbs the iteration already in progress.

    Example:
        ```python
        channel = ResultChannel()
        subscription = channel.subscribe(requirement)

        # in the host's result callback
        consumed = channel.dispatch_action_result(token, outcome)

        subscription.unsubscribe()
        ```
    """

    def __init__(self) -> None:
        self._listeners: tuple[ResultListener, ...] = ()

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: ResultListener) -> Subscription:
        """Register ``listener`` and return its subscription handle."""
        self._listeners = (*self._listeners, listener)
        return Subscription(self, listener)

    def dispatch_action_result(self, token: int, outcome: Any) -> bool:
        """Deliver an action result to every subscriber.

        Returns:
            True if at least one subscriber consumed the event.
        """
        consumed = False
        for listener in reversed(self._listeners):
            consumed |= bool(listener.on_action_result(token, outcome))
        if not consumed:
            logger.debug("action_result_unconsumed", token=token)
        return consumed

    def dispatch_permission_result(
        self,
        token: int,
        permissions: Sequence[str],
        grants: Sequence[int],
    ) -> bool:
        """Deliver a permission result to every subscriber.

        Returns:
            True if at least one subscriber consumed the event.
        """
        consumed = False
        for listener in reversed(self._listeners):
            consumed |= bool(
                listener.on_permission_result(token, permissions, grants)
            )
        if not consumed:
            logger.debug(
                "permission_result_unconsumed",
                token=token,
                permissions=list(permissions),
            )
        return consumed

    def _remove(self, listener: ResultListener) -> None:
        # Remove one entry by identity; the same listener may be subscribed twice.
        listeners = list(self._listeners)
        for index, existing in enumerate(listeners):
            if existing is listener:
                del listeners[index]
                break
        self._listeners = tuple(listeners)
