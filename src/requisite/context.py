"""Execution context: the host capabilities a case may use.

Cases never talk to a concrete host object. Everything they need (starting
an action that reports back, requesting a permission, querying permission
state) goes through an :class:`ExecutionContext`, which lets permission
cases, settings-screen cases and test doubles share one contract.

These are Protocol classes, not abstract base classes: any host adapter with
matching methods qualifies without inheriting from anything here.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Protocol, TypeVar, runtime_checkable

from requisite.exceptions import ContractViolationError

__all__ = [
    "ExecutionContext",
    "Grant",
    "require_host",
]

HostT = TypeVar("HostT")


class Grant(IntEnum):
    """Per-permission result delivered with a permission result event."""

    GRANTED = 0
    DENIED = -1


@runtime_checkable
class ExecutionContext(Protocol):
    """Capabilities a host exposes to attached requirement cases.

    Example:
        >>> class ScreenContext:
        ...     def __init__(self, screen):
        ...         self._screen = screen
        ...     def current_host(self):
        ...         return self._screen
        ...     def start_action_for_result(self, action, token):
        ...         self._screen.open(action, request_token=token)
        ...     def request_permission(self, name, token):
        ...         self._screen.ask_permission(name, request_token=token)
        ...     def has_permission(self, name):
        ...         return name in self._screen.granted
        ...     def should_show_rationale(self, name):
        ...         return name in self._screen.declined_once
    """

    def current_host(self) -> Any:
        """Return the host object actions are started from.

        The host's identity is also what teardown notifications are matched
        against.
        """
        ...

    def start_action_for_result(self, action: Any, token: int) -> None:
        """Start ``action``; its result arrives later with ``token``."""
        ...

    def request_permission(self, name: str, token: int) -> None:
        """Ask the user for ``name``; the answer arrives later with ``token``."""
        ...

    def has_permission(self, name: str) -> bool:
        """Return True if ``name`` is currently granted."""
        ...

    def should_show_rationale(self, name: str) -> bool:
        """Return True if an explanation should precede requesting ``name``."""
        ...


def require_host(context: ExecutionContext, host_type: type[HostT]) -> HostT:
    """Return the context's host, checked against ``host_type``.

    Cases that need a concrete host (to show a dialog, say) use this instead
    of threading a host type parameter through every class.

    Raises:
        ContractViolationError: If the host is not a ``host_type``.
    """
    host = context.current_host()
    if not isinstance(host, host_type):
        raise ContractViolationError(
            f"Expected host of type {host_type.__name__}, "
            f"got {type(host).__name__}"
        )
    return host
