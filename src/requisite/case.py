"""Requirement case contract.

A :class:`RequirementCase` is one precondition: a synchronous check plus a
procedure that tries to make the check pass. The orchestrator attaches a case
to an execution context only while that case is being checked or resolved;
every host-facing helper on the case refuses to run while detached, so a
case that keeps a stale reference around fails loudly instead of acting on
a host that may already be gone.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Protocol

from requisite.context import ExecutionContext
from requisite.exceptions import CaseNotAttachedError, ContractViolationError

__all__ = [
    "CaseCallback",
    "RequirementCase",
]


class CaseCallback(Protocol):
    """Receiver of a case's outcome (implemented by the orchestrator)."""

    def on_case_result(self, success: bool, payload: Any = None) -> None: ...


class RequirementCase(ABC):
    """Base class for requirement cases.

    Subclasses implement :meth:`is_satisfied` and :meth:`start_resolution`.
    Cases that start an action or request a permission also override
    :meth:`on_action_result` / :meth:`on_permission_result` to recognise
    their own token and report the outcome.

    Example:
        ```python
        class NetworkCase(RequirementCase):
            TOKEN = token_for("network")

            def is_satisfied(self) -> bool:
                return network.is_connected()

            def start_resolution(self) -> None:
                self.start_action_for_result("wireless_settings", self.TOKEN)

            def on_action_result(self, token: int, outcome: Any) -> bool:
                if token != self.TOKEN:
                    return False
                if self.is_satisfied():
                    self.report_success()
                else:
                    self.report_failure()
                return True
        ```
    """

    _context: ExecutionContext | None = None
    _callback: CaseCallback | None = None

    @abstractmethod
    def is_satisfied(self) -> bool:
        """Return True if this precondition currently holds.

        Only called while attached.
        """

    @abstractmethod
    def start_resolution(self) -> None:
        """Try to make this precondition hold.

        Called only after :meth:`is_satisfied` returned False, at most once
        per attachment. Must eventually call exactly one of
        :meth:`report_success` or :meth:`report_failure`, either right away
        or once a result event arrives.
        """

    def on_action_result(self, token: int, outcome: Any) -> bool:
        """Handle an action result. Returns True if consumed."""
        return False

    def on_permission_result(
        self, token: int, permissions: Sequence[str], grants: Sequence[int]
    ) -> bool:
        """Handle a permission result. Returns True if consumed."""
        return False

    # -- attachment (orchestrator only) ---------------------------------

    def attach(self, context: ExecutionContext, callback: CaseCallback) -> None:
        if self._context is not None:
            raise ContractViolationError(
                f"Requirement case {type(self).__name__} is already attached"
            )
        self._context = context
        self._callback = callback

    def detach(self) -> None:
        self._context = None
        self._callback = None

    @property
    def is_attached(self) -> bool:
        return self._context is not None

    # -- helpers for subclasses -----------------------------------------

    @property
    def context(self) -> ExecutionContext:
        """The execution context this case is attached to."""
        if self._context is None:
            raise CaseNotAttachedError(type(self).__name__)
        return self._context

    def _require_callback(self) -> CaseCallback:
        if self._callback is None:
            raise CaseNotAttachedError(type(self).__name__)
        return self._callback

    def report_success(self) -> None:
        """Report that this case is now satisfied."""
        self._require_callback().on_case_result(True, None)

    def report_failure(self, payload: Any = None) -> None:
        """Report that this case could not be satisfied.

        Args:
            payload: Optional reason handed to every listener's
                ``on_failure``. None means "no specific reason".
        """
        self._require_callback().on_case_result(False, payload)

    def start_action_for_result(self, action: Any, token: int) -> None:
        self.context.start_action_for_result(action, token)

    def request_permission(self, name: str, token: int) -> None:
        self.context.request_permission(name, token)

    def has_permission(self, name: str) -> bool:
        return self.context.has_permission(name)

    def should_show_rationale(self, name: str) -> bool:
        return self.context.should_show_rationale(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(attached={self.is_attached})"
