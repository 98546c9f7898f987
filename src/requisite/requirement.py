"""Requirement: the orchestrator that resolves an ordered chain of cases.

A run walks the cases in order. Satisfied cases are skipped synchronously;
the first unsatisfied case is asked to resolve itself and the run suspends
until that case reports back, usually after a result event delivered
through the :class:`ResultChannel`. Any number of listeners can join a run
while it is in flight; they all receive the single outcome.

States:
    idle        no subscription held
    running     subscribed to the channel, at most one case attached
    destroyed   absorbing; reached via destroy() or host teardown
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from requisite.channel import ResultChannel, Subscription
from requisite.context import ExecutionContext
from requisite.exceptions import (
    ContractViolationError,
    NoAttachedCaseError,
    RequirementDestroyedError,
)
from requisite.lifecycle import TeardownNotifier
from requisite.listeners import ListenerRegistry, RequirementListener
from requisite.logging import get_logger

if TYPE_CHECKING:
    from requisite.builder import RequirementBuilder
    from requisite.case import RequirementCase
    from requisite.config import RequisiteConfig

__all__ = ["Requirement"]

logger = get_logger(__name__)


class _HostTeardownWatch:
    """Destroys a requirement when its own host is torn down."""

    def __init__(self, requirement: Requirement, host: Any) -> None:
        self._requirement = requirement
        self._host = host

    def on_host_teardown(self, host: Any) -> None:
        if host is self._host:
            self._requirement.destroy()


class _CheckOnlyCallback:
    """Callback attached during is_valid(); cases may not report from a check."""

    def on_case_result(self, success: bool, payload: Any = None) -> None:
        raise ContractViolationError(
            "Requirement cases must not report a result from is_satisfied()"
        )


_CHECK_ONLY = _CheckOnlyCallback()


class Requirement:
    """Ordered chain of requirement cases plus its resolution state.

    Build instances with :meth:`builder`. A requirement holds non-owning
    references to its cases; the case list never changes after build.

    Example:
        ```python
        requirement = (
            Requirement.builder()
            .add(NetworkCase())
            .add(LocationPermissionCase())
            .build(context, channel, lifecycle=notifier)
        )

        requirement.validate(CallbackListener(
            on_success=start_navigation,
            on_failure=lambda payload: show_blocked(payload),
        ))
        ```
    """

    def __init__(
        self,
        cases: Sequence[RequirementCase],
        context: ExecutionContext,
        channel: ResultChannel,
        *,
        lifecycle: TeardownNotifier | None = None,
        config: RequisiteConfig | None = None,
    ) -> None:
        self._cases: tuple[RequirementCase, ...] = tuple(cases)
        self._context: ExecutionContext | None = context
        self._channel: ResultChannel | None = channel
        self._lifecycle = lifecycle
        self._pending: deque[RequirementCase] = deque()
        self._listeners = ListenerRegistry()
        self._subscription: Subscription | None = None
        self._attached: RequirementCase | None = None
        self._destroyed = False
        self._advancing = False
        self._advance_requested = False
        self._trace = config.trace.log_transitions if config is not None else True
        self._log = logger.bind(requirement_id=f"{id(self):x}")

        self._teardown_watch: _HostTeardownWatch | None = None
        if lifecycle is not None:
            self._teardown_watch = _HostTeardownWatch(self, context.current_host())
            lifecycle.register(self._teardown_watch)

    @staticmethod
    def builder() -> RequirementBuilder:
        """Return a new, empty :class:`RequirementBuilder`."""
        # Import here to avoid circular imports
        from requisite.builder import RequirementBuilder

        return RequirementBuilder()

    # -- public API ------------------------------------------------------

    def validate(self, listener: RequirementListener) -> None:
        """Resolve the chain and report the outcome to ``listener``.

        If a run is already in flight, ``listener`` joins it instead of
        starting another one.

        Raises:
            RequirementDestroyedError: If this requirement was destroyed.
        """
        self._ensure_alive("validate")
        self._listeners.add(listener)

        if self._subscription is not None:
            self._log.debug(
                "requirement_listener_joined", listeners=len(self._listeners)
            )
            return

        if not self._cases:
            self._end(success=True)
            return

        self._pending.clear()
        self._pending.extend(self._cases)
        self._subscription = self._require_channel().subscribe(self)
        self._log.debug("requirement_run_started", cases=len(self._cases))
        self._advance()

    def is_valid(self) -> bool:
        """Check every case synchronously without resolving anything.

        Stops at the first unsatisfied case. Pending queue, subscription and
        listeners are left untouched. If a run is in flight, its attached
        case is detached for the duration of the check and re-attached
        afterwards, so no two cases are ever attached at once.

        Raises:
            RequirementDestroyedError: If this requirement was destroyed.
        """
        self._ensure_alive("is_valid")
        context = self._require_context()

        in_flight = self._attached
        if in_flight is not None:
            in_flight.detach()
        try:
            for case in self._cases:
                case.attach(context, _CHECK_ONLY)
                try:
                    satisfied = case.is_satisfied()
                finally:
                    case.detach()
                if not satisfied:
                    return False
            return True
        finally:
            if in_flight is not None and self._attached is in_flight:
                in_flight.attach(context, self)

    def cancel(self, payload: Any = None) -> None:
        """Abort the current run, reporting ``payload`` as the failure.

        Safe to call when idle (nobody is notified) and after destroy (no-op).
        """
        if self._destroyed:
            return
        self._log.debug("requirement_cancelled", in_progress=self.is_in_progress())
        self._detach_current()
        self._end(success=False, payload=payload)

    def destroy(self) -> None:
        """Release every resource this requirement holds. Idempotent.

        Listeners of an in-flight run are dropped without notification.
        """
        if self._destroyed:
            return
        if self._lifecycle is not None and self._teardown_watch is not None:
            self._lifecycle.unregister(self._teardown_watch)
        self._release_subscription()
        self._detach_current()
        self._pending.clear()
        self._listeners.clear()
        self._destroyed = True

        self._lifecycle = None
        self._teardown_watch = None
        self._context = None
        self._channel = None
        self._cases = ()
        self._log.debug("requirement_destroyed")

    def is_in_progress(self) -> bool:
        return self._subscription is not None

    def is_destroyed(self) -> bool:
        return self._destroyed

    # -- result channel listener ------------------------------------------

    def on_action_result(self, token: int, outcome: Any) -> bool:
        case = self._attached
        if case is None:
            return False
        return case.on_action_result(token, outcome)

    def on_permission_result(
        self, token: int, permissions: Sequence[str], grants: Sequence[int]
    ) -> bool:
        case = self._attached
        if case is None:
            return False
        return case.on_permission_result(token, permissions, grants)

    # -- case callback ------------------------------------------------------

    def on_case_result(self, success: bool, payload: Any = None) -> None:
        """Receive the outcome of the attached case.

        Raises:
            NoAttachedCaseError: If no case is attached (stale callback).
            RequirementDestroyedError: If this requirement was destroyed.
        """
        self._ensure_alive("on_case_result")
        case = self._attached
        if case is None:
            raise NoAttachedCaseError()

        self._detach_current()
        if success:
            self._pending.popleft()
            if self._trace:
                self._log.debug("requirement_case_resolved", case=repr(case))
            self._advance()
        else:
            if self._trace:
                self._log.debug("requirement_case_failed", case=repr(case))
            self._end(success=False, payload=payload)

    # -- internals ------------------------------------------------------------

    def _advance(self) -> None:
        # A case may report from inside start_resolution(); that request is
        # picked up by the loop already running instead of recursing.
        if self._advancing:
            self._advance_requested = True
            return

        self._advancing = True
        self._advance_requested = True
        try:
            while self._advance_requested:
                self._advance_requested = False
                self._step()
        finally:
            self._advancing = False

    def _step(self) -> None:
        while self._subscription is not None:
            if not self._pending:
                self._end(success=True)
                return

            case = self._pending[0]
            try:
                self._attach(case)
                satisfied = case.is_satisfied()
                if not satisfied:
                    if self._trace:
                        self._log.debug("requirement_case_resolving", case=repr(case))
                    case.start_resolution()
            except BaseException:
                self._abort(case)
                raise

            if not satisfied:
                return
            self._detach_current()
            self._pending.popleft()
            if self._trace:
                self._log.debug("requirement_case_satisfied", case=repr(case))

    def _end(self, success: bool, payload: Any = None) -> None:
        self._pending.clear()
        self._release_subscription()

        # Listeners registered from inside a hook belong to the next run.
        listeners, self._listeners = self._listeners, ListenerRegistry()
        self._log.debug(
            "requirement_run_ended", success=success, listeners=len(listeners)
        )
        if success:
            listeners.notify_success()
        else:
            listeners.notify_failure(payload)
        listeners.notify_complete()
        listeners.clear()

    def _abort(self, case: RequirementCase) -> None:
        # Case code raised mid-run: drop the run so the next validate()
        # starts over. Listeners of the aborted run are not notified.
        self._log.debug("requirement_run_aborted", case=repr(case))
        self._detach_current()
        self._pending.clear()
        self._release_subscription()
        self._listeners = ListenerRegistry()

    def _attach(self, case: RequirementCase) -> None:
        case.attach(self._require_context(), self)
        self._attached = case

    def _detach_current(self) -> None:
        case, self._attached = self._attached, None
        if case is not None:
            case.detach()

    def _release_subscription(self) -> None:
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.unsubscribe()

    def _ensure_alive(self, operation: str) -> None:
        if self._destroyed:
            raise RequirementDestroyedError(operation)

    def _require_context(self) -> ExecutionContext:
        if self._context is None:
            raise RequirementDestroyedError("context")
        return self._context

    def _require_channel(self) -> ResultChannel:
        if self._channel is None:
            raise RequirementDestroyedError("channel")
        return self._channel

    def __repr__(self) -> str:
        if self._destroyed:
            return "Requirement(destroyed)"
        return (
            f"Requirement(cases={len(self._cases)}, "
            f"in_progress={self.is_in_progress()}, pending={len(self._pending)})"
        )
