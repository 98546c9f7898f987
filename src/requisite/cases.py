"""Ready-made cases for the common shapes of precondition.

- :class:`CheckCase`: plain callables for custom logic.
- :class:`SettingsCase`: "this setting must be on"; opens a settings
  action and re-checks when the host reports back.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from requisite.case import RequirementCase
from requisite.tokens import check_token, token_for

__all__ = ["CheckCase", "SettingsCase"]


class CheckCase(RequirementCase):
    """Case built from a check and an optional resolver.

    The resolver receives the case itself and must eventually call
    ``report_success()`` or ``report_failure(payload)`` on it. Without a
    resolver an unsatisfied check fails immediately with ``payload``.

    Example:
        >>> disk = CheckCase(
        ...     check=lambda: shutil.disk_usage("/").free > 10**9,
        ...     payload="disk_full",
        ... )
    """

    def __init__(
        self,
        check: Callable[[], bool],
        resolve: Callable[[CheckCase], None] | None = None,
        *,
        payload: Any = None,
        name: str | None = None,
    ) -> None:
        self._check = check
        self._resolve = resolve
        self._payload = payload
        self.name = name or getattr(check, "__name__", "check")

    def is_satisfied(self) -> bool:
        # Touch the context so a detached call fails like any other case.
        _ = self.context
        return bool(self._check())

    def start_resolution(self) -> None:
        if self._resolve is None:
            self.report_failure(self._payload)
        else:
            self._resolve(self)

    def __repr__(self) -> str:
        return f"CheckCase(name={self.name!r}, attached={self.is_attached})"


class SettingsCase(RequirementCase):
    """Case satisfied by a setting the user can switch on in the host.

    Resolution starts ``action`` (for example the host's wireless settings
    screen). When the host reports the action finished, the check runs
    again; the reported outcome is ignored because users can back out of a
    settings screen in ways that do not reflect what they changed.

    Args:
        check: Returns True when the setting is on.
        action: Action handed to ``start_action_for_result``.
        token: Explicit token; derived from ``action`` when omitted.
        payload: Failure payload when the setting is still off.
    """

    def __init__(
        self,
        check: Callable[[], bool],
        action: str,
        token: int | None = None,
        *,
        payload: Any = None,
    ) -> None:
        self._check = check
        self._action = action
        self._token = token_for(action) if token is None else check_token(token)
        self._payload = payload

    @property
    def token(self) -> int:
        return self._token

    def is_satisfied(self) -> bool:
        _ = self.context
        return bool(self._check())

    def start_resolution(self) -> None:
        self.start_action_for_result(self._action, self._token)

    def on_action_result(self, token: int, outcome: Any) -> bool:
        if token != self._token:
            return False
        if self.is_satisfied():
            self.report_success()
        else:
            self.report_failure(self._payload)
        return True

    def __repr__(self) -> str:
        return f"SettingsCase(action={self._action!r}, token={self._token})"
