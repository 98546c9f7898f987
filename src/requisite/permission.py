"""Permission case.

:class:`PermissionCase` layers the usual permission flow on top of the
base case contract:

1. Already granted → satisfied, nothing to do.
2. Host says a rationale should be shown → :meth:`show_rationale`; the
   subclass explains and then calls :meth:`request` (or reports failure).
3. Otherwise request the permission straight away.
4. Answer arrives: granted → success. Denied while a rationale would still
   be shown → failure. Denied with "don't ask again" →
   :meth:`show_explanation_on_never`, which by default fails but may send
   the user to the settings screen via :meth:`navigate_to_settings`.
5. Returning from the settings screen → re-check and report.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from requisite.case import RequirementCase
from requisite.config import DEFAULT_SETTINGS_ACTION
from requisite.context import Grant
from requisite.logging import get_logger
from requisite.tokens import check_token, token_for

if TYPE_CHECKING:
    from requisite.config import RequisiteConfig

__all__ = ["PermissionCase", "SettingsNavigation"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SettingsNavigation:
    """Action started to open the host's settings screen for a permission."""

    settings_action: str
    permission: str


class PermissionCase(RequirementCase):
    """Case satisfied when a single permission is granted.

    Args:
        permission: Permission name as understood by the host.
        token: Explicit request token. Derived from ``permission`` when
            omitted.
        settings_action: Action used by :meth:`navigate_to_settings`.

    Example:
        ```python
        class CameraPermissionCase(PermissionCase):
            def __init__(self) -> None:
                super().__init__("camera")

            def show_rationale(self) -> None:
                decision = PromptDecision(
                    on_accept=self.request, on_decline=self.report_failure
                )
                prompts.show("We need the camera to scan codes",
                             on_accept=decision.accept,
                             on_dismiss=decision.dismiss)
        ```
    """

    def __init__(
        self,
        permission: str,
        token: int | None = None,
        *,
        settings_action: str = DEFAULT_SETTINGS_ACTION,
    ) -> None:
        self._permission = permission
        self._token = token_for(permission) if token is None else check_token(token)
        self._settings_action = settings_action

    @classmethod
    def configured(
        cls, permission: str, config: RequisiteConfig, **kwargs: Any
    ) -> PermissionCase:
        """Create a case using token and settings values from ``config``.

        An explicit ``token`` is checked against ``config.tokens.ceiling``.

        Raises:
            InvalidTokenError: If an explicit token exceeds the ceiling.
        """
        ceiling = config.tokens.ceiling
        if kwargs.get("token") is None:
            kwargs["token"] = token_for(permission, ceiling)
        else:
            check_token(kwargs["token"], ceiling)
        kwargs.setdefault("settings_action", config.permissions.settings_action)
        return cls(permission, **kwargs)

    @property
    def permission(self) -> str:
        return self._permission

    @property
    def token(self) -> int:
        return self._token

    def is_satisfied(self) -> bool:
        return self.has_permission(self._permission)

    def start_resolution(self) -> None:
        if self.should_show_rationale(self._permission):
            self.show_rationale()
        else:
            self.request()

    @abstractmethod
    def show_rationale(self) -> None:
        """Explain why the permission is needed.

        Must end in either :meth:`request` or :meth:`report_failure`.
        """

    def show_explanation_on_never(self) -> None:
        """Handle a denial the user asked not to be asked about again.

        Override to show an explanation that offers
        :meth:`navigate_to_settings`. The default gives up.
        """
        self.report_failure()

    def request(self) -> None:
        """Request the permission from the host."""
        self.request_permission(self._permission, self._token)

    def navigate_to_settings(self) -> None:
        """Open the host's settings screen for this permission."""
        self.start_action_for_result(
            SettingsNavigation(self._settings_action, self._permission),
            self._token,
        )

    def on_action_result(self, token: int, outcome: Any) -> bool:
        if token != self._token:
            return False
        # Back from the settings screen; the outcome itself is not trusted.
        if self.is_satisfied():
            self.report_success()
        else:
            self.report_failure()
        return True

    def on_permission_result(
        self, token: int, permissions: Sequence[str], grants: Sequence[int]
    ) -> bool:
        if token != self._token:
            return False
        if grants and grants[0] == Grant.GRANTED:
            self.report_success()
        elif not self.should_show_rationale(self._permission):
            logger.debug(
                "permission_denied_permanently", permission=self._permission
            )
            self.show_explanation_on_never()
        else:
            self.report_failure()
        return True

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(permission={self._permission!r}, "
            f"token={self._token})"
        )
