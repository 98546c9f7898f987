"""Decision tracking for prompts shown during resolution.

Cases often show a prompt ("Location is off. Open settings?") and must
react to two host callbacks: the accept button, and the prompt being
dismissed. Hosts usually fire *both* when the user accepts, so the dismiss
handler has to know whether an accept already happened.

:class:`PromptDecision` captures that as an explicit three-state outcome
inside the handlers it hands out:

    decision = PromptDecision(
        on_accept=lambda: self.start_action_for_result("location_settings", TOKEN),
        on_decline=self.report_failure,
    )
    host.show_prompt(
        title="Location is off",
        on_accept=decision.accept,
        on_dismiss=decision.dismiss,
    )
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

__all__ = [
    "Decision",
    "PromptDecision",
]


class Decision(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class PromptDecision:
    """First decision wins; later accept/dismiss calls are ignored."""

    def __init__(
        self,
        on_accept: Callable[[], None],
        on_decline: Callable[[], None],
    ) -> None:
        self._on_accept = on_accept
        self._on_decline = on_decline
        self._decision = Decision.PENDING

    @property
    def decision(self) -> Decision:
        return self._decision

    def accept(self) -> None:
        if self._decision is not Decision.PENDING:
            return
        self._decision = Decision.ACCEPTED
        self._on_accept()

    def dismiss(self) -> None:
        if self._decision is not Decision.PENDING:
            return
        self._decision = Decision.DECLINED
        self._on_decline()
