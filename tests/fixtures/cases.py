"""Scripted requirement cases and listeners for requisite tests.

Provides:
- RecordingCase: case with a fixed satisfied flag and an optional
  start_resolution script; counts calls and checks how many cases of its
  group are attached whenever it is queried
- TokenCase: RecordingCase that resolves on an action result for its token
- RecordingListener: listener that records hook calls in order
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from requisite.case import RequirementCase
from requisite.listeners import RequirementListener


class RecordingCase(RequirementCase):
    """Case whose answers are scripted by the test."""

    def __init__(
        self,
        name: str,
        satisfied: bool = True,
        on_start: Callable[[RecordingCase], None] | None = None,
        group: list[RecordingCase] | None = None,
    ) -> None:
        self.name = name
        self.satisfied = satisfied
        self.on_start = on_start
        self.group = group if group is not None else []
        self.group.append(self)
        self.satisfied_calls = 0
        self.resolution_calls = 0
        self.max_attached_seen = 0

    def _observe_group(self) -> None:
        attached = sum(1 for case in self.group if case.is_attached)
        self.max_attached_seen = max(self.max_attached_seen, attached)

    def is_satisfied(self) -> bool:
        _ = self.context
        self.satisfied_calls += 1
        self._observe_group()
        return self.satisfied

    def start_resolution(self) -> None:
        _ = self.context
        self.resolution_calls += 1
        self._observe_group()
        if self.on_start is not None:
            self.on_start(self)

    def __repr__(self) -> str:
        return f"RecordingCase({self.name!r})"


class TokenCase(RecordingCase):
    """Resolves when an action result with its token arrives.

    A truthy outcome reports success; a falsy one reports failure with the
    outcome as payload.
    """

    def __init__(self, name: str, token: int, **kwargs: Any) -> None:
        kwargs.setdefault("satisfied", False)
        super().__init__(name, **kwargs)
        self.token = token
        self.action_results: list[tuple[int, Any]] = []

    def start_resolution(self) -> None:
        super().start_resolution()
        self.start_action_for_result(f"resolve-{self.name}", self.token)

    def on_action_result(self, token: int, outcome: Any) -> bool:
        self.action_results.append((token, outcome))
        if token != self.token:
            return False
        if outcome:
            self.report_success()
        else:
            self.report_failure(outcome)
        return True


class RecordingListener(RequirementListener):
    """Listener that appends ("success",), ("failure", payload) and
    ("complete",) tuples to ``events``."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def on_success(self) -> None:
        self.events.append(("success",))

    def on_failure(self, payload: Any) -> None:
        self.events.append(("failure", payload))

    def on_complete(self) -> None:
        self.events.append(("complete",))


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()
