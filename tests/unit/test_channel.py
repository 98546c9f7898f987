"""Unit tests for ResultChannel and Subscription."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from requisite.channel import ResultChannel


class StubListener:
    """Result listener that records events and returns a fixed answer."""

    def __init__(self, name: str, consume: bool, log: list[str]) -> None:
        self.name = name
        self.consume = consume
        self.log = log

    def on_action_result(self, token: int, outcome: Any) -> bool:
        self.log.append(f"{self.name}:action:{token}")
        return self.consume

    def on_permission_result(
        self, token: int, permissions: Sequence[str], grants: Sequence[int]
    ) -> bool:
        self.log.append(f"{self.name}:permission:{token}")
        return self.consume


class TestDispatch:
    """Tests for dispatching results to subscribers."""

    def test_no_subscribers(self) -> None:
        """Test that an empty channel consumes nothing."""
        channel = ResultChannel()

        assert channel.dispatch_action_result(1, None) is False
        assert channel.dispatch_permission_result(1, ["camera"], [0]) is False

    def test_most_recent_subscriber_first(self) -> None:
        """Test that subscribers are visited newest first."""
        channel = ResultChannel()
        log: list[str] = []
        channel.subscribe(StubListener("first", False, log))
        channel.subscribe(StubListener("second", False, log))

        channel.dispatch_action_result(5, None)

        assert log == ["second:action:5", "first:action:5"]

    def test_every_subscriber_sees_event_even_after_consumption(self) -> None:
        """Test that consumption does not stop delivery."""
        channel = ResultChannel()
        log: list[str] = []
        channel.subscribe(StubListener("first", False, log))
        channel.subscribe(StubListener("second", True, log))

        consumed = channel.dispatch_permission_result(3, ["camera"], [0])

        assert consumed is True
        assert log == ["second:permission:3", "first:permission:3"]

    def test_consumed_if_any_listener_consumes(self) -> None:
        """Test that results are ORed across listeners."""
        channel = ResultChannel()
        log: list[str] = []
        channel.subscribe(StubListener("consumer", True, log))
        channel.subscribe(StubListener("bystander", False, log))

        assert channel.dispatch_action_result(1, None) is True

    def test_unsubscribe_during_dispatch_does_not_skip(self) -> None:
        """Test that a snapshot is dispatched when listeners change mid-way."""
        channel = ResultChannel()
        log: list[str] = []
        first_subscription = channel.subscribe(StubListener("first", False, log))

        class Unsubscriber(StubListener):
            def on_action_result(self, token: int, outcome: Any) -> bool:
                first_subscription.unsubscribe()
                return super().on_action_result(token, outcome)

        channel.subscribe(Unsubscriber("second", False, log))

        channel.dispatch_action_result(1, None)

        assert log == ["second:action:1", "first:action:1"]
        assert channel.subscriber_count == 1

    def test_subscribe_during_dispatch_waits_for_next_event(self) -> None:
        """Test that a listener added mid-dispatch sees only later events."""
        channel = ResultChannel()
        log: list[str] = []
        late = StubListener("late", False, log)

        class Subscriber(StubListener):
            def on_action_result(self, token: int, outcome: Any) -> bool:
                if token == 1:
                    channel.subscribe(late)
                return super().on_action_result(token, outcome)

        channel.subscribe(Subscriber("early", False, log))

        channel.dispatch_action_result(1, None)
        channel.dispatch_action_result(2, None)

        assert log == ["early:action:1", "late:action:2", "early:action:2"]


class TestSubscription:
    """Tests for Subscription handles."""

    def test_unsubscribe_removes_listener(self) -> None:
        channel = ResultChannel()
        subscription = channel.subscribe(StubListener("a", True, []))

        assert channel.subscriber_count == 1
        assert subscription.is_active is True

        subscription.unsubscribe()

        assert channel.subscriber_count == 0
        assert subscription.is_active is False
        assert channel.dispatch_action_result(1, None) is False

    def test_unsubscribe_is_idempotent(self) -> None:
        """Test that a second unsubscribe does not remove another entry."""
        channel = ResultChannel()
        listener = StubListener("a", True, [])
        first = channel.subscribe(listener)
        channel.subscribe(listener)

        first.unsubscribe()
        first.unsubscribe()

        assert channel.subscriber_count == 1

    def test_unsubscribe_only_touches_own_listener(self) -> None:
        channel = ResultChannel()
        log: list[str] = []
        keep = StubListener("keep", False, log)
        channel.subscribe(keep)
        drop = channel.subscribe(StubListener("drop", False, log))

        drop.unsubscribe()
        channel.dispatch_action_result(4, None)

        assert log == ["keep:action:4"]
