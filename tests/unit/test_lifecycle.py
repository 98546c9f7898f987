"""Unit tests for TeardownNotifier."""

from __future__ import annotations

from typing import Any

from requisite.lifecycle import TeardownNotifier


class RecordingObserver:
    def __init__(self) -> None:
        self.hosts: list[Any] = []

    def on_host_teardown(self, host: Any) -> None:
        self.hosts.append(host)


class TestTeardownNotifier:
    """Tests for observer registration and notification."""

    def test_notifies_every_observer(self) -> None:
        notifier = TeardownNotifier()
        observers = [RecordingObserver(), RecordingObserver()]
        for observer in observers:
            notifier.register(observer)
        host = object()

        notifier.notify_teardown(host)

        assert [o.hosts for o in observers] == [[host], [host]]

    def test_unregister(self) -> None:
        notifier = TeardownNotifier()
        observer = RecordingObserver()
        notifier.register(observer)

        notifier.unregister(observer)
        notifier.notify_teardown(object())

        assert observer.hosts == []
        assert notifier.observer_count == 0

    def test_unregister_unknown_observer_is_ignored(self) -> None:
        notifier = TeardownNotifier()

        notifier.unregister(RecordingObserver())

        assert notifier.observer_count == 0

    def test_observer_may_unregister_during_notification(self) -> None:
        """Test that removal mid-notification still reaches every observer."""
        notifier = TeardownNotifier()
        later = RecordingObserver()

        class SelfRemoving(RecordingObserver):
            def on_host_teardown(self, host: Any) -> None:
                super().on_host_teardown(host)
                notifier.unregister(self)

        first = SelfRemoving()
        notifier.register(first)
        notifier.register(later)

        notifier.notify_teardown("host")

        assert first.hosts == ["host"]
        assert later.hosts == ["host"]
        assert notifier.observer_count == 1
