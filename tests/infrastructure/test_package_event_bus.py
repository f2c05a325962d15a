"""Tests for the in-process package event bus."""

from unittest.mock import Mock

from src.domain.entities import PackageEvent, PackageEventKind
from src.infrastructure.events import PackageEventBus


class TestPackageEventBus:
    """Test subscription and synchronous delivery."""

    def test_publish_reaches_subscribers_in_order(self):
        bus = PackageEventBus()
        received = []
        bus.subscribe(lambda event: received.append(("first", event)))
        bus.subscribe(lambda event: received.append(("second", event)))

        bus.package_added("com.example.notes")

        event = PackageEvent(PackageEventKind.ADDED, "com.example.notes")
        assert received == [("first", event), ("second", event)]

    def test_unsubscribe_stops_delivery(self):
        bus = PackageEventBus()
        callback = Mock()
        unsubscribe = bus.subscribe(callback)

        unsubscribe()
        unsubscribe()
        bus.package_removed("com.example.notes")

        callback.assert_not_called()
        assert bus.subscriber_count == 0

    def test_failing_subscriber_does_not_stop_delivery(self):
        bus = PackageEventBus()
        after = Mock()
        bus.subscribe(Mock(side_effect=RuntimeError("subscriber bug")))
        bus.subscribe(after)

        bus.package_changed("com.example.notes")

        after.assert_called_once_with(
            PackageEvent(PackageEventKind.CHANGED, "com.example.notes")
        )

    def test_event_kind_accepts_text(self):
        assert PackageEvent("removed", "a.b").kind is PackageEventKind.REMOVED
