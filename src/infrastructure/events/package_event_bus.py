"""In-process package event stream.

Delivers package install, uninstall and update notifications to subscribers
synchronously on the publishing thread. A subscriber that raises is logged
and does not stop delivery to the others.
"""

from threading import Lock

from src.config import get_logger
from src.domain.entities import PackageEvent, PackageEventKind
from src.domain.packages import PackageEventCallback, Unsubscribe

logger = get_logger(__name__)


class PackageEventBus:
    """Thread-safe publish/subscribe hub for ``PackageEvent`` values."""

    def __init__(self) -> None:
        self._subscribers: list[PackageEventCallback] = []
        self._lock = Lock()

    def subscribe(self, callback: PackageEventCallback) -> Unsubscribe:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, event: PackageEvent) -> None:
        """Deliver ``event`` to every current subscriber in subscription order."""
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception(
                    f"Package event subscriber failed on {event.kind} {event.package_name}"
                )

    def package_added(self, package_name: str) -> None:
        self.publish(PackageEvent(PackageEventKind.ADDED, package_name))

    def package_removed(self, package_name: str) -> None:
        self.publish(PackageEvent(PackageEventKind.REMOVED, package_name))

    def package_changed(self, package_name: str) -> None:
        self.publish(PackageEvent(PackageEventKind.CHANGED, package_name))
