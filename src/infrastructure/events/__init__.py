"""Package event stream implementations."""

from .package_event_bus import PackageEventBus

__all__ = ["PackageEventBus"]
