"""Package inspection and event stream contracts."""

from .interfaces import (
    PackageEventCallback,
    PackageEventStreamProtocol,
    PackageInspectorProtocol,
    Unsubscribe,
)

__all__ = [
    "PackageEventCallback",
    "PackageEventStreamProtocol",
    "PackageInspectorProtocol",
    "Unsubscribe",
]
