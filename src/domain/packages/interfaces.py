"""Domain interfaces for the environment the registry runs in.

These interfaces define the contracts for package inspection and package
change notification without depending on infrastructure implementations,
following the dependency inversion principle.
"""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from src.domain.entities import ComponentName, MetadataElement, PackageEvent

PackageEventCallback = Callable[[PackageEvent], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class PackageInspectorProtocol(Protocol):
    """Enumerates installed components and returns their declared metadata."""

    def list_searchable_components(self) -> Sequence[ComponentName]:
        """List components that declare searchable metadata.

        Returns:
            Component identities in a stable order; the registry keeps this
            order for its derived candidate lists.
        """
        ...

    def get_raw_metadata(
        self, component: ComponentName
    ) -> Sequence[MetadataElement] | None:
        """Return the component's declared metadata stream.

        Args:
            component: Component to inspect

        Returns:
            Ordered metadata elements, or None if the component declares none

        Raises:
            MetadataUnavailableError: If the metadata cannot be read, for
                example because the component was removed mid-scan
        """
        ...

    def resolve_provider_owner(self, authority: str) -> str | None:
        """Return the package owning the provider for ``authority``.

        Returns:
            Package name, or None if no installed provider matches
        """
        ...


@runtime_checkable
class PackageEventStreamProtocol(Protocol):
    """Source of package install, uninstall and update notifications."""

    def subscribe(self, callback: PackageEventCallback) -> Unsubscribe:
        """Register ``callback`` for every future event.

        Returns:
            Function removing the subscription
        """
        ...
