"""In-memory package inspector.

Holds a table of installed packages and publishes the matching package event
whenever a package is installed, updated or removed. Used for embedding the
registry in tests and tools that manage their own package set.
"""

from collections.abc import Iterable, Mapping, Sequence
from threading import Lock

from attrs import define, field

from src.config import get_logger
from src.domain.entities import ComponentName, MetadataElement
from src.domain.errors import MetadataUnavailableError
from src.infrastructure.events import PackageEventBus

logger = get_logger(__name__)


def _freeze_components(
    components: Mapping[str, Iterable[MetadataElement] | None],
) -> dict[str, tuple[MetadataElement, ...] | None]:
    return {
        name: None if metadata is None else tuple(metadata)
        for name, metadata in components.items()
    }


@define(frozen=True, slots=True)
class InstalledPackage:
    """An installed package with its components and content providers.

    ``components`` maps a class name (``.Short`` names are expanded with the
    package name) to the component's declared searchable metadata, or None
    for components that declare none.
    """

    name: str
    components: dict[str, tuple[MetadataElement, ...] | None] = field(
        factory=dict, converter=_freeze_components, hash=False
    )
    provider_authorities: frozenset[str] = field(factory=frozenset, converter=frozenset)

    def component_name(self, class_name: str) -> ComponentName:
        if class_name.startswith("."):
            class_name = self.name + class_name
        return ComponentName(self.name, class_name)


class InMemoryPackageInspector:
    """Package inspector backed by an in-memory package table.

    Args:
        event_bus: When given, install/update/uninstall publish events on it.
    """

    def __init__(self, event_bus: PackageEventBus | None = None) -> None:
        self._packages: dict[str, InstalledPackage] = {}
        self._lock = Lock()
        self.event_bus = event_bus

    # -------------------------------------------------------------------------
    # Package management
    # -------------------------------------------------------------------------

    def install(self, package: InstalledPackage) -> None:
        """Install or replace a package; replacing publishes a change event."""
        with self._lock:
            existed = package.name in self._packages
            self._packages[package.name] = package
        logger.debug(f"{'Updated' if existed else 'Installed'} package {package.name}")

        if self.event_bus is not None:
            if existed:
                self.event_bus.package_changed(package.name)
            else:
                self.event_bus.package_added(package.name)

    def update(self, package: InstalledPackage) -> None:
        """Replace an installed package.

        Raises:
            KeyError: If the package is not installed.
        """
        with self._lock:
            if package.name not in self._packages:
                raise KeyError(package.name)
            self._packages[package.name] = package
        if self.event_bus is not None:
            self.event_bus.package_changed(package.name)

    def uninstall(self, package_name: str) -> None:
        """Remove a package.

        Raises:
            KeyError: If the package is not installed.
        """
        with self._lock:
            del self._packages[package_name]
        logger.debug(f"Removed package {package_name}")
        if self.event_bus is not None:
            self.event_bus.package_removed(package_name)

    def installed_packages(self) -> list[str]:
        with self._lock:
            return list(self._packages)

    # -------------------------------------------------------------------------
    # PackageInspectorProtocol
    # -------------------------------------------------------------------------

    def list_searchable_components(self) -> Sequence[ComponentName]:
        with self._lock:
            packages = list(self._packages.values())
        return [
            package.component_name(class_name)
            for package in packages
            for class_name, metadata in package.components.items()
            if metadata is not None
        ]

    def get_raw_metadata(
        self, component: ComponentName
    ) -> Sequence[MetadataElement] | None:
        with self._lock:
            package = self._packages.get(component.package_name)
        if package is None:
            raise MetadataUnavailableError(component, "package not installed")

        for class_name, metadata in package.components.items():
            if package.component_name(class_name) == component:
                return metadata
        raise MetadataUnavailableError(component, "component not found")

    def resolve_provider_owner(self, authority: str) -> str | None:
        with self._lock:
            packages = list(self._packages.values())
        for package in packages:
            if authority in package.provider_authorities:
                return package.name
        return None
