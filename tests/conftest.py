from collections.abc import Iterator

import pytest

from src.application.services import RegistryCoordinator
from src.domain.entities import ComponentName
from src.infrastructure.events import PackageEventBus
from src.infrastructure.packages import InMemoryPackageInspector


@pytest.fixture
def component() -> ComponentName:
    """A component identity used across tests."""
    return ComponentName("com.example.notes", "com.example.notes.SearchNotes")


@pytest.fixture
def event_bus() -> PackageEventBus:
    """Provide an in-process package event bus."""
    return PackageEventBus()


@pytest.fixture
def inspector(event_bus) -> InMemoryPackageInspector:
    """Provide an in-memory inspector that publishes on the event bus."""
    return InMemoryPackageInspector(event_bus)


@pytest.fixture
def coordinator(inspector, event_bus) -> Iterator[RegistryCoordinator]:
    """Provide a coordinator and tear it down after the test."""
    coordinator = RegistryCoordinator(inspector, event_bus)
    yield coordinator
    coordinator.close()
