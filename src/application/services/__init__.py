"""Application services - registry ownership and lifecycle coordination."""

from .registry_coordinator import (
    RegistryCoordinator,
    RegistryFactory,
    SearchablesChangedListener,
)
from .searchable_registry import RegistrySnapshot, SearchableRegistry

__all__ = [
    "RegistryCoordinator",
    "RegistryFactory",
    "RegistrySnapshot",
    "SearchableRegistry",
    "SearchablesChangedListener",
]
