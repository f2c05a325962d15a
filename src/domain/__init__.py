"""Searchables domain layer - value objects, parsing rules and contracts."""

from . import entities, packages, parsing

from .entities import (
    ActionKeyInfo,
    ActionKeyTable,
    ComponentName,
    MetadataElement,
    PackageEvent,
    PackageEventKind,
    SearchableInfo,
)
from .errors import (
    MetadataUnavailableError,
    ProviderResolutionError,
    SearchablesError,
    SerializationMismatchError,
    UnknownSearchableError,
)
from .packages import PackageEventStreamProtocol, PackageInspectorProtocol
from .parsing import ConfigurationParser

__all__ = [
    # Modules
    "entities",
    "packages",
    "parsing",
    # Key domain types
    "ActionKeyInfo",
    "ActionKeyTable",
    "ComponentName",
    "MetadataElement",
    "PackageEvent",
    "PackageEventKind",
    "SearchableInfo",
    # Contracts
    "PackageEventStreamProtocol",
    "PackageInspectorProtocol",
    # Parsing
    "ConfigurationParser",
    # Errors
    "MetadataUnavailableError",
    "ProviderResolutionError",
    "SearchablesError",
    "SerializationMismatchError",
    "UnknownSearchableError",
]
