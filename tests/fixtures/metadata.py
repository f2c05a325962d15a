"""Builders for declared metadata and installed packages used across tests."""

from src.domain.entities import MetadataElement
from src.infrastructure.packages import InstalledPackage

WEB_SEARCH_ACTION = "android.intent.action.WEB_SEARCH"


def searchable(**attributes) -> MetadataElement:
    """Build a ``searchable`` metadata element."""
    return MetadataElement.searchable(**attributes)


def action_key(**attributes) -> MetadataElement:
    """Build an ``actionkey`` metadata element."""
    return MetadataElement.action_key(**attributes)


def package(name: str, *, providers=(), **components) -> InstalledPackage:
    """Build an installed package; keyword names become ``.Name`` components."""
    return InstalledPackage(
        name=name,
        components={f".{cls}": metadata for cls, metadata in components.items()},
        provider_authorities=providers,
    )
