"""Raw declarative metadata and package change events.

Inspectors hand the parser an ordered stream of ``MetadataElement`` values,
one per declared element, with attribute values left undecoded.
"""

from enum import StrEnum, auto
from types import MappingProxyType
from typing import Any

from attrs import define, field

# Element tags understood by the configuration parser
SEARCHABLE_TAG = "searchable"
ACTION_KEY_TAG = "actionkey"


def _freeze(attributes: Any) -> MappingProxyType:
    return MappingProxyType(dict(attributes or {}))


@define(frozen=True, slots=True)
class MetadataElement:
    """One declared element: a tag plus its raw attribute values."""

    tag: str
    attributes: MappingProxyType = field(factory=dict, converter=_freeze, hash=False)

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    @classmethod
    def searchable(cls, **attributes: Any) -> "MetadataElement":
        return cls(SEARCHABLE_TAG, attributes)

    @classmethod
    def action_key(cls, **attributes: Any) -> "MetadataElement":
        return cls(ACTION_KEY_TAG, attributes)


class PackageEventKind(StrEnum):
    """Kinds of package change delivered by the system event stream."""

    ADDED = auto()
    REMOVED = auto()
    CHANGED = auto()


@define(frozen=True, slots=True)
class PackageEvent:
    """A package install, uninstall or update notification.

    The package name is carried for logging only; every event triggers a full
    rescan.
    """

    kind: PackageEventKind = field(converter=PackageEventKind)
    package_name: str
