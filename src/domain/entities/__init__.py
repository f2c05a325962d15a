"""Core domain entities representing searchable components."""

from .action_keys import EMPTY_ACTION_KEYS, ActionKeyInfo, ActionKeyTable
from .component import ComponentName
from .metadata import (
    ACTION_KEY_TAG,
    SEARCHABLE_TAG,
    MetadataElement,
    PackageEvent,
    PackageEventKind,
)
from .parcel import ParcelReader, ParcelWriter
from .searchable import (
    DEFAULT_IME_OPTIONS,
    DEFAULT_INPUT_TYPE,
    SEARCH_MODE_BADGE_ICON,
    SEARCH_MODE_BADGE_LABEL,
    SEARCH_MODE_QUERY_REWRITE_FROM_DATA,
    SEARCH_MODE_QUERY_REWRITE_FROM_TEXT,
    VOICE_SEARCH_LAUNCH_RECOGNIZER,
    VOICE_SEARCH_LAUNCH_WEB_SEARCH,
    VOICE_SEARCH_SHOW_BUTTON,
    SearchableInfo,
)

__all__ = [
    # Identity
    "ComponentName",
    # Action keys
    "ActionKeyInfo",
    "ActionKeyTable",
    "EMPTY_ACTION_KEYS",
    # Searchable record
    "SearchableInfo",
    "DEFAULT_IME_OPTIONS",
    "DEFAULT_INPUT_TYPE",
    "SEARCH_MODE_BADGE_ICON",
    "SEARCH_MODE_BADGE_LABEL",
    "SEARCH_MODE_QUERY_REWRITE_FROM_DATA",
    "SEARCH_MODE_QUERY_REWRITE_FROM_TEXT",
    "VOICE_SEARCH_LAUNCH_RECOGNIZER",
    "VOICE_SEARCH_LAUNCH_WEB_SEARCH",
    "VOICE_SEARCH_SHOW_BUTTON",
    # Raw metadata and events
    "ACTION_KEY_TAG",
    "SEARCHABLE_TAG",
    "MetadataElement",
    "PackageEvent",
    "PackageEventKind",
    # Wire container
    "ParcelReader",
    "ParcelWriter",
]
