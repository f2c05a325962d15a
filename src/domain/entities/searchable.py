"""Searchable component configuration record.

A ``SearchableInfo`` holds everything the search coordinator knows about one
searchable component. Display fields are resource references: opaque ints
that must be resolved against the owning component's own resources, never
against the caller's.
"""

import attrs
from attrs import define, field

from src.domain.errors import SerializationMismatchError

from .action_keys import EMPTY_ACTION_KEYS, ActionKeyInfo, ActionKeyTable
from .component import ComponentName
from .parcel import ParcelReader, ParcelWriter

# Search mode bits
SEARCH_MODE_BADGE_LABEL = 0x04
SEARCH_MODE_BADGE_ICON = 0x08
SEARCH_MODE_QUERY_REWRITE_FROM_DATA = 0x10
SEARCH_MODE_QUERY_REWRITE_FROM_TEXT = 0x20

# Voice search mode bits
VOICE_SEARCH_SHOW_BUTTON = 0x1
VOICE_SEARCH_LAUNCH_WEB_SEARCH = 0x2
VOICE_SEARCH_LAUNCH_RECOGNIZER = 0x4

# Input defaults: plain text class, normal variation; "search" IME action
TYPE_CLASS_TEXT = 0x1
TYPE_TEXT_VARIATION_NORMAL = 0x0
IME_ACTION_SEARCH = 0x3
DEFAULT_INPUT_TYPE = TYPE_CLASS_TEXT | TYPE_TEXT_VARIATION_NORMAL
DEFAULT_IME_OPTIONS = IME_ACTION_SEARCH


@define(frozen=True, slots=True)
class SearchableInfo:
    """Immutable searchability configuration for one component.

    The behavior flags and ``is_valid`` are derived once from the packed
    fields when the record is built and are never recomputed. A record is
    valid only when ``label_id`` is non-zero; invalid records never enter a
    registry.
    """

    search_activity: ComponentName
    label_id: int = 0
    hint_id: int = 0
    search_mode: int = 0
    icon_id: int = 0
    search_button_text: int = 0
    input_type: int = DEFAULT_INPUT_TYPE
    ime_options: int = DEFAULT_IME_OPTIONS
    include_in_global_search: bool = False

    # Suggestions
    suggest_authority: str | None = None
    suggest_path: str | None = None
    suggest_selection: str | None = None
    suggest_intent_action: str | None = None
    suggest_intent_data: str | None = None
    suggest_threshold: int = 0
    suggest_provider_package: str | None = None

    action_keys: ActionKeyTable = EMPTY_ACTION_KEYS

    # Voice search
    voice_search_mode: int = 0
    voice_language_model_id: int = 0
    voice_prompt_text_id: int = 0
    voice_language_id: int = 0
    voice_max_results: int = 0

    # Derived from the fields above at construction time
    badge_label: bool = field(init=False)
    badge_icon: bool = field(init=False)
    query_rewrite_from_data: bool = field(init=False)
    query_rewrite_from_text: bool = field(init=False)
    is_valid: bool = field(init=False)

    @badge_label.default
    def _badge_label(self) -> bool:
        return bool(self.search_mode & SEARCH_MODE_BADGE_LABEL)

    @badge_icon.default
    def _badge_icon(self) -> bool:
        return bool(self.search_mode & SEARCH_MODE_BADGE_ICON) and self.icon_id != 0

    @query_rewrite_from_data.default
    def _query_rewrite_from_data(self) -> bool:
        return bool(self.search_mode & SEARCH_MODE_QUERY_REWRITE_FROM_DATA)

    @query_rewrite_from_text.default
    def _query_rewrite_from_text(self) -> bool:
        return bool(self.search_mode & SEARCH_MODE_QUERY_REWRITE_FROM_TEXT)

    @is_valid.default
    def _is_valid(self) -> bool:
        return self.label_id != 0

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def voice_search_enabled(self) -> bool:
        return bool(self.voice_search_mode & VOICE_SEARCH_SHOW_BUTTON)

    @property
    def voice_search_launch_web_search(self) -> bool:
        return bool(self.voice_search_mode & VOICE_SEARCH_LAUNCH_WEB_SEARCH)

    @property
    def voice_search_launch_recognizer(self) -> bool:
        return bool(self.voice_search_mode & VOICE_SEARCH_LAUNCH_RECOGNIZER)

    def get_suggest_threshold(self) -> int:
        return self.suggest_threshold

    def find_action_key(self, key_code: int) -> ActionKeyInfo | None:
        """Return the binding for ``key_code``, or None if none is defined."""
        return self.action_keys.find(key_code)

    def with_action_key(
        self,
        key_code: int,
        query_action_msg: str | None = None,
        suggest_action_msg: str | None = None,
        suggest_action_msg_column: str | None = None,
    ) -> "SearchableInfo":
        """Return a copy with the binding folded into the action key table.

        Unusable bindings are dropped and ``self`` is returned unchanged.
        """
        table = self.action_keys.prepend(
            key_code, query_action_msg, suggest_action_msg, suggest_action_msg_column
        )
        if table is self.action_keys:
            return self
        return attrs.evolve(self, action_keys=table)

    def provider_package_matches_activity(self) -> bool:
        """True if the suggestion provider lives in the component's own package."""
        return self.suggest_provider_package == self.search_activity.package_name

    # -------------------------------------------------------------------------
    # Wire format
    # -------------------------------------------------------------------------

    def write_to_parcel(self, parcel: ParcelWriter) -> None:
        """Write every field in wire order. Nulls are written as sentinels."""
        parcel.write_bool(self.is_valid)
        parcel.write_int(self.label_id)
        parcel.write_string(self.search_activity.package_name)
        parcel.write_string(self.search_activity.class_name)
        parcel.write_int(self.hint_id)
        parcel.write_int(self.search_mode)
        parcel.write_int(self.icon_id)
        parcel.write_int(self.search_button_text)
        parcel.write_int(self.input_type)
        parcel.write_int(self.ime_options)
        parcel.write_bool(self.include_in_global_search)

        parcel.write_string(self.suggest_authority)
        parcel.write_string(self.suggest_path)
        parcel.write_string(self.suggest_selection)
        parcel.write_string(self.suggest_intent_action)
        parcel.write_string(self.suggest_intent_data)
        parcel.write_int(self.suggest_threshold)

        # Declaration order, so prepending on read restores scan order
        parcel.write_int(len(self.action_keys))
        for info in self.action_keys.declaration_order():
            parcel.write_int(info.key_code)
            parcel.write_string(info.query_action_msg)
            parcel.write_string(info.suggest_action_msg)
            parcel.write_string(info.suggest_action_msg_column)

        parcel.write_string(self.suggest_provider_package)

        parcel.write_int(self.voice_search_mode)
        parcel.write_int(self.voice_language_model_id)
        parcel.write_int(self.voice_prompt_text_id)
        parcel.write_int(self.voice_language_id)
        parcel.write_int(self.voice_max_results)

    @classmethod
    def read_from_parcel(cls, parcel: ParcelReader) -> "SearchableInfo":
        """Read one record written by :meth:`write_to_parcel`.

        Raises:
            SerializationMismatchError: If the stream disagrees with the format.
        """
        valid_flag = parcel.read_bool("validity flag")
        label_id = parcel.read_int("label")
        package_name = parcel.read_string("component package")
        class_name = parcel.read_string("component class")
        if not package_name or not class_name:
            raise SerializationMismatchError("Record has no component identity")
        component = ComponentName(package_name, class_name)

        fields = {
            "hint_id": parcel.read_int("hint"),
            "search_mode": parcel.read_int("search mode"),
            "icon_id": parcel.read_int("icon"),
            "search_button_text": parcel.read_int("search button text"),
            "input_type": parcel.read_int("input type"),
            "ime_options": parcel.read_int("ime options"),
            "include_in_global_search": parcel.read_bool("global search flag"),
            "suggest_authority": parcel.read_string("suggest authority"),
            "suggest_path": parcel.read_string("suggest path"),
            "suggest_selection": parcel.read_string("suggest selection"),
            "suggest_intent_action": parcel.read_string("suggest intent action"),
            "suggest_intent_data": parcel.read_string("suggest intent data"),
            "suggest_threshold": parcel.read_int("suggest threshold"),
        }

        count = parcel.read_int("action key count")
        # Each binding takes at least four ints on the wire
        if count < 0 or count * 16 > parcel.remaining:
            raise SerializationMismatchError(
                f"Action key count {count} does not match the stream"
            )
        bindings: list[ActionKeyInfo] = []
        for _ in range(count):
            info = ActionKeyInfo(
                parcel.read_int("action key code"),
                parcel.read_string("query action msg"),
                parcel.read_string("suggest action msg"),
                parcel.read_string("suggest action msg column"),
            )
            # Only usable bindings are ever written
            if info.key_code == 0 or not info.has_message:
                raise SerializationMismatchError(
                    f"Unusable action key binding {info.key_code} in stream"
                )
            bindings.insert(0, info)

        fields["suggest_provider_package"] = parcel.read_string("suggest provider package")
        fields["voice_search_mode"] = parcel.read_int("voice search mode")
        fields["voice_language_model_id"] = parcel.read_int("voice language model")
        fields["voice_prompt_text_id"] = parcel.read_int("voice prompt text")
        fields["voice_language_id"] = parcel.read_int("voice language")
        fields["voice_max_results"] = parcel.read_int("voice max results")

        info = cls(
            component,
            label_id=label_id,
            action_keys=ActionKeyTable(bindings),
            **fields,
        )
        if info.is_valid != valid_flag:
            raise SerializationMismatchError(
                f"Validity flag {valid_flag} disagrees with label reference {label_id}"
            )
        return info

    def serialize(self) -> bytes:
        """Encode this record in the wire format."""
        parcel = ParcelWriter()
        self.write_to_parcel(parcel)
        return parcel.to_bytes()

    @classmethod
    def deserialize(cls, data: bytes) -> "SearchableInfo":
        """Decode a record produced by :meth:`serialize`.

        The whole buffer must be consumed by exactly one record.

        Raises:
            SerializationMismatchError: On any disagreement with the wire format.
        """
        parcel = ParcelReader(data)
        info = cls.read_from_parcel(parcel)
        parcel.expect_end()
        return info
