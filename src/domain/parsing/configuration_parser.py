"""Parser turning declared searchable metadata into ``SearchableInfo`` records.

The metadata stream is walked in order. A ``searchable`` element starts the
record; each ``actionkey`` element after it folds one binding into that
record. Any other element is ignored.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from src.config import get_logger, settings
from src.domain.entities import (
    ACTION_KEY_TAG,
    DEFAULT_IME_OPTIONS,
    DEFAULT_INPUT_TYPE,
    SEARCHABLE_TAG,
    ComponentName,
    MetadataElement,
    SearchableInfo,
)
from src.domain.errors import ProviderResolutionError
from src.domain.packages import PackageInspectorProtocol

from .values import (
    IME_OPTION_FLAGS,
    INPUT_TYPE_FLAGS,
    SEARCH_MODE_FLAGS,
    VOICE_SEARCH_MODE_FLAGS,
    to_bool,
    to_int,
    to_resource_ref,
    to_str,
)

logger = get_logger(__name__)


def _flags(table: Mapping[str, int]) -> Callable[[Any], int]:
    return lambda value: to_int(value, table)


# Searchable attribute name -> (record field, decoder, default)
_SEARCHABLE_ATTRIBUTES: dict[str, tuple[str, Callable[[Any], Any], Any]] = {
    "label": ("label_id", to_resource_ref, 0),
    "hint": ("hint_id", to_resource_ref, 0),
    "icon": ("icon_id", to_resource_ref, 0),
    "searchButtonText": ("search_button_text", to_resource_ref, 0),
    "searchMode": ("search_mode", _flags(SEARCH_MODE_FLAGS), 0),
    "inputType": ("input_type", _flags(INPUT_TYPE_FLAGS), DEFAULT_INPUT_TYPE),
    "imeOptions": ("ime_options", _flags(IME_OPTION_FLAGS), DEFAULT_IME_OPTIONS),
    "includeInGlobalSearch": ("include_in_global_search", to_bool, False),
    "voiceSearchMode": ("voice_search_mode", _flags(VOICE_SEARCH_MODE_FLAGS), 0),
    "voiceLanguageModel": ("voice_language_model_id", to_resource_ref, 0),
    "voicePromptText": ("voice_prompt_text_id", to_resource_ref, 0),
    "voiceLanguage": ("voice_language_id", to_resource_ref, 0),
    "voiceMaxResults": ("voice_max_results", to_int, 0),
}

_SUGGESTION_ATTRIBUTES: dict[str, tuple[str, Callable[[Any], Any], Any]] = {
    "searchSuggestAuthority": ("suggest_authority", to_str, None),
    "searchSuggestPath": ("suggest_path", to_str, None),
    "searchSuggestSelection": ("suggest_selection", to_str, None),
    "searchSuggestIntentAction": ("suggest_intent_action", to_str, None),
    "searchSuggestIntentData": ("suggest_intent_data", to_str, None),
    "searchSuggestThreshold": ("suggest_threshold", to_int, 0),
}


class ConfigurationParser:
    """Builds one ``SearchableInfo`` per component from its metadata stream.

    Args:
        inspector: Used to resolve the package owning a suggestion authority.
            When None, the owner is left unresolved.
        inhibit_suggestions: Drop every suggestion field and suggestion
            message. Defaults to ``settings.registry.inhibit_suggestions``.
    """

    def __init__(
        self,
        inspector: PackageInspectorProtocol | None = None,
        *,
        inhibit_suggestions: bool | None = None,
    ) -> None:
        self.inspector = inspector
        self.inhibit_suggestions = (
            settings.registry.inhibit_suggestions
            if inhibit_suggestions is None
            else inhibit_suggestions
        )

    def parse(
        self,
        raw_attributes: Iterable[MetadataElement],
        component: ComponentName,
    ) -> SearchableInfo | None:
        """Parse a component's metadata stream.

        Args:
            raw_attributes: Ordered metadata elements for the component
            component: Identity of the component the metadata belongs to

        Returns:
            A valid record, or None if the component is not configured for
            search (no ``searchable`` element, a zero label, or an action key
            declared before the ``searchable`` element)
        """
        result: SearchableInfo | None = None

        for element in raw_attributes:
            if element.tag == SEARCHABLE_TAG:
                result = self._parse_searchable(element, component)
                if result is None:
                    return None
            elif element.tag == ACTION_KEY_TAG:
                if result is None:
                    # Can't process an action key outside its searchable
                    logger.debug(
                        f"Action key before searchable element in "
                        f"{component.flatten_to_short_string()}"
                    )
                    return None
                result = self._parse_action_key(element, result)

        return result

    # -------------------------------------------------------------------------
    # Element parsers
    # -------------------------------------------------------------------------

    def _parse_searchable(
        self, element: MetadataElement, component: ComponentName
    ) -> SearchableInfo | None:
        values = self._decode(element, _SEARCHABLE_ATTRIBUTES, component)
        if not self.inhibit_suggestions:
            values |= self._decode(element, _SUGGESTION_ATTRIBUTES, component)

        authority = values.get("suggest_authority")
        if authority is not None:
            values["suggest_provider_package"] = self._resolve_provider(authority)

        info = SearchableInfo(component, **values)
        if not info.is_valid:
            # Help developers instead of silently discarding
            logger.warning(
                f"Insufficient metadata to configure searchability for "
                f"{component.flatten_to_short_string()}"
            )
            return None
        return info

    def _parse_action_key(
        self, element: MetadataElement, info: SearchableInfo
    ) -> SearchableInfo:
        component = info.search_activity
        key_code = self._decode_one(element, "keycode", to_int, 0, component)
        query_msg = self._decode_one(element, "queryActionMsg", to_str, None, component)
        suggest_msg = suggest_column = None
        if not self.inhibit_suggestions:
            suggest_msg = self._decode_one(
                element, "suggestActionMsg", to_str, None, component
            )
            suggest_column = self._decode_one(
                element, "suggestActionMsgColumn", to_str, None, component
            )
        return info.with_action_key(key_code, query_msg, suggest_msg, suggest_column)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _resolve_provider(self, authority: str) -> str | None:
        if self.inspector is None:
            return None
        try:
            owner = self.inspector.resolve_provider_owner(authority)
        except ProviderResolutionError as e:
            logger.debug(str(e))
            return None
        if owner is None:
            logger.debug(f"No provider installed for authority {authority!r}")
        return owner

    def _decode(
        self,
        element: MetadataElement,
        table: Mapping[str, tuple[str, Callable[[Any], Any], Any]],
        component: ComponentName,
    ) -> dict[str, Any]:
        return {
            field_name: self._decode_one(element, name, decoder, default, component)
            for name, (field_name, decoder, default) in table.items()
        }

    @staticmethod
    def _decode_one(
        element: MetadataElement,
        name: str,
        decoder: Callable[[Any], Any],
        default: Any,
        component: ComponentName,
    ) -> Any:
        raw = element.get(name)
        if raw is None:
            return default
        try:
            return decoder(raw)
        except ValueError as e:
            logger.warning(
                f"Ignoring attribute {name}={raw!r} in "
                f"{component.flatten_to_short_string()}: {e}"
            )
            return default
