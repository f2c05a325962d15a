"""Tests for turning declared metadata into SearchableInfo records."""

from unittest.mock import Mock

import pytest

from src.domain.entities import (
    DEFAULT_IME_OPTIONS,
    DEFAULT_INPUT_TYPE,
    MetadataElement,
    SearchableInfo,
)
from src.domain.errors import ProviderResolutionError
from src.domain.parsing import ConfigurationParser
from tests.fixtures.metadata import action_key, searchable


@pytest.fixture
def provider_inspector():
    """Inspector mock that only knows how to resolve provider authorities."""
    inspector = Mock()
    inspector.resolve_provider_owner.return_value = "com.example.provider"
    return inspector


@pytest.fixture
def parser(provider_inspector) -> ConfigurationParser:
    return ConfigurationParser(provider_inspector, inhibit_suggestions=False)


class TestSearchableElement:
    """Test parsing of the searchable element itself."""

    def test_minimal_declaration_uses_defaults(self, parser, component):
        """A bare label yields a valid record with every default."""
        info = parser.parse([searchable(label=7)], component)

        assert info is not None
        assert info.is_valid
        assert info.label_id == 7
        assert info.search_activity == component
        assert info.input_type == DEFAULT_INPUT_TYPE
        assert info.ime_options == DEFAULT_IME_OPTIONS
        assert info.suggest_authority is None
        assert info.suggest_provider_package is None
        assert info.get_suggest_threshold() == 0
        assert not info.action_keys

    def test_authority_and_threshold_resolve_provider(
        self, parser, component, provider_inspector
    ):
        info = parser.parse(
            [
                searchable(
                    label=5,
                    searchSuggestAuthority="com.example.suggest",
                    searchSuggestThreshold=1,
                )
            ],
            component,
        )

        assert info.label_id == 5
        assert info.suggest_authority == "com.example.suggest"
        assert info.get_suggest_threshold() == 1
        assert info.suggest_provider_package == "com.example.provider"
        provider_inspector.resolve_provider_owner.assert_called_once_with(
            "com.example.suggest"
        )

    def test_zero_label_is_not_searchable(self, parser, component):
        """A declaration without a label is dropped, not an error."""
        assert parser.parse([searchable(label=0, hint=3)], component) is None

    def test_missing_label_is_not_searchable(self, parser, component):
        assert parser.parse([searchable(hint=3)], component) is None

    def test_no_searchable_element(self, parser, component):
        assert parser.parse([], component) is None
        assert parser.parse([MetadataElement("other")], component) is None

    def test_unrelated_elements_are_ignored(self, parser, component):
        info = parser.parse(
            [MetadataElement("other"), searchable(label=1), MetadataElement("x")],
            component,
        )

        assert info is not None

    def test_declarative_text_values(self, parser, component):
        """Manifest-style text values decode to the same fields."""
        info = parser.parse(
            [
                searchable(
                    label="@0x7f050001",
                    icon="@12",
                    searchMode="showSearchLabelAsBadge|queryRewriteFromText",
                    inputType="textUri",
                    imeOptions="actionGo",
                    includeInGlobalSearch="true",
                    voiceSearchMode="showVoiceSearchButton|launchRecognizer",
                    voiceMaxResults="3",
                )
            ],
            component,
        )

        assert info.label_id == 0x7F050001
        assert info.icon_id == 12
        assert info.badge_label
        assert info.query_rewrite_from_text
        assert not info.query_rewrite_from_data
        assert info.input_type == 0x11
        assert info.ime_options == 0x2
        assert info.include_in_global_search
        assert info.voice_search_enabled
        assert info.voice_search_launch_recognizer
        assert info.voice_max_results == 3

    def test_null_reference_label_is_not_searchable(self, parser, component):
        assert parser.parse([searchable(label="@null")], component) is None

    def test_invalid_attribute_falls_back_to_default(self, parser, component):
        """An undecodable value is ignored rather than failing the record."""
        info = parser.parse(
            [searchable(label=1, searchMode="notAFlag", includeInGlobalSearch="maybe")],
            component,
        )

        assert info.search_mode == 0
        assert not info.include_in_global_search

    def test_out_of_range_integer_falls_back_to_default(self, parser, component):
        info = parser.parse(
            [searchable(label=1, voiceMaxResults="3000000000")], component
        )

        assert info.voice_max_results == 0
        assert SearchableInfo.deserialize(info.serialize()) == info

    def test_unresolved_provider_leaves_owner_empty(
        self, parser, component, provider_inspector
    ):
        provider_inspector.resolve_provider_owner.return_value = None

        info = parser.parse(
            [searchable(label=1, searchSuggestAuthority="missing")], component
        )

        assert info.suggest_authority == "missing"
        assert info.suggest_provider_package is None

    def test_provider_resolution_error_leaves_owner_empty(
        self, parser, component, provider_inspector
    ):
        provider_inspector.resolve_provider_owner.side_effect = (
            ProviderResolutionError("missing")
        )

        info = parser.parse(
            [searchable(label=1, searchSuggestAuthority="missing")], component
        )

        assert info is not None
        assert info.suggest_provider_package is None

    def test_parser_without_inspector(self, component):
        parser = ConfigurationParser(inhibit_suggestions=False)

        info = parser.parse(
            [searchable(label=1, searchSuggestAuthority="a.b")], component
        )

        assert info.suggest_authority == "a.b"
        assert info.suggest_provider_package is None

    def test_later_searchable_element_replaces_earlier(self, parser, component):
        info = parser.parse(
            [
                searchable(label=1),
                action_key(keycode=5, queryActionMsg="call"),
                searchable(label=2),
            ],
            component,
        )

        assert info.label_id == 2
        assert info.find_action_key(5) is None


class TestActionKeyElements:
    """Test action key folding."""

    def test_action_keys_follow_searchable(self, parser, component):
        info = parser.parse(
            [
                searchable(label=1),
                action_key(keycode=5, queryActionMsg="call"),
                action_key(keycode=6, suggestActionMsg="dial"),
            ],
            component,
        )

        assert [k.key_code for k in info.action_keys] == [6, 5]
        assert info.find_action_key(6).suggest_action_msg == "dial"

    def test_duplicate_key_code_last_declared_wins(self, parser, component):
        info = parser.parse(
            [
                searchable(label=1),
                action_key(keycode=5, queryActionMsg="first"),
                action_key(keycode=5, queryActionMsg="second"),
            ],
            component,
        )

        assert info.find_action_key(5).query_action_msg == "second"

    def test_action_key_before_searchable_rejects_component(self, parser, component):
        result = parser.parse(
            [action_key(keycode=5, queryActionMsg="call"), searchable(label=1)],
            component,
        )

        assert result is None

    def test_unusable_action_keys_are_dropped(self, parser, component):
        info = parser.parse(
            [
                searchable(label=1),
                action_key(keycode=0, queryActionMsg="call"),
                action_key(keycode=5),
                action_key(keycode="bogus", queryActionMsg="call"),
            ],
            component,
        )

        assert info is not None
        assert not info.action_keys

    def test_text_key_code(self, parser, component):
        info = parser.parse(
            [searchable(label=1), action_key(keycode="0x5", queryActionMsg="call")],
            component,
        )

        assert info.find_action_key(5) is not None


class TestInhibitSuggestions:
    """Test the switch that strips suggestion configuration."""

    def test_suggestion_fields_are_dropped(self, component, provider_inspector):
        parser = ConfigurationParser(provider_inspector, inhibit_suggestions=True)

        info = parser.parse(
            [
                searchable(
                    label=1,
                    searchSuggestAuthority="com.example.suggest",
                    searchSuggestThreshold=4,
                ),
                action_key(
                    keycode=5,
                    queryActionMsg="call",
                    suggestActionMsg="dial",
                    suggestActionMsgColumn="number",
                ),
                action_key(keycode=6, suggestActionMsg="only suggestions"),
            ],
            component,
        )

        assert info.suggest_authority is None
        assert info.get_suggest_threshold() == 0
        assert info.suggest_provider_package is None
        provider_inspector.resolve_provider_owner.assert_not_called()

        binding = info.find_action_key(5)
        assert binding.query_action_msg == "call"
        assert binding.suggest_action_msg is None
        assert binding.suggest_action_msg_column is None
        assert info.find_action_key(6) is None
