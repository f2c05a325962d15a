"""Tests for settings loading and the logging helpers."""

from pathlib import Path

from pydantic import ValidationError
import pytest

from src.config import get_config, resilient_operation, settings
from src.config.settings import WEB_SEARCH_ACTION, Settings


class TestSettings:
    """Test environment-driven configuration."""

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.registry.web_search_action == WEB_SEARCH_ACTION
        assert config.registry.web_search_authorities == []
        assert not config.registry.inhibit_suggestions
        assert config.registry.notify_workers == 2
        assert config.logging.console_level == "INFO"

    def test_nested_environment_variables(self, monkeypatch):
        monkeypatch.setenv("REGISTRY__INHIBIT_SUGGESTIONS", "true")
        monkeypatch.setenv("REGISTRY__WEB_SEARCH_AUTHORITIES", '["a.b", "c.d"]')

        config = Settings(_env_file=None)

        assert config.registry.inhibit_suggestions
        assert config.registry.web_search_authorities == ["a.b", "c.d"]

    def test_flat_keys_map_to_groups(self):
        config = Settings(
            _env_file=None,
            searchables_manifest_dir="/srv/manifests",
            console_log_level="WARNING",
        )

        assert config.registry.manifest_dir == Path("/srv/manifests")
        assert config.logging.console_level == "WARNING"

    def test_notify_workers_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("REGISTRY__NOTIFY_WORKERS", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_flat_key_access(self):
        assert get_config("SEARCHABLES_NOTIFY_WORKERS") == (
            settings.registry.notify_workers
        )
        assert get_config("UNKNOWN_KEY", "fallback") == "fallback"


class TestResilientOperation:
    """Test the boundary error logging decorator."""

    def test_passes_results_through(self):
        @resilient_operation("double")
        def double(value):
            return value * 2

        assert double(4) == 8

    def test_reraises_after_logging(self):
        @resilient_operation()
        def fail():
            raise RuntimeError("scan failed")

        with pytest.raises(RuntimeError, match="scan failed"):
            fail()
