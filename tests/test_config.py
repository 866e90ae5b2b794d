"""Tests for configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from gettext_catalog.config import CatalogConfig, get_config, set_config


@pytest.fixture(autouse=True)
def reset_config():
    """Reset the global configuration around each test."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DEFAULT_LANGUAGE",
        "LOCALE_DIR",
        "LOAD_COMMENTS",
        "WRITE_COMMENTS",
        "JSON_INDENT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(f"GETTEXT_CATALOG_{name}", raising=False)
    return monkeypatch


class TestCatalogConfig:
    """Test CatalogConfig."""

    def test_defaults(self, clean_env):
        """Test default values."""
        config = CatalogConfig.from_environment()

        assert config.default_language == "en"
        assert config.locale_dir == Path("locale")
        assert config.load_comments is False
        assert config.write_comments is True
        assert config.json_indent is None
        assert config.log_level == "WARNING"

    def test_from_environment(self, clean_env):
        """Test reading every variable."""
        clean_env.setenv("GETTEXT_CATALOG_DEFAULT_LANGUAGE", "de")
        clean_env.setenv("GETTEXT_CATALOG_LOCALE_DIR", "/srv/i18n")
        clean_env.setenv("GETTEXT_CATALOG_LOAD_COMMENTS", "yes")
        clean_env.setenv("GETTEXT_CATALOG_WRITE_COMMENTS", "off")
        clean_env.setenv("GETTEXT_CATALOG_JSON_INDENT", "4")
        clean_env.setenv("GETTEXT_CATALOG_LOG_LEVEL", "debug")

        config = CatalogConfig.from_environment()

        assert config.default_language == "de"
        assert config.locale_dir == Path("/srv/i18n")
        assert config.load_comments is True
        assert config.write_comments is False
        assert config.json_indent == 4
        assert config.log_level_value == logging.DEBUG

    def test_invalid_values_use_defaults(self, clean_env):
        """Test that unparsable values fall back to defaults."""
        clean_env.setenv("GETTEXT_CATALOG_LOAD_COMMENTS", "maybe")
        clean_env.setenv("GETTEXT_CATALOG_JSON_INDENT", "wide")
        clean_env.setenv("GETTEXT_CATALOG_LOG_LEVEL", "LOUD")

        config = CatalogConfig.from_environment()

        assert config.load_comments is False
        assert config.json_indent is None
        assert config.log_level_value == logging.WARNING

    def test_locale_dir_coerced(self):
        """Test that string paths become Path objects."""
        assert CatalogConfig(locale_dir="i18n").locale_dir == Path("i18n")

    def test_with_overrides(self):
        """Test copying with selected fields replaced."""
        config = CatalogConfig(default_language="de")
        updated = config.with_overrides(write_comments=False, json_indent=None)

        assert updated.default_language == "de"
        assert updated.write_comments is False
        assert config.write_comments is True

    def test_to_dict(self):
        """Test dictionary conversion."""
        data = CatalogConfig().to_dict()

        assert data["locale_dir"] == "locale"
        assert data["default_language"] == "en"


class TestGlobalConfig:
    """Test the global configuration."""

    def test_loaded_once(self, clean_env):
        """Test that the environment is read on first use."""
        clean_env.setenv("GETTEXT_CATALOG_DEFAULT_LANGUAGE", "fr")

        config = get_config()

        assert config.default_language == "fr"
        assert get_config() is config

    def test_set_config(self):
        """Test replacing the global configuration."""
        config = CatalogConfig(default_language="ja")
        set_config(config)

        assert get_config() is config
