"""Tests for runtime translation.

Tests cover:
- Registering catalogs by language
- Loading a locale directory
- gettext/ngettext lookup and fallbacks
- Reverse lookup across languages
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from gettext_catalog.config import CatalogConfig
from gettext_catalog.formats import write_file
from gettext_catalog.model import Localization, Message
from gettext_catalog.translator import Translator


# =============================================================================
# Test Fixtures
# =============================================================================


def make_catalog(language: str | None, plural_forms: str | None = None, **translations) -> Localization:
    catalog = Localization()
    if language is not None:
        catalog.set_header("Language", language)
    if plural_forms is not None:
        catalog.set_header("Plural-Forms", plural_forms)
    for msgid, translation in translations.items():
        catalog.add(Message(msgid, translations=[translation]))
    return catalog


@pytest.fixture
def german() -> Localization:
    catalog = make_catalog("de", Save="Speichern")
    catalog.add(Message("Open", context="menu", translations=["Öffnen"]))
    catalog.add(Message("Empty", translations=[""]))
    catalog.add(Message("One file", plural="{0} files", translations=["Eine Datei", "{0} Dateien"]))
    return catalog


@pytest.fixture
def translator(german) -> Translator:
    translator = Translator(CatalogConfig(default_language="en"))
    translator.add(make_catalog("en", Save="Save"))
    translator.add(german)
    return translator


@pytest.fixture
def locale_dir(tmp_path: Path) -> Path:
    """Directory with catalogs in several formats."""
    write_file(make_catalog("de", Save="Speichern"), tmp_path / "german.po")
    # No Language header, so the file name decides
    (tmp_path / "fr.po").write_text('msgid "Save"\nmsgstr "Enregistrer"\n', encoding="utf-8")
    (tmp_path / "es.po").write_text('msgid ""\nmsgstr "Project-Id-Version: demo"\n', encoding="utf-8")
    write_file(make_catalog("it", Save="Salva"), tmp_path / "it.mo")
    (tmp_path / "broken.po").write_text("not a catalog\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored\n", encoding="utf-8")
    return tmp_path


# =============================================================================
# Registration Tests
# =============================================================================


class TestRegistration:
    """Test adding catalogs."""

    def test_language_from_header(self, translator):
        """Test that catalogs register under their Language header."""
        assert translator.contains_language("de")
        assert translator.contains_language("DE")
        assert sorted(translator.languages) == ["de", "en"]

    def test_explicit_language(self):
        """Test registering under another language."""
        translator = Translator(CatalogConfig())
        translator.add(make_catalog("de", Save="Speichern"), "de_AT")

        assert translator.contains_language("de_at")
        assert not translator.contains_language("de")

    def test_replace(self, translator):
        """Test that adding a language again replaces its catalog."""
        translator.add(make_catalog("de", Save="Sichern"))
        assert translator.gettext("Save", "de") == "Sichern"


class TestLoadDirectory:
    """Test loading catalogs from a directory."""

    def test_load(self, locale_dir):
        """Test language detection from headers and file names."""
        translator = Translator(CatalogConfig(default_language="en"))
        loaded = translator.load_directory(locale_dir)

        assert loaded == 2
        assert translator.gettext("Save", "de") == "Speichern"
        assert translator.gettext("Save", "fr") == "Enregistrer"
        assert not translator.contains_language("german")
        assert not translator.contains_language("es")

    def test_working_language_always_present(self, locale_dir):
        """Test that an empty catalog is created for the working language."""
        translator = Translator(CatalogConfig(default_language="en"))
        translator.load_directory(locale_dir)

        assert translator.contains_language("en")
        assert translator.gettext("Save") == "Save"

    def test_extensions(self, locale_dir):
        """Test selecting which files are loaded."""
        translator = Translator(CatalogConfig())
        translator.load_directory(locale_dir, extensions=(".mo",))

        assert translator.gettext("Save", "it") == "Salva"
        assert not translator.contains_language("de")

    def test_first_catalog_wins(self, tmp_path):
        """Test that later files for the same language are ignored."""
        write_file(make_catalog("de", Save="Speichern"), tmp_path / "a.po")
        write_file(make_catalog("de", Save="Sichern"), tmp_path / "b.po")

        translator = Translator(CatalogConfig())
        assert translator.load_directory(tmp_path) == 1
        assert translator.gettext("Save", "de") == "Speichern"

    def test_configured_directory(self, locale_dir):
        """Test the default directory from the configuration."""
        translator = Translator(CatalogConfig(locale_dir=locale_dir))
        translator.load_directory()

        assert translator.contains_language("de")

    def test_missing_directory(self, tmp_path, caplog):
        """Test that a missing directory only logs a warning."""
        translator = Translator(CatalogConfig(default_language="en"))

        with caplog.at_level(logging.WARNING, logger="gettext_catalog"):
            assert translator.load_directory(tmp_path / "missing") == 0

        assert "does not exist" in caplog.text
        assert translator.languages == ["en"]

    def test_skipped_files_logged(self, locale_dir, caplog):
        """Test warnings for unreadable and empty catalogs."""
        translator = Translator(CatalogConfig())

        with caplog.at_level(logging.WARNING, logger="gettext_catalog"):
            translator.load_directory(locale_dir)

        assert "broken.po" in caplog.text
        assert "es.po" in caplog.text


# =============================================================================
# Lookup Tests
# =============================================================================


class TestGettext:
    """Test singular lookup."""

    def test_translate(self, translator):
        """Test a simple lookup."""
        assert translator.gettext("Save", "de") == "Speichern"

    def test_context(self, translator):
        """Test lookup with context."""
        assert translator.gettext("Open", "de", "menu") == "Öffnen"
        assert translator.pgettext("menu", "Open", "de") == "Öffnen"
        assert translator.gettext("Open", "de") == "Open"

    def test_missing_message(self, translator):
        """Test that unknown messages return the source string."""
        assert translator.gettext("Quit", "de") == "Quit"

    def test_empty_translation(self, translator):
        """Test that empty translations fall back to the source string."""
        assert translator.gettext("Empty", "de") == "Empty"

    def test_unknown_language(self, translator):
        """Test fallback to the working language."""
        assert translator.gettext("Save", "ja") == "Save"

    def test_default_language(self, german):
        """Test lookup without a language."""
        translator = Translator(CatalogConfig(default_language="de"))
        translator.add(german)

        assert translator.gettext("Save") == "Speichern"

    def test_no_catalogs(self):
        """Test lookup on an empty translator."""
        assert Translator(CatalogConfig()).gettext("Save") == "Save"


class TestNgettext:
    """Test plural lookup."""

    def test_plural_forms(self, translator):
        """Test selecting the plural translation."""
        assert translator.ngettext("One file", "{0} files", 1, "de") == "Eine Datei"
        assert translator.ngettext("One file", "{0} files", 5, "de") == "{0} Dateien"
        assert translator.ngettext("One file", "{0} files", 0, "de") == "{0} Dateien"

    def test_missing_message(self, translator):
        """Test fallback to the source strings."""
        assert translator.ngettext("One dir", "{0} dirs", 1, "de") == "One dir"
        assert translator.ngettext("One dir", "{0} dirs", 2, "de") == "{0} dirs"

    def test_index_out_of_range(self):
        """Test that a formula index beyond the translations falls back."""
        catalog = make_catalog("ru", "nplurals=3; plural=n==1 ? 0 : n==2 ? 1 : 2;")
        catalog.add(Message("One file", plural="{0} files", translations=["файл", "файла"]))
        translator = Translator(CatalogConfig())
        translator.add(catalog)

        assert translator.ngettext("One file", "{0} files", 2, "ru") == "файла"
        assert translator.ngettext("One file", "{0} files", 7, "ru") == "{0} files"


class TestFindByTranslation:
    """Test reverse lookup."""

    def test_all_languages(self, translator):
        """Test searching every catalog."""
        result = translator.find_by_translation("Save")
        assert [(lang, m.id) for lang, m in result] == [("en", "Save")]

    def test_single_language(self, translator):
        """Test searching one catalog."""
        result = translator.find_by_translation("Öffnen", language="de", context="menu")

        assert len(result) == 1
        assert result[0][1].key == "menu\x04Open"

    def test_unknown_language(self, translator):
        """Test that unknown languages yield nothing."""
        assert translator.find_by_translation("Speichern", language="ja") == []
