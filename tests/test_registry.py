"""Tests for the format registry and file helpers."""

from __future__ import annotations

from typing import BinaryIO

import pytest

from gettext_catalog.errors import UnsupportedFormatError
from gettext_catalog.formats import (
    JSONFormat,
    LocalizationFormat,
    MOFormat,
    POFormat,
    get_format,
    is_supported,
    list_extensions,
    loads,
    read_file,
    register_format,
    write_file,
)
from gettext_catalog.formats import registry
from gettext_catalog.model import Localization, Message


class TestGetFormat:
    """Test codec selection."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("po", POFormat),
            (".pot", POFormat),
            ("locale/de.PO", POFormat),
            ("mo", MOFormat),
            ("messages/de.json", JSONFormat),
        ],
    )
    def test_lookup(self, name, expected):
        """Test lookup by name, extension and path."""
        assert isinstance(get_format(name), expected)

    def test_unsupported(self):
        """Test that unknown extensions list the available ones."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            get_format("catalog.xliff")

        assert exc_info.value.name == ".xliff"
        assert ".po" in exc_info.value.available

    def test_list_and_check(self):
        """Test listing registered extensions."""
        assert {".po", ".pot", ".mo", ".json"} <= set(list_extensions())
        assert is_supported("de.mo")
        assert not is_supported("de.xliff")


class TestRegisterFormat:
    """Test registering custom codecs."""

    @pytest.fixture
    def restore_registry(self):
        saved = dict(registry._FORMAT_REGISTRY)
        yield
        registry._FORMAT_REGISTRY.clear()
        registry._FORMAT_REGISTRY.update(saved)

    def test_register(self, restore_registry):
        """Test that a registered codec is used for its extension."""

        class KeyListFormat(LocalizationFormat):
            name = "keys"
            extensions = (".keys",)
            binary = False

            def read(self, localization: Localization, stream: BinaryIO, load_comments: bool = False) -> None:
                for line in stream.read().decode("utf-8").splitlines():
                    localization.add(Message(line))

            def write(self, localization: Localization, stream: BinaryIO, write_comments: bool = False) -> None:
                stream.write("\n".join(m.key for m in localization).encode("utf-8"))

        register_format(KeyListFormat)

        assert loads("a\nb", format="keys").count == 2


class TestFiles:
    """Test reading and writing files."""

    def test_write_and_read(self, tmp_path):
        """Test a file round trip chosen by extension."""
        catalog = Localization()
        catalog.add(Message("Yes", translations=["Ja"]))

        for name in ("de.po", "de.mo", "de.json"):
            write_file(catalog, tmp_path / name)
            assert read_file(tmp_path / name).get("Yes").translations == ["Ja"]

    def test_format_override(self, tmp_path):
        """Test reading a file whose extension does not match."""
        path = tmp_path / "catalog.txt"
        path.write_text('msgid "Yes"\nmsgstr "Ja"\n', encoding="utf-8")

        assert read_file(path, format="po").contains("Yes")

    def test_read_into_existing(self, tmp_path):
        """Test merging a file into an existing catalog."""
        path = tmp_path / "extra.po"
        path.write_text('msgid "No"\nmsgstr "Nein"\n', encoding="utf-8")
        catalog = Localization()
        catalog.add(Message("Yes", translations=["Ja"]))

        result = read_file(path, localization=catalog)

        assert result is catalog
        assert catalog.count == 2

    def test_missing_file(self, tmp_path):
        """Test that I/O errors propagate."""
        with pytest.raises(OSError):
            read_file(tmp_path / "missing.po")
