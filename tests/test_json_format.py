"""Tests for the JSON codec."""

from __future__ import annotations

import io
import json

import pytest

from gettext_catalog.errors import FormatError
from gettext_catalog.formats import JSONFormat, dumps, loads
from gettext_catalog.model import Localization, Message


@pytest.fixture
def catalog() -> Localization:
    """Create a catalog with comments, context and plurals."""
    catalog = Localization()
    catalog.set_header("Language", "de")
    catalog.add(
        Message(
            "Welcome",
            context="home",
            translations=["Willkommen"],
            comments=["Shown on the start page"],
            translator_comments=["informal"],
            references=["views/home.html"],
            flags=["fuzzy"],
            previous_id="Hello",
        )
    )
    catalog.add(Message("One file", plural="{0} files", translations=["Eine Datei", "{0} Dateien"]))
    return catalog


def read_json(text: str, load_comments: bool = False) -> Localization:
    catalog = Localization()
    JSONFormat().read(catalog, io.BytesIO(text.encode("utf-8")), load_comments)
    return catalog


class TestWriting:
    """Test the JSON document shape."""

    def test_document_shape(self, catalog):
        """Test top-level keys and message entries."""
        document = json.loads(dumps(catalog, format="json", write_comments=False))

        assert set(document) == {"Headers", "Messages"}
        assert document["Headers"] == {
            "Plural-Forms": "nplurals=2; plural=(n!=1);",
            "Language": "de",
        }
        assert document["Messages"]["One file"] == {
            "Id": "One file",
            "Plural": "{0} files",
            "Translations": ["Eine Datei", "{0} Dateien"],
        }

    def test_context_key(self, catalog):
        """Test that contextual messages use the composite key."""
        document = json.loads(dumps(catalog, format="json"))
        entry = document["Messages"]["home\x04Welcome"]

        assert entry["Context"] == "home"
        assert entry["Id"] == "Welcome"
        assert entry["Flags"] == ["fuzzy"]
        assert entry["PreviousId"] == "Hello"
        assert "PreviousContext" not in entry

    def test_without_comments(self, catalog):
        """Test that comment fields are omitted on request."""
        document = json.loads(dumps(catalog, format="json", write_comments=False))

        assert "Comments" not in document["Messages"]["home\x04Welcome"]

    def test_compact_and_indented(self, catalog):
        """Test output indentation."""
        assert "\n" not in dumps(catalog, format="json")
        assert "\n  " in dumps(catalog, format="json", indent=2)

    def test_unicode_unescaped(self):
        """Test that non-ASCII text is written as is."""
        catalog = Localization()
        catalog.add(Message("Size", translations=["Größe"]))

        assert "Größe" in JSONFormat().format(catalog)


class TestReading:
    """Test reading JSON documents."""

    def test_round_trip(self, catalog):
        """Test reading back a written catalog with comments."""
        result = loads(dumps(catalog, format="json"), format="json", load_comments=True)
        welcome = result.get("Welcome", "home")

        assert result.language == "de"
        assert result.count == 2
        assert welcome.translations == ["Willkommen"]
        assert welcome.comments == ["Shown on the start page"]
        assert welcome.translator_comments == ["informal"]
        assert welcome.references == ["views/home.html"]
        assert welcome.is_fuzzy
        assert welcome.previous_id == "Hello"
        assert result.get("One file").plural == "{0} files"

    def test_comments_skipped_by_default(self, catalog):
        """Test that comments are only loaded on request."""
        result = loads(dumps(catalog, format="json"), format="json")
        assert result.get("Welcome", "home").comments == []

    def test_id_from_key(self):
        """Test that a missing Id falls back to the key."""
        catalog = read_json('{"Messages": {"ctx\\u0004Open": {"Context": "ctx", "Translations": ["Öffnen"]}}}')
        assert catalog.get("Open", "ctx").translations == ["Öffnen"]

    def test_context_from_key(self):
        """Test that a key with a context supplies both Id and Context."""
        catalog = read_json('{"Messages": {"ctx\\u0004a": {"Translations": ["A"]}}}')

        assert catalog.contains("a", "ctx")
        assert not catalog.contains("a")
        assert catalog.get("a", "ctx").translations == ["A"]

    def test_empty_document(self):
        """Test an object without messages."""
        assert read_json("{}").count == 0

    def test_plural_forms_header(self):
        """Test that typed headers are applied."""
        catalog = read_json('{"Headers": {"Plural-Forms": "nplurals=3; plural=n==1 ? 0 : n==2 ? 1 : 2;"}}')
        assert catalog.num_plurals == 3


class TestReadErrors:
    """Test malformed JSON input."""

    def test_syntax_error_position(self):
        """Test that parse errors carry line and column."""
        with pytest.raises(FormatError) as exc_info:
            read_json('{\n  "Messages": [\n}')

        assert exc_info.value.format_name == "json"
        assert exc_info.value.line == 3
        assert exc_info.value.column is not None

    def test_unknown_top_level_key(self):
        """Test that only Headers and Messages are allowed."""
        with pytest.raises(FormatError, match="Invalid top-level key"):
            read_json('{"Messages": {}, "Extra": 1}')

    @pytest.mark.parametrize(
        "text",
        [
            "[]",
            '{"Headers": []}',
            '{"Headers": {"Language": 1}}',
            '{"Messages": []}',
            '{"Messages": {"a": "b"}}',
            '{"Messages": {"a": {"Translations": "b"}}}',
            '{"Headers": {"Plural-Forms": "bogus"}}',
        ],
    )
    def test_wrong_types(self, text):
        """Test structurally invalid documents."""
        with pytest.raises(FormatError):
            read_json(text)

    @pytest.mark.parametrize(
        "text, field",
        [
            ('{"Messages": {"a": {"Comments": "xyz"}}}', "Comments"),
            ('{"Messages": {"a": {"TranslatorComments": [1]}}}', "TranslatorComments"),
            ('{"Messages": {"a": {"References": {"x": 1}}}}', "References"),
            ('{"Messages": {"a": {"Flags": "fuzzy"}}}', "Flags"),
            ('{"Messages": {"a": {"PreviousId": ["old"]}}}', "PreviousId"),
            ('{"Messages": {"a": {"PreviousContext": 3}}}', "PreviousContext"),
        ],
    )
    def test_wrong_comment_types(self, text, field):
        """Test that comment fields are type-checked when loaded."""
        with pytest.raises(FormatError, match=field):
            read_json(text, load_comments=True)

    @pytest.mark.parametrize(
        "text",
        [
            '{"Messages": {"a": {"Id": 1}}}',
            '{"Messages": {"a": {"Context": ["x"]}}}',
            '{"Messages": {"a": {"Plural": true}}}',
        ],
    )
    def test_wrong_identity_types(self, text):
        """Test that Id, Context and Plural must be strings."""
        with pytest.raises(FormatError, match="must be a string"):
            read_json(text)
