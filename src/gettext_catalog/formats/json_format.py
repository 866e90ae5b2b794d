"""Reader and writer for the JSON catalog format.

Document shape::

    {
        "Headers": {"Plural-Forms": "nplurals=2; plural=(n!=1);", "Language": "de"},
        "Messages": {
            "context\\u0004Welcome": {
                "Context": "context",
                "Id": "Welcome",
                "Translations": ["Willkommen"]
            }
        }
    }

Comment fields (``TranslatorComments``, ``Comments``, ``References``,
``Flags``, ``PreviousContext``, ``PreviousId``) are optional.
"""

from __future__ import annotations

import json
import logging
from typing import Any, BinaryIO

from gettext_catalog.errors import HeaderError
from gettext_catalog.formats.base import LocalizationFormat
from gettext_catalog.model.localization import Localization
from gettext_catalog.model.message import CONTEXT_SEPARATOR, Message


logger = logging.getLogger(__name__)


HEADERS_KEY = "Headers"
MESSAGES_KEY = "Messages"

_LIST_FIELDS = {
    "TranslatorComments": "translator_comments",
    "Comments": "comments",
    "References": "references",
}


class JSONFormat(LocalizationFormat):
    """Codec for ``.json`` catalogs.

    Args:
        indent: Indentation passed to :func:`json.dumps`; None writes compact output.
    """

    name = "json"
    extensions = (".json",)
    binary = False

    def __init__(self, indent: int | None = None) -> None:
        self.indent = indent

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def write(
        self,
        localization: Localization,
        stream: BinaryIO,
        write_comments: bool = False,
    ) -> None:
        stream.write(self.format(localization, write_comments).encode("utf-8"))

    def format(self, localization: Localization, write_comments: bool = False) -> str:
        """Render the catalog as a JSON document."""
        document = {
            HEADERS_KEY: dict(localization.get_headers().items()),
            MESSAGES_KEY: {
                message.key: self._message_to_dict(message, write_comments)
                for message in localization.messages
            },
        }

        separators = None if self.indent is not None else (",", ":")
        return json.dumps(document, ensure_ascii=False, indent=self.indent, separators=separators)

    def _message_to_dict(self, message: Message, write_comments: bool) -> dict[str, Any]:
        result: dict[str, Any] = {}

        if write_comments:
            result["TranslatorComments"] = list(message.translator_comments)
            result["Comments"] = list(message.comments)
            result["References"] = list(message.references)
            result["Flags"] = list(message.flags)
            if message.previous_context:
                result["PreviousContext"] = message.previous_context
            if message.previous_id:
                result["PreviousId"] = message.previous_id

        if message.context:
            result["Context"] = message.context
        result["Id"] = message.id
        if message.plural:
            result["Plural"] = message.plural
        result["Translations"] = list(message.translations)

        return result

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def read(
        self,
        localization: Localization,
        stream: BinaryIO,
        load_comments: bool = False,
    ) -> None:
        try:
            document = json.loads(stream.read().decode("utf-8-sig"))
        except UnicodeDecodeError as e:
            raise self._error(f"Invalid UTF-8 data: {e}") from e
        except json.JSONDecodeError as e:
            raise self._error(e.msg, line=e.lineno, column=e.colno) from e

        if not isinstance(document, dict):
            raise self._error("Expected an object at top level")

        for key in document:
            if key not in (HEADERS_KEY, MESSAGES_KEY):
                raise self._error(
                    f"Invalid top-level key {key!r}, only 'Messages' and 'Headers' are allowed"
                )

        headers = document.get(HEADERS_KEY, {})
        if not isinstance(headers, dict):
            raise self._error("'Headers' must be an object")
        for name, value in headers.items():
            if not isinstance(value, str):
                raise self._error(f"Header {name!r} must be a string")
            try:
                localization.set_header(name, value)
            except HeaderError as e:
                raise self._error(str(e)) from e

        messages = document.get(MESSAGES_KEY, {})
        if not isinstance(messages, dict):
            raise self._error("'Messages' must be an object")
        for key, data in messages.items():
            localization.add(self._message_from_dict(key, data, load_comments))

        logger.debug("Read %d messages from JSON stream", len(messages))

    def _message_from_dict(self, key: str, data: Any, load_comments: bool) -> Message:
        if not isinstance(data, dict):
            raise self._error(f"Message {key!r} must be an object")

        translations = self._string_list(data, "Translations", key, default=[""])
        # Id and Context default to the two halves of the key
        key_context, _, key_id = key.rpartition(CONTEXT_SEPARATOR)

        message = Message(
            id=self._string(data, "Id", key, default=key_id) or "",
            context=self._string(data, "Context", key, default=key_context),
            plural=self._string(data, "Plural", key) or None,
            translations=translations or [""],
        )

        if load_comments:
            for json_key, attribute in _LIST_FIELDS.items():
                getattr(message, attribute).extend(self._string_list(data, json_key, key))
            message.flags.update(self._string_list(data, "Flags", key))
            message.previous_context = self._string(data, "PreviousContext", key)
            message.previous_id = self._string(data, "PreviousId", key)

        return message

    def _string(self, data: dict, field: str, key: str, default: str | None = None) -> str | None:
        value = data.get(field, default)
        if value is not None and not isinstance(value, str):
            raise self._error(f"{field!r} of message {key!r} must be a string")
        return value

    def _string_list(self, data: dict, field: str, key: str, default: list[str] | None = None) -> list[str]:
        value = data.get(field, [] if default is None else default)
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise self._error(f"{field!r} of message {key!r} must be a list of strings")
        return value
