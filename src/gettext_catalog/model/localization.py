"""The catalog aggregate: messages plus headers for one language."""

from __future__ import annotations

import logging
from typing import Iterator

from gettext_catalog.model.collections import CaseInsensitiveDict
from gettext_catalog.model.message import Message, make_key
from gettext_catalog.plurals.expression import (
    DEFAULT_NUM_PLURALS,
    DEFAULT_PLURAL_EXPRESSION,
    PLURAL_FORMS_HEADER,
    PluralExpression,
    format_plural_forms,
    get_plural_expression,
    parse_plural_forms,
)


logger = logging.getLogger(__name__)


LANGUAGE_HEADER = "Language"
DEFAULT_LANGUAGE = "en"

_TYPED_HEADERS = (PLURAL_FORMS_HEADER.lower(), LANGUAGE_HEADER.lower())


class Localization:
    """A message catalog for one target language.

    Messages are indexed by their composite key (see :func:`make_key`);
    adding a message with an existing key replaces the previous one.
    Headers are case-insensitive. ``Plural-Forms`` and ``Language`` are
    kept as typed values; all other headers are stored verbatim.

    Not thread-safe: concurrent mutation must be serialized by the caller.

    Example:
        catalog = Localization()
        catalog.set_header("Plural-Forms", "nplurals=3; plural=n==1 ? 0 : n==2 ? 1 : 2;")
        catalog.add(Message("File", plural="Files", translations=["a", "b", "c"]))
        catalog.get("File").translations[catalog.plural_forms.evaluate(2)]  # "b"
    """

    def __init__(self) -> None:
        self._messages: dict[str, Message] = {}
        self._headers = CaseInsensitiveDict()
        self.num_plurals: int = DEFAULT_NUM_PLURALS
        self.plural_forms: PluralExpression = get_plural_expression(DEFAULT_PLURAL_EXPRESSION)
        self.language: str = DEFAULT_LANGUAGE

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def add(self, message: Message) -> Message:
        """Add a message, replacing any message with the same key.

        Returns:
            The added message.
        """
        key = message.key
        previous = self._messages.get(key)
        if previous is not None and previous is not message:
            previous._detach()

        if message.owner is not None and message.owner is not self:
            message.owner.remove(message)

        self._messages[key] = message
        message._attach(self)
        return message

    def remove(self, message: Message | str, context: str | None = None) -> bool:
        """Remove a message by instance or by id and context.

        Returns:
            True if a message was removed.
        """
        if isinstance(message, Message):
            key = message.key
            if self._messages.get(key) is not message:
                return False
        else:
            key = make_key(message, context)

        removed = self._messages.pop(key, None)
        if removed is None:
            return False

        removed._detach()
        return True

    def get(self, id: str, context: str | None = None) -> Message | None:
        """Get the message with the given id and context."""
        return self._messages.get(make_key(id, context))

    def contains(self, id: str, context: str | None = None) -> bool:
        """Check if a message with the given id and context exists."""
        return make_key(id, context) in self._messages

    def notify_rekey(self, message: Message, old_key: str) -> None:
        """Move a message to its new key after its id or context changed.

        Called by :class:`Message` setters; a message already stored under
        the new key is replaced.
        """
        if self._messages.get(old_key) is not message:
            return

        del self._messages[old_key]
        new_key = message.key
        previous = self._messages.get(new_key)
        if previous is not None and previous is not message:
            previous._detach()
        self._messages[new_key] = message
        logger.debug("Re-keyed message %r -> %r", old_key, new_key)

    def find_by_translation(self, value: str, context: str | None = None) -> list[Message]:
        """Find messages whose first translation equals ``value``.

        Args:
            value: Translated text to look for.
            context: If given, only messages with this context match.

        Returns:
            Matching messages in catalog order.
        """
        return [
            message
            for message in self._messages.values()
            if message.translations
            and message.translations[0] == value
            and (context is None or message.context == context)
        ]

    @property
    def messages(self) -> list[Message]:
        """Messages in catalog order."""
        return list(self._messages.values())

    @property
    def count(self) -> int:
        return len(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages.values()))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Message):
            return self._messages.get(item.key) is item
        if isinstance(item, str):
            return item in self._messages
        return False

    def clear(self) -> None:
        """Remove all messages and headers."""
        for message in self._messages.values():
            message._detach()
        self._messages.clear()
        self._headers.clear()
        self.num_plurals = DEFAULT_NUM_PLURALS
        self.plural_forms = get_plural_expression(DEFAULT_PLURAL_EXPRESSION)
        self.language = DEFAULT_LANGUAGE

    # -------------------------------------------------------------------------
    # Headers
    # -------------------------------------------------------------------------

    def set_header(self, name: str, value: str) -> None:
        """Set a header.

        ``Plural-Forms`` is parsed and compiled, ``Language`` is stored in
        :attr:`language`. The catalog is left unchanged if parsing fails.

        Raises:
            HeaderError: Malformed ``Plural-Forms`` value.
            ExpressionCompileError: The plural formula does not compile.
        """
        normalized = name.lower()
        if normalized == PLURAL_FORMS_HEADER.lower():
            self.num_plurals, self.plural_forms = parse_plural_forms(value)
        elif normalized == LANGUAGE_HEADER.lower():
            self.language = value
        self._headers[name] = value

    def get_header(self, name: str) -> str | None:
        """Get a header value; ``Plural-Forms`` is rebuilt from the typed values."""
        normalized = name.lower()
        if normalized == PLURAL_FORMS_HEADER.lower():
            return format_plural_forms(self.num_plurals, self.plural_forms)
        if normalized == LANGUAGE_HEADER.lower():
            return self.language
        return self._headers.get(name)

    def has_header(self, name: str) -> bool:
        """Check if a header was set explicitly."""
        return name in self._headers

    def remove_header(self, name: str) -> bool:
        """Remove a header; typed headers fall back to their defaults.

        Returns:
            True if the header had been set.
        """
        normalized = name.lower()
        if normalized == PLURAL_FORMS_HEADER.lower():
            self.num_plurals = DEFAULT_NUM_PLURALS
            self.plural_forms = get_plural_expression(DEFAULT_PLURAL_EXPRESSION)
        elif normalized == LANGUAGE_HEADER.lower():
            self.language = DEFAULT_LANGUAGE

        if name in self._headers:
            del self._headers[name]
            return True
        return False

    def get_headers(self) -> CaseInsensitiveDict:
        """Snapshot of all headers in output order.

        ``Plural-Forms`` and ``Language`` are always present; when they were
        never set explicitly they come first, otherwise they keep the
        position at which they were set.
        """
        headers = CaseInsensitiveDict()
        for name in (PLURAL_FORMS_HEADER, LANGUAGE_HEADER):
            if name not in self._headers:
                headers[name] = self.get_header(name)

        for name, value in self._headers.items():
            if name.lower() in _TYPED_HEADERS:
                value = self.get_header(name)
            headers[name] = value

        return headers

    @property
    def headers(self) -> CaseInsensitiveDict:
        return self.get_headers()

    def plural_index(self, n: int) -> int:
        """Evaluate the plural formula for ``n``; the result is not bounds-checked."""
        return self.plural_forms.evaluate(n)

    def __repr__(self) -> str:
        return f"Localization(language={self.language!r}, messages={len(self._messages)})"
