"""Translation units."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from gettext_catalog.model.collections import FlagSet

if TYPE_CHECKING:
    from gettext_catalog.model.localization import Localization


CONTEXT_SEPARATOR = "\x04"
PLURAL_SEPARATOR = "\x00"

FUZZY_FLAG = "fuzzy"


def make_key(id: str, context: str | None = None) -> str:
    """Build the composite catalog key for an id and context.

    The key is ``context + "\\x04" + id`` when the context is non-empty,
    otherwise the id alone.
    """
    if context:
        return f"{context}{CONTEXT_SEPARATOR}{id}"
    return id


class Message:
    """One translation unit: a source string with its translations.

    ``id`` and ``context`` form the message's identity. Once the message
    has been added to a :class:`Localization`, changing either of them
    re-keys the message inside that catalog.

    Attributes:
        plural: Plural source string, or None if the message has no plural forms.
        translations: Translated strings, one per plural form.
        comments: Extracted comments (``#.``).
        translator_comments: Translator comments (``#``).
        references: Source references (``#:``).
        flags: Flags such as ``fuzzy`` (``#,``), case-insensitive.
        previous_id: Previous msgid (``#| msgid``).
        previous_context: Previous msgctxt (``#| msgctxt``).
    """

    def __init__(
        self,
        id: str = "",
        context: str | None = "",
        plural: str | None = None,
        translations: Iterable[str] | None = None,
        comments: Iterable[str] | None = None,
        translator_comments: Iterable[str] | None = None,
        references: Iterable[str] | None = None,
        flags: Iterable[str] | None = None,
        previous_id: str | None = None,
        previous_context: str | None = None,
    ) -> None:
        self._id = id
        self._context = context or ""
        self._owner: Localization | None = None

        self.plural = plural
        self.translations: list[str] = list(translations) if translations is not None else [""]
        self.comments: list[str] = list(comments or [])
        self.translator_comments: list[str] = list(translator_comments or [])
        self.references: list[str] = list(references or [])
        self.flags = FlagSet(flags)
        self.previous_id = previous_id
        self.previous_context = previous_context

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @id.setter
    def id(self, value: str) -> None:
        old_key = self.key
        self._id = value
        if self._owner is not None:
            self._owner.notify_rekey(self, old_key)

    @property
    def context(self) -> str:
        """Disambiguating context; empty string means no context."""
        return self._context

    @context.setter
    def context(self, value: str | None) -> None:
        old_key = self.key
        self._context = value or ""
        if self._owner is not None:
            self._owner.notify_rekey(self, old_key)

    @property
    def key(self) -> str:
        return make_key(self._id, self._context)

    @property
    def owner(self) -> "Localization | None":
        """The catalog this message was added to, if any."""
        return self._owner

    def _attach(self, owner: "Localization") -> None:
        self._owner = owner

    def _detach(self) -> None:
        self._owner = None

    # -------------------------------------------------------------------------
    # Convenience
    # -------------------------------------------------------------------------

    @property
    def has_plural(self) -> bool:
        return bool(self.plural)

    @property
    def is_fuzzy(self) -> bool:
        return FUZZY_FLAG in self.flags

    @property
    def is_translated(self) -> bool:
        return any(self.translations)

    def get_translation(self, index: int = 0) -> str:
        """Return the translation at ``index``, or an empty string if missing."""
        if 0 <= index < len(self.translations):
            return self.translations[index] or ""
        return ""

    def __repr__(self) -> str:
        parts = [f"id={self._id!r}"]
        if self._context:
            parts.append(f"context={self._context!r}")
        if self.plural is not None:
            parts.append(f"plural={self.plural!r}")
        parts.append(f"translations={self.translations!r}")
        return f"Message({', '.join(parts)})"
