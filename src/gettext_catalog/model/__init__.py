"""Catalog data model: messages, headers and plural metadata."""

from gettext_catalog.model.collections import CaseInsensitiveDict, FlagSet
from gettext_catalog.model.localization import (
    DEFAULT_LANGUAGE,
    LANGUAGE_HEADER,
    Localization,
)
from gettext_catalog.model.message import (
    CONTEXT_SEPARATOR,
    PLURAL_SEPARATOR,
    Message,
    make_key,
)

__all__ = [
    "CaseInsensitiveDict",
    "FlagSet",
    "DEFAULT_LANGUAGE",
    "LANGUAGE_HEADER",
    "Localization",
    "CONTEXT_SEPARATOR",
    "PLURAL_SEPARATOR",
    "Message",
    "make_key",
]
