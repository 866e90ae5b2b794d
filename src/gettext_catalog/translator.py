"""Runtime message lookup across several catalogs.

Usage:
    from gettext_catalog import Translator

    translator = Translator()
    translator.load_directory("locale")

    translator.gettext("Welcome", language="de")
    translator.ngettext("One file", "{0} files", 5, language="de")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from gettext_catalog.config import CatalogConfig, get_config
from gettext_catalog.errors import CatalogError
from gettext_catalog.formats.files import read_file
from gettext_catalog.model.localization import LANGUAGE_HEADER, Localization
from gettext_catalog.model.message import Message


logger = logging.getLogger(__name__)


class Translator:
    """Registry of catalogs keyed by language, with gettext-style lookup.

    Languages are matched case-insensitively. Lookups for a language
    without a catalog use the working language instead; missing or empty
    translations fall back to the source strings.

    Not thread-safe while catalogs are being added.
    """

    def __init__(self, config: CatalogConfig | None = None) -> None:
        self.config = config or get_config()
        self._localizations: dict[str, Localization] = {}

    @property
    def working_language(self) -> str:
        return self.config.default_language

    @property
    def languages(self) -> list[str]:
        return [loc.language for loc in self._localizations.values()]

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add(self, localization: Localization, language: str | None = None) -> None:
        """Register a catalog, replacing any catalog for the same language."""
        language = language or localization.language
        self._localizations[language.lower()] = localization

    def get_localization(self, language: str | None = None) -> Localization | None:
        """Get the catalog used for a language, after working-language fallback."""
        return self._resolve(language)

    def contains_language(self, language: str) -> bool:
        return language.lower() in self._localizations

    def load_directory(
        self,
        path: str | Path | None = None,
        extensions: Iterable[str] = (".po",),
    ) -> int:
        """Load all catalogs in a directory.

        The language of each file is its explicit ``Language`` header, or
        the file name without extension. Empty catalogs are skipped and the
        first catalog found for a language wins. Afterwards the working
        language always has a catalog.

        Args:
            path: Directory to scan; defaults to the configured locale directory.
            extensions: File extensions to load.

        Returns:
            Number of catalogs registered.
        """
        directory = Path(path) if path is not None else self.config.locale_dir
        extensions = {ext.lower() for ext in extensions}
        loaded = 0

        if directory.is_dir():
            for file in sorted(directory.iterdir()):
                if not file.is_file() or file.suffix.lower() not in extensions:
                    continue

                try:
                    localization = read_file(file, load_comments=self.config.load_comments)
                except CatalogError as e:
                    logger.warning("Skipping %s: %s", file, e)
                    continue

                if len(localization) == 0:
                    logger.warning("Skipping %s: no messages", file)
                    continue

                if localization.has_header(LANGUAGE_HEADER):
                    language = localization.language
                else:
                    language = file.stem

                if self.contains_language(language):
                    continue

                self.add(localization, language)
                loaded += 1
                logger.info("Loaded %d messages for '%s' from %s", len(localization), language, file)
        else:
            logger.warning("Locale directory %s does not exist", directory)

        if not self.contains_language(self.working_language):
            empty = Localization()
            empty.set_header(LANGUAGE_HEADER, self.working_language)
            self.add(empty)

        return loaded

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def _resolve(self, language: str | None) -> Localization | None:
        language = language or self.working_language
        if not self.contains_language(language):
            language = self.working_language
        return self._localizations.get(language.lower())

    def gettext(
        self,
        message: str,
        language: str | None = None,
        context: str | None = None,
    ) -> str:
        """Translate a message.

        Returns:
            The first translation, or ``message`` if there is none.
        """
        localization = self._resolve(language)
        if localization is not None:
            entry = localization.get(message, context)
            if entry is not None and entry.get_translation(0):
                return entry.get_translation(0)
        return message

    def ngettext(
        self,
        message: str,
        plural: str,
        n: int,
        language: str | None = None,
        context: str | None = None,
    ) -> str:
        """Translate a message with plural forms.

        The catalog's plural formula selects the translation for ``n``. An
        index outside the message's translations counts as untranslated.

        Returns:
            The selected translation, or ``plural`` if ``n != 1`` else ``message``.
        """
        localization = self._resolve(language)
        if localization is not None:
            entry = localization.get(message, context)
            if entry is not None:
                translation = entry.get_translation(localization.plural_index(n))
                if translation:
                    return translation
        return plural if n != 1 else message

    def pgettext(self, context: str, message: str, language: str | None = None) -> str:
        """Translate a message in a context."""
        return self.gettext(message, language, context)

    def find_by_translation(
        self,
        value: str,
        language: str | None = None,
        context: str | None = None,
    ) -> list[tuple[str, Message]]:
        """Find messages whose first translation equals ``value``.

        Args:
            value: Translated text.
            language: Restrict the search to this language's catalog.
            context: Restrict the search to this context.

        Returns:
            ``(language, message)`` pairs.
        """
        if language is not None:
            localization = self._localizations.get(language.lower())
            candidates = [(language, localization)] if localization is not None else []
        else:
            candidates = [(loc.language, loc) for loc in self._localizations.values()]

        return [
            (lang, message)
            for lang, localization in candidates
            for message in localization.find_by_translation(value, context)
        ]
