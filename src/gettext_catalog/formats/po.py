"""Reader and writer for the gettext PO text format.

A PO file is a sequence of blank-line separated entries::

    #  translator comment
    #. extracted comment
    #: src/file.py:12
    #, fuzzy, python-format
    #| msgctxt "previous context"
    #| msgid "previous id"
    msgctxt "context"
    msgid "One file"
    msgid_plural "{0} files"
    msgstr[0] "Eine Datei"
    msgstr[1] "{0} Dateien"

The entry with an empty msgid carries the catalog headers as its
translation.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Iterator

from gettext_catalog.formats.base import (
    LocalizationFormat,
    format_header_block,
    parse_header_block,
)
from gettext_catalog.model.localization import Localization
from gettext_catalog.model.message import Message


logger = logging.getLogger(__name__)


_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

# Greedy, so escaped quotes inside the string are kept
_STRING_RE = re.compile(r'"(.*)"')

_MSGSTR_INDEX_RE = re.compile(r"^msgstr\[(\d+)\]")

_ESCAPE_RE = re.compile(r"\\(.)")


class Command(str, Enum):
    """PO keyword whose string is currently being accumulated."""

    NONE = "none"
    MSGCTXT = "msgctxt"
    MSGID = "msgid"
    MSGID_PLURAL = "msgid_plural"
    MSGSTR = "msgstr"


def unescape(value: str) -> str:
    """Resolve backslash escapes in a quoted PO string.

    ``\\n`` becomes a newline; any other escaped character is kept with the
    backslash dropped (so ``\\"`` and ``\\\\`` yield ``"`` and ``\\``).
    """
    return _ESCAPE_RE.sub(lambda m: "\n" if m.group(1) == "n" else m.group(1), value)


def escape(value: str) -> str:
    """Quote-escape a string, splitting it onto continuation lines at newlines."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", '\\n"\n"')
    )


def escape_inline(value: str) -> str:
    """Quote-escape a string that has to stay on one line."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _comment_lines(prefix: str, comments: list[str]) -> Iterator[str]:
    # Every physical line needs its own prefix
    for comment in comments:
        for piece in comment.splitlines() or [""]:
            yield f"{prefix}{piece}"


@dataclass
class _EntryState:
    """Parser state for the entry currently being read."""

    message: Message = field(default_factory=Message)
    command: Command = Command.NONE
    index: int = 0
    buffer: str = ""
    translations: dict[int, str] = field(default_factory=dict)

    def flush(self) -> None:
        """Store the accumulated string in the field of the current command."""
        if self.command is Command.MSGCTXT:
            self.message.context = self.buffer
        elif self.command is Command.MSGID:
            self.message.id = self.buffer
        elif self.command is Command.MSGID_PLURAL:
            self.message.plural = self.buffer
        elif self.command is Command.MSGSTR:
            self.translations[self.index] = self.buffer

    def start(self, command: Command, index: int, value: str) -> None:
        self.flush()
        self.command = command
        self.index = index
        self.buffer = value


class POFormat(LocalizationFormat):
    """Codec for ``.po`` and ``.pot`` files.

    Example:
        catalog = Localization()
        with open("de.po", "rb") as f:
            POFormat().read(catalog, f, load_comments=True)
    """

    name = "po"
    extensions = (".po", ".pot")
    binary = False

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
            text = stream.read().decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise self._error(f"Invalid UTF-8 data: {e}") from e

        state = _EntryState()
        added = 0

        for line_no, raw_line in enumerate(_LINE_BREAK_RE.split(text), start=1):
            line = raw_line.strip()

            # A blank line ends the entry
            if not line:
                if state.command is not Command.NONE:
                    state.flush()
                    added += self._finish_entry(localization, state)
                    state = _EntryState()
                continue

            if line.startswith("#"):
                if load_comments:
                    self._read_comment(state.message, line)
                continue

            command, index = self._detect_command(line, state)
            match = _STRING_RE.search(line)
            if command is Command.NONE or match is None:
                raise self._error("Syntax error", line=line_no)

            value = unescape(match.group(1))
            if command is state.command and index == state.index:
                state.buffer += value
            else:
                state.start(command, index, value)

        if state.command is not Command.NONE:
            state.flush()
            added += self._finish_entry(localization, state)

        logger.debug("Read %d messages from PO stream", added)

    def _detect_command(self, line: str, state: _EntryState) -> tuple[Command, int]:
        # A bare string continues the previous keyword
        if line.startswith('"'):
            return state.command, state.index

        if line.startswith("msgid_plural"):
            return Command.MSGID_PLURAL, 0
        if line.startswith("msgid"):
            return Command.MSGID, 0
        if line.startswith("msgstr"):
            match = _MSGSTR_INDEX_RE.match(line)
            return Command.MSGSTR, int(match.group(1)) if match else 0
        if line.startswith("msgctxt"):
            return Command.MSGCTXT, 0

        return Command.NONE, 0

    def _read_comment(self, message: Message, line: str) -> None:
        if line.startswith("#."):
            message.comments.append(line[2:].strip())
        elif line.startswith("#:"):
            message.references.append(line[2:].strip())
        elif line.startswith("#,"):
            message.flags.update(flag.strip() for flag in line[2:].split(",") if flag.strip())
        elif line.startswith("#|"):
            self._read_previous(message, line[2:].strip())
        else:
            message.translator_comments.append(line[1:].strip())

    def _read_previous(self, message: Message, line: str) -> None:
        match = _STRING_RE.search(line)
        if match is None or line.startswith("msgid_plural"):
            return

        if line.startswith("msgid"):
            message.previous_id = unescape(match.group(1))
        elif line.startswith("msgctxt"):
            message.previous_context = unescape(match.group(1))

    def _finish_entry(self, localization: Localization, state: _EntryState) -> int:
        message = state.message

        # The entry with an empty msgid holds the headers
        if not message.id:
            header_block = state.translations.get(0)
            if header_block is not None:
                parse_header_block(localization, header_block, self.name)
            return 0

        size = max(state.translations) + 1 if state.translations else 1
        message.translations = [state.translations.get(i, "") for i in range(size)]
        localization.add(message)
        return 1

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
        """Render the catalog as PO text."""
        header_block = format_header_block(localization.get_headers())

        parts = ['msgid ""\n', 'msgstr ""\n', f'"{escape(header_block)}"\n\n']
        parts.append(
            "\n".join(
                self._format_message(message, localization.num_plurals, write_comments)
                for message in localization.messages
            )
        )

        logger.debug("Wrote %d messages to PO stream", len(localization))
        return "".join(parts)

    def _format_message(self, message: Message, num_plurals: int, write_comments: bool) -> str:
        lines: list[str] = []

        if write_comments:
            lines.extend(_comment_lines("#  ", message.translator_comments))
            lines.extend(_comment_lines("#. ", message.comments))
            lines.extend(_comment_lines("#: ", message.references))

            if message.flags:
                lines.append("#, " + ", ".join(message.flags))
            if message.previous_context:
                lines.append(f'#| msgctxt "{escape_inline(message.previous_context)}"')
            if message.previous_id:
                lines.append(f'#| msgid "{escape_inline(message.previous_id)}"')

        if message.context:
            lines.append(f'msgctxt "{escape(message.context)}"')

        lines.append(f'msgid "{escape(message.id)}"')

        if message.plural:
            lines.append(f'msgid_plural "{escape(message.plural)}"')

        if message.plural and num_plurals > 1:
            translations = list(message.translations)
            translations.extend([""] * (num_plurals - len(translations)))
            for i, translation in enumerate(translations):
                lines.append(f'msgstr[{i}] "{escape(translation or "")}"')
        else:
            lines.append(f'msgstr "{escape(message.get_translation(0))}"')

        return "\n".join(lines) + "\n"
