"""Reader and writer for the gettext MO binary format.

Layout (32-bit unsigned integers, little-endian when written)::

    0   magic number 0x950412de
    4   file format revision (0)
    8   N, number of strings (including the header entry)
    12  O, offset of the table of original strings
    16  T, offset of the table of translated strings
    20  S, size of the hash table (0, none is written)
    24  H, offset of the hash table (0)
    28  original string table: N x (length, offset)
        translated string table: N x (length, offset)
        NUL-terminated strings

Entry 0 is the header (empty original string). The remaining entries are
sorted by their ``context\\x04id`` key.
"""

from __future__ import annotations

import logging
import struct
from typing import BinaryIO

from gettext_catalog.formats.base import (
    LocalizationFormat,
    format_header_block,
    parse_header_block,
)
from gettext_catalog.model.localization import Localization
from gettext_catalog.model.message import (
    CONTEXT_SEPARATOR,
    PLURAL_SEPARATOR,
    Message,
)


logger = logging.getLogger(__name__)


MAGIC = 0x950412DE
REVISION = 0

HEADER_SIZE = 28
TABLE_ENTRY_SIZE = 8


def original_key(message: Message) -> str:
    """Original string for a message: ``[context\\x04]id[\\x00plural]``."""
    key = message.key
    if message.plural:
        key += PLURAL_SEPARATOR + message.plural
    return key


def translated_value(message: Message) -> str:
    """Translated string for a message: translations joined by NUL."""
    return PLURAL_SEPARATOR.join(t or "" for t in message.translations)


class MOFormat(LocalizationFormat):
    """Codec for compiled ``.mo`` catalogs.

    Comments are not part of the format; the ``load_comments`` and
    ``write_comments`` flags have no effect.
    """

    name = "mo"
    extensions = (".mo",)
    binary = True

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def write(
        self,
        localization: Localization,
        stream: BinaryIO,
        write_comments: bool = False,
    ) -> None:
        stream.write(self.format(localization))

    def format(self, localization: Localization) -> bytes:
        """Render the catalog as MO bytes."""
        messages = sorted(localization.messages, key=lambda m: m.key)
        count = len(messages) + 1

        originals = [b""] + [original_key(m).encode("utf-8") for m in messages]
        translations = [format_header_block(localization.get_headers()).encode("utf-8")]
        translations += [translated_value(m).encode("utf-8") for m in messages]

        original_offset = HEADER_SIZE
        translated_offset = original_offset + count * TABLE_ENTRY_SIZE
        position = translated_offset + count * TABLE_ENTRY_SIZE

        tables: list[bytes] = []
        pool: list[bytes] = []

        # Original strings first, then translated ones, in table order
        for data in originals + translations:
            tables.append(struct.pack("<II", len(data), position))
            pool.append(data + b"\x00")
            position += len(data) + 1

        header = struct.pack(
            "<7I",
            MAGIC,
            REVISION,
            count,
            original_offset,
            translated_offset,
            0,
            0,
        )

        logger.debug("Wrote %d messages to MO stream", len(messages))
        return header + b"".join(tables) + b"".join(pool)

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def read(
        self,
        localization: Localization,
        stream: BinaryIO,
        load_comments: bool = False,
    ) -> None:
        data = stream.read()

        if len(data) < HEADER_SIZE:
            raise self._error("Not a valid .mo file: too short")

        (magic,) = struct.unpack_from("<I", data, 0)
        if magic == MAGIC:
            byte_order = "<"
        elif struct.unpack_from(">I", data, 0)[0] == MAGIC:
            byte_order = ">"
        else:
            raise self._error(f"Not a valid .mo file: bad magic number 0x{magic:08x}")

        revision, count, original_offset, translated_offset = struct.unpack_from(
            f"{byte_order}4I", data, 4
        )
        if revision != REVISION:
            raise self._error(f"Unsupported .mo revision {revision}")

        original_table = self._read_table(data, byte_order, original_offset, count)
        translated_table = self._read_table(data, byte_order, translated_offset, count)

        added = 0
        for (o_len, o_off), (t_len, t_off) in zip(original_table, translated_table):
            original = self._read_string(data, o_off, o_len)
            translated = self._read_string(data, t_off, t_len)

            if not original:
                parse_header_block(localization, translated, self.name)
                continue

            localization.add(self._make_message(original, translated))
            added += 1

        logger.debug("Read %d messages from MO stream", added)

    def _read_table(
        self,
        data: bytes,
        byte_order: str,
        offset: int,
        count: int,
    ) -> list[tuple[int, int]]:
        end = offset + count * TABLE_ENTRY_SIZE
        if end > len(data):
            raise self._error(f"String table at offset {offset} exceeds file size {len(data)}")

        return [
            struct.unpack_from(f"{byte_order}II", data, offset + i * TABLE_ENTRY_SIZE)
            for i in range(count)
        ]

    def _read_string(self, data: bytes, offset: int, length: int) -> str:
        if offset + length > len(data):
            raise self._error(f"String at offset {offset} exceeds file size {len(data)}")

        try:
            return data[offset:offset + length].decode("utf-8")
        except UnicodeDecodeError as e:
            raise self._error(f"Invalid UTF-8 string at offset {offset}: {e}") from e

    def _make_message(self, original: str, translated: str) -> Message:
        key, _, plural = original.partition(PLURAL_SEPARATOR)
        context, sep, id = key.partition(CONTEXT_SEPARATOR)
        if not sep:
            context, id = "", key

        return Message(
            id=id,
            context=context,
            plural=plural if PLURAL_SEPARATOR in original else None,
            translations=translated.split(PLURAL_SEPARATOR),
        )
