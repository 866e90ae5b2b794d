"""gettext-catalog: gettext message catalogs for Python.

Reads and writes PO, MO and JSON catalogs, compiles ``Plural-Forms``
formulas, and looks up translations at runtime.

Example:
    import gettext_catalog as gc

    catalog = gc.read_file("locale/de.po", load_comments=True)
    catalog.get("Welcome").translations
    gc.write_file(catalog, "locale/de.mo")

    translator = gc.Translator()
    translator.load_directory("locale")
    translator.ngettext("One file", "{0} files", 3, language="de")
"""

from gettext_catalog.config import CatalogConfig, get_config, set_config
from gettext_catalog.errors import (
    CatalogError,
    EmptyExpressionError,
    ExpressionCompileError,
    FormatError,
    HeaderError,
    InvalidCharacterError,
    MalformedExpressionError,
    MissingQuestionMarkError,
    UnsupportedFormatError,
)
from gettext_catalog.formats import (
    JSONFormat,
    LocalizationFormat,
    MOFormat,
    POFormat,
    dumps,
    get_format,
    loads,
    read_file,
    register_format,
    write_file,
)
from gettext_catalog.model import Localization, Message
from gettext_catalog.plurals import PluralExpression, parse_plural_forms
from gettext_catalog.translator import Translator

__version__ = "0.1.0"

__all__ = [
    # Model
    "Localization",
    "Message",
    "PluralExpression",
    "parse_plural_forms",
    # Formats
    "LocalizationFormat",
    "POFormat",
    "MOFormat",
    "JSONFormat",
    "get_format",
    "register_format",
    "read_file",
    "write_file",
    "loads",
    "dumps",
    # Runtime
    "Translator",
    "CatalogConfig",
    "get_config",
    "set_config",
    # Errors
    "CatalogError",
    "FormatError",
    "UnsupportedFormatError",
    "HeaderError",
    "ExpressionCompileError",
    "InvalidCharacterError",
    "EmptyExpressionError",
    "MissingQuestionMarkError",
    "MalformedExpressionError",
]
