"""Command-line interface for gettext catalogs.

Commands:
    gettext-catalog convert: Convert between PO, MO and JSON catalogs
    gettext-catalog info: Show headers and message statistics
    gettext-catalog lookup: Translate a single message

The ``po2mo`` and ``mo2po`` scripts are single-command converters that read
standard input and write standard output when no files are given.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from gettext_catalog.config import CatalogConfig, get_config
from gettext_catalog.errors import CatalogError
from gettext_catalog.formats.files import dumps, loads, read_file, write_file
from gettext_catalog.model.localization import Localization
from gettext_catalog.translator import Translator


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gettext-catalog",
    help="Read, write and convert gettext message catalogs",
    add_completion=False,
    no_args_is_help=True,
)

po2mo_app = typer.Typer(
    name="po2mo",
    help="Compile a PO catalog into an MO catalog",
    add_completion=False,
)

mo2po_app = typer.Typer(
    name="mo2po",
    help="Decompile an MO catalog into a PO catalog",
    add_completion=False,
)

console = Console()


# =============================================================================
# Type Aliases
# =============================================================================

InputArg = Annotated[
    Optional[Path],
    typer.Argument(help="Input catalog file (default: standard input)"),
]

OutputArg = Annotated[
    Optional[Path],
    typer.Argument(help="Output catalog file (default: standard output)"),
]


# =============================================================================
# Helper Functions
# =============================================================================


def setup_logging(verbose: bool = False, config: CatalogConfig | None = None) -> None:
    """Route package logging to stderr through rich."""
    config = config or get_config()
    level = logging.DEBUG if verbose else config.log_level_value

    package_logger = logging.getLogger("gettext_catalog")
    package_logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        package_logger.addHandler(handler)
    for handler in package_logger.handlers:
        handler.setLevel(level)


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _convert(
    input: Path | None,
    output: Path | None,
    source_format: str | None,
    target_format: str | None,
    write_comments: bool,
    config: CatalogConfig,
) -> None:
    """Read a catalog from a file or stdin and write it to a file or stdout."""
    source_format = source_format or (str(input) if input is not None else None)
    target_format = target_format or (str(output) if output is not None else None)
    if source_format is None:
        _fail("Cannot infer the input format when reading standard input, use --from")
    if target_format is None:
        _fail("Cannot infer the output format when writing standard output, use --to")

    if input is not None and not input.exists():
        _fail(f"File not found: {input}")

    try:
        if input is not None:
            localization = read_file(input, load_comments=write_comments, format=source_format)
        else:
            data = typer.get_binary_stream("stdin").read()
            localization = loads(data, format=source_format, load_comments=write_comments)

        if output is not None:
            write_file(
                localization,
                output,
                write_comments=write_comments,
                format=target_format,
                indent=config.json_indent,
            )
            logger.info("Wrote %d messages to %s", len(localization), output)
        else:
            result = dumps(
                localization,
                format=target_format,
                write_comments=write_comments,
                indent=config.json_indent,
            )
            stdout = typer.get_binary_stream("stdout")
            stdout.write(result if isinstance(result, bytes) else result.encode("utf-8"))
            stdout.flush()
    except (CatalogError, OSError) as e:
        _fail(str(e))


def _load(file: Path) -> Localization:
    if not file.exists():
        _fail(f"File not found: {file}")
    try:
        return read_file(file, load_comments=True)
    except (CatalogError, OSError) as e:
        _fail(str(e))


# =============================================================================
# Commands
# =============================================================================


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Read, write and convert gettext message catalogs."""
    setup_logging(verbose)


@app.command(name="convert")
def convert_cmd(
    input: InputArg = None,
    output: OutputArg = None,
    source_format: Annotated[
        Optional[str],
        typer.Option("--from", "-f", help="Input format (po, pot, mo, json)"),
    ] = None,
    target_format: Annotated[
        Optional[str],
        typer.Option("--to", "-t", help="Output format (po, pot, mo, json)"),
    ] = None,
    no_comments: Annotated[
        bool,
        typer.Option("--no-comments", help="Drop comments, flags and previous values"),
    ] = False,
) -> None:
    """Convert a catalog between formats.

    Formats are inferred from the file extensions unless given explicitly.
    """
    config = get_config()
    write_comments = config.write_comments and not no_comments
    _convert(input, output, source_format, target_format, write_comments, config)


@app.command(name="info")
def info_cmd(
    file: Annotated[Path, typer.Argument(help="Catalog file to inspect")],
) -> None:
    """Show headers and message statistics of a catalog."""
    localization = _load(file)
    messages = localization.messages

    headers = Table(title="Headers", show_header=True, header_style="bold")
    headers.add_column("Name", style="cyan")
    headers.add_column("Value")
    for name, value in localization.get_headers().items():
        headers.add_row(name, value)

    stats = Table(title="Messages", show_header=True, header_style="bold")
    stats.add_column("Metric", style="cyan")
    stats.add_column("Count", justify="right")
    stats.add_row("Total", str(len(messages)))
    stats.add_row("Plural", str(sum(1 for m in messages if m.has_plural)))
    stats.add_row("With context", str(sum(1 for m in messages if m.context)))
    stats.add_row("Fuzzy", str(sum(1 for m in messages if m.is_fuzzy)))
    stats.add_row("Untranslated", str(sum(1 for m in messages if not m.is_translated)))

    console.print(headers)
    console.print(stats)


@app.command(name="lookup")
def lookup_cmd(
    file: Annotated[Path, typer.Argument(help="Catalog file to search")],
    msgid: Annotated[str, typer.Argument(help="Source string to translate")],
    context: Annotated[
        Optional[str],
        typer.Option("--context", "-c", help="Message context"),
    ] = None,
    count: Annotated[
        Optional[int],
        typer.Option("--count", "-n", help="Count selecting the plural form"),
    ] = None,
) -> None:
    """Print the translation of a message."""
    localization = _load(file)

    message = localization.get(msgid, context)
    if message is None:
        _fail(f"Message not found: {msgid!r}")

    translator = Translator(get_config())
    translator.add(localization)

    try:
        if count is None:
            text = translator.gettext(msgid, localization.language, context)
        else:
            text = translator.ngettext(
                msgid, message.plural or msgid, count, localization.language, context
            )
    except ZeroDivisionError:
        _fail(f"Plural formula divides by zero for count {count}")

    typer.echo(text)


@po2mo_app.command()
def po2mo(input: InputArg = None, output: OutputArg = None) -> None:
    """Compile a PO catalog into an MO catalog."""
    setup_logging()
    _convert(input, output, "po", "mo", False, get_config())


@mo2po_app.command()
def mo2po(input: InputArg = None, output: OutputArg = None) -> None:
    """Decompile an MO catalog into a PO catalog."""
    setup_logging()
    _convert(input, output, "mo", "po", False, get_config())


if __name__ == "__main__":
    app()
