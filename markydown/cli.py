"""
Converts a Markydown file to HTML.
The result goes to stdout, or atomically to a file when an output path is given.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import LINE_BREAK_ALIASES, LINE_BREAK_TAGS, ConfigError, build_config
from .filesystem import get_max_file_size, normalize_filepath, write_output
from .html import render_html
from .parser import ParseFileError, parse_events, read_document

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "events"]),
    default="html",
    show_default=True,
    help="Render HTML or list the parsing events",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the result to this file instead of stdout",
)
@click.option("--wrap/--no-wrap", default=None, help="Wrap output in <html> and <body>")
@click.option("--escape/--no-escape", default=None, help="HTML-escape text fragments")
@click.option(
    "--line-break",
    type=click.Choice([*LINE_BREAK_TAGS, *LINE_BREAK_ALIASES]),
    help="Markup for hard line breaks",
)
@click.option("--heading-ids/--no-heading-ids", default=None, help="Add slug ids to headings")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output_format: str = "html",
    output: str | None = None,
    wrap: bool | None = None,
    escape: bool | None = None,
    line_break: str | None = None,
    heading_ids: bool | None = None,
):
    """
    Entry point for converting a Markydown file.

    Args:
        filepath: Path to the Markydown file to convert.
        output_format: ``html`` to render HTML, ``events`` to list parser events.
        output: Optional destination file; stdout when omitted.
        wrap: Override for wrapping the output in ``<html>``/``<body>``.
        escape: Override for HTML-escaping text fragments.
        line_break: Override for the hard line break markup.
        heading_ids: Override for adding slug ids to headings.

    Returns:
        None.

    Raises:
        click.BadParameter: If the input path is invalid or configuration
            values are unsupported.
        click.ClickException: If reading, size checks, or writing fail.

    Examples:
        markydown notes.md --no-wrap -o notes.html
    """
    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            filepath.parent,
            wrap_document=wrap,
            escape_html=escape,
            line_break=line_break,
            heading_ids=heading_ids,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        document = read_document(filepath, config, max_file_size)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    if output_format == "events":
        result = "".join(f"{event}\n" for event in parse_events(document))
    else:
        result = render_html(document, config)

    if output is None:
        click.echo(result, nl=False)
        return

    try:
        write_output(
            Path(output),
            result,
            warn=lambda message: click.echo(message, err=True),
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
