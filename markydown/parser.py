"""Markydown parsing: paragraphs, paragraph contents and whole documents."""

from __future__ import annotations

from pathlib import Path

from .char_classes import is_bullet, is_horizontal_space
from .config import ConfigError, MarkydownConfig, validate_config
from .constants import HEADING_MARKER, MAX_HEADING_LEVEL
from .exceptions import FileTooLargeError, ParseError
from .filesystem import collect_file_stat, enforce_file_size, safe_read
from .lexer import (
    consume_raw_horizontal_spaces,
    consume_raw_spaces,
    consume_raw_spaces_within_paragraph,
    is_hard_line_break_ahead,
    next_rune,
    paragraph_goes_on,
)
from .links import consume_link_target
from .models import ParserContext, ParType, RuneType, SpecialToken, TextStyle, Token
from .processor import Event, EventRecorder, Processor

_HEADING_TYPES = {1: ParType.HEADING1, 2: ParType.HEADING2, 3: ParType.HEADING3}


def parse(document: str, processor: Processor) -> None:
    """Parse a Markydown document, reporting what is found to `processor`.

    Works in the spirit of the Template Method pattern: the parser drives
    the processor through the document, calling one of its methods for every
    paragraph boundary, text fragment, style change or link it finds. No
    input is ever rejected; malformed constructs are reported as text.

    Args:
        document: Complete Markydown text.
        processor: Receiver of the parsing events.

    Returns:
        None.

    Raises:
        Exception: Whatever the processor raises, unchanged.

    Examples:
        parse("Click [here](target).", EventRecorder())
    """
    ctx = ParserContext(source=document, processor=processor)
    parse_document(ctx)


def parse_events(document: str) -> list[Event]:
    """Parse a document and return the recorded events.

    Examples:
        [str(event) for event in parse_events("bir iki")]
        # ['START_DOCUMENT', 'START_PARAGRAPH TEXT', "FRAGMENT 'bir'",
        #  'SPECIAL_TOKEN SPACE', "FRAGMENT 'iki'", 'END_PARAGRAPH TEXT',
        #  'END_DOCUMENT']
    """
    recorder = EventRecorder()
    parse(document, recorder)
    return recorder.events


def parse_document(ctx: ParserContext) -> None:
    """Parse the whole document held by `ctx`."""
    ctx.processor.on_start_document()

    while parse_any_paragraph(ctx):
        continue

    ctx.processor.on_end_document()


def parse_any_paragraph(ctx: ParserContext) -> bool:
    """Detect the type of the next paragraph and parse it.

    Returns:
        bool: True when a paragraph was parsed, False at the end of input.
    """
    consume_raw_spaces(ctx)
    if ctx.at_end:
        return False

    if parse_heading(ctx):
        return True

    if parse_bulleted_paragraph(ctx):
        return True

    parse_text_paragraph(ctx)
    return True


def parse_heading(ctx: ParserContext) -> bool:
    """Parse a level 1 to 3 heading.

    The marker is one to three ``#`` characters immediately followed by a
    horizontal space. Longer runs of ``#`` are not headings.

    Returns:
        bool: True when a heading was parsed; False otherwise, in which case
            no input was consumed.
    """
    level = _heading_marker_width(ctx)
    if level == 0:
        return False

    par_type = _HEADING_TYPES[level]
    ctx.pos += level
    consume_raw_horizontal_spaces(ctx)

    ctx.processor.on_start_paragraph(par_type)
    parse_paragraph_contents(ctx)
    ctx.processor.on_end_paragraph(par_type)

    return True


def _heading_marker_width(ctx: ParserContext) -> int:
    for level in range(1, MAX_HEADING_LEVEL + 1):
        if not ctx.source.startswith(HEADING_MARKER * level, ctx.pos):
            return 0
        if is_horizontal_space(ctx.peek(level)):
            return level
    return 0


def parse_bulleted_paragraph(ctx: ParserContext) -> bool:
    """Parse a bulleted list item (a single ``+`` followed by a space).

    Returns:
        bool: True when a list item was parsed; False otherwise, in which case
            no input was consumed.
    """
    if not (is_bullet(ctx.peek()) and is_horizontal_space(ctx.peek(1))):
        return False

    ctx.pos += 1
    consume_raw_horizontal_spaces(ctx)

    ctx.processor.on_start_paragraph(ParType.BULLETED_LIST)
    parse_paragraph_contents(ctx)
    ctx.processor.on_end_paragraph(ParType.BULLETED_LIST)

    return True


def parse_text_paragraph(ctx: ParserContext) -> None:
    """Parse a regular text paragraph.

    Last resort when no other paragraph type matches, so it always succeeds.
    """
    ctx.processor.on_start_paragraph(ParType.TEXT)
    parse_paragraph_contents(ctx)
    ctx.processor.on_end_paragraph(ParType.TEXT)


def parse_paragraph_contents(ctx: ParserContext) -> None:
    """Parse paragraph contents up to the end of the paragraph.

    The cursor must sit on the first character of the contents, with any
    paragraph marker (``# ``, ``+ ``) already consumed. Returns at the end of
    input or before the second line break of a blank-line separator.
    """
    processor = ctx.processor
    ctx.reset_fragment()

    while True:
        start = ctx.pos
        token = next_rune(ctx)
        kind = token.kind

        if kind is RuneType.TEXT:
            _accumulate_text(ctx, start, token)

        elif kind is RuneType.SPACE:
            emit_fragment(ctx)
            consume_raw_spaces_within_paragraph(ctx)
            if not paragraph_goes_on(ctx):
                # End of input, or the whitespace ran into a blank line.
                # Deliberate: trailing spaces never swallow the separator, so
                # "a \n\nb" is two paragraphs. Do not keep looping here.
                return
            if not is_hard_line_break_ahead(ctx):
                processor.on_special_token(SpecialToken.SPACE)

        elif kind is RuneType.EMPHASIS or kind is RuneType.STRONG_EMPHASIS:
            emit_fragment(ctx)
            _toggle_text_style(
                ctx, TextStyle.EMPHASIS if kind is RuneType.EMPHASIS else TextStyle.STRONG
            )
            processor.on_change_text_style(ctx.text_style)

        elif kind is RuneType.NEW_LINE:
            emit_fragment(ctx)
            consume_raw_horizontal_spaces(ctx)
            if token.escaped:
                processor.on_special_token(SpecialToken.LINE_BREAK)
            elif paragraph_goes_on(ctx):
                processor.on_special_token(SpecialToken.SPACE)

            if not paragraph_goes_on(ctx):
                # End of input, or two consecutive line breaks
                return

        elif kind is RuneType.LINK_START:
            emit_fragment(ctx)
            processor.on_start_link(ctx.link_target)

        elif kind is RuneType.LINK_END:
            emit_fragment(ctx)
            processor.on_end_link()
            consume_link_target(ctx)

        elif kind is RuneType.END_OF_INPUT:
            emit_fragment(ctx)
            return


def _toggle_text_style(ctx: ParserContext, style: TextStyle) -> None:
    if ctx.text_style is style:
        ctx.text_style = TextStyle.REGULAR
    else:
        ctx.text_style = style


def _accumulate_text(ctx: ParserContext, start: int, token: Token) -> None:
    """Extend the current fragment with a text token.

    Fragments without escapes stay a slice of the source. The first escape
    copies the fragment into an owned buffer that drops the escape markers.
    """
    if token.escaped and ctx.frag_buffer is None:
        ctx.frag_buffer = [ctx.source[ctx.frag_start : ctx.frag_end]]

    if ctx.frag_buffer is None:
        ctx.frag_end = ctx.pos
    elif token.escaped:
        ctx.frag_buffer.append(token.rune)
    else:
        ctx.frag_buffer.append(ctx.source[start : ctx.pos])


def emit_fragment(ctx: ParserContext) -> None:
    """Report the accumulated fragment, if any, and start a new one.

    An empty fragment is never reported, but the window is reset all the
    same so the next fragment starts at the cursor.
    """
    if ctx.frag_buffer is not None:
        text = "".join(ctx.frag_buffer)
    else:
        text = ctx.source[ctx.frag_start : ctx.frag_end]

    if text:
        ctx.processor.on_fragment(text)

    ctx.reset_fragment()


class ParseFileError(Exception):
    """Raised when reading or parsing a Markydown file fails."""


def read_document(
    filepath: Path,
    config: MarkydownConfig | None = None,
    max_file_size: int | None = None,
) -> str:
    """Read a Markydown file after validating configuration and size limits.

    Args:
        filepath: Path to the file to read.
        config: Configuration providing the default size limit; defaults to a
            new `MarkydownConfig` when omitted.
        max_file_size: Optional override for the maximum file size in bytes.

    Returns:
        str: The decoded file content.

    Raises:
        ParseFileError: If the configuration is invalid, the file is too large,
            cannot be read, or is not valid UTF-8.

    Examples:
        text = read_document(Path("README.md"), max_file_size=1024 * 1024)
    """
    config = config or MarkydownConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    effective_max_file_size = config.max_file_size if max_file_size is None else max_file_size
    if effective_max_file_size <= 0:
        raise ParseFileError("`max_file_size` override must be a positive integer")

    try:
        stat_result = collect_file_stat(filepath)
        enforce_file_size(stat_result, effective_max_file_size, filepath)
        with safe_read(filepath) as file:
            return file.read()
    except FileTooLargeError as error:
        error_message = (
            f"{filepath} is {error.size} bytes, exceeding the maximum allowed size "
            f"of {error.limit} bytes."
        )
        raise ParseFileError(error_message) from error
    except ParseError as error:
        raise ParseFileError(f"{filepath}: {error}") from error
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except IOError as error:
        raise ParseFileError(str(error)) from error


def parse_file(
    filepath: Path,
    processor: Processor,
    config: MarkydownConfig | None = None,
    max_file_size: int | None = None,
) -> None:
    """Read a Markydown file and parse it into `processor`.

    Args:
        filepath: Path to the Markydown file.
        processor: Receiver of the parsing events.
        config: Configuration providing the size limit.
        max_file_size: Optional override for the maximum file size in bytes.

    Raises:
        ParseFileError: If the file cannot be loaded; see `read_document`.

    Examples:
        parse_file(Path("notes.md"), EventRecorder())
    """
    document = read_document(filepath, config, max_file_size)
    parse(document, processor)
