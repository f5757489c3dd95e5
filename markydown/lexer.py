"""Rune-level lexing of Markydown text."""

from __future__ import annotations

from .char_classes import (
    is_emphasis,
    is_escape,
    is_horizontal_space,
    is_link_end,
    is_link_start,
    is_new_line,
    is_space,
)
from .links import look_ahead_for_link
from .models import ParserContext, RuneType, Token


def next_rune(ctx: ParserContext) -> Token:
    r"""Consume and classify the next rune of the input.

    Handles escapes and line breaks (CR, LF, CRLF and LFCR all count as one
    logical line break), but knows little about the Markydown syntax: a token
    class only says what a rune could be. ``#`` is never special here, and
    ``[`` or ``]`` come back as `RuneType.TEXT` when no link can be formed.

    Args:
        ctx: Parser context whose cursor is advanced past the token.

    Returns:
        Token: Token class, logical rune, and whether it was escaped.

    Examples:
        next_rune(ParserContext("**bold**", processor)).kind  # STRONG_EMPHASIS
        next_rune(ParserContext(r"\*", processor))  # TEXT, "*", escaped
    """
    if ctx.at_end:
        return Token(RuneType.END_OF_INPUT)

    char = ctx.peek()
    ctx.pos += 1

    if is_horizontal_space(char):
        return Token(RuneType.SPACE, " ")

    if is_emphasis(char):
        if is_emphasis(ctx.peek()):
            ctx.pos += 1
            return Token(RuneType.STRONG_EMPHASIS, char)
        return Token(RuneType.EMPHASIS, char)

    if is_link_start(char):
        # Links do not nest: a pending target keeps `[` literal
        if ctx.link_target is None and look_ahead_for_link(ctx):
            return Token(RuneType.LINK_START, char)
        return Token(RuneType.TEXT, char)

    if is_link_end(char):
        if ctx.link_target is not None:
            return Token(RuneType.LINK_END, char)
        return Token(RuneType.TEXT, char)

    if is_escape(char):
        escaped = ctx.peek()
        if escaped:
            ctx.pos += 1
        if is_new_line(escaped):
            _consume_new_line_pair(ctx, escaped)
            return Token(RuneType.NEW_LINE, "\n", escaped=True)
        return Token(RuneType.TEXT, escaped, escaped=True)

    if is_new_line(char):
        _consume_new_line_pair(ctx, char)
        return Token(RuneType.NEW_LINE, "\n")

    return Token(RuneType.TEXT, char)


def _consume_new_line_pair(ctx: ParserContext, first: str) -> None:
    """Consume the second half of a CRLF or LFCR pair, if present.

    Two identical line break characters are two separate line breaks.
    """
    second = ctx.peek()
    if is_new_line(second) and second != first:
        ctx.pos += 1


def consume_raw_spaces(ctx: ParserContext) -> None:
    """Skip every whitespace character, line breaks included.

    Escapes are not looked at: escaped spaces and line breaks carry meaning
    and belong to the main parsing loop.
    """
    source = ctx.source
    while ctx.pos < len(source) and is_space(source[ctx.pos]):
        ctx.pos += 1


def consume_raw_horizontal_spaces(ctx: ParserContext) -> None:
    """Skip horizontal whitespace and restart the fragment window after it."""
    source = ctx.source
    while ctx.pos < len(source) and is_horizontal_space(source[ctx.pos]):
        ctx.pos += 1
    ctx.reset_fragment()


def consume_raw_spaces_within_paragraph(ctx: ParserContext) -> None:
    """Skip whitespace including at most one line break.

    Stops before a second line break so the paragraph boundary stays visible.
    """
    consume_raw_horizontal_spaces(ctx)
    char = ctx.peek()
    if is_new_line(char):
        ctx.pos += 1
        _consume_new_line_pair(ctx, char)
        consume_raw_horizontal_spaces(ctx)
    ctx.reset_fragment()


def paragraph_goes_on(ctx: ParserContext) -> bool:
    """Tell whether the current paragraph continues past the cursor."""
    if ctx.at_end:
        return False
    return not is_new_line(ctx.peek())


def is_hard_line_break_ahead(ctx: ParserContext) -> bool:
    """Tell whether the input continues with an escaped line break."""
    return is_escape(ctx.peek()) and is_new_line(ctx.peek(1))
