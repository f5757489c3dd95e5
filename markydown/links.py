"""Link detection and link target extraction."""

from __future__ import annotations

from .char_classes import is_escape, is_link_end, is_link_target_end, is_link_target_start
from .models import ParserContext


def look_ahead_for_link(ctx: ParserContext) -> bool:
    """Decide whether the ``[`` just consumed really opens a link.

    Scans forward from the cursor without moving it, looking for the first
    unescaped ``]``. An escape hides the character that follows it. When the
    ``]`` is found, the text right after it must be a well-formed target.

    Args:
        ctx: Parser context positioned right after the ``[``.

    Returns:
        bool: True when a link follows; the pending link target is then set
            on `ctx`. False otherwise, with `ctx` left untouched.

    Examples:
        look_ahead_for_link(ParserContext("[here](target)", processor, pos=1))  # True
        look_ahead_for_link(ParserContext("[Kafka]", processor, pos=1))  # False
    """
    source = ctx.source
    index = ctx.pos

    while index < len(source):
        char = source[index]
        if is_link_end(char):
            return parse_link_target(ctx, index + 1)
        if is_escape(char):
            index += 2
        else:
            index += 1

    return False


def parse_link_target(ctx: ParserContext, start: int) -> bool:
    """Parse a ``(target)`` beginning at `start`.

    Escape markers are dropped from the target text, but still count towards
    the raw length used later to skip over the target.

    Args:
        ctx: Parser context receiving the target on success.
        start: Index where the target (its opening parenthesis) should begin.

    Returns:
        bool: True when a complete, non-empty target was found.

    Examples:
        parse_link_target(ParserContext("(t\\\\)x)", processor), 0)  # target "t)x"
    """
    source = ctx.source
    if start >= len(source) or not is_link_target_start(source[start]):
        return False

    index = start + 1
    parts: list[str] = []
    segment_start = index

    while index < len(source):
        char = source[index]
        if is_link_target_end(char):
            parts.append(source[segment_start:index])
            target = "".join(parts)
            if not target:
                return False
            ctx.link_target = target
            ctx.link_target_len = index - (start + 1)
            return True
        if is_escape(char):
            parts.append(source[segment_start:index])
            segment_start = index + 1
            index += 2
        else:
            index += 1

    return False


def consume_link_target(ctx: ParserContext) -> None:
    """Skip the already validated ``(target)`` right at the cursor."""
    # +2 for the parentheses
    ctx.pos += ctx.link_target_len + 2
    ctx.reset_fragment()
    ctx.link_target = None
    ctx.link_target_len = 0
