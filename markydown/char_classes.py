"""Character classes of the Markydown syntax.

Every predicate takes a single character and returns False for the empty
string, which the lexer uses as its end-of-input sentinel.
"""

from __future__ import annotations

from .constants import (
    BULLET_MARKER,
    EMPHASIS_MARKER,
    ESCAPE_MARKER,
    LINK_END,
    LINK_START,
    LINK_TARGET_END,
    LINK_TARGET_START,
    NEW_LINE_CHARS,
)


def is_new_line(char: str) -> bool:
    """Check whether a character is a line break (CR or LF)."""
    return char != "" and char in NEW_LINE_CHARS


def is_space(char: str) -> bool:
    """Check whether a character is any kind of Unicode whitespace."""
    return char.isspace()


def is_horizontal_space(char: str) -> bool:
    """Check whether a character is whitespace other than CR or LF.

    Examples:
        is_horizontal_space("\\t")  # True
        is_horizontal_space("\\n")  # False
        is_horizontal_space("\\u00a0")  # True
    """
    return char.isspace() and not is_new_line(char)


def is_bullet(char: str) -> bool:
    return char == BULLET_MARKER


def is_emphasis(char: str) -> bool:
    return char == EMPHASIS_MARKER


def is_escape(char: str) -> bool:
    return char == ESCAPE_MARKER


def is_link_start(char: str) -> bool:
    return char == LINK_START


def is_link_end(char: str) -> bool:
    return char == LINK_END


def is_link_target_start(char: str) -> bool:
    return char == LINK_TARGET_START


def is_link_target_end(char: str) -> bool:
    return char == LINK_TARGET_END
