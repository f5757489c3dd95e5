"""Data models for markydown."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .processor import Processor


class ParType(Enum):
    """Paragraph types recognized by the parser.

    Attributes:
        TEXT: Regular text paragraph.
        HEADING1: Level-1 heading (``# ``).
        HEADING2: Level-2 heading (``## ``).
        HEADING3: Level-3 heading (``### ``).
        BULLETED_LIST: Bulleted list item (``+ ``).
    """

    TEXT = auto()
    HEADING1 = auto()
    HEADING2 = auto()
    HEADING3 = auto()
    BULLETED_LIST = auto()

    @property
    def heading_level(self) -> int | None:
        """Heading level for heading types, None for everything else."""
        return _HEADING_LEVELS.get(self)


_HEADING_LEVELS = {ParType.HEADING1: 1, ParType.HEADING2: 2, ParType.HEADING3: 3}


class TextStyle(Enum):
    """Semantic style of text.

    Says that text is emphasized, not how it looks. Only one style is active
    at a time.
    """

    REGULAR = auto()
    EMPHASIS = auto()
    STRONG = auto()


class SpecialToken(Enum):
    """Non-text content that needs special handling inside a paragraph.

    Attributes:
        SPACE: Blank space separating words.
        LINE_BREAK: Hard line break within the same paragraph.
    """

    SPACE = auto()
    LINE_BREAK = auto()


class RuneType(Enum):
    """Token classes returned by the lexer."""

    TEXT = auto()
    END_OF_INPUT = auto()
    EMPHASIS = auto()
    STRONG_EMPHASIS = auto()
    SPACE = auto()
    NEW_LINE = auto()
    LINK_START = auto()
    LINK_END = auto()


@dataclass(frozen=True)
class Token:
    """One lexed rune.

    Attributes:
        kind: Token class.
        rune: Logical rune value; empty at end of input.
        escaped: Whether the rune was produced through a backslash escape.
    """

    kind: RuneType
    rune: str = ""
    escaped: bool = False


@dataclass
class ParserContext:
    """Encapsulate the state of a single parse run.

    Attributes:
        source: Complete document text; never modified.
        processor: Receiver of the parsing events.
        pos: Index of the first unconsumed character in `source`.
        frag_start: Start index of the fragment being accumulated.
        frag_end: End index (exclusive) of the fragment being accumulated.
        frag_buffer: Escape-free pieces of the current fragment, used instead
            of the ``source`` slice once the fragment contains an escape.
        text_style: Currently active text style.
        link_target: Target of the link being parsed, or None outside links.
        link_target_len: Raw length of the link target text in `source`,
            escapes included and parentheses excluded.
    """

    source: str
    processor: Processor
    pos: int = 0
    frag_start: int = 0
    frag_end: int = 0
    frag_buffer: list[str] | None = field(default=None)
    text_style: TextStyle = TextStyle.REGULAR
    link_target: str | None = None
    link_target_len: int = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        """Return the character `offset` places past the cursor, or ``""``."""
        index = self.pos + offset
        if index >= len(self.source):
            return ""
        return self.source[index]

    def reset_fragment(self) -> None:
        """Start an empty fragment window at the cursor."""
        self.frag_start = self.pos
        self.frag_end = self.pos
        self.frag_buffer = None
