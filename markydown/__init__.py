"""
markydown: a parser for Markydown, a small subset of Markdown.

The parser does not convert to any output format by itself. It calls the
methods of a user-supplied processor as it finds paragraphs, text
fragments, style changes and links. An HTML processor is included.

CLI Usage:
    markydown notes.md -o notes.html

Library Usage:
    from markydown import BaseProcessor, parse, render_html

    class WordCounter(BaseProcessor):
        def __init__(self):
            self.words = 0

        def on_fragment(self, text):
            self.words += 1

    counter = WordCounter()
    parse("Some *text* here.", counter)
    html = render_html("Some *text* here.")
"""

from .config import ConfigError, MarkydownConfig
from .exceptions import FileTooLargeError, ParseError
from .html import HtmlProcessor, render_html
from .models import ParType, SpecialToken, TextStyle
from .parser import ParseFileError, parse, parse_events, parse_file, read_document
from .processor import BaseProcessor, Event, EventKind, EventRecorder, Processor
from .slugify import generate_slug

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse",
    "parse_events",
    "parse_file",
    "read_document",
    "render_html",
    "generate_slug",
    # Processors
    "Processor",
    "BaseProcessor",
    "EventRecorder",
    "HtmlProcessor",
    # Data models
    "Event",
    "EventKind",
    "ParType",
    "SpecialToken",
    "TextStyle",
    "MarkydownConfig",
    # Exceptions
    "ConfigError",
    "FileTooLargeError",
    "ParseError",
    "ParseFileError",
    # Version
    "__version__",
]
