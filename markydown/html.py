"""HTML rendering of Markydown documents."""

from __future__ import annotations

import io
from html import escape
from typing import TextIO

from .config import MarkydownConfig, normalize_config, validate_config
from .models import ParType, SpecialToken, TextStyle
from .parser import parse
from .processor import BaseProcessor
from .slugify import SlugRegistry

_PARAGRAPH_TAGS = {
    ParType.TEXT: "p",
    ParType.HEADING1: "h1",
    ParType.HEADING2: "h2",
    ParType.HEADING3: "h3",
    ParType.BULLETED_LIST: "li",
}

_STYLE_TAGS = {
    TextStyle.EMPHASIS: "em",
    TextStyle.STRONG: "strong",
}


class HtmlProcessor(BaseProcessor):
    """Processor writing HTML to a text stream.

    Consecutive list items share a single ``<ul>``. Text styles and links are
    tracked across paragraphs: a style or link still open when a paragraph
    ends is closed before the paragraph's closing tag and reopened inside the
    next one. A link always encloses the style tags inside it, so the output
    stays well nested.

    Link targets are attribute-escaped but not sanitized: URL schemes such as
    ``javascript:`` are written as given. Filter targets in a subclass when
    rendering untrusted documents.

    Args:
        stream: Destination for the generated HTML.
        config: Rendering options; defaults to a new `MarkydownConfig`.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        processor = HtmlProcessor(sys.stdout, MarkydownConfig(wrap_document=False))
        parse("# Title", processor)  # writes "<h1>Title</h1>\\n"
    """

    def __init__(self, stream: TextIO, config: MarkydownConfig | None = None):
        config = normalize_config(config or MarkydownConfig())
        validate_config(config)
        self.stream = stream
        self.config = config
        self._par_type: ParType | None = None
        self._text_style = TextStyle.REGULAR
        self._link_target: str | None = None
        self._slugs = SlugRegistry(preserve_unicode=config.preserve_unicode)
        # Headings with ids are buffered until their text, hence their slug, is known
        self._heading_html: list[str] | None = None
        self._heading_text: list[str] = []

    def _write(self, markup: str) -> None:
        if self._heading_html is not None:
            self._heading_html.append(markup)
        else:
            self.stream.write(markup)

    def on_start_document(self) -> None:
        if self.config.wrap_document:
            self.stream.write("<html>\n<body>\n")

    def on_end_document(self) -> None:
        if self._par_type is ParType.BULLETED_LIST:
            self.stream.write("</ul>\n")
        self._par_type = None

        if self.config.wrap_document:
            self.stream.write("</body>\n</html>\n")

    def on_start_paragraph(self, par_type: ParType) -> None:
        in_list = self._par_type is ParType.BULLETED_LIST
        if par_type is ParType.BULLETED_LIST and not in_list:
            self.stream.write("<ul>\n")
        elif par_type is not ParType.BULLETED_LIST and in_list:
            self.stream.write("</ul>\n")
        self._par_type = par_type

        if self.config.heading_ids and par_type.heading_level is not None:
            self._heading_html = []
            self._heading_text = []
        else:
            self._write(f"<{_PARAGRAPH_TAGS[par_type]}>")

        self._open_inline()

    def on_end_paragraph(self, par_type: ParType) -> None:
        self._close_inline()

        tag = _PARAGRAPH_TAGS[par_type]
        if self._heading_html is None:
            self._write(f"</{tag}>\n")
            return

        inner = "".join(self._heading_html)
        self._heading_html = None
        slug = self._slugs.unique_slug("".join(self._heading_text))
        self.stream.write(f'<{tag} id="{escape(slug)}">{inner}</{tag}>\n')

    def on_fragment(self, text: str) -> None:
        if self._heading_html is not None:
            self._heading_text.append(text)
        self._write(escape(text, quote=False) if self.config.escape_html else text)

    def on_special_token(self, token: SpecialToken) -> None:
        if self._heading_html is not None:
            self._heading_text.append(" ")
        if token is SpecialToken.LINE_BREAK:
            self._write(self.config.line_break)
        else:
            self._write(" ")

    def on_change_text_style(self, style: TextStyle) -> None:
        self._close_style()
        self._text_style = style
        self._open_style()

    def on_start_link(self, target: str) -> None:
        self._close_style()
        self._link_target = target
        self._open_inline()

    def on_end_link(self) -> None:
        self._close_inline()
        self._link_target = None
        self._open_style()

    def _open_style(self) -> None:
        if self._text_style is not TextStyle.REGULAR:
            self._write(f"<{_STYLE_TAGS[self._text_style]}>")

    def _close_style(self) -> None:
        if self._text_style is not TextStyle.REGULAR:
            self._write(f"</{_STYLE_TAGS[self._text_style]}>")

    def _open_inline(self) -> None:
        """Open the pending link, then the active style inside it."""
        if self._link_target is not None:
            self._write(f'<a href="{escape(self._link_target)}">')
        self._open_style()

    def _close_inline(self) -> None:
        self._close_style()
        if self._link_target is not None:
            self._write("</a>")


def render_html(document: str, config: MarkydownConfig | None = None) -> str:
    """Render a Markydown document to an HTML string.

    Args:
        document: Markydown text.
        config: Rendering options; defaults to a new `MarkydownConfig`.

    Returns:
        str: The generated HTML.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        render_html("Some *text*.", MarkydownConfig(wrap_document=False))
        # "<p>Some <em>text</em>.</p>\\n"
    """
    buffer = io.StringIO()
    parse(document, HtmlProcessor(buffer, config))
    return buffer.getvalue()
