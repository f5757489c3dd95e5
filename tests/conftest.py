from collections.abc import Callable

import pytest
from click.testing import CliRunner

from markydown.models import ParType, SpecialToken, TextStyle
from markydown.parser import parse
from markydown.processor import BaseProcessor

_PAR_CODES = {
    ParType.TEXT: "P",
    ParType.HEADING1: "H1",
    ParType.HEADING2: "H2",
    ParType.HEADING3: "H3",
    ParType.BULLETED_LIST: "UL",
}
_TOKEN_CODES = {SpecialToken.SPACE: "SP", SpecialToken.LINE_BREAK: "NL"}
_STYLE_CODES = {TextStyle.REGULAR: "RE", TextStyle.EMPHASIS: "EM", TextStyle.STRONG: "ST"}


class CodeProcessor(BaseProcessor):
    """Records every event as a short code, e.g. ``SP-H1`` or ``F-text``."""

    def __init__(self):
        self.codes: list[str] = []

    def on_start_document(self):
        self.codes.append("SD")

    def on_end_document(self):
        self.codes.append("ED")

    def on_start_paragraph(self, par_type):
        self.codes.append(f"SP-{_PAR_CODES[par_type]}")

    def on_end_paragraph(self, par_type):
        self.codes.append(f"EP-{_PAR_CODES[par_type]}")

    def on_fragment(self, text):
        self.codes.append(f"F-{text}")

    def on_special_token(self, token):
        self.codes.append(f"ST-{_TOKEN_CODES[token]}")

    def on_change_text_style(self, style):
        self.codes.append(f"TS-{_STYLE_CODES[style]}")

    def on_start_link(self, target):
        self.codes.append(f"SL-{target}")

    def on_end_link(self):
        self.codes.append("EL")


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture(scope="session")
def parse_codes() -> Callable[[str], list[str]]:
    """Parses a document and returns its events as short codes."""
    def _parse_codes(document: str) -> list[str]:
        processor = CodeProcessor()
        parse(document, processor)
        return processor.codes

    return _parse_codes
