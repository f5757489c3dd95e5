from __future__ import annotations

from pathlib import Path

import pytest

from markydown.exceptions import FileTooLargeError
from markydown.models import ParType, SpecialToken, TextStyle
from markydown.parser import ParseFileError, parse, parse_events, parse_file, read_document
from markydown.processor import BaseProcessor, Event, EventKind, EventRecorder

EMPTY_DOCUMENT = ["SD", "ED"]


@pytest.mark.parametrize(
    "document",
    [
        "",
        " ",
        "\t",
        "   \t \t  ",
        "\n",
        "\r",
        "\n  ",
        "   \t\n\n \t\n    \t    \n\r  \r\n\t  ",
    ],
)
def test_blank_documents_emit_only_document_events(parse_codes, document: str):
    assert parse_codes(document) == EMPTY_DOCUMENT


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        ("one", ["SD", "SP-P", "F-one", "EP-P", "ED"]),
        ("   två\t", ["SD", "SP-P", "F-två", "EP-P", "ED"]),
        ("\n\ntrês  \n", ["SD", "SP-P", "F-três", "EP-P", "ED"]),
        # Escaped letter
        ("\ndö\\rt \n", ["SD", "SP-P", "F-dört", "EP-P", "ED"]),
        # Rogue backslash at the end of the input
        ("fünf\\", ["SD", "SP-P", "F-fünf", "EP-P", "ED"]),
    ],
)
def test_single_words(parse_codes, document: str, expected: list[str]):
    assert parse_codes(document) == expected


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        ("bir iki", ["SD", "SP-P", "F-bir", "ST-SP", "F-iki", "EP-P", "ED"]),
        ("     água  \t seca\n  ", ["SD", "SP-P", "F-água", "ST-SP", "F-seca", "EP-P", "ED"]),
        (
            "\n um  \n\r dois\n\r  três  ",
            ["SD", "SP-P", "F-um", "ST-SP", "F-dois", "ST-SP", "F-três", "EP-P", "ED"],
        ),
    ],
)
def test_plain_text_paragraphs(parse_codes, document: str, expected: list[str]):
    assert parse_codes(document) == expected


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        ("#\tOompa    loompa", ["SD", "SP-H1", "F-Oompa", "ST-SP", "F-loompa", "EP-H1", "ED"]),
        ("## doompadee\tdoo", ["SD", "SP-H2", "F-doompadee", "ST-SP", "F-doo", "EP-H2", "ED"]),
        ("###    doompadah   dee  ", ["SD", "SP-H3", "F-doompadah", "ST-SP", "F-dee", "EP-H3", "ED"]),
        ("# ", ["SD", "SP-H1", "EP-H1", "ED"]),
    ],
)
def test_headings(parse_codes, document: str, expected: list[str]):
    assert parse_codes(document) == expected


def test_heading_requires_space_after_marker(parse_codes):
    assert parse_codes("#I've\n\tgot\t") == [
        "SD", "SP-P", "F-#I've", "ST-SP", "F-got", "EP-P", "ED",
    ]


def test_four_hash_signs_are_plain_text(parse_codes):
    assert parse_codes("#### a perfect\n") == [
        "SD", "SP-P", "F-####", "ST-SP", "F-a", "ST-SP", "F-perfect", "EP-P", "ED",
    ]


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        ("+ Puzzle\n\t for\n\n", ["SD", "SP-UL", "F-Puzzle", "ST-SP", "F-for", "EP-UL", "ED"]),
        ("+   \t you.", ["SD", "SP-UL", "F-you.", "EP-UL", "ED"]),
        # An actual list item requires a space after the bullet
        ("+Só!", ["SD", "SP-P", "F-+Só!", "EP-P", "ED"]),
        ("++ double", ["SD", "SP-P", "F-++", "ST-SP", "F-double", "EP-P", "ED"]),
    ],
)
def test_bulleted_list_items(parse_codes, document: str, expected: list[str]):
    assert parse_codes(document) == expected


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        ("*Now!*", ["SD", "SP-P", "TS-EM", "F-Now!", "TS-RE", "EP-P", "ED"]),
        (
            "Now, **go!**",
            ["SD", "SP-P", "F-Now,", "ST-SP", "TS-ST", "F-go!", "TS-RE", "EP-P", "ED"],
        ),
        (
            "**Now**,   go!",
            ["SD", "SP-P", "TS-ST", "F-Now", "TS-RE", "F-,", "ST-SP", "F-go!", "EP-P", "ED"],
        ),
        # Emphasis in the middle of words
        (
            "# Unbe*lie*vable!",
            ["SD", "SP-H1", "F-Unbe", "TS-EM", "F-lie", "TS-RE", "F-vable!", "EP-H1", "ED"],
        ),
        (
            "# Unbe**lie**vable!",
            ["SD", "SP-H1", "F-Unbe", "TS-ST", "F-lie", "TS-RE", "F-vable!", "EP-H1", "ED"],
        ),
        # Escaped emphasis markers
        ("\\*Now!\\*", ["SD", "SP-P", "F-*Now!*", "EP-P", "ED"]),
        ("*\\*Now!\\**", ["SD", "SP-P", "TS-EM", "F-*Now!*", "TS-RE", "EP-P", "ED"]),
        ("\\**Now!\\**", ["SD", "SP-P", "F-*", "TS-EM", "F-Now!*", "TS-RE", "EP-P", "ED"]),
    ],
)
def test_text_styles(parse_codes, document: str, expected: list[str]):
    assert parse_codes(document) == expected


def test_style_toggling_is_exclusive(parse_codes):
    # Entering one style while the other is active replaces it
    assert parse_codes("**a*b*c**") == [
        "SD", "SP-P",
        "TS-ST", "F-a", "TS-EM", "F-b", "TS-RE", "F-c", "TS-ST",
        "EP-P", "ED",
    ]


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        (
            "Click [here](target).",
            ["SD", "SP-P", "F-Click", "ST-SP", "SL-target", "F-here", "EL", "F-.", "EP-P", "ED"],
        ),
        # Formatting characters inside the target are not formatting
        (
            "+ Click [here, *please*!](the*tárgeτ*)",
            [
                "SD", "SP-UL", "F-Click", "ST-SP", "SL-the*tárgeτ*",
                "F-here,", "ST-SP", "TS-EM", "F-please", "TS-RE", "F-!", "EL", "EP-UL", "ED",
            ],
        ),
        (
            "### Click\\[ [her\\]e](t\\(arg\\)et).",
            [
                "SD", "SP-H3", "F-Click[", "ST-SP", "SL-t(arg)et",
                "F-her]e", "EL", "F-.", "EP-H3", "ED",
            ],
        ),
        ("[](empty-text)", ["SD", "SP-P", "SL-empty-text", "EL", "EP-P", "ED"]),
    ],
)
def test_links(parse_codes, document: str, expected: list[str]):
    assert parse_codes(document) == expected


@pytest.mark.parametrize(
    ("document", "fragment"),
    [
        ("[here", "[here"),
        ("x[x", "x[x"),
        ("[Kafka]", "[Kafka]"),
        ("[open](unterminated", "[open](unterminated"),
        ("[empty]()", "[empty]()"),
        ("stray]", "stray]"),
    ],
)
def test_malformed_links_are_plain_text(parse_codes, document: str, fragment: str):
    assert parse_codes(document) == ["SD", "SP-P", f"F-{fragment}", "EP-P", "ED"]


def test_links_do_not_nest(parse_codes):
    assert parse_codes("[a [b](c)") == [
        "SD", "SP-P", "SL-c", "F-a", "ST-SP", "F-[b", "EL", "EP-P", "ED",
    ]


def test_multiple_paragraphs(parse_codes):
    document = "foo bar\n\tbaz\n\n\tanøther"

    assert parse_codes(document) == [
        "SD",
        "SP-P", "F-foo", "ST-SP", "F-bar", "ST-SP", "F-baz", "EP-P",
        "SP-P", "F-anøther", "EP-P",
        "ED",
    ]


def test_mixed_paragraph_types(parse_codes):
    document = "# Title\n\n\t\t\t+ Ïtem\n\n\t\t\t+ Another one"

    assert parse_codes(document) == [
        "SD",
        "SP-H1", "F-Title", "EP-H1",
        "SP-UL", "F-Ïtem", "EP-UL",
        "SP-UL", "F-Another", "ST-SP", "F-one", "EP-UL",
        "ED",
    ]


@pytest.mark.parametrize("document", ["a \n\nb", "a\t\r\n  \r\nb", "a  \n \t \nb"])
def test_trailing_spaces_before_blank_line_end_the_paragraph(parse_codes, document: str):
    assert parse_codes(document) == ["SD", "SP-P", "F-a", "EP-P", "SP-P", "F-b", "EP-P", "ED"]


@pytest.mark.parametrize(
    "document",
    [
        "One\nsingle\nparagraph.",
        "One\rsingle\rparagraph.",
        "One\n\rsingle\n\rparagraph.",
        "One\r\nsingle\r\nparagraph.",
        "One\r\nsingle\n\rparagraph.",
        "One\r\nsingle\rparagraph.",
        "One\nsingle\n\rparagraph.",
    ],
)
def test_line_break_conventions_are_equivalent(parse_codes, document: str):
    assert parse_codes(document) == [
        "SD", "SP-P", "F-One", "ST-SP", "F-single", "ST-SP", "F-paragraph.", "EP-P", "ED",
    ]


@pytest.mark.parametrize("separator", ["\n\n", "\r\r", "\r\n\r\n", "\n\r\n\r"])
def test_blank_line_conventions_separate_paragraphs(parse_codes, separator: str):
    assert parse_codes(f"one{separator}two") == [
        "SD", "SP-P", "F-one", "EP-P", "SP-P", "F-two", "EP-P", "ED",
    ]


@pytest.mark.parametrize(
    ("document", "expected"),
    [
        ("«\\ Où\\ ?\\ »", ["SD", "SP-P", "F-« Où ? »", "EP-P", "ED"]),
        ("blah\\ ", ["SD", "SP-P", "F-blah ", "EP-P", "ED"]),
        (" blah\\  ", ["SD", "SP-P", "F-blah ", "EP-P", "ED"]),
        ("line\\\nbreak", ["SD", "SP-P", "F-line", "ST-NL", "F-break", "EP-P", "ED"]),
        ("line\\\rbreak", ["SD", "SP-P", "F-line", "ST-NL", "F-break", "EP-P", "ED"]),
        ("line\\\r\nbreak", ["SD", "SP-P", "F-line", "ST-NL", "F-break", "EP-P", "ED"]),
        ("line\\\n\rbreak", ["SD", "SP-P", "F-line", "ST-NL", "F-break", "EP-P", "ED"]),
        ("here  \\\n there", ["SD", "SP-P", "F-here", "ST-NL", "F-there", "EP-P", "ED"]),
        ("here  \\\n\\ there", ["SD", "SP-P", "F-here", "ST-NL", "F- there", "EP-P", "ED"]),
        (
            "here \\ \\\n there",
            ["SD", "SP-P", "F-here", "ST-SP", "F- ", "ST-NL", "F-there", "EP-P", "ED"],
        ),
    ],
)
def test_hard_spaces_and_line_breaks(parse_codes, document: str, expected: list[str]):
    assert parse_codes(document) == expected


def test_unicode_horizontal_space_separates_words(parse_codes):
    assert parse_codes("a\u00a0b\u2003c") == [
        "SD", "SP-P", "F-a", "ST-SP", "F-b", "ST-SP", "F-c", "EP-P", "ED",
    ]


def test_realistic_document(parse_codes):
    document = "\n\t".join(
        [
            "# The  title",
            "",
            "Paragraph one.",
            "Still the *same paragraph*.",
            "",
            "## Subtitle",
            "",
            "+ First;",
            "",
            "+ [Second](http://www.example.com);",
            "",
            "+ **Third**, ok?",
            "",
            "### Sub*sub*ti\\*tle",
            "",
            "Here \\[we\\] have some **more**   text\\",
            "with        some hard  \\",
            "breaks.",
            "",
            "",
        ]
    )

    assert parse_codes(document) == [
        "SD",
        "SP-H1", "F-The", "ST-SP", "F-title", "EP-H1",
        "SP-P", "F-Paragraph", "ST-SP", "F-one.", "ST-SP", "F-Still", "ST-SP", "F-the", "ST-SP",
        "TS-EM", "F-same", "ST-SP", "F-paragraph", "TS-RE", "F-.", "EP-P",
        "SP-H2", "F-Subtitle", "EP-H2",
        "SP-UL", "F-First;", "EP-UL",
        "SP-UL", "SL-http://www.example.com", "F-Second", "EL", "F-;", "EP-UL",
        "SP-UL", "TS-ST", "F-Third", "TS-RE", "F-,", "ST-SP", "F-ok?", "EP-UL",
        "SP-H3", "F-Sub", "TS-EM", "F-sub", "TS-RE", "F-ti*tle", "EP-H3",
        "SP-P", "F-Here", "ST-SP", "F-[we]", "ST-SP", "F-have", "ST-SP", "F-some", "ST-SP",
        "TS-ST", "F-more", "TS-RE", "ST-SP", "F-text", "ST-NL",
        "F-with", "ST-SP", "F-some", "ST-SP", "F-hard", "ST-NL",
        "F-breaks.", "EP-P",
        "ED",
    ]


def test_text_style_persists_across_paragraphs(parse_codes):
    assert parse_codes("*a\n\nb*") == [
        "SD",
        "SP-P", "TS-EM", "F-a", "EP-P",
        "SP-P", "F-b", "TS-RE", "EP-P",
        "ED",
    ]


def test_link_may_span_paragraphs(parse_codes):
    assert parse_codes("[a\n\nb](c)") == [
        "SD",
        "SP-P", "SL-c", "F-a", "EP-P",
        "SP-P", "F-b", "EL", "EP-P",
        "ED",
    ]


def test_parse_events_records_typed_events():
    assert parse_events("*Now!*") == [
        Event(EventKind.START_DOCUMENT),
        Event(EventKind.START_PARAGRAPH, ParType.TEXT),
        Event(EventKind.CHANGE_TEXT_STYLE, TextStyle.EMPHASIS),
        Event(EventKind.FRAGMENT, "Now!"),
        Event(EventKind.CHANGE_TEXT_STYLE, TextStyle.REGULAR),
        Event(EventKind.END_PARAGRAPH, ParType.TEXT),
        Event(EventKind.END_DOCUMENT),
    ]


def test_parse_events_bir_iki():
    assert parse_events("bir iki") == [
        Event(EventKind.START_DOCUMENT),
        Event(EventKind.START_PARAGRAPH, ParType.TEXT),
        Event(EventKind.FRAGMENT, "bir"),
        Event(EventKind.SPECIAL_TOKEN, SpecialToken.SPACE),
        Event(EventKind.FRAGMENT, "iki"),
        Event(EventKind.END_PARAGRAPH, ParType.TEXT),
        Event(EventKind.END_DOCUMENT),
    ]


def test_parse_runs_are_independent():
    first = EventRecorder()
    second = EventRecorder()

    parse("*open", first)
    parse("plain", second)

    assert Event(EventKind.CHANGE_TEXT_STYLE, TextStyle.EMPHASIS) in first.events
    assert [event.kind for event in second.events] == [
        EventKind.START_DOCUMENT,
        EventKind.START_PARAGRAPH,
        EventKind.FRAGMENT,
        EventKind.END_PARAGRAPH,
        EventKind.END_DOCUMENT,
    ]


def test_processor_errors_propagate():
    class Refusing(BaseProcessor):
        def on_fragment(self, text):
            raise RuntimeError(f"refused {text}")

    with pytest.raises(RuntimeError, match="refused word"):
        parse("word", Refusing())


def _write_document(tmp_path: Path, content: str, name: str = "sample.md") -> Path:
    target = tmp_path / name
    target.write_bytes(content.encode("utf-8"))
    return target


def test_parse_file_reports_events(tmp_path: Path):
    target = _write_document(tmp_path, "# Title\r\n\r\nBody text.\r\n")
    recorder = EventRecorder()

    parse_file(target, recorder)

    assert [str(event) for event in recorder.events] == [
        "START_DOCUMENT",
        "START_PARAGRAPH HEADING1",
        "FRAGMENT 'Title'",
        "END_PARAGRAPH HEADING1",
        "START_PARAGRAPH TEXT",
        "FRAGMENT 'Body'",
        "SPECIAL_TOKEN SPACE",
        "FRAGMENT 'text.'",
        "END_PARAGRAPH TEXT",
        "END_DOCUMENT",
    ]


def test_read_document_keeps_carriage_returns(tmp_path: Path):
    target = _write_document(tmp_path, "a\rb\r\n")

    assert read_document(target) == "a\rb\r\n"


def test_read_document_rejects_large_files(tmp_path: Path):
    target = _write_document(tmp_path, "x" * 64)

    with pytest.raises(ParseFileError, match="exceeding the maximum allowed size of 16") as excinfo:
        read_document(target, max_file_size=16)

    assert isinstance(excinfo.value.__cause__, FileTooLargeError)


def test_read_document_rejects_non_positive_override(tmp_path: Path):
    target = _write_document(tmp_path, "text")

    with pytest.raises(ParseFileError):
        read_document(target, max_file_size=0)


def test_read_document_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "broken.md"
    target.write_bytes(b"caf\xe9")

    with pytest.raises(ParseFileError, match="Invalid UTF-8"):
        read_document(target)


def test_read_document_rejects_missing_file(tmp_path: Path):
    with pytest.raises(ParseFileError):
        read_document(tmp_path / "missing.md")
