"""Processor interface receiving parsing events, plus an event recorder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from .models import ParType, SpecialToken, TextStyle


class Processor(Protocol):
    """Something that processes a Markydown document as it is parsed.

    The parser calls these methods synchronously, in document order:

        Document  := start_document Paragraph* end_document
        Paragraph := start_paragraph(k) Content* end_paragraph(k)
        Content   := fragment | special_token | change_text_style | Link
        Link      := start_link Content* end_link

    Exceptions raised by a processor propagate out of `markydown.parse`.
    """

    def on_start_document(self) -> None: ...

    def on_end_document(self) -> None: ...

    def on_start_paragraph(self, par_type: ParType) -> None: ...

    def on_end_paragraph(self, par_type: ParType) -> None: ...

    def on_fragment(self, text: str) -> None: ...

    def on_special_token(self, token: SpecialToken) -> None: ...

    def on_change_text_style(self, style: TextStyle) -> None: ...

    def on_start_link(self, target: str) -> None: ...

    def on_end_link(self) -> None: ...


class BaseProcessor:
    """Processor that ignores every event; subclass and override what you need."""

    def on_start_document(self) -> None:
        pass

    def on_end_document(self) -> None:
        pass

    def on_start_paragraph(self, par_type: ParType) -> None:
        pass

    def on_end_paragraph(self, par_type: ParType) -> None:
        pass

    def on_fragment(self, text: str) -> None:
        pass

    def on_special_token(self, token: SpecialToken) -> None:
        pass

    def on_change_text_style(self, style: TextStyle) -> None:
        pass

    def on_start_link(self, target: str) -> None:
        pass

    def on_end_link(self) -> None:
        pass


class EventKind(Enum):
    """One member per `Processor` callback."""

    START_DOCUMENT = auto()
    END_DOCUMENT = auto()
    START_PARAGRAPH = auto()
    END_PARAGRAPH = auto()
    FRAGMENT = auto()
    SPECIAL_TOKEN = auto()
    CHANGE_TEXT_STYLE = auto()
    START_LINK = auto()
    END_LINK = auto()


@dataclass(frozen=True)
class Event:
    """A recorded processor callback.

    Attributes:
        kind: Which callback was invoked.
        value: The callback argument, or None for argument-less callbacks.

    Examples:
        str(Event(EventKind.FRAGMENT, "bir"))  # "FRAGMENT 'bir'"
        str(Event(EventKind.START_PARAGRAPH, ParType.TEXT))  # "START_PARAGRAPH TEXT"
    """

    kind: EventKind
    value: ParType | SpecialToken | TextStyle | str | None = None

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.name
        if isinstance(self.value, Enum):
            return f"{self.kind.name} {self.value.name}"
        return f"{self.kind.name} {self.value!r}"


class EventRecorder(BaseProcessor):
    """Processor collecting every callback as an `Event`."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def _record(self, kind: EventKind, value=None) -> None:
        self.events.append(Event(kind, value))

    def on_start_document(self) -> None:
        self._record(EventKind.START_DOCUMENT)

    def on_end_document(self) -> None:
        self._record(EventKind.END_DOCUMENT)

    def on_start_paragraph(self, par_type: ParType) -> None:
        self._record(EventKind.START_PARAGRAPH, par_type)

    def on_end_paragraph(self, par_type: ParType) -> None:
        self._record(EventKind.END_PARAGRAPH, par_type)

    def on_fragment(self, text: str) -> None:
        self._record(EventKind.FRAGMENT, text)

    def on_special_token(self, token: SpecialToken) -> None:
        self._record(EventKind.SPECIAL_TOKEN, token)

    def on_change_text_style(self, style: TextStyle) -> None:
        self._record(EventKind.CHANGE_TEXT_STYLE, style)

    def on_start_link(self, target: str) -> None:
        self._record(EventKind.START_LINK, target)

    def on_end_link(self) -> None:
        self._record(EventKind.END_LINK)
