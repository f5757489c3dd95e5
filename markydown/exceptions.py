"""Package-specific exception types."""

from __future__ import annotations


class ParseError(ValueError):
    """Base class for errors raised while loading a document for parsing.

    The parser itself never rejects input; these errors come from the limits
    and checks applied around it.
    """


class FileTooLargeError(ParseError):
    """Raised when an input file exceeds the configured maximum size.

    Args:
        size: Size of the file in bytes.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"File size of {self.size} bytes exceeds the maximum allowed size of {self.limit} bytes"
