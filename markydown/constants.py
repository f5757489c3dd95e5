"""Constants used across the markydown package."""

from __future__ import annotations

from .config import MarkydownConfig

DEFAULT_CONFIG = MarkydownConfig()

# Markydown syntax
HEADING_MARKER = "#"
MAX_HEADING_LEVEL = 3
BULLET_MARKER = "+"
EMPHASIS_MARKER = "*"
ESCAPE_MARKER = "\\"
LINK_START = "["
LINK_END = "]"
LINK_TARGET_START = "("
LINK_TARGET_END = ")"
NEW_LINE_CHARS = "\r\n"

# Files and limits
MARKYDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".markydown")
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
