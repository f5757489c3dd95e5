"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

LINE_BREAK_TAGS = ("<br>", "<br/>", "<br />")
LINE_BREAK_ALIASES = {"html": "<br>", "xhtml": "<br />"}


@dataclass
class MarkydownConfig:
    """Configuration for rendering Markydown documents.

    Attributes:
        wrap_document: Whether to surround the output with ``<html>`` and
            ``<body>`` elements.
        escape_html: Whether to HTML-escape text fragments.
        line_break: Markup emitted for hard line breaks (``"<br>"``,
            ``"<br/>"``, ``"<br />"``, or the aliases ``"html"``/``"xhtml"``).
        heading_ids: Whether to add slug ``id`` attributes to headings.
        preserve_unicode: Whether to keep Unicode characters in heading slugs.
        max_file_size: Maximum input file size in bytes that will be processed.

    Examples:
        MarkydownConfig(wrap_document=False, line_break="xhtml")
    """

    # Output
    wrap_document: bool = True
    escape_html: bool = True
    line_break: str = "<br>"

    # Heading anchors
    heading_ids: bool = False
    preserve_unicode: bool = False

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> MarkydownConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.markydown]`` table from `pyproject.toml` and the
    ``[markydown]`` or ``[tool.markydown]`` table from `.markydown.toml` when
    present. Returns default values when no configuration is found. TOML files
    that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        MarkydownConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a markydown table is present but is not a mapping or
            contains unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "markydown")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".markydown.toml",
            table_paths=[("markydown",), ("tool", "markydown")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return MarkydownConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> MarkydownConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> MarkydownConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys are conventionally dashed
    raw_config = {key.replace("-", "_"): value for key, value in raw_config.items()}

    try:
        return MarkydownConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: MarkydownConfig) -> MarkydownConfig:
    """Resolve aliases such as ``line_break = "xhtml"``."""
    line_break = config.line_break
    if isinstance(line_break, str):
        line_break = LINE_BREAK_ALIASES.get(line_break, line_break)

    return replace(config, line_break=line_break)


def validate_config(config: MarkydownConfig) -> None:
    """Validate a `MarkydownConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If flags are not booleans, the line break markup is
            unsupported, or the size limit is not a positive integer.

    Examples:
        validate_config(MarkydownConfig(line_break="<br />"))
    """
    config = normalize_config(config)

    _ensure_booleans(
        {
            "wrap_document": config.wrap_document,
            "escape_html": config.escape_html,
            "heading_ids": config.heading_ids,
            "preserve_unicode": config.preserve_unicode,
        }
    )
    _ensure_integers({"max_file_size": config.max_file_size})

    if config.line_break not in LINE_BREAK_TAGS:
        raise ConfigError(
            "`line_break` must be one of: " + ", ".join((*LINE_BREAK_TAGS, *LINE_BREAK_ALIASES))
        )

    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: MarkydownConfig, **overrides: object) -> MarkydownConfig:
    """Apply override values to a `MarkydownConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        MarkydownConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `MarkydownConfig`.

    Examples:
        updated = apply_overrides(config, wrap_document=False, line_break=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> MarkydownConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        MarkydownConfig: Validated configuration ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), heading_ids=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_booleans(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be a boolean")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
