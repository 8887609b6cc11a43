"""Configuration schema for the `[cmdnest]` settings table."""

from .constants import DEFAULT_COMMENT, DEFAULT_DELIMITERS, DEFAULT_PROMPT, HISTORY_FILE, MAX_ARGS, MAX_RECURSION
from .logging_setup import parse_level
from .validation import ConfigField, ConfigItems

__all__ = ["INTERPRETER_CONFIG_SCHEMA"]


def _positive(value: int) -> list[str]:
    return [] if value > 0 else [f"must be greater than zero, got {value}"]


def _not_empty(value: str) -> list[str]:
    return [] if value else ["must not be empty"]


def _log_level(value: int | str) -> list[str]:
    return [] if parse_level(str(value)) is not None else [f"unknown log level {value!r}"]


INTERPRETER_CONFIG_SCHEMA = ConfigItems(
    ConfigField("prompt", str, default=DEFAULT_PROMPT, description="Prompt shown by the interactive loop"),
    ConfigField(
        "delimiters",
        str,
        default=DEFAULT_DELIMITERS,
        description="Characters separating the words of a command line",
        validator=_not_empty,
    ),
    ConfigField(
        "comment",
        str,
        default=DEFAULT_COMMENT,
        description="Words starting with this marker and the rest of the line are ignored",
        validator=_not_empty,
    ),
    ConfigField("max_depth", int, default=MAX_RECURSION, description="Maximum nested dispatch depth", validator=_positive),
    ConfigField("max_args", int, default=MAX_ARGS, description="Maximum number of words per command line", validator=_positive),
    ConfigField("history_file", str, default=str(HISTORY_FILE), description="Line editor history, empty to keep it in memory"),
    ConfigField("log_level", (int, str), default="warning", description="Initial log level (0..5 or a level name)", validator=_log_level),
    ConfigField("log_file", str, default="", description="Optional log file"),
)
