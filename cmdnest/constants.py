"""Shared constants for cmdnest."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "CONFIG_SECTION",
    "DEFAULT_COMMENT",
    "DEFAULT_DELIMITERS",
    "DEFAULT_PROMPT",
    "HELP_GUTTER",
    "HELP_INDENT",
    "HISTORY_FILE",
    "MAX_ARGS",
    "MAX_RECURSION",
]

# Config file path - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "cmdnest" / "config.toml"
CONFIG_SECTION = "cmdnest"

# Line editor history - XDG_STATE_HOME with fallback to ~/.local/state
_xdg_state_home = Path(os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state")
HISTORY_FILE = _xdg_state_home / "cmdnest" / "history"

# Command line parsing
DEFAULT_PROMPT = "> "
DEFAULT_DELIMITERS = " \t\r\n"
DEFAULT_COMMENT = "#"
MAX_ARGS = 32

# Nested dispatch ceiling (sourced scripts, handlers calling dispatch)
MAX_RECURSION = 64

# Help layout
HELP_INDENT = 4
HELP_GUTTER = 2
