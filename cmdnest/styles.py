"""Colors for log records on the screen and for hints in the line editor."""

import logging
import os
import sys
from typing import TextIO

__all__ = ["HINT_STYLE", "LEVEL_CODES", "SGR_RESET", "level_format", "sgr", "use_color"]

SGR_RESET = "\x1b[0m"

# SGR parameters per log level, levels missing here are printed plainly
LEVEL_CODES: dict[int, tuple[str, ...]] = {
    logging.WARNING: ("33", "2"),  # dim yellow
    logging.ERROR: ("31", "2"),  # dim red
    logging.CRITICAL: ("31", "1"),  # bold red
}

# prompt_toolkit style of the argument hints shown after the input
HINT_STYLE = "ansimagenta"


def use_color(stream: TextIO | None = None) -> bool:
    """Tell whether `stream` (stderr by default) should get colored output.

    NO_COLOR wins over FORCE_COLOR, which wins over TTY detection.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = sys.stderr if stream is None else stream
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def sgr(*codes: str) -> str:
    """Return the escape sequence selecting `codes`, empty if there are none."""
    return f"\x1b[{';'.join(codes)}m" if codes else ""


def level_format(levelno: int, fmt: str, color: bool) -> str:
    """Wrap the log format `fmt` in the colors of `levelno`.

    Args:
        levelno: Logging level of the records using this format
        fmt: The uncolored format
        color: Whether colors are enabled at all
    """
    codes = LEVEL_CODES.get(levelno)
    if not color or not codes:
        return fmt
    return f"{sgr(*codes)}{fmt}{SGR_RESET}"
