"""Help text for a command tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import HELP_GUTTER

if TYPE_CHECKING:
    from .command import Command

__all__ = ["HELP_HEADER", "render_help"]

HELP_HEADER = "commands:\n"


def render_help(root: Command, header: str = HELP_HEADER) -> str:
    """Render every command below `root`, one aligned row per command.

    Nested commands show their full invocation path after their indentation,
    and the descriptions of a group of siblings start at the same column.

    Example::

        commands:
        help                show this help
        log <logcmd> <...>  change logger options
            log level <0..5>        change the log level

    Args:
        root: Top of the tree, not listed itself
        header: Text placed before the rows
    """
    widths = root.longest()
    buffer = [header] if header else []
    root.help(buffer, 0, widths.keyword_plus_arghints + HELP_GUTTER)
    return "".join(buffer)
