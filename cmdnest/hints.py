"""Argument hints shown while typing.

A command's arghints string lists its arguments (" <logcmd> <...>"). Once a
line has resolved to a command `nest` words deep and holds `argc` words, the
argument being typed next is hint number `argc - nest`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .completion import descend
from .constants import DEFAULT_COMMENT, DEFAULT_DELIMITERS, MAX_ARGS
from .logging_setup import get_logger
from .tokens import token_spans, tokenize

if TYPE_CHECKING:
    from .command import Command

__all__ = ["hint_for_line", "hint_index", "next_hint", "remaining_hints"]

log = get_logger("cmdnest.hints")


def hint_index(arghints: str, argc: int, nest: int, delimiters: str = DEFAULT_DELIMITERS) -> int | None:
    """Return the index of the hint to show, None when out of range."""
    index = argc - nest
    if index < 0 or index >= len(token_spans(arghints, delimiters)):
        return None
    return index


def next_hint(arghints: str, argc: int, nest: int, delimiters: str = DEFAULT_DELIMITERS) -> str | None:
    """Return the single hint for the next argument.

    >>> next_hint(" <a> <b> <c>", argc=2, nest=1)
    '<b>'
    """
    index = hint_index(arghints, argc, nest, delimiters)
    if index is None:
        return None
    start, end = token_spans(arghints, delimiters)[index]
    return arghints[start:end]


def remaining_hints(arghints: str, argc: int, nest: int, delimiters: str = DEFAULT_DELIMITERS) -> str | None:
    """Return the hints from the next argument to the end, with a leading space."""
    index = hint_index(arghints, argc, nest, delimiters)
    if index is None:
        return None
    return " " + arghints[token_spans(arghints, delimiters)[index][0] :]


def hint_for_line(
    root: Command,
    line: str,
    delimiters: str = DEFAULT_DELIMITERS,
    comment: str = DEFAULT_COMMENT,
    max_args: int = MAX_ARGS,
) -> str | None:
    """Return the hint text to display after `line`.

    The leading space is dropped when the line already ends with a delimiter.
    """
    tokens = tokenize(line, delimiters, comment, max_args)
    if not tokens:
        return None
    path = descend(root, tokens)
    nest = len(path) - 1
    if nest == 0:
        return None
    hint = remaining_hints(path[-1].arghints, len(tokens), nest, delimiters)
    log.debug("hint for %r: %r", line, hint)
    if hint is not None and line[-1] in delimiters:
        return hint[1:]
    return hint
