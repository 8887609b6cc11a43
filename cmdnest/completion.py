"""Tab completion against a command tree.

Completion first resolves how far the typed line matches the tree, walking
down one exact keyword at a time, then lists the sub-commands of the deepest
matched command that start with the next, partially typed, word.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import DEFAULT_COMMENT, DEFAULT_DELIMITERS, MAX_ARGS
from .logging_setup import get_logger
from .tokens import split_line, strip_comments, token_spans

if TYPE_CHECKING:
    from .command import Command

__all__ = [
    "CompletionResult",
    "Resolution",
    "complete",
    "complete_line",
    "descend",
    "resolve",
]

log = get_logger("cmdnest.completion")


@dataclass
class Resolution:
    """Where a typed line stands in the command tree."""

    node: Command  # command whose sub-commands complete the line
    nest: int  # words consumed to reach `node`, also the index of `substring`
    substring: str | None  # word being completed, None if there is none


@dataclass
class CompletionResult:
    """Sub-commands of the resolved command matching the word being typed."""

    resolution: Resolution
    matches: list[str]
    longest: int


def descend(root: Command, tokens: list[str]) -> list[Command]:
    """Follow `tokens` down the tree as far as they match exactly.

    There is no backtracking: each word is looked up among the sub-commands
    of the previous match only.

    Returns:
        The matched path, starting with `root`
    """
    path = [root]
    for token in tokens:
        cmd = path[-1].find_by_keyword(token)
        if cmd is None:
            log.debug("Command %s not found", token)
            break
        log.debug("Command %s found!", token)
        path.append(cmd)
    return path


def resolve(root: Command, tokens: list[str], trailing_delimiter: bool = False) -> Resolution:
    """Resolve the command and the word to complete.

    - The first word without an exact match is the one to complete, among
      the sub-commands of the last match.
    - When every word matched and the line ends with a delimiter, every
      sub-command of the last match is a candidate.
    - When every word matched and the cursor still touches the last word,
      that word is completed among its siblings, so a complete keyword also
      offers the longer ones. This extends the plain deepest-prefix walk,
      which would leave no word to complete there.

    Args:
        root: Top of the command tree
        tokens: Words typed so far
        trailing_delimiter: Whether the line ends with a delimiter
    """
    path = descend(root, tokens)
    nest = len(path) - 1
    if nest < len(tokens):
        return Resolution(path[-1], nest, tokens[nest])
    if not tokens:
        return Resolution(root, 0, None)
    if trailing_delimiter:
        return Resolution(path[-1], nest, "")
    return Resolution(path[-2], nest - 1, tokens[-1])


def complete(
    root: Command,
    line: str,
    delimiters: str = DEFAULT_DELIMITERS,
    comment: str = DEFAULT_COMMENT,
    max_args: int = MAX_ARGS,
) -> CompletionResult | None:
    """Complete the last word of `line`.

    Returns:
        The matches, or None when there is nothing to complete (empty line,
        comment, command without sub-commands)
    """
    tokens = split_line(line, delimiters, max_args)
    if not tokens or len(strip_comments(tokens, comment)) != len(tokens):
        return None

    resolution = resolve(root, tokens, trailing_delimiter=line[-1] in delimiters)
    found = resolution.node.partial_matches(resolution.substring)
    if found is None:
        return None
    matches, longest = found
    log.debug("partial_matches length: %d  longest: %d", len(matches), longest)
    return CompletionResult(resolution, matches, longest)


def complete_line(
    root: Command,
    line: str,
    delimiters: str = DEFAULT_DELIMITERS,
    comment: str = DEFAULT_COMMENT,
    max_args: int = MAX_ARGS,
) -> list[str]:
    """Return every completed version of `line`.

    The completed word is replaced by each matching keyword followed by the
    first delimiter, anything typed after it is dropped.
    """
    result = complete(root, line, delimiters, comment, max_args)
    if not result:
        return []
    spans = token_spans(line, delimiters)
    nest = result.resolution.nest
    start = spans[nest][0] if nest < len(spans) else len(line)
    return [f"{line[:start]}{keyword}{delimiters[0]}" for keyword in result.matches]
