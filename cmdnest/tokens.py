"""Command line tokenizer."""

from .constants import DEFAULT_COMMENT, DEFAULT_DELIMITERS, MAX_ARGS
from .logging_setup import VERBOSE, get_logger

__all__ = [
    "split_line",
    "strip_comments",
    "token_spans",
    "tokenize",
]

log = get_logger("cmdnest.tokens")


def token_spans(line: str, delimiters: str = DEFAULT_DELIMITERS) -> list[tuple[int, int]]:
    """Locate the words of a line.

    Args:
        line: The raw command line
        delimiters: Every character of this string separates words

    Returns:
        (start, end) offsets of each word, consecutive delimiters produce no word
    """
    spans = []
    start = None
    for position, char in enumerate(line):
        if char in delimiters:
            if start is not None:
                spans.append((start, position))
                start = None
        elif start is None:
            start = position
    if start is not None:
        spans.append((start, len(line)))
    return spans


def split_line(line: str, delimiters: str = DEFAULT_DELIMITERS, max_args: int = MAX_ARGS) -> list[str]:
    """Split a line into at most `max_args` words.

    Extra words are dropped with a warning.
    """
    tokens = [line[start:end] for start, end in token_spans(line, delimiters)]
    if len(tokens) > max_args:
        log.warning("Too many arguments (%d), ignoring the last %d", len(tokens), len(tokens) - max_args)
        del tokens[max_args:]
    return tokens


def strip_comments(tokens: list[str], comment: str = DEFAULT_COMMENT) -> list[str]:
    """Drop the first word starting with the comment marker and everything after it."""
    if not comment:
        return tokens
    for position, token in enumerate(tokens):
        if token.startswith(comment):
            log.log(VERBOSE, "Found comment %s at arg %d", comment, position)
            return tokens[:position]
    return tokens


def tokenize(
    line: str,
    delimiters: str = DEFAULT_DELIMITERS,
    comment: str = DEFAULT_COMMENT,
    max_args: int = MAX_ARGS,
) -> list[str]:
    """Split a line and strip its comment."""
    return strip_comments(split_line(line, delimiters, max_args), comment)
