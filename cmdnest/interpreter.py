"""Command interpreter.

The interpreter owns the root of a command tree and turns lines of text into
handler calls::

    interp = Interpreter()
    register_builtin_commands(interp)
    interp.commands().register(Command.create(on_greet, None, "greet", " <name>", "say hello"))
    interp.dispatch("greet world  # comments are ignored")

Dispatch may be re-entered by handlers (`source` runs a script through it),
nesting is bounded by `max_depth`.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from .command import Command
from .completion import CompletionResult, complete, complete_line
from .config import Configuration
from .constants import DEFAULT_COMMENT, DEFAULT_DELIMITERS, DEFAULT_PROMPT, MAX_ARGS, MAX_RECURSION
from .hints import hint_for_line
from .logging_setup import VERBOSE, get_logger
from .models import Status
from .schema import INTERPRETER_CONFIG_SCHEMA
from .tokens import tokenize

if TYPE_CHECKING:
    from .protocols import LineReader

__all__ = ["Interpreter"]


class Interpreter:  # pylint: disable=too-many-instance-attributes
    """Dispatches command lines to a tree of commands."""

    def __init__(self, settings: Configuration | None = None, output: TextIO | None = None) -> None:
        """Initialize the interpreter.

        Args:
            settings: The `[cmdnest]` settings, schema defaults if None
            output: Where command output is written, the current stdout if None
        """
        self.log = get_logger("cmdnest.interpreter")
        if settings is None:
            settings = Configuration(logger=self.log, schema=INTERPRETER_CONFIG_SCHEMA)
        self.settings = settings
        self.prompt = settings.get_str("prompt", DEFAULT_PROMPT)
        self.delimiters = settings.get_str("delimiters") or DEFAULT_DELIMITERS
        self.comment = settings.get_str("comment", DEFAULT_COMMENT)
        self.max_depth = settings.get_int("max_depth", MAX_RECURSION)
        self.max_args = settings.get_int("max_args", MAX_ARGS)
        self._output = output
        self.stopped = False
        self.depth = 0
        self._root = Command.create(None, self, "")

    def commands(self) -> Command:
        """Return the root command, sub-commands registered there are top-level commands."""
        return self._root

    def write(self, text: str) -> None:
        """Write command output."""
        stream = self._output if self._output is not None else sys.stdout
        stream.write(text)
        stream.flush()

    def dispatch(self, line: str) -> int:
        """Run one command line.

        Empty lines and comments do nothing and succeed.

        Returns:
            The handler's status, or a negative `Status` when the command is
            unknown, the nesting is too deep or the handler raised
        """
        self.depth += 1
        try:
            self.log.log(VERBOSE, "depth: %d line: %r", self.depth, line)
            if self.depth > self.max_depth:
                self.log.error("Maximum recursion depth %d reached", self.max_depth)
                return Status.RECURSION_LIMIT
            return self._dispatch(line)
        finally:
            self.depth -= 1

    def _dispatch(self, line: str) -> int:
        args = tokenize(line, self.delimiters, self.comment, self.max_args)
        if not args:
            self.log.log(VERBOSE, "Ignoring empty line")
            return Status.SUCCESS

        cmd = self._root.find_by_keyword(args[0])
        if cmd is None:
            self.log.warning("Command %s not found", args[0])
            return Status.NOT_FOUND

        try:
            return cmd.exec(len(args), args)
        except Exception:  # pylint: disable=broad-exception-caught
            self.log.exception("%s(%s) failed:", args[0], ", ".join(args[1:]))
            return Status.HANDLER_EXCEPTION

    def quit(self) -> None:
        """Stop `loop` before the next line is read."""
        self.stopped = True

    def loop(self, reader: LineReader) -> int:
        """Read and dispatch lines until `quit` or the end of input.

        Args:
            reader: Source of the lines, typically a `Console`
        """
        while not self.stopped:
            line = reader.get_line(self.prompt)
            if line is None:
                self.log.debug("End of input")
                break
            self.log.debug("line: %s", line)
            result = self.dispatch(line)
            self.log.info("Result of dispatch(%s) is %d", line, result)
        return Status.SUCCESS

    # Line editing support

    def complete(self, line: str) -> CompletionResult | None:
        """Return the completions of the last word of `line`."""
        return complete(self._root, line, self.delimiters, self.comment, self.max_args)

    def complete_line(self, line: str) -> list[str]:
        """Return `line` completed with each candidate keyword."""
        return complete_line(self._root, line, self.delimiters, self.comment, self.max_args)

    def hint(self, line: str) -> str | None:
        """Return the argument hints to show after `line`."""
        return hint_for_line(self._root, line, self.delimiters, self.comment, self.max_args)
