"""Interfaces between the interpreter and its collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .command import Command

__all__ = ["CommandHandler", "LineReader"]


class LineReader(Protocol):
    """Source of command lines for `Interpreter.loop`."""

    def get_line(self, prompt: str) -> str | None:
        """Return the next line, None at end of input."""


class CommandHandler(Protocol):
    """Callable run when a command is dispatched.

    `args[0]` is the keyword the command was invoked with.
    """

    def __call__(self, cmd: Command, context: Any, argc: int, args: list[str]) -> int:  # noqa: ANN401
        """Return a status code."""
