"""Ordered registry of sibling commands.

A registry keeps its commands in registration order and is owned by exactly
one command. Aliases reach another command's registry through a
`BorrowedChildren` reference, which is never destroyed through the alias.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .logging_setup import get_logger

if TYPE_CHECKING:
    from .command import Command

__all__ = [
    "BorrowedChildren",
    "Children",
    "CommandRegistry",
    "OwnedChildren",
]

log = get_logger("cmdnest.registry")


class CommandRegistry:
    """Insertion-ordered collection of sibling commands.

    Destroying the registry destroys every command it still holds.
    """

    def __init__(self) -> None:
        self._items: list[Command] = []
        self._destroyed = False

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._items))

    def __contains__(self, cmd: object) -> bool:
        return any(item is cmd for item in self._items)

    @property
    def destroyed(self) -> bool:
        """Return True once `destroy` has been called."""
        return self._destroyed

    def append(self, cmd: Command) -> bool:
        """Add a command at the tail.

        Returns:
            False if the registry was already destroyed
        """
        if self._destroyed:
            log.error("Cannot add '%s' to a destroyed registry", cmd.keyword)
            return False
        self._items.append(cmd)
        return True

    def find(self, predicate: Callable[[Command], bool]) -> Command | None:
        """Return the first command matching `predicate`, in registration order."""
        for item in self._items:
            if predicate(item):
                return item
        return None

    def find_by_keyword(self, keyword: str) -> Command | None:
        """Return the command registered under `keyword`, if any."""
        return self.find(lambda item: item.keyword == keyword)

    def index(self, cmd: Command) -> int:
        """Return the position of `cmd`.

        Raises:
            ValueError: If `cmd` is not in the registry
        """
        for position, item in enumerate(self._items):
            if item is cmd:
                return position
        raise ValueError(cmd)

    def remove(self, cmd: Command) -> None:
        """Remove and destroy `cmd`.

        Raises:
            ValueError: If `cmd` is not in the registry
        """
        del self._items[self.index(cmd)]
        cmd.destroy()

    def copy(self, copier: Callable[[Command], Command]) -> CommandRegistry:
        """Return a new registry holding `copier(item)` for every item."""
        duplicate = CommandRegistry()
        for item in self._items:
            duplicate.append(copier(item))
        return duplicate

    def destroy(self) -> None:
        """Destroy every command and leave the registry empty."""
        if self._destroyed:
            log.warning("attempt to double-destroy a command registry")
            return
        self._destroyed = True
        items, self._items = self._items, []
        for item in items:
            item.destroy()


@dataclass(frozen=True)
class OwnedChildren:
    """Sub-commands owned by a command, destroyed along with it."""

    registry: CommandRegistry


@dataclass(frozen=True)
class BorrowedChildren:
    """Sub-commands shared with the command an alias was made from."""

    registry: CommandRegistry


Children = OwnedChildren | BorrowedChildren
