"""Command tree nodes.

A `Command` is one addressable command: a keyword unique among its
siblings, argument hints and a description for the UI, a handler with an
opaque context, attribute flags, and an optional registry of sub-commands
allocated on first registration.

Example::

    root = Command.create(None, None, "")
    log = Command.create(on_log, None, "log", " <logcmd> <...>", "change logger options")
    root.register(log)
    log.register(Command.create(on_level, None, "level", " <0..5>", "change the log level"))
"""

from __future__ import annotations

from typing import Any

from .constants import HELP_GUTTER, HELP_INDENT
from .logging_setup import VERBOSE, get_logger
from .models import CommandAttribute, FieldWidths
from .protocols import CommandHandler
from .registry import BorrowedChildren, Children, CommandRegistry, OwnedChildren

__all__ = ["Command", "Handler"]

# handler(cmd, context, argc, args) -> status, args[0] is the invoked keyword
Handler = CommandHandler

log = get_logger("cmdnest.command")


class Command:  # pylint: disable=too-many-public-methods
    """A node of the command tree."""

    def __init__(
        self,
        handler: Handler | None = None,
        context: Any = None,  # noqa: ANN401
        keyword: str | None = "",
        arghints: str | None = "",
        description: str | None = "",
    ) -> None:
        """Initialize the command.

        Args:
            handler: Called by `exec`, None for pure grouping commands
            context: Passed to the handler unmodified, never owned
            keyword: The word invoking this command, empty only for a root
            arghints: Argument hints, conventionally with a leading space (" <path>")
            description: One line description for help
        """
        self._handler = handler
        self._context = context
        self._keyword = str(keyword or "")
        self._arghints = str(arghints or "")
        self._description = str(description or "")
        self._attributes = CommandAttribute.NONE
        self._children: Children | None = None
        self._destroyed = False

    @classmethod
    def create(
        cls,
        handler: Handler | None,
        context: Any,  # noqa: ANN401
        keyword: str | None,
        arghints: str | None = None,
        description: str | None = None,
    ) -> Command:
        """Command factory, see `__init__`."""
        return cls(handler, context, keyword, arghints, description)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._keyword!r} {self._attributes!r}>"

    # Lifecycle

    def destroy(self) -> None:
        """Tear down this command and its owned sub-commands.

        Borrowed sub-commands (aliases) are left untouched. Calling this
        twice only logs a warning.
        """
        if getattr(self, "_destroyed", True):
            log.warning("attempt to early or double-destroy %r", self)
            return
        self._destroyed = True
        children, self._children = self._children, None
        if isinstance(children, OwnedChildren):
            children.registry.destroy()
        self._handler = None
        self._context = None

    @property
    def destroyed(self) -> bool:
        """Return True once `destroy` has been called."""
        return self._destroyed

    def copy(self) -> Command:
        """Return a deep copy of this command.

        Owned sub-commands are copied recursively, borrowed ones stay shared.
        The context is shared, it is never owned.
        """
        duplicate = type(self)(self._handler, self._context, self._keyword, self._arghints, self._description)
        duplicate.set_attributes(self._attributes)
        if isinstance(self._children, OwnedChildren):
            duplicate._children = OwnedChildren(self._children.registry.copy(Command.copy))
        else:
            duplicate._children = self._children
        return duplicate

    def alias(self, keyword: str) -> Command:
        """Create an alias of this command under a new keyword.

        The alias shares the handler, context and argument hints, and borrows
        this command's sub-commands: anything registered through either
        keyword is visible through both.
        Destroying this command leaves its aliases with an empty registry;
        aliases are not unregistered automatically.

        Args:
            keyword: The keyword of the alias
        """
        alias = type(self)(self._handler, self._context, keyword, self._arghints, f"alias for {self._keyword}")
        attributes = CommandAttribute.ALIAS | CommandAttribute.MUTABLE
        if self.is_construct:
            attributes |= CommandAttribute.CONSTRUCT
        alias.set_attributes(attributes)
        alias._children = BorrowedChildren(self._registry(create=True))
        return alias

    # Attributes & fields

    def set_attributes(self, attributes: CommandAttribute) -> None:
        """Add attribute flags. Flags are never cleared."""
        self._attributes |= attributes

    @property
    def attributes(self) -> CommandAttribute:
        """Return the attribute flags."""
        return self._attributes

    @property
    def is_alias(self) -> bool:
        """Whether this command was generated from another one."""
        return CommandAttribute.ALIAS in self._attributes

    @property
    def is_mutable(self) -> bool:
        """Whether this command may be unregistered or redefined at runtime."""
        return CommandAttribute.MUTABLE in self._attributes

    @property
    def is_construct(self) -> bool:
        """Whether this command is part of a multi-line language construct."""
        return CommandAttribute.CONSTRUCT in self._attributes

    @property
    def keyword(self) -> str:
        return self._keyword

    @property
    def arghints(self) -> str:
        return self._arghints

    @property
    def description(self) -> str:
        return self._description

    @property
    def context(self) -> Any:  # noqa: ANN401
        return self._context

    @property
    def children(self) -> CommandRegistry | None:
        """Return the sub-command registry, owned or borrowed."""
        return self._children.registry if self._children is not None else None

    @property
    def children_ref(self) -> Children | None:
        """Return the tagged reference to the sub-commands."""
        return self._children

    def _registry(self, create: bool = False) -> CommandRegistry | None:
        """Return the sub-command registry, allocating an owned one if asked."""
        if self._children is None and create:
            self._children = OwnedChildren(CommandRegistry())
        return self.children

    # Lookup & execution

    def find_by_keyword(self, keyword: str) -> Command | None:
        """Return the direct sub-command registered under `keyword`."""
        registry = self.children
        if not registry:
            log.log(VERBOSE, "Empty command registry under %r", self._keyword)
            return None
        found = registry.find_by_keyword(keyword)
        if found is None:
            log.log(VERBOSE, "Command %r not found under %r", keyword, self._keyword)
        return found

    def partial_matches(self, substring: str | None) -> tuple[list[str], int] | None:
        """List the direct sub-commands whose keyword starts with `substring`.

        Args:
            substring: Case-sensitive prefix, None when nothing was typed

        Returns:
            (keywords in registration order, length of the longest keyword),
            or None if there is no substring or no sub-command at all
        """
        registry = self.children
        if substring is None or not registry:
            log.debug("substring: %r  sub-commands: %s", substring, len(registry) if registry else None)
            return None

        matches = []
        longest = 0
        for cmd in registry:
            log.log(VERBOSE, "checking %r against %r", cmd.keyword, substring)
            if cmd.keyword.startswith(substring):
                matches.append(cmd.keyword)
                longest = max(longest, len(cmd.keyword))
        return matches, longest

    def exec(self, argc: int, args: list[str]) -> int:
        """Run the handler, returning its status (0 without handler)."""
        if self._handler is None:
            return 0
        return self._handler(self, self._context, argc, args)

    # Help

    def longest(self, widths: FieldWidths | None = None) -> FieldWidths:
        """Measure the longest fields of every command below this one.

        Args:
            widths: Accumulator to update, a new one if None

        Returns:
            The accumulator
        """
        if widths is None:
            widths = FieldWidths()
        for cmd in self.children or ():
            widths.keyword_plus_arghints = max(widths.keyword_plus_arghints, len(cmd.keyword) + len(cmd.arghints))
            widths.keyword = max(widths.keyword, len(cmd.keyword))
            widths.arghints = max(widths.arghints, len(cmd.arghints))
            widths.description = max(widths.description, len(cmd.description))
            cmd.longest(widths)
        return widths

    def help(self, buffer: list[str], depth: int = 0, column_width: int | None = None, prefix: str = "") -> None:
        """Append one help row per sub-command, recursively.

        Rows read `<indent><keyword><arghints><pad><description>`, where the
        indent holds `depth` levels and the invocation path of this command,
        and the pad starts every description of a sibling group at the same
        column.

        Args:
            buffer: Receives the rows, newline terminated
            depth: Indentation level of the rows
            column_width: Offset of the description column, measured from the
                          indent. Computed with `longest` if None
            prefix: Invocation path of the parent, each keyword followed by a space
        """
        registry = self.children
        if not registry:
            return
        if column_width is None:
            column_width = self.longest().keyword_plus_arghints + HELP_GUTTER

        path = f"{prefix}{self._keyword} " if self._keyword else prefix
        indent = " " * (HELP_INDENT * depth) + path
        for cmd in registry:
            usage = cmd.keyword + cmd.arghints
            pad = " " * max(column_width - len(usage), 1)
            buffer.append(f"{indent}{usage}{pad}{cmd.description}".rstrip() + "\n")
            cmd.help(buffer, depth + 1, column_width, path)

    # Registration

    def register(self, child: Command) -> bool:
        """Register `child` as a sub-command.

        Returns:
            False if the keyword is empty or already taken, or if the child
            would make the tree cyclic
        """
        if not child.keyword:
            log.error("Cannot register a command without keyword under %r", self._keyword)
            return False
        if child.destroyed:
            log.error("Cannot register destroyed command %r", child.keyword)
            return False
        registry = self._registry(create=True)
        assert registry is not None
        if child is self or child._reaches(registry):
            log.error("Registering %r under %r would create a cycle", child.keyword, self._keyword)
            return False
        if registry.find_by_keyword(child.keyword) is not None:
            log.error("Command '%s' already registered", child.keyword)
            return False
        return registry.append(child)

    def unregister(self, child: Command) -> bool:
        """Remove and destroy the sub-command with the same keyword as `child`.

        Returns:
            False if no sub-command has that keyword
        """
        registry = self.children
        found = registry.find_by_keyword(child.keyword) if registry else None
        if found is None:
            log.error("Command '%s' not found", child.keyword)
            return False
        registry.remove(found)  # type: ignore[union-attr]
        return True

    def _reaches(self, registry: CommandRegistry) -> bool:
        """Return True if `registry` is this command's or any descendant's."""
        pending = [self]
        seen: set[int] = set()
        while pending:
            registry_here = pending.pop().children
            if registry_here is None or id(registry_here) in seen:
                continue
            if registry_here is registry:
                return True
            seen.add(id(registry_here))
            pending.extend(registry_here)
        return False
