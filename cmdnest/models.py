"""Common types shared by the command tree and the interpreter."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag

__all__ = [
    "CmdNestError",
    "CommandAttribute",
    "ExitCode",
    "FieldWidths",
    "Status",
]


class CommandAttribute(IntFlag):
    """Independent flags describing a command.

    Flags are added with `Command.set_attributes` and never cleared.
    """

    NONE = 0
    # identity generated from another command, children are borrowed
    ALIAS = 1 << 0
    # may be unregistered or redefined at runtime (aliases, routines)
    MUTABLE = 1 << 1
    # part of a multi-line language construct (routine ... end)
    CONSTRUCT = 1 << 2


class Status(IntEnum):
    """Status codes returned by dispatch and the built-in handlers.

    Handlers may return any integer, these are only the ones used here.
    """

    SUCCESS = 0
    ERROR = -1  # missing or invalid arguments
    NOT_FOUND = -2  # unknown command, sub-command or file
    REJECTED = -3  # request refused (duplicate keyword, not an alias)
    FAILED = -4  # registry operation failed
    RECURSION_LIMIT = -5
    HANDLER_EXCEPTION = -6


class ExitCode(IntEnum):
    """Standard exit codes for the cmdnest entry point."""

    SUCCESS = 0
    USAGE_ERROR = 1  # invalid arguments
    CONFIG_ERROR = 2  # unreadable or invalid configuration
    SCRIPT_ERROR = 3  # a sourced script could not be run


@dataclass
class FieldWidths:
    """Longest text fields seen while walking a command tree."""

    keyword_plus_arghints: int = 0
    keyword: int = 0
    arghints: int = 0
    description: int = 0


class CmdNestError(BaseException):
    """Used for errors which already triggered logging."""
