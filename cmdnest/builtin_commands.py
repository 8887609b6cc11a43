"""Built-in commands.

Every handler follows the command handler contract: it receives the command
it was invoked through, that command's context, and the words of the line
with the invoked keyword first. Handlers registered at the root get the
interpreter as context.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import coerce_to_bool
from .help import render_help
from .logging_setup import NUMERIC_LEVELS, get_logger, parse_level, set_file, set_level, set_stdout
from .models import Status

if TYPE_CHECKING:
    from .command import Command, Handler
    from .interpreter import Interpreter

__all__ = ["BUILTIN_COMMANDS", "LOG_COMMANDS", "register_builtin_commands", "run_script"]

log = get_logger("cmdnest.builtins")


def _help(cmd: Command, interp: Interpreter, argc: int, args: list[str]) -> int:
    interp.write(render_help(interp.commands()))
    return Status.SUCCESS


def _alias(cmd: Command, interp: Interpreter, argc: int, args: list[str]) -> int:
    """Register `args[2]` again, at the top level, as `args[1]`."""
    if argc < 3:
        log.error("Expected new and original keyword for alias")
        return Status.ERROR

    scope = interp.commands()
    original = scope.find_by_keyword(args[2])
    if original is None:
        log.warning("Command %s not found", args[2])
        return Status.NOT_FOUND

    alias = original.alias(args[1])
    if not scope.register(alias):
        log.error("Failed to register alias %s to %s", args[1], args[2])
        alias.destroy()
        return Status.REJECTED
    return Status.SUCCESS


def _unalias(cmd: Command, interp: Interpreter, argc: int, args: list[str]) -> int:
    if argc < 2:
        log.error("Expected keyword to unalias")
        return Status.ERROR

    scope = interp.commands()
    target = scope.find_by_keyword(args[1])
    if target is None:
        log.warning("Command %s not found", args[1])
        return Status.NOT_FOUND
    if not target.is_alias:
        interp.write(f"error: {target.keyword} is not an alias\n")
        return Status.REJECTED
    if not scope.unregister(target):
        interp.write(f"error: unregister({args[1]}) failed\n")
        return Status.FAILED
    return Status.SUCCESS


def _log(cmd: Command, context: Any, argc: int, args: list[str]) -> int:  # noqa: ANN401
    """Run the `log` sub-command named by `args[1]`."""
    if argc < 2:
        log.error("Not enough arguments for log command")
        return Status.ERROR
    sub_command = cmd.find_by_keyword(args[1])
    if sub_command is None:
        log.warning("Sub-command %s not found", args[1])
        return Status.NOT_FOUND
    return sub_command.exec(argc - 1, args[1:])


def _log_level(cmd: Command, context: Any, argc: int, args: list[str]) -> int:  # noqa: ANN401
    if argc < 2:
        log.error("Expected a numeric argument for level")
        return Status.ERROR
    level = parse_level(args[1])
    if level is None:
        log.error("Invalid log level %s, expected 0..%d or a level name", args[1], len(NUMERIC_LEVELS) - 1)
        return Status.ERROR
    log.info("Setting log level to %s", logging.getLevelName(level))
    set_level(level)
    return Status.SUCCESS


def _log_stdout(cmd: Command, context: Any, argc: int, args: list[str]) -> int:  # noqa: ANN401
    if argc < 2:
        log.error("Expected a boolean flag")
        return Status.ERROR
    enabled = coerce_to_bool(args[1])
    log.info("Setting log stdout to %s", "true" if enabled else "false")
    set_stdout(enabled)
    return Status.SUCCESS


def _log_file(cmd: Command, context: Any, argc: int, args: list[str]) -> int:  # noqa: ANN401
    if argc < 2:
        log.error("Expected a file path argument")
        return Status.ERROR
    log.info("Setting log file path to %s", args[1])
    try:
        set_file(args[1])
    except OSError as e:
        log.error("Could not open log file %s: %s", args[1], e)
        return Status.FAILED
    return Status.SUCCESS


def run_script(interp: Interpreter, path: str) -> int:
    """Dispatch every line of the script at `path`.

    Bytes that are not valid UTF-8 are replaced, so the rest of the line
    and of the script still runs.

    Returns:
        NOT_FOUND if the file cannot be opened, else the first negative
        status among the lines, SUCCESS otherwise.
        A read error ends the script early with a warning.
    """
    try:
        script = Path(path).open(encoding="utf-8", errors="replace")  # noqa: SIM115
    except OSError as e:
        log.error("Could not open %s for reading: %s", path, e)
        return Status.NOT_FOUND

    status: int = Status.SUCCESS
    with script:
        try:
            for line in script:
                result = interp.dispatch(line)
                log.info("Result of dispatch(%s) is %d", line.rstrip("\n"), result)
                if result < 0 and status == Status.SUCCESS:
                    status = result
        except OSError as e:
            log.warning("Reading %s failed: %s", path, e)
    return status


def _source(cmd: Command, interp: Interpreter, argc: int, args: list[str]) -> int:
    if argc < 2:
        log.error("Expected a file path argument")
        return Status.ERROR
    return run_script(interp, args[1])


def _quit(cmd: Command, interp: Interpreter, argc: int, args: list[str]) -> int:
    interp.quit()
    return Status.SUCCESS


# (keyword, arghints, description, handler), in registration order
BUILTIN_COMMANDS: list[tuple[str, str, str, Handler]] = [
    ("help", "", "show a list of commands with hints and description", _help),
    ("alias", " <alias-keyword> <original-keyword>", "alias one command keyword to another", _alias),
    ("unalias", " <alias-keyword>", "unregister a command alias", _unalias),
    ("log", " <logcmd> <...>", "change logger options", _log),
    ("source", " <path>", "load and run a command script", _source),
    ("quit", "", "exit the command handling loop", _quit),
]

LOG_COMMANDS: list[tuple[str, str, str, Handler]] = [
    ("level", " <0..5>", "change the log message level (0=VERBOSE, 5=CRITICAL)", _log_level),
    ("stdout", " <true/false>", "enable or disable logging to the screen", _log_stdout),
    ("file", " <path>", "change the log file path", _log_file),
]


def register_builtin_commands(interp: Interpreter) -> bool:
    """Register the built-in commands at the top level of `interp`.

    Returns:
        False if any command could not be registered
    """
    scope = interp.commands()
    success = True
    for keyword, arghints, description, handler in BUILTIN_COMMANDS:
        cmd = scope.create(handler, interp, keyword, arghints, description)
        success &= scope.register(cmd)
        if keyword == "log":
            for sub_keyword, sub_arghints, sub_description, sub_handler in LOG_COMMANDS:
                success &= cmd.register(cmd.create(sub_handler, None, sub_keyword, sub_arghints, sub_description))
    return success
