"""cmdnest command line entry point."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

from .builtin_commands import register_builtin_commands, run_script
from .config_loader import ConfigLoader
from .console import Console
from .interpreter import Interpreter
from .logging_setup import get_logger, init_logger, parse_level, set_file, set_level
from .models import CmdNestError, ExitCode


@dataclass
class Args:
    """Parsed command line arguments."""

    config: str = ""
    debug: bool = False
    help: bool = False
    batch: bool = False
    scripts: list[str] = field(default_factory=list)
    error: str = ""


def parse_args(argv: list[str]) -> Args:
    """Parse command line arguments.

    Args:
        argv: Command line arguments (without program name)

    Returns:
        Parsed arguments, `error` is set on invalid usage
    """
    args = Args()
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--config":
            if i + 1 >= len(argv):
                args.error = "--config requires a path"
                return args
            args.config = argv[i + 1]
            i += 2
            continue
        if arg == "--debug":
            args.debug = True
        elif arg in ("--help", "-h"):
            args.help = True
        elif arg == "--batch":
            args.batch = True
        elif arg == "--":
            args.scripts.extend(argv[i + 1 :])
            break
        elif arg.startswith("-"):
            args.error = f"Unknown option {arg}"
            return args
        else:
            args.scripts.append(arg)
        i += 1
    return args


def print_help() -> None:
    """Print minimal help message."""
    print("Usage: cmdnest [OPTIONS] [SCRIPT...]")
    print()
    print("Nested command interpreter. Scripts are run in order, then the")
    print("interactive prompt starts unless --batch is given.")
    print()
    print("Options:")
    print("  --config PATH   Use this config file instead of the default one")
    print("  --debug         Enable debug logging")
    print("  --batch         Exit after running the scripts")
    print("  --help          Show this message")


def run(argv: list[str]) -> int:
    """Run cmdnest with the given arguments, returning the exit code."""
    args = parse_args(argv)
    if args.help:
        print_help()
        return ExitCode.SUCCESS
    if args.error:
        print(f"Error: {args.error}", file=sys.stderr)
        print_help()
        return ExitCode.USAGE_ERROR

    init_logger(force_debug=args.debug)
    log = get_logger()

    try:
        settings = ConfigLoader(log).load(args.config)
    except CmdNestError:
        return ExitCode.CONFIG_ERROR

    level = parse_level(settings.get_str("log_level"))
    if level is not None and not args.debug:
        set_level(level)
    log_file = settings.get_str("log_file")
    if log_file:
        try:
            set_file(log_file)
        except OSError as e:
            log.critical("Cannot open log file %s: %s", log_file, e)
            return ExitCode.CONFIG_ERROR

    interp = Interpreter(settings)
    if not register_builtin_commands(interp):
        log.warning("Some built-in commands could not be registered")

    for script in args.scripts:
        result = run_script(interp, script)
        if result < 0:
            log.error("Script %s failed with status %d", script, result)
            if args.batch:
                return ExitCode.SCRIPT_ERROR
        if interp.stopped:
            return ExitCode.SUCCESS

    if args.batch:
        return ExitCode.SUCCESS

    interp.loop(Console(interp, settings.get_str("history_file")))
    return ExitCode.SUCCESS


def main() -> None:
    """Entry point for the cmdnest command."""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
