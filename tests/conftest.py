" generic fixtures "
import logging
from io import StringIO

import pytest

from cmdnest.builtin_commands import register_builtin_commands
from cmdnest.command import Command
from cmdnest.interpreter import Interpreter


def pytest_configure():
    "Runs once before all"
    from cmdnest.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A plain logger for the configuration objects"
    return logging.getLogger("cmdnest.tests")


@pytest.fixture
def output():
    "Captures what commands write"
    return StringIO()


@pytest.fixture
def interp(output):
    "Interpreter with the built-in commands"
    interpreter = Interpreter(output=output)
    assert register_builtin_commands(interpreter)
    return interpreter


class Recorder:
    "Handler recording its calls"

    def __init__(self, status=0):
        self.status = status
        self.calls = []

    def __call__(self, cmd, context, argc, args):
        self.calls.append((cmd.keyword, context, argc, list(args)))
        return self.status


@pytest.fixture
def recorder():
    return Recorder()


def make_tree(*keywords, handler=None):
    "Root command with one sub-command per keyword, in order"
    root = Command.create(None, None, "")
    for keyword in keywords:
        assert root.register(Command.create(handler, None, keyword))
    return root


@pytest.fixture(autouse=True)
def restore_log_level():
    "Undo level changes made by `log level`"
    from cmdnest.logging_setup import LogObjects

    level = LogObjects.level
    yield
    LogObjects.level = level
    for logger in LogObjects.loggers:
        logger.setLevel(logging.DEBUG if level is None else level)
