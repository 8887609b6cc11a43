"""Tests for the help renderer."""

from cmdnest.command import Command
from cmdnest.constants import HELP_GUTTER
from cmdnest.help import HELP_HEADER, render_help


def test_empty_tree():
    assert render_help(Command.create(None, None, "")) == HELP_HEADER


def test_alignment():
    root = Command.create(None, None, "")
    root.register(Command.create(None, None, "x", " <n>", "short"))
    root.register(Command.create(None, None, "longname", "", "a longer description"))
    rows = render_help(root).splitlines()
    assert rows[0] == "commands:"
    column = len("longname") + HELP_GUTTER
    assert rows[1].index("short") == column
    assert rows[2].index("a longer description") == column


def test_nested_path_and_indent():
    root = Command.create(None, None, "")
    horse = Command.create(None, None, "horse", " <nosir>", "i don't like it")
    root.register(horse)
    hockey = Command.create(None, None, "hockey", " <walrus>", "rubber walrus protectors")
    horse.register(hockey)
    hockey.register(Command.create(None, None, "deep", "", "deepest"))
    rows = render_help(root, header="").splitlines()
    assert rows[0].startswith("horse <nosir>")
    assert rows[1].startswith("    horse hockey <walrus>")
    assert rows[2].startswith("        horse hockey deep")
    assert rows[2].endswith("deepest")


def test_column_width_uses_the_whole_subtree():
    root = Command.create(None, None, "")
    top = Command.create(None, None, "a", "", "top")
    root.register(top)
    top.register(Command.create(None, None, "long-sub-command", " <arg>", "nested"))
    rows = render_help(root, header="").splitlines()
    assert rows[0].index("top") == len("long-sub-command <arg>") + HELP_GUTTER
