"""Tests for command tree nodes."""

from unittest.mock import patch

from conftest import Recorder, make_tree

from cmdnest.command import Command
from cmdnest.models import CommandAttribute
from cmdnest.registry import BorrowedChildren, OwnedChildren


class TestCreate:
    """Node construction and fields."""

    def test_fields(self):
        context = object()
        cmd = Command.create(None, context, "log", " <logcmd>", "change logger options")
        assert cmd.keyword == "log"
        assert cmd.arghints == " <logcmd>"
        assert cmd.description == "change logger options"
        assert cmd.context is context
        assert cmd.attributes == CommandAttribute.NONE
        assert cmd.children is None

    def test_none_fields_become_empty(self):
        cmd = Command.create(None, None, None, None, None)
        assert cmd.keyword == ""
        assert cmd.arghints == ""
        assert cmd.description == ""

    def test_attributes_are_only_added(self):
        cmd = Command.create(None, None, "x")
        cmd.set_attributes(CommandAttribute.MUTABLE)
        cmd.set_attributes(CommandAttribute.CONSTRUCT)
        assert cmd.is_mutable
        assert cmd.is_construct
        assert not cmd.is_alias
        cmd.set_attributes(CommandAttribute.NONE)
        assert cmd.attributes == CommandAttribute.MUTABLE | CommandAttribute.CONSTRUCT


class TestRegister:
    """Registration and keyword uniqueness."""

    def test_registry_is_allocated_on_first_register(self):
        root = Command.create(None, None, "")
        assert root.register(Command.create(None, None, "a"))
        assert isinstance(root.children_ref, OwnedChildren)
        assert len(root.children) == 1

    def test_duplicate_keyword_is_rejected(self):
        root = make_tree("log")
        assert not root.register(Command.create(None, None, "log"))
        assert len(root.children) == 1

    def test_empty_keyword_is_rejected(self):
        root = Command.create(None, None, "")
        assert not root.register(Command.create(None, None, ""))
        assert not root.children

    def test_cycles_are_rejected(self):
        parent = Command.create(None, None, "parent")
        child = Command.create(None, None, "child")
        assert parent.register(child)
        assert not child.register(parent)
        assert not parent.register(parent)

    def test_destroyed_command_is_rejected(self):
        root = Command.create(None, None, "")
        cmd = Command.create(None, None, "gone")
        cmd.destroy()
        assert not root.register(cmd)

    def test_unregister(self):
        root = make_tree("a", "b")
        b = root.find_by_keyword("b")
        assert root.unregister(b)
        assert b.destroyed
        assert root.find_by_keyword("b") is None
        assert [cmd.keyword for cmd in root.children] == ["a"]

    def test_unregister_matches_by_keyword(self):
        root = make_tree("a")
        original = root.find_by_keyword("a")
        assert root.unregister(Command.create(None, None, "a"))
        assert original.destroyed

    def test_unregister_unknown(self):
        root = make_tree("a")
        assert not root.unregister(Command.create(None, None, "z"))
        assert not Command.create(None, None, "").unregister(Command.create(None, None, "z"))


class TestLookup:
    """Exact and partial keyword lookups."""

    def test_find_by_keyword(self):
        root = make_tree("log", "local")
        assert root.find_by_keyword("local").keyword == "local"
        assert root.find_by_keyword("lo") is None
        assert Command.create(None, None, "").find_by_keyword("log") is None

    def test_partial_matches_order_and_longest(self):
        root = make_tree("log", "local", "list", "quit")
        assert root.partial_matches("lo") == (["log", "local"], 5)

    def test_partial_matches_is_case_sensitive(self):
        root = make_tree("log")
        assert root.partial_matches("L") == ([], 0)

    def test_partial_matches_empty_substring_lists_everything(self):
        root = make_tree("log", "quit")
        assert root.partial_matches("") == (["log", "quit"], 4)

    def test_partial_matches_without_input_or_children(self):
        assert make_tree("log").partial_matches(None) is None
        assert Command.create(None, None, "").partial_matches("l") is None


class TestExec:
    """Handler invocation."""

    def test_exec_passes_everything(self):
        handler = Recorder(status=7)
        context = object()
        cmd = Command.create(handler, context, "greet")
        assert cmd.exec(2, ["greet", "world"]) == 7
        assert handler.calls == [("greet", context, 2, ["greet", "world"])]

    def test_exec_without_handler(self):
        assert Command.create(None, None, "group").exec(1, ["group"]) == 0


class TestLifecycle:
    """Destroy, copy and alias."""

    def test_destroy_recurses_through_owned_children(self):
        root = make_tree("a")
        a = root.find_by_keyword("a")
        registry = root.children
        root.destroy()
        assert root.destroyed
        assert a.destroyed
        assert registry.destroyed
        assert root.children is None

    def test_double_destroy_is_harmless(self):
        cmd = Command.create(None, None, "x")
        cmd.destroy()
        with patch("cmdnest.command.log") as log:
            cmd.destroy()
        assert cmd.destroyed
        log.warning.assert_called_once_with("attempt to early or double-destroy %r", cmd)

    def test_copy_is_deep_for_owned_children(self):
        root = make_tree("a", "b")
        root.set_attributes(CommandAttribute.MUTABLE)
        duplicate = root.copy()
        assert duplicate is not root
        assert duplicate.is_mutable
        assert [cmd.keyword for cmd in duplicate.children] == ["a", "b"]
        assert duplicate.children is not root.children
        assert duplicate.find_by_keyword("a") is not root.find_by_keyword("a")

    def test_copy_shares_borrowed_children(self):
        original = make_tree("a")
        alias = original.alias("again")
        assert alias.copy().children is original.children

    def test_alias_fields(self):
        handler = Recorder()
        context = object()
        original = Command.create(handler, context, "source", " <path>", "run a script")
        alias = original.alias("run")
        assert alias.keyword == "run"
        assert alias.arghints == " <path>"
        assert alias.description == "alias for source"
        assert alias.context is context
        assert alias.attributes == CommandAttribute.ALIAS | CommandAttribute.MUTABLE
        alias.exec(2, ["run", "x"])
        assert handler.calls == [("run", context, 2, ["run", "x"])]

    def test_alias_keeps_construct(self):
        original = Command.create(None, None, "routine")
        original.set_attributes(CommandAttribute.CONSTRUCT)
        assert original.alias("proc").is_construct

    def test_alias_shares_children_both_ways(self):
        original = make_tree("x")
        alias = original.alias("alt")
        assert isinstance(alias.children_ref, BorrowedChildren)
        assert alias.find_by_keyword("x") is original.find_by_keyword("x")
        assert alias.register(Command.create(None, None, "y"))
        assert original.find_by_keyword("y") is not None
        assert original.register(Command.create(None, None, "z"))
        assert alias.find_by_keyword("z") is not None

    def test_alias_of_childless_command_shares_later_children(self):
        original = Command.create(None, None, "log")
        alias = original.alias("l")
        assert original.register(Command.create(None, None, "level"))
        assert alias.find_by_keyword("level") is not None

    def test_destroying_alias_keeps_original_children(self):
        original = make_tree("X", "Y")
        alias = original.alias("a2")
        alias.destroy()
        assert original.find_by_keyword("X") is not None
        assert original.find_by_keyword("Y") is not None
        assert len(original.children) == 2
        assert not original.find_by_keyword("X").destroyed

    def test_unregistering_original_empties_alias(self):
        root = Command.create(None, None, "")
        log = Command.create(None, None, "log")
        root.register(log)
        log.register(Command.create(None, None, "level"))
        alias = log.alias("l")
        root.register(alias)
        assert root.unregister(log)
        assert root.find_by_keyword("l") is alias
        assert alias.find_by_keyword("level") is None
        assert alias.children.destroyed


class TestHelp:
    """Field measurement and help rows."""

    def test_longest_walks_the_subtree(self):
        root = Command.create(None, None, "")
        log = Command.create(None, None, "log", " <logcmd> <...>", "change logger options")
        root.register(log)
        log.register(Command.create(None, None, "level", " <0..5>", "a much longer description here"))
        widths = root.longest()
        assert widths.keyword_plus_arghints == len("log <logcmd> <...>")
        assert widths.keyword == len("level")
        assert widths.arghints == len(" <logcmd> <...>")
        assert widths.description == len("a much longer description here")

    def test_siblings_align(self):
        root = Command.create(None, None, "")
        root.register(Command.create(None, None, "x", " <n>", "short"))
        root.register(Command.create(None, None, "longname", "", "a longer description"))
        buffer = []
        root.help(buffer)
        column = len("longname") + 2
        assert buffer == [
            "x <n>".ljust(column) + "short\n",
            "longname".ljust(column) + "a longer description\n",
        ]
        assert buffer[0].index("short") == buffer[1].index("a longer") == column

    def test_nested_rows_show_the_path(self):
        root = Command.create(None, None, "")
        log = Command.create(None, None, "log", " <logcmd>", "logger")
        root.register(log)
        log.register(Command.create(None, None, "level", " <0..5>", "set level"))
        log.register(Command.create(None, None, "file", " <path>", "set file"))
        buffer = []
        root.help(buffer)
        assert buffer[0].startswith("log <logcmd>")
        assert buffer[1].startswith("    log level <0..5>")
        assert buffer[2].startswith("    log file <path>")
        assert buffer[1].index("set level") == buffer[2].index("set file")

    def test_row_without_description_has_no_trailing_space(self):
        root = make_tree("quit")
        buffer = []
        root.help(buffer)
        assert buffer == ["quit\n"]
