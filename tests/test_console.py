"""Tests for the interactive line editor."""

from unittest.mock import Mock

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory, InMemoryHistory

from cmdnest.console import CommandCompleter, Console, HintProcessor


def completions(interp, text):
    completer = CommandCompleter(interp)
    return list(completer.get_completions(Document(text), CompleteEvent(completion_requested=True)))


class TestCompleter:
    """Keyword completion in the prompt."""

    def test_top_level(self, interp):
        result = completions(interp, "lo")
        assert [c.text for c in result] == ["log "]
        assert result[0].start_position == -2

    def test_nested(self, interp):
        result = completions(interp, "log ")
        assert [c.text for c in result] == ["level ", "stdout ", "file "]
        assert all(c.start_position == 0 for c in result)

    def test_replaces_up_to_the_cursor(self, interp):
        result = completions(interp, "log  st")
        assert [c.text for c in result] == ["stdout "]
        assert result[0].start_position == -2

    def test_nothing_to_complete(self, interp):
        assert completions(interp, "") == []
        assert completions(interp, "quit ") == []


class TestHints:
    """Argument hints after the input."""

    def test_fragments(self, interp):
        processor = HintProcessor(interp)
        assert processor.hint_fragments("source") == [("class:hint", " <path>")]
        assert processor.hint_fragments("alias x ") == [("class:hint", "<original-keyword>")]
        assert processor.hint_fragments("quit") == []

    def test_transformation_appends_to_last_line(self, interp):
        processor = HintProcessor(interp)
        transformation_input = Mock(document=Document("source"), fragments=[("", "source")], lineno=0)
        result = processor.apply_transformation(transformation_input)
        assert result.fragments == [("", "source"), ("class:hint", " <path>")]


class TestConsole:
    """Reading lines."""

    def test_get_line(self, interp):
        session = Mock()
        session.prompt.side_effect = ["help", KeyboardInterrupt, EOFError]
        console = Console(interp, session=session)
        assert console.get_line("> ") == "help"
        assert console.get_line("> ") == ""
        assert console.get_line("> ") is None
        session.prompt.assert_called_with("> ")

    def test_loop(self, interp, output):
        session = Mock()
        session.prompt.side_effect = ["help", "quit", "help"]
        interp.loop(Console(interp, session=session))
        assert output.getvalue().count("commands:") == 1
        assert interp.stopped

    def test_history(self, interp, tmp_path):
        console = Console(interp, session=Mock())
        assert isinstance(console._open_history(""), InMemoryHistory)
        history = console._open_history(str(tmp_path / "state" / "history"))
        assert isinstance(history, FileHistory)
        assert (tmp_path / "state").is_dir()
