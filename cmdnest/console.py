"""Interactive line editor for an interpreter.

Built on prompt_toolkit: tab completion of command keywords, argument hints
shown after the typed text, and persistent history.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from prompt_toolkit.layout.processors import Processor, Transformation, TransformationInput
from prompt_toolkit.styles import Style

from .styles import HINT_STYLE
from .logging_setup import get_logger
from .tokens import token_spans

if TYPE_CHECKING:
    from prompt_toolkit.formatted_text import StyleAndTextTuples

    from .interpreter import Interpreter

__all__ = ["CONSOLE_STYLE", "CommandCompleter", "Console", "HintProcessor"]

CONSOLE_STYLE = Style.from_dict({"hint": HINT_STYLE})


class CommandCompleter(Completer):
    """Completes the word before the cursor with the keywords of the command tree."""

    def __init__(self, interp: Interpreter) -> None:
        self.interp = interp

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        line = document.text_before_cursor
        result = self.interp.complete(line)
        if not result:
            return

        # replace from the start of the completed word up to the cursor
        spans = token_spans(line, self.interp.delimiters)
        nest = result.resolution.nest
        start = spans[nest][0] if nest < len(spans) else len(line)
        for keyword in result.matches:
            yield Completion(keyword + self.interp.delimiters[0], start_position=start - len(line), display=keyword)


class HintProcessor(Processor):
    """Shows the argument hints of the typed command after the input."""

    def __init__(self, interp: Interpreter) -> None:
        self.interp = interp

    def hint_fragments(self, text: str) -> StyleAndTextTuples:
        """Return the hint to append to `text`, as formatted text."""
        hint = self.interp.hint(text)
        return [("class:hint", hint)] if hint else []

    def apply_transformation(self, transformation_input: TransformationInput) -> Transformation:
        document = transformation_input.document
        fragments = transformation_input.fragments
        if transformation_input.lineno != document.line_count - 1:
            return Transformation(fragments)
        return Transformation(fragments + self.hint_fragments(document.text))


class Console:
    """Reads command lines from the terminal, see `LineReader`."""

    def __init__(
        self,
        interp: Interpreter,
        history_file: str = "",
        session: PromptSession | None = None,
    ) -> None:
        """Initialize the console.

        Args:
            interp: The interpreter providing completions and hints
            history_file: History file path, history is kept in memory if empty
            session: Prompt session to use instead of a new one
        """
        self.log = get_logger("cmdnest.console")
        self.interp = interp
        if session is None:
            session = PromptSession(
                history=self._open_history(history_file),
                completer=CommandCompleter(interp),
                complete_while_typing=False,
                input_processors=[HintProcessor(interp)],
                style=CONSOLE_STYLE,
            )
        self.session = session

    def _open_history(self, history_file: str) -> History:
        if not history_file:
            return InMemoryHistory()
        path = Path(history_file).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.log.warning("Cannot create %s, history will not be saved: %s", path.parent, e)
            return InMemoryHistory()
        return FileHistory(str(path))

    def get_line(self, prompt: str) -> str | None:
        """Read one line.

        Returns:
            The line, an empty string on Ctrl-C, None on Ctrl-D
        """
        try:
            return self.session.prompt(prompt)
        except KeyboardInterrupt:
            return ""
        except EOFError:
            return None
