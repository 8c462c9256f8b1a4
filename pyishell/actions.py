"""Operations available to the shell and to running commands."""

from __future__ import annotations

import contextlib
import sys
import threading
from typing import IO, Callable, Iterable, Iterator, Optional, Union

from pyishell.choice import (
    CURSOR_HOME,
    HIDE_CURSOR,
    SHOW_CURSOR,
    ChoiceMenu,
    ChoiceStyle,
)
from pyishell.command import Command
from pyishell.reader import LineReader
from pyishell.terminal import (
    KEY_DOWN,
    KEY_ENTER,
    KEY_EOF,
    KEY_INTERRUPT,
    KEY_SPACE,
    KEY_UP,
    clear_screen,
    default_pager,
    read_key,
    show_paged,
    terminal_rows,
)

# Rows assumed for menus when input does not come from a terminal.
FALLBACK_ROWS = 24


def _sprint(args: tuple) -> str:
    """Join values, with a space only between two that are not strings."""
    parts: list[str] = []
    previous_is_str = True
    for index, value in enumerate(args):
        is_str = isinstance(value, str)
        if index > 0 and not is_str and not previous_is_str:
            parts.append(" ")
        parts.append(str(value))
        previous_is_str = is_str
    return "".join(parts)


class ShellActions:
    """Input, output and menu operations of a shell.

    The shell builds on this class; command contexts reach these methods
    through the shell.
    """

    def __init__(
        self,
        reader: Optional[LineReader] = None,
        writer: Optional[IO[str]] = None,
        root_cmd: Optional[Command] = None,
    ) -> None:
        self.writer: IO[str] = writer if writer is not None else sys.stdout
        self.reader = reader if reader is not None else LineReader(stdout=self.writer)
        self.root_cmd = root_cmd if root_cmd is not None else Command()
        self.pager = ""
        self.pager_args: list[str] = []
        self.choice_style = ChoiceStyle()
        self.multi_choice_active = False
        self.halted = threading.Event()
        self._active = False
        self._active_lock = threading.Lock()

    @property
    def active(self) -> bool:
        """Whether the shell is reading and dispatching input."""
        with self._active_lock:
            return self._active

    @active.setter
    def active(self, value: bool) -> None:
        with self._active_lock:
            self._active = value

    # input

    def read_line(self) -> str:
        """Read a line; at end of input return an empty string."""
        try:
            return self.reader.read_line()
        except EOFError:
            return ""

    def read_line_with_default(self, default: str) -> str:
        """Read a line that starts out holding ``default``."""
        self.reader.default_input = default
        try:
            return self.read_line()
        finally:
            self.reader.default_input = ""

    def read_password(self) -> str:
        """Read a line without echoing it; at end of input return an empty string."""
        try:
            return self.reader.read_password()
        except EOFError:
            return ""

    def read_multi_lines_func(self, func: Callable[[str], bool]) -> str:
        """Read lines, passing each to ``func``, until it returns false.

        Returns the lines read, joined by newlines.
        """
        text, _ = self._read_lines(func)
        return text

    def read_multi_lines(self, terminator: str) -> str:
        """Read lines until one ends with ``terminator``, which is kept."""
        return self.read_multi_lines_func(
            lambda line: not line.strip().endswith(terminator)
        )

    def _read_lines(
        self, func: Callable[[str], bool]
    ) -> tuple[str, Optional[BaseException]]:
        """Read lines as ``read_multi_lines_func`` does, also returning what ended input early."""
        lines: list[str] = []
        error: Optional[BaseException] = None
        count = 0
        try:
            while True:
                if count == 1:
                    self.reader.reading_multi = True
                try:
                    line = self.reader.read_line()
                except (EOFError, KeyboardInterrupt) as exc:
                    line, error = "", exc
                lines.append(line)
                if not func(line) or error is not None:
                    break
                count += 1
        finally:
            if count > 0:
                self.reader.reading_multi = False
        return "\n".join(lines), error

    # output

    def println(self, *args: object) -> None:
        """Write the values separated by spaces and end the line."""
        self.reader.clear_output()
        self._write(" ".join(str(arg) for arg in args) + "\n")

    def print(self, *args: object) -> None:
        """Write the values without a trailing newline."""
        text = _sprint(args)
        self.reader.note_output(text)
        self._write(text)

    def printf(self, fmt: str, *args: object) -> None:
        """Write ``fmt`` formatted with ``%`` against ``args``."""
        text = fmt % args if args else fmt
        self.reader.note_output(text)
        self._write(text)

    def show_paged(self, source: Union[str, bytes, IO]) -> None:
        """Show text, or the contents of a stream, through the pager."""
        if not self.pager:
            self.pager = default_pager()
        show_paged(source, self.pager, self.pager_args, self.writer)

    def clear_screen(self) -> None:
        """Clear the screen."""
        clear_screen(self.writer)

    def _write(self, text: str) -> None:
        self.writer.write(text)
        flush = getattr(self.writer, "flush", None)
        if flush is not None:
            flush()

    # menus

    def multi_choice(self, options: list[str], text: str) -> int:
        """Let the user pick one option; return its index, or -1 if cancelled."""
        return self._choose(options, text, None, False)[0]

    def checklist(
        self, options: list[str], text: str, init: Optional[Iterable[int]] = None
    ) -> list[int]:
        """Let the user tick options with space; ``init`` are ticked to begin with.

        Returns the ticked indices, or ``[-1]`` if cancelled.
        """
        return self._choose(options, text, init, True)

    def _choose(
        self,
        options: list[str],
        text: str,
        init: Optional[Iterable[int]],
        multi: bool,
    ) -> list[int]:
        try:
            rows = terminal_rows()
        except OSError:
            if self.reader.interactive:
                raise
            rows = FALLBACK_ROWS
        menu = ChoiceMenu(options, text, init, multi, rows, self.choice_style)
        self.multi_choice_active = True
        self.show_prompt(False)
        try:
            self._write(HIDE_CURSOR)
            try:
                self._write(CURSOR_HOME)
                with self._key_input() as (stream, raw):
                    while True:
                        drawn = menu.render()
                        self._write(drawn.replace("\n", "\r\n") if raw else drawn)
                        key = read_key(stream)
                        if key == KEY_DOWN:
                            menu.next()
                        elif key == KEY_UP:
                            menu.previous()
                        elif key == KEY_SPACE:
                            menu.toggle_current()
                        elif key == KEY_INTERRUPT:
                            menu.cancelled = True
                            break
                        elif key in (KEY_ENTER, KEY_EOF):
                            break
                self.println()
            finally:
                self._write(SHOW_CURSOR)
        finally:
            self.show_prompt(True)
            self.multi_choice_active = False
        return menu.result()

    @contextlib.contextmanager
    def _key_input(self) -> Iterator[tuple[IO[str], bool]]:
        from pyishell.terminal import raw_mode

        stream = self.reader.stdin
        if not self.reader.interactive:
            yield stream, False
            return
        with raw_mode(stream.fileno()) as raw:
            yield stream, raw

    # settings

    def set_prompt(self, prompt: str) -> None:
        """Set the prompt shown before input."""
        self.reader.prompt = prompt

    def set_multi_prompt(self, prompt: str) -> None:
        """Set the prompt shown from the second line of multi-line input."""
        self.reader.multi_prompt = prompt

    def set_multi_choice_prompt(self, prompt: str, spacer: str) -> None:
        """Set the pointer and spacer drawn beside menu options."""
        self.choice_style.symbol = prompt
        self.choice_style.spacer = spacer

    def set_checklist_options(self, open_mark: str, selected_mark: str) -> None:
        """Set the marks drawn for unticked and ticked checklist options."""
        self.choice_style.open_mark = open_mark
        self.choice_style.selected_mark = selected_mark

    def show_prompt(self, show: bool) -> None:
        """Choose whether the prompt is shown when reading input."""
        self.reader.show_prompt = show

    # commands

    def cmds(self) -> list[Command]:
        """Return the top level commands."""
        return self.root_cmd.subcommands()

    def help_text(self) -> str:
        """Return the help of the top level commands."""
        return self.root_cmd.help_text()

    def stop(self) -> None:
        """Stop reading input; the shell stays usable and can be started again."""
        with self._active_lock:
            if not self._active:
                return
            self._active = False
        self.halted.set()