"""Line input for the shell: prompts, default text, history and passwords."""

from __future__ import annotations

import getpass
import sys
import threading
from typing import Any, Callable, Optional, TextIO

DEFAULT_PROMPT = ">>> "
DEFAULT_MULTI_PROMPT = "... "

CompleteFunc = Callable[[str, int], "tuple[list[str], int]"]


def _readline_module() -> Any:
    try:
        import readline
    except ImportError:
        return None
    return readline


def _chomp(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class LineReader:
    """Reads lines from the user, showing the proper prompt.

    ``completer`` is a callable taking the line and cursor position and
    returning the completion suffixes and the length of the word they
    complete. It is used when reading from an interactive terminal.
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        prompt: str = DEFAULT_PROMPT,
        multi_prompt: str = DEFAULT_MULTI_PROMPT,
    ) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.prompt = prompt
        self.multi_prompt = multi_prompt
        self.show_prompt = True
        self.reading_multi = False
        self.default_input = ""
        self.completer: Optional[CompleteFunc] = None
        self.history_file = ""
        self._printed = ""
        self._history_loaded: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def interactive(self) -> bool:
        """Tell whether input comes from the process's own terminal."""
        if self.stdin is not sys.stdin:
            return False
        try:
            return bool(self.stdin.isatty())
        except (AttributeError, ValueError):
            return False

    def prompt_text(self) -> str:
        """Return the prompt for the next line, or an empty one when hidden."""
        if not self.show_prompt:
            return ""
        return self.multi_prompt if self.reading_multi else self.prompt

    def note_output(self, text: str) -> None:
        """Remember text printed without a newline; its last line acts as the prompt."""
        self._printed = text

    def clear_output(self) -> None:
        """Forget previously noted output."""
        self._printed = ""

    def read_line(self) -> str:
        """Read one line without its line ending.

        Raises ``EOFError`` at end of input; ``KeyboardInterrupt`` passes through.
        """
        with self._lock:
            prompt = self.prompt_text()
            if self._printed:
                last = self._printed.split("\n")[-1]
                if last.strip():
                    # already on screen, it stands in for the prompt
                    prompt = ""
                self._printed = ""
            if self.interactive:
                return self._read_interactive(prompt)
            return self._read_stream(prompt)

    def read_password(self) -> str:
        """Read a line without echoing it on a terminal."""
        with self._lock:
            self._printed = ""
            if self.interactive:
                return getpass.getpass("")
            line = self.stdin.readline()
            if not line:
                raise EOFError
            return _chomp(line)

    def _read_stream(self, prompt: str) -> str:
        if prompt:
            self.stdout.write(prompt)
            flush = getattr(self.stdout, "flush", None)
            if flush is not None:
                flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return self.default_input + _chomp(line)

    def _read_interactive(self, prompt: str) -> str:
        rl = _readline_module()
        if rl is None:
            return self.default_input + input(prompt)
        self._load_history(rl)
        previous = self._install_completer(rl)
        default = self.default_input
        if default:
            rl.set_startup_hook(lambda: rl.insert_text(default))
        try:
            line = input(prompt)
        finally:
            rl.set_startup_hook(None)
            rl.set_completer(previous)
        self._save_history(rl)
        return line

    def _install_completer(self, rl: Any) -> Any:
        previous = rl.get_completer()
        completer = self.completer
        if completer is None:
            return previous
        matches: list[str] = []

        def complete(text: str, state: int) -> Optional[str]:
            if state == 0:
                line = rl.get_line_buffer()
                pos = rl.get_endidx()
                suggestions, length = completer(line, pos)
                stem = line[pos - length:pos]
                matches[:] = [stem + suffix for suffix in suggestions]
            return matches[state] if state < len(matches) else None

        rl.set_completer_delims(" \t\n")
        rl.set_completer(complete)
        rl.parse_and_bind("tab: complete")
        return previous

    def _load_history(self, rl: Any) -> None:
        if not self.history_file or self._history_loaded == self.history_file:
            return
        try:
            rl.read_history_file(self.history_file)
        except OSError:
            pass
        self._history_loaded = self.history_file

    def _save_history(self, rl: Any) -> None:
        if not self.history_file:
            return
        try:
            rl.write_history_file(self.history_file)
        except OSError:
            pass