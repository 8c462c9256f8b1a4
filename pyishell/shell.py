"""The interactive shell: reads input, dispatches commands, handles Ctrl-C and EOF."""

from __future__ import annotations

import os
import shlex
import sys
import threading
from pathlib import Path
from typing import IO, Any, Callable, Optional, Sequence

from pyishell.actions import ShellActions
from pyishell.command import Command
from pyishell.completer import Completer
from pyishell.context import Context, ContextValues
from pyishell.progress import ProgressBar
from pyishell.reader import DEFAULT_PROMPT, LineReader

ContextFunc = Callable[[Context], None]
InterruptFunc = Callable[[Context, int, str], None]


class ShellError(Exception):
    """Base class of errors reported by the shell."""


class NoHandlerError(ShellError):
    """Input matched no command and no fallback handler is set."""

    def __init__(self, message: str = "incorrect input, try 'help'") -> None:
        super().__init__(message)


class NoInterruptHandlerError(ShellError):
    """Ctrl-C was pressed and no interrupt handler is set."""

    def __init__(self, message: str = "no interrupt handler") -> None:
        super().__init__(message)


def _exit_func(c: Context) -> None:
    c.stop()


def _help_func(c: Context) -> None:
    c.println(c.help_text())


def _clear_func(c: Context) -> None:
    try:
        c.clear_screen()
    except OSError as exc:
        c.err(exc)


def _interrupt_func(c: Context, count: int, line: str) -> None:
    if count >= 2:
        c.println("Interrupted")
        sys.exit(1)
    c.println("Input Ctrl-c once more to exit")


class Shell(ShellActions):
    """An interactive command shell.

    It comes with ``exit``, ``help`` and ``clear`` commands and a Ctrl-C
    handler that exits on the second consecutive press.
    """

    def __init__(
        self,
        stdin: Optional[IO[str]] = None,
        stdout: Optional[IO[str]] = None,
        prompt: str = DEFAULT_PROMPT,
    ) -> None:
        writer = stdout if stdout is not None else sys.stdout
        reader = LineReader(stdin=stdin, stdout=writer, prompt=prompt)
        super().__init__(reader=reader, writer=writer)
        self.values = ContextValues()
        self.raw_args: list[str] = []
        self.interrupt_count = 0
        self.progress_bar = ProgressBar(self.writer)
        self._generic: Optional[ContextFunc] = None
        self._interrupt_handler: Optional[InterruptFunc] = None
        self._eof_handler: Optional[ContextFunc] = None
        self._auto_help = True
        self._ignore_case = False
        self._custom_completer = False
        self._closed = False
        self._thread: Optional[threading.Thread] = None

        self.add_cmd(Command(name="exit", help="exit the program", func=_exit_func))
        self.add_cmd(Command(name="help", help="display help", func=_help_func))
        self.add_cmd(Command(name="clear", help="clear the screen", func=_clear_func))
        self.interrupt(_interrupt_func)

    # running

    def start(self) -> None:
        """Start the shell in a background thread without waiting for it."""
        if self._prepare_run():
            self._thread = threading.Thread(target=self._loop, daemon=True)
            self._thread.start()

    def run(self) -> None:
        """Run the shell until it stops."""
        if self._prepare_run():
            self._loop()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the shell to stop; return whether it did within ``timeout``."""
        return self.halted.wait(timeout)

    def close(self) -> None:
        """Stop the shell for good; a closed shell cannot be run again."""
        self.stop()
        self._closed = True

    def _prepare_run(self) -> bool:
        if self._closed:
            raise ShellError("shell is closed")
        if self.active:
            return False
        if not self._custom_completer:
            self.reader.completer = Completer(
                self.root_cmd, disabled=lambda: self.multi_choice_active
            ).complete
        self.halted = threading.Event()
        self.active = True
        return True

    def _loop(self) -> None:
        while self.active:
            args, error = self._read()
            if not self.active:
                break
            if isinstance(error, EOFError):
                if self._eof_handler is None:
                    self._write("EOF\n")
                    self.stop()
                    break
                try:
                    self._handle_eof()
                except Exception as exc:
                    self._report(exc)
                    continue
            elif error is not None and not isinstance(error, KeyboardInterrupt):
                self._report(error)
                continue

            try:
                if isinstance(error, KeyboardInterrupt):
                    self._handle_interrupt(args)
                else:
                    self.interrupt_count = 0
                    if not args:
                        continue
                    self._handle_input(args)
            except Exception as exc:
                self._report(exc)

    def _report(self, error: BaseException) -> None:
        self.println("Error:", error)

    # non-interactive use

    def process(self, *args: str) -> None:
        """Handle ``args`` as one line of input, raising any error a command reports."""
        self._handle_input(list(args))

    def process_output(self, output: IO[str], *args: str) -> None:
        """Like ``process`` but write the output to ``output``."""
        original = self.writer
        self.writer = output
        try:
            self._handle_input(list(args))
        finally:
            self.writer = original

    # dispatch

    def _handle_input(self, line: list[str]) -> None:
        if self._handle_command(line):
            return
        if self._generic is None:
            raise NoHandlerError()
        ctx = self.new_context(None, line)
        self._generic(ctx)
        if ctx.error is not None:
            raise ctx.error

    def _handle_interrupt(self, line: list[str]) -> None:
        if self._interrupt_handler is None:
            raise NoInterruptHandlerError()
        ctx = self.new_context(None, line)
        self.interrupt_count += 1
        self._interrupt_handler(ctx, self.interrupt_count, " ".join(line))
        if ctx.error is not None:
            raise ctx.error

    def _handle_eof(self) -> None:
        assert self._eof_handler is not None
        ctx = self.new_context(None, None)
        self._eof_handler(ctx)
        if ctx.error is not None:
            raise ctx.error

    def _handle_command(self, words: list[str]) -> bool:
        if self._ignore_case:
            words = [word.lower() for word in words]
        cmd, args = self.root_cmd.find_cmd(words)
        if cmd is None:
            return False
        if cmd.func is None or (self._auto_help and args == ["help"]):
            self.println(cmd.help_text())
            return True
        ctx = self.new_context(cmd, args)
        cmd.func(ctx)
        if ctx.error is not None:
            raise ctx.error
        return True

    def new_context(
        self, cmd: Optional[Command], args: Optional[Sequence[str]]
    ) -> Context:
        """Build the context a handler receives, with copies of the shell's values."""
        return Context(
            args=list(args or []),
            raw_args=list(self.raw_args),
            cmd=cmd if cmd is not None else Command(),
            actions=self,
            progress_bar=self.progress_bar.copy(self.writer),
            values=ContextValues(self.values),
        )

    # reading

    def read_args(self) -> list[str]:
        """Read one command, following line continuations and heredocs.

        Raises ``EOFError`` at end of input, ``KeyboardInterrupt`` on Ctrl-C
        and ``ValueError`` when quoting is unbalanced.
        """
        args, error = self._read()
        if error is not None:
            raise error
        return args

    def _read(self) -> tuple[list[str], Optional[BaseException]]:
        self.raw_args = []
        heredoc = False
        marker = ""

        def wants_more(line: str) -> bool:
            nonlocal heredoc, marker
            if heredoc:
                return line != marker
            if "<<" in line:
                found = line.split("<<", 1)[1].strip()
                if found:
                    marker = found
                    heredoc = True
                    return True
            return line.strip().endswith("\\")

        text, error = self._read_lines(wants_more)
        self.raw_args = text.split()

        if heredoc:
            head, tail = text.split("<<", 1)
            rest = tail.split("\n", 1)
            body = rest[1] if len(rest) > 1 else ""
            if body.endswith(marker):
                body = body[: -len(marker)]
            try:
                args = shlex.split(head)
            except ValueError as exc:
                return [body], exc
            return [*args, body], error

        try:
            args = shlex.split(text.replace("\\\n", " \n"))
        except ValueError as exc:
            return [], exc
        return args, error

    # configuration

    def add_cmd(self, cmd: Command) -> None:
        """Add a top level command."""
        self.root_cmd.add_cmd(cmd)

    def delete_cmd(self, name: str) -> None:
        """Remove a top level command."""
        self.root_cmd.delete_cmd(name)

    def not_found(self, func: Optional[ContextFunc]) -> None:
        """Set the handler for input that matches no command."""
        self._generic = func

    def auto_help(self, enable: bool) -> None:
        """Choose whether ``<command> help`` shows the command's help."""
        self._auto_help = enable

    def interrupt(self, func: Optional[InterruptFunc]) -> None:
        """Set the Ctrl-C handler; it gets the count of consecutive presses."""
        self._interrupt_handler = func

    def eof(self, func: Optional[ContextFunc]) -> None:
        """Set the end-of-input handler, replacing the default of stopping."""
        self._eof_handler = func

    def ignore_case(self, ignore: bool) -> None:
        """Make command names case insensitive; commands must then be lower case."""
        self._ignore_case = ignore

    def custom_completer(self, completer: Callable[[str, int], Any]) -> None:
        """Use ``completer`` instead of completing command names."""
        self._custom_completer = True
        self.reader.completer = completer

    def set_history_path(self, path: str) -> None:
        """Set the history file; an empty path disables history."""
        self.reader.history_file = path

    def set_home_history_path(self, path: str) -> None:
        """Set the history file relative to the user's home directory."""
        try:
            home = str(Path.home())
        except (RuntimeError, KeyError):
            variable = "USERPROFILE" if sys.platform.startswith("win") else "HOME"
            home = os.environ.get(variable, "")
        self.set_history_path(os.path.join(home, path))

    def set_pager(self, pager: str, args: Sequence[str]) -> None:
        """Set the pager program and its arguments for paged output."""
        self.pager = pager
        self.pager_args = list(args)