"""Terminal helpers: clearing the screen, paging, screen size and raw keys."""

from __future__ import annotations

import contextlib
import io
import os
import subprocess
import sys
from typing import IO, Iterator, Optional, Sequence, Union

CLEAR_SCREEN = "\033[H\033[2J"

KEY_UP = "up"
KEY_DOWN = "down"
KEY_SPACE = "space"
KEY_ENTER = "enter"
KEY_INTERRUPT = "interrupt"
KEY_EOF = "eof"

_CONTROL_KEYS = {
    "\x10": KEY_UP,
    "\x0e": KEY_DOWN,
    " ": KEY_SPACE,
    "\r": KEY_ENTER,
    "\n": KEY_ENTER,
    "\x03": KEY_INTERRUPT,
}
_ARROWS = {"A": KEY_UP, "B": KEY_DOWN}


def _flush(stream: IO) -> None:
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()


def _fileno(stream: IO) -> Optional[int]:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def clear_screen(writer: IO[str]) -> None:
    """Clear the screen that ``writer`` draws on."""
    writer.write(CLEAR_SCREEN)
    _flush(writer)


def default_pager() -> str:
    """Return the pager used when none is configured."""
    return "more" if sys.platform.startswith("win") else "less"


def show_paged(
    source: Union[str, bytes, IO],
    pager: Optional[str] = None,
    pager_args: Sequence[str] = (),
    writer: Optional[IO] = None,
) -> None:
    """Feed ``source`` through a pager whose output goes to ``writer``.

    Raises ``FileNotFoundError`` if the pager is missing and
    ``subprocess.CalledProcessError`` if it fails.
    """
    content = source if isinstance(source, (str, bytes)) else source.read()
    data = content.encode() if isinstance(content, str) else content
    command = [pager or default_pager(), *pager_args]
    target = writer if writer is not None else sys.stdout
    fd = _fileno(target)
    if fd is not None:
        _flush(target)
        subprocess.run(command, input=data, stdout=fd, stderr=fd, check=True)
        return
    completed = subprocess.run(
        command, input=data, stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
        check=False,
    )
    if isinstance(target, (io.RawIOBase, io.BufferedIOBase)):
        target.write(completed.stdout)
    else:
        target.write(completed.stdout.decode(errors="replace"))
    _flush(target)
    completed.check_returncode()


def terminal_rows() -> int:
    """Return the number of rows of the terminal on standard output.

    Raises ``OSError`` when standard output is not a terminal.
    """
    try:
        fd = sys.stdout.fileno()
        return os.get_terminal_size(fd).lines
    except (AttributeError, ValueError) as exc:
        raise OSError(str(exc)) from exc


@contextlib.contextmanager
def raw_mode(fd: int) -> Iterator[bool]:
    """Put the terminal on ``fd`` in raw mode for the block.

    Yields whether raw mode was entered; it is not for non-terminals or
    where the platform has no terminal control.
    """
    try:
        import termios
        import tty
    except ImportError:
        yield False
        return
    if not os.isatty(fd):
        yield False
        return
    saved = termios.tcgetattr(fd)
    tty.setraw(fd)
    try:
        yield True
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def read_key(stream: IO[str]) -> str:
    """Read one key press and name it.

    Arrow keys and Ctrl-P/Ctrl-N give ``KEY_UP``/``KEY_DOWN``; other
    characters come back unchanged.
    """
    char = stream.read(1)
    if not char:
        return KEY_EOF
    if char != "\x1b":
        return _CONTROL_KEYS.get(char, char)
    second = stream.read(1)
    if second not in ("[", "O"):
        return char + second
    third = stream.read(1)
    return _ARROWS.get(third, char + second + third)