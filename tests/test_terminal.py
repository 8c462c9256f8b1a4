import io
import os
import subprocess
import sys

import pytest

from pyishell import terminal


UPPER = [ "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"]


def test_clear_screen_writes_escape_sequence():
    out = io.StringIO()
    terminal.clear_screen(out)
    assert out.getvalue() == terminal.CLEAR_SCREEN
    assert out.getvalue().startswith("\033[")


def test_default_pager_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    assert terminal.default_pager() == "more"


def test_default_pager_unix(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert terminal.default_pager() == "less"


def test_show_paged_text_to_string_writer():
    out = io.StringIO()
    terminal.show_paged("paged text", sys.executable, UPPER, out)
    assert out.getvalue() == "PAGED TEXT"


def test_show_paged_from_stream():
    out = io.StringIO()
    terminal.show_paged(io.StringIO("abc\ndef"), sys.executable, UPPER, out)
    assert out.getvalue().splitlines() == ["ABC", "DEF"]


def test_show_paged_to_binary_writer():
    out = io.BytesIO()
    terminal.show_paged(b"xyz", sys.executable, UPPER, out)
    assert out.getvalue() == b"XYZ"


def test_show_paged_failure_raises():
    with pytest.raises(subprocess.CalledProcessError) as info:
        terminal.show_paged("x", sys.executable, ["-c", "import sys; sys.exit(3)"],
                            io.StringIO())
    assert info.value.returncode == 3


def test_show_paged_missing_pager():
    with pytest.raises(FileNotFoundError):
        terminal.show_paged("x", "no-such-pager-for-tests", [], io.StringIO())


class _FakeStdout:
    def fileno(self):
        return 1


def test_terminal_rows(monkeypatch):
    monkeypatch.setattr(sys, "stdout", _FakeStdout())
    monkeypatch.setattr(os, "get_terminal_size", lambda fd: os.terminal_size((80, 30)))
    assert terminal.terminal_rows() == 30


def test_terminal_rows_not_a_terminal(monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    with pytest.raises(OSError):
        terminal.terminal_rows()


def test_raw_mode_on_pipe_is_not_entered():
    read_fd, write_fd = os.pipe()
    try:
        with terminal.raw_mode(read_fd) as entered:
            assert entered is False
    finally:
        os.close(read_fd)
        os.close(write_fd)


@pytest.mark.parametrize(
    "keys, expected",
    [
        ("\x1b[A", terminal.KEY_UP),
        ("\x1bOB", terminal.KEY_DOWN),
        ("\x10", terminal.KEY_UP),
        ("\x0e", terminal.KEY_DOWN),
        (" ", terminal.KEY_SPACE),
        ("\r", terminal.KEY_ENTER),
        ("\x03", terminal.KEY_INTERRUPT),
        ("", terminal.KEY_EOF),
        ("x", "x"),
        ("\x1b[C", "\x1b[C"),
    ],
)
def test_read_key(keys, expected):
    assert terminal.read_key(io.StringIO(keys)) == expected


def test_read_key_consumes_one_key_at_a_time():
    stream = io.StringIO("\x1b[Bq")
    assert [terminal.read_key(stream), terminal.read_key(stream)] == [
        terminal.KEY_DOWN, "q"]