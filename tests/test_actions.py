import io
import sys

import pytest

from pyishell.actions import ShellActions
from pyishell.command import Command
from pyishell.reader import DEFAULT_MULTI_PROMPT, DEFAULT_PROMPT, LineReader
from pyishell.terminal import CLEAR_SCREEN


def make_actions(stdin_text=""):
    out = io.StringIO()
    term = io.StringIO()
    reader = LineReader(stdin=io.StringIO(stdin_text), stdout=term)
    return ShellActions(reader=reader, writer=out), out, term


def test_println_joins_with_spaces():
    actions, out, _ = make_actions()
    actions.println("Hello", "there")
    assert out.getvalue() == "Hello there\n"


def test_print_spaces_only_between_non_strings():
    actions, out, _ = make_actions()
    actions.print("a", "b")
    actions.print(1, 2)
    assert out.getvalue() == "ab" + "1 2"


def test_printf_formats():
    actions, out, _ = make_actions()
    actions.printf("%s-%d", "x", 3)
    assert out.getvalue() == "x-3"


def test_print_replaces_prompt_for_next_read():
    actions, out, term = make_actions("bob\n")
    actions.print("Username: ")
    assert actions.read_line() == "bob"
    assert DEFAULT_PROMPT not in term.getvalue()
    assert out.getvalue() == "Username: "


def test_println_restores_prompt():
    actions, _, term = make_actions("bob\n")
    actions.print("Username: ")
    actions.println()
    assert actions.read_line() == "bob"
    assert term.getvalue() == DEFAULT_PROMPT


def test_read_line_at_end_of_input_is_empty():
    actions, _, _ = make_actions("")
    assert actions.read_line() == ""


def test_read_password_at_end_of_input_is_empty():
    actions, _, _ = make_actions("")
    assert actions.read_password() == ""


def test_read_line_with_default_is_reset():
    actions, _, _ = make_actions("cd\n")
    assert actions.read_line_with_default("ab") == "ab" + "cd"
    assert actions.reader.default_input == ""


def test_set_prompt_and_hide_prompt():
    actions, _, term = make_actions("one\ntwo\n")
    actions.set_prompt("$ ")
    assert actions.read_line() == "one"
    assert term.getvalue() == "$ "
    actions.show_prompt(False)
    assert actions.read_line() == "two"
    assert term.getvalue() == "$ "


def test_read_multi_lines_until_terminator():
    actions, _, term = make_actions("a\nb;\nc\n")
    assert actions.read_multi_lines(";") == "a\nb;"
    assert DEFAULT_MULTI_PROMPT in term.getvalue()
    assert actions.reader.reading_multi is False
    assert actions.read_line() == "c"


def test_set_multi_prompt_used_from_second_line():
    actions, _, term = make_actions("x\ny.\n")
    actions.set_multi_prompt("+ ")
    assert actions.read_multi_lines(".") == "x\ny."
    assert term.getvalue() == DEFAULT_PROMPT + "+ "


def test_read_multi_lines_func_stops_at_end_of_input():
    actions, _, _ = make_actions("first\nsecond\n")
    seen = []

    def keep_going(line):
        seen.append(line)
        return True

    text = actions.read_multi_lines_func(keep_going)
    assert text.split("\n")[:2] == ["first", "second"]
    assert seen[:2] == ["first", "second"]


def test_multi_choice_moves_down():
    options = ["a", "b", "c"]
    actions, out, _ = make_actions("\x0e\x0e\r")
    assert actions.multi_choice(options, "pick") == options.index("c")
    assert "pick" in out.getvalue()
    assert actions.multi_choice_active is False
    assert actions.reader.show_prompt is True


def test_multi_choice_arrow_keys():
    options = ["a", "b", "c"]
    actions, _, _ = make_actions("\x1b[B\x1b[B\x1b[A\r")
    assert actions.multi_choice(options, "pick") == options.index("b")


def test_multi_choice_up_wraps_to_last():
    options = ["a", "b", "c"]
    actions, _, _ = make_actions("\x10\r")
    assert actions.multi_choice(options, "pick") == len(options) - 1


def test_multi_choice_interrupt_cancels():
    actions, _, _ = make_actions("\x0e\x03")
    assert actions.multi_choice(["a", "b"], "pick") == -1


def test_checklist_toggles():
    options = ["a", "b", "c"]
    actions, _, _ = make_actions(" \x0e \r")
    assert actions.checklist(options, "pick") == [options.index("a"), options.index("b")]


def test_checklist_initial_selection_and_untoggle():
    actions, _, _ = make_actions(" \r")
    # cursor starts on the last initially selected option
    assert actions.checklist(["a", "b", "c"], "pick", [0, 2]) == [0]


def test_checklist_ignores_out_of_range_init():
    actions, _, _ = make_actions("\r")
    assert actions.checklist(["a", "b"], "pick", [5, 1]) == [1]


def test_checklist_interrupt_cancels():
    actions, _, _ = make_actions("\x03")
    assert actions.checklist(["a", "b"], "pick", [1]) == [-1]


def test_set_checklist_options_changes_marks():
    actions, out, _ = make_actions("\r")
    actions.set_checklist_options("[ ] ", "[X] ")
    actions.checklist(["a", "b"], "pick", [1])
    assert "[ ] a" in out.getvalue()
    assert "[X] b" in out.getvalue()


def test_set_multi_choice_prompt_changes_spacer():
    actions, out, _ = make_actions("\r")
    actions.set_multi_choice_prompt(" >>", " - ")
    actions.multi_choice(["a", "b"], "pick")
    assert " - a" in out.getvalue()
    assert " - b" in out.getvalue()


def test_cmds_and_help_text():
    root = Command()
    root.add_cmd(Command(name="greet", help="greet user"))
    root.add_cmd(Command(name="exit", help="exit the program"))
    actions = ShellActions(writer=io.StringIO(), root_cmd=root)
    assert [cmd.name for cmd in actions.cmds()] == ["exit", "greet"]
    assert actions.help_text() == root.help_text()
    assert "greet user" in actions.help_text()


def test_clear_screen_writes_sequence():
    actions, out, _ = make_actions()
    actions.clear_screen()
    assert out.getvalue() == CLEAR_SCREEN


def test_stop_deactivates_once():
    actions, _, _ = make_actions()
    actions.active = True
    actions.stop()
    assert actions.active is False
    assert actions.halted.is_set()
    actions.halted.clear()
    actions.stop()
    assert not actions.halted.is_set()


ECHO = "import sys; sys.stdout.write(sys.stdin.read())"


def test_show_paged_text_through_pager():
    actions, out, _ = make_actions()
    actions.pager = sys.executable
    actions.pager_args = ["-c", ECHO]
    actions.show_paged("line1\nline2\n")
    assert out.getvalue().splitlines() == ["line1", "line2"]


def test_show_paged_stream_through_pager():
    actions, out, _ = make_actions()
    actions.pager = sys.executable
    actions.pager_args = ["-c", ECHO]
    actions.show_paged(io.StringIO("from a stream\n"))
    assert out.getvalue().splitlines() == ["from a stream"]


def test_show_paged_missing_pager():
    actions, _, _ = make_actions()
    actions.pager = "pyishell-no-such-pager"
    with pytest.raises(FileNotFoundError):
        actions.show_paged("text")