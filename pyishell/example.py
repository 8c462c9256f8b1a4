"""A sample shell showing off commands, prompts, menus and progress bars."""

from __future__ import annotations

import sys
import time
from typing import Optional, Sequence

from pyishell.command import Command
from pyishell.context import Context
from pyishell.shell import Shell

# Pause between steps of the determinate progress bar demo, in seconds.
PROGRESS_STEP_DELAY = 0.1
# How long the indeterminate progress bar demo runs, in seconds.
INDETERMINATE_DURATION = 10.0

_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_BOLD_RED = "\033[31;1m"
_RESET = "\033[0m"

_PAGED_LINE = "%d. This is a paged text input.\nThis is another line of it.\n\n"


def _login(c: Context) -> None:
    c.show_prompt(False)
    try:
        c.println("Let's simulate login")
        c.print("Username: ")
        username = c.read_line()
        c.print("Password: ")
        password = c.read_password()
        c.println("Your inputs were", username, "and", password + ".")
    finally:
        c.show_prompt(True)


def _greet(c: Context) -> None:
    name = " ".join(c.args) if c.args else "Stranger"
    c.println("Hello", name)


def _default(c: Context) -> None:
    c.show_prompt(False)
    try:
        default_input = "default input, you can edit this"
        if c.args:
            default_input = " ".join(c.args)
        c.print("input: ")
        read = c.read_line_with_default(default_input)
        if read == default_input:
            c.println("you left the default input intact")
        else:
            c.printf("you modified input to '%s'", read)
            c.println()
    finally:
        c.show_prompt(True)


def _multi(c: Context) -> None:
    c.println("Input multiple lines and end with semicolon ';'.")
    lines = c.read_multi_lines(";")
    c.println("Done reading. You wrote:")
    c.println(lines)


def _choice(c: Context) -> None:
    choice = c.multi_choice(
        ["Pythonians", "Python programmers", "Pythonistas", "Pythoneers"],
        "What are Python programmers called ?",
    )
    if choice == 2:
        c.println("You got it!")
    else:
        c.println("Sorry, you're wrong.")


def _checklist(c: Context) -> None:
    languages = ["Python", "Ruby", "Haskell", "Rust"]
    choices = c.checklist(
        languages, "What are your favourite programming languages ?", None
    )
    chosen = [languages[index] for index in choices if index >= 0]
    c.println("Your choices are", ", ".join(chosen))


def _determinate(c: Context) -> None:
    bar = c.progress_bar
    bar.start()
    for percent in range(101):
        bar.suffix = f" {percent}%"
        bar.progress(percent)
        time.sleep(PROGRESS_STEP_DELAY)
    bar.stop()


def _indeterminate(c: Context) -> None:
    bar = c.progress_bar
    bar.indeterminate = True
    bar.start()
    time.sleep(INDETERMINATE_DURATION)
    bar.stop()


def _paged(c: Context) -> None:
    lines = "".join(_PAGED_LINE % number for number in range(1, 101))
    c.show_paged(lines)


def _color(c: Context) -> None:
    c.print(f"{_CYAN}cyan\n{_RESET}")
    c.println(f"{_YELLOW}yellow{_RESET}")
    c.printf("%s\n", f"{_BOLD_RED}bold red{_RESET}")


def _suggest_command() -> Command:
    words: list[str] = []

    def add(c: Context) -> None:
        if not c.args:
            c.err(ValueError("missing word(s)"))
            return
        words.extend(c.args)

    def clear(c: Context) -> None:
        words.clear()

    auto_cmd = Command(
        name="suggest",
        help="try auto complete",
        long_help=(
            "Try dynamic autocomplete by adding and removing words.\n"
            'Then view the autocomplete by tabbing after "words" subcommand.\n'
            "\n"
            "This is an example of a long help."
        ),
    )
    auto_cmd.add_cmd(Command(name="add", help="add words to autocomplete", func=add))
    auto_cmd.add_cmd(
        Command(name="clear", help="clear words in autocomplete", func=clear)
    )
    auto_cmd.add_cmd(
        Command(
            name="words",
            help="add words with 'suggest add', then tab after typing 'suggest words '",
            completer=lambda args: list(words),
        )
    )
    return auto_cmd


def build_shell() -> Shell:
    """Return a shell holding the sample commands."""
    shell = Shell()
    shell.add_cmd(Command(name="login", help="simulate a login", func=_login))
    shell.add_cmd(
        Command(
            name="greet", aliases=["hello", "welcome"], help="greet user", func=_greet
        )
    )
    shell.add_cmd(
        Command(name="default", help="readline with default input", func=_default)
    )
    shell.add_cmd(Command(name="multi", help="input in multiple lines", func=_multi))
    shell.add_cmd(Command(name="choice", help="multiple choice prompt", func=_choice))
    shell.add_cmd(Command(name="checklist", help="checklist prompt", func=_checklist))
    shell.add_cmd(
        Command(name="det", help="determinate progress bar", func=_determinate)
    )
    shell.add_cmd(
        Command(name="ind", help="indeterminate progress bar", func=_indeterminate)
    )
    shell.add_cmd(_suggest_command())
    shell.add_cmd(Command(name="paged", help="show paged text", func=_paged))
    shell.add_cmd(Command(name="color", help="color print", func=_color))
    return shell


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the sample shell; with ``exit`` first, run the rest as one command."""
    args = list(sys.argv[1:] if argv is None else argv)
    shell = build_shell()
    shell.println("Sample Interactive Shell")
    if args and args[0] == "exit":
        try:
            shell.process(*args[1:])
        except Exception as exc:
            shell.println("Error:", exc)
            return 1
        return 0
    shell.run()
    shell.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())