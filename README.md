# pyishell

A library for building interactive shells: register commands and
subcommands, get tab completion of command names, read single lines,
multiple lines or passwords, present multiple-choice menus and checklists,
page long output and show progress bars. It uses only the standard library.

## Installing

    pip install pyishell

## A small shell

```python
from pyishell.command import Command
from pyishell.shell import Shell


def greet(c):
    name = " ".join(c.args) if c.args else "Stranger"
    c.println("Hello", name)


shell = Shell()
shell.add_cmd(Command(name="greet", aliases=["hello"], help="greet user", func=greet))
shell.run()
shell.close()
```

`Shell(stdin=None, stdout=None, prompt=">>> ")` reads from standard input
and writes to standard output unless given other streams. `shell.start()`
runs the loop in a background thread and `shell.wait(timeout)` waits for it
to stop.

Every shell comes with `exit`, `help` and `clear`. Typing `help` after a
command (for example `greet help`) prints that command's help, as does
running a command that has no function; turn the first off with
`shell.auto_help(False)`. `shell.ignore_case(True)` makes command names
case insensitive (register them in lower case).

Input that matches no command goes to the handler set with
`shell.not_found(func)`; without one, the shell prints
`Error: incorrect input, try 'help'`. Ctrl-C calls the handler set with
`shell.interrupt(func)`, which receives the context, the number of
consecutive presses and the line; the default asks for a second Ctrl-C and
then exits. End of input stops the shell unless a handler is set with
`shell.eof(func)`.

## Commands

`pyishell.command.Command` holds `name`, `aliases`, `func`, `help`,
`long_help`, `completer` and `completer_with_prefix`. Subcommands are added
with `add_cmd`, removed with `delete_cmd` and listed, sorted by name, with
`subcommands()`. `help_text()` gives the help and a table of subcommands;
`find_cmd(words)` walks the words down the tree and returns the deepest
command found and the remaining words.

Tab completes subcommand names by default. A command's `completer(args)`
or `completer_with_prefix(prefix, args)` replaces that with its own list.
`shell.custom_completer(func)` replaces completion altogether, with a
function taking the line and cursor position and returning the completion
suffixes and the length of the word they complete.

## Inside a command

The context passed to a command function offers:

- `c.args` – the arguments after the command name; `c.raw_args` – the input split on whitespace
- `c.cmd` – the running command
- `c.read_line()`, `c.read_line_with_default(text)`, `c.read_password()`
- `c.read_multi_lines(";")` – read until a line ends with the terminator;
  `c.read_multi_lines_func(func)` – read until `func(line)` returns false
- `c.println(...)`, `c.print(...)`, `c.printf(fmt, ...)` (`%` formatting)
- `c.multi_choice(options, text)` – returns the chosen index, or -1 on Ctrl-C
- `c.checklist(options, text, init)` – returns the ticked indices, or `[-1]` on Ctrl-C
- `c.show_paged(text)` – show text or a stream's contents through the pager
  (`less`, or `more` on Windows; change it with `shell.set_pager(pager, args)`)
- `c.set_prompt(text)`, `c.set_multi_prompt(text)`, `c.show_prompt(flag)`
- `c.set_multi_choice_prompt(pointer, spacer)`, `c.set_checklist_options(open_mark, selected_mark)`
- `c.progress_bar` – a `ProgressBar` with `start()`, `progress(percent)`, `stop()`
  and the settings `prefix`, `suffix`, `final`, `interval`, `indeterminate`, `display`
- `c.values` – a copy of `shell.values`
- `c.err(error)` – report an error to the shell
- `c.stop()` – stop the shell

In menus, the arrow keys or Ctrl-P/Ctrl-N move, space ticks a checklist
option and Enter confirms.

Lines ending in a backslash continue on the next line, and `cmd << END`
reads a heredoc up to a line reading `END`, passed as the last argument.
`shell.read_args()` reads one such command and returns its words.

## Progress bars

`pyishell.progress` has `ProgressBar` and three displays:
`SimpleProgressDisplay` (the default bracketed bar), `CharSetDisplay(frames)`
and `FuncDisplay(func)`, where `func(percent)` is called with -1 for the
indeterminate frames.

## Non-interactive use

```python
shell.process("greet", "World")
```

runs a single command without reading input and raises any error it
reports; `shell.process_output(buf, "greet", "World")` does the same while
writing to `buf`.

## History

`shell.set_history_path(path)` or `shell.set_home_history_path(name)` keeps
the input history in a file.

## Limitations

Tab completion, history files and editable default input need the standard
`readline` module and an interactive terminal on standard input; without
them lines are read plainly and the default input is put before what is
typed. An open menu does not redraw itself when the terminal is resized.

## Example shell

A demonstration shell with login, greeting, default input, multi-line
input, choices, checklists, progress bars, custom completion, colours and
paged output:

    pyishell-example

Given `exit` as its first argument, it runs the rest as one command and
exits, for example `pyishell-example exit greet World`.