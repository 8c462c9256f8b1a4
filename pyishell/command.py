"""Command tree used by the shell to dispatch input."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

CommandFunc = Callable[[Any], None]
ArgsCompleter = Callable[[list[str]], list[str]]
PrefixCompleter = Callable[[str, list[str]], list[str]]


@dataclass(eq=False)
class Command:
    """A shell command with optional subcommands.

    ``completer`` takes the command arguments and returns completion
    options; ``completer_with_prefix`` also gets the word typed so far and
    takes precedence when both are set.
    """

    name: str = ""
    aliases: list[str] = field(default_factory=list)
    func: Optional[CommandFunc] = None
    help: str = ""
    long_help: str = ""
    completer: Optional[ArgsCompleter] = None
    completer_with_prefix: Optional[PrefixCompleter] = None
    _children: dict[str, "Command"] = field(
        default_factory=dict, init=False, repr=False
    )

    def add_cmd(self, cmd: "Command") -> None:
        """Add ``cmd`` as a subcommand, replacing one of the same name."""
        self._children[cmd.name] = cmd

    def delete_cmd(self, name: str) -> None:
        """Remove the subcommand called ``name`` if there is one."""
        self._children.pop(name, None)

    def subcommands(self) -> list["Command"]:
        """Return the subcommands sorted by name."""
        return sorted(self._children.values(), key=lambda cmd: cmd.name)

    def has_subcommand(self) -> bool:
        """Tell whether there are subcommands other than a lone ``help``."""
        if len(self._children) > 1:
            return True
        return "help" not in self._children and bool(self._children)

    def help_text(self) -> str:
        """Return the help of this command and a table of its subcommands."""
        parts: list[str] = []

        def paragraph(*items: str) -> None:
            parts.append("\n")
            if items:
                parts.append(" ".join(items) + "\n")

        if self.long_help:
            paragraph(self.long_help)
        elif self.help:
            paragraph(self.help)
        elif self.name:
            paragraph(self.name, "has no help")

        if self.has_subcommand():
            paragraph("Commands:")
            children = self.subcommands()
            width = max(len(child.name) for child in children) + 2
            for child in children:
                parts.append(f"  {child.name.ljust(width)}    {child.help}\n")
            paragraph()
        return "".join(parts)

    def find_child(self, name: str) -> Optional["Command"]:
        """Return the subcommand whose name, or failing that alias, is ``name``."""
        if name in self._children:
            return self._children[name]
        return next(
            (cmd for cmd in self._children.values() if name in cmd.aliases),
            None,
        )

    def find_cmd(self, args: list[str]) -> tuple[Optional["Command"], list[str]]:
        """Walk ``args`` down the command tree.

        Returns the deepest matching command (``None`` if the first word
        matches nothing) and the arguments left after it.
        """
        found: Optional[Command] = None
        current: Command = self
        for index, arg in enumerate(args):
            child = current.find_child(arg)
            if child is None:
                return found, list(args[index:])
            found = current = child
        return found, []