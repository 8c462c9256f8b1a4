"""Tab completion over a command tree."""

from __future__ import annotations

import shlex
from typing import Callable, Optional

from pyishell.command import Command


class Completer:
    """Suggests completions for a partially typed command line."""

    def __init__(
        self, cmd: Command, disabled: Optional[Callable[[], bool]] = None
    ) -> None:
        self.cmd = cmd
        self.disabled = disabled

    def complete(self, line: str, pos: int) -> tuple[list[str], int]:
        """Return the suffixes completing the word before ``pos`` and its length."""
        if self.disabled is not None and self.disabled():
            return [], len(line)
        try:
            words = shlex.split(line)
        except ValueError:
            words = line.split()

        prefix = ""
        if words and pos > 0 and line[pos - 1] != " ":
            prefix = words[-1]
            candidates = self.get_words(prefix, words[:-1])
        else:
            candidates = self.get_words(prefix, words)

        suggestions = [
            word[len(prefix):] for word in candidates if word.startswith(prefix)
        ]
        if len(suggestions) == 1 and prefix and suggestions[0] == "":
            suggestions = [" "]
        return suggestions, len(prefix)

    def get_words(self, prefix: str, words: list[str]) -> list[str]:
        """Return the candidate words for the command that ``words`` select."""
        cmd, args = self.cmd.find_cmd(words)
        if cmd is None:
            cmd, args = self.cmd, list(words)
        if cmd.completer_with_prefix is not None:
            return list(cmd.completer_with_prefix(prefix, args))
        if cmd.completer is not None:
            return list(cmd.completer(args))
        return [child.name for child in cmd.subcommands()]