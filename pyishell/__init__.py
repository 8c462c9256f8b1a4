"""Interactive command-line shells with commands, completion, prompts, menus and progress bars."""

__version__ = "2.0.0"

__all__ = [
    "actions",
    "choice",
    "command",
    "completer",
    "context",
    "example",
    "progress",
    "reader",
    "shell",
    "terminal",
]