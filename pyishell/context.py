"""Per-invocation context handed to command functions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pyishell.command import Command


class ContextValues(dict):
    """String-keyed values shared between the shell and its commands."""

    def get(self, key: str) -> Any:  # type: ignore[override]
        """Return the value for ``key``, or None when it is absent."""
        return super().get(key)

    def set(self, key: str, value: Any) -> None:
        """Associate ``value`` with ``key``."""
        self[key] = value

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        self.pop(key, None)

    def keys(self) -> list[str]:  # type: ignore[override]
        """Return all keys."""
        return list(super().keys())


@dataclass
class Context:
    """What a command function receives when it runs.

    Attributes not found on the context are looked up on ``actions``.
    """

    args: list[str] = field(default_factory=list)
    raw_args: list[str] = field(default_factory=list)
    cmd: Command = field(default_factory=Command)
    actions: Any = None
    progress_bar: Any = None
    values: ContextValues = field(default_factory=ContextValues)
    error: Optional[BaseException] = None

    def err(self, error: BaseException) -> None:
        """Record that an error occurred while running the command."""
        self.error = error

    def __getattr__(self, name: str) -> Any:
        actions = self.__dict__.get("actions")
        if name.startswith("_") or actions is None:
            raise AttributeError(name)
        return getattr(actions, name)