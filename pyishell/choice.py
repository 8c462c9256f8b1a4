"""Multiple choice and checklist menus."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterable, Optional

HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
CURSOR_HOME = "\033[0;0H"
CLEAR_DOWN = "\033[0J"

_HIGHLIGHT = "\033[36;1m"
_RESET = "\033[0m"


@dataclass
class ChoiceStyle:
    """The marks drawn beside menu options."""

    symbol: str = " ❯"
    windows_symbol: str = " >"
    spacer: str = " "
    open_mark: str = "⬡ "
    selected_mark: str = "⬢ "
    color: bool = True

    @property
    def pointer(self) -> str:
        """The symbol pointing at the current option on this platform."""
        return self.windows_symbol if sys.platform.startswith("win") else self.symbol


def init_selected(init: Optional[Iterable[int]], maximum: int) -> list[int]:
    """Return the distinct initial selections below ``maximum``, in first-seen order."""
    return list(dict.fromkeys(i for i in (init or ()) if i < maximum))


def toggle(selected: list[int], cur: int) -> list[int]:
    """Return ``selected`` with ``cur`` removed if present, else appended."""
    if cur in selected:
        result = list(selected)
        result.remove(cur)
        return result
    return [*selected, cur]


def build_options_strings(
    options: list[str],
    selected: Optional[list[int]],
    index: int,
    style: Optional[ChoiceStyle] = None,
) -> list[str]:
    """Render each option with its mark, highlighting the one at ``index``.

    ``selected`` is ``None`` for a single choice menu.
    """
    style = style if style is not None else ChoiceStyle()
    pointer = style.pointer
    lines = []
    for i, option in enumerate(options):
        if selected is None:
            mark = style.spacer
        elif i in selected:
            mark = style.selected_mark
        else:
            mark = style.open_mark
        if i == index:
            text = pointer + mark + option
            lines.append(f"{_HIGHLIGHT}{text}{_RESET}" if style.color else text)
        else:
            lines.append(" " * len(pointer) + mark + option)
    return lines


class ChoiceMenu:
    """State of a menu the user moves through with up, down and space."""

    def __init__(
        self,
        options: list[str],
        text: str = "",
        init: Optional[Iterable[int]] = None,
        multi: bool = False,
        max_rows: int = 24,
        style: Optional[ChoiceStyle] = None,
    ) -> None:
        self.options = list(options)
        self.text = text
        self.multi = multi
        self.max_rows = max_rows
        self.style = style if style is not None else ChoiceStyle()
        self.selected: Optional[list[int]] = (
            init_selected(init, len(self.options)) if multi else None
        )
        self.cur = self.selected[-1] if self.selected else 0
        self.offset = 0
        self.cancelled = False

    def next(self) -> None:
        """Move down, wrapping to the first option."""
        self.cur += 1
        if self.cur >= self.max_rows + self.offset - 1:
            self.offset += 1
        if self.cur >= len(self.options):
            self.offset = 0
            self.cur = 0

    def previous(self) -> None:
        """Move up, wrapping to the last option."""
        self.cur -= 1
        if self.cur < self.offset:
            self.offset -= 1
        if self.cur < 0:
            if len(self.options) > self.max_rows - 1:
                self.offset = len(self.options) - self.max_rows + 1
            else:
                self.offset = 0
            self.cur = len(self.options) - 1

    def toggle_current(self) -> None:
        """Select or deselect the current option in a checklist."""
        if self.selected is not None:
            self.selected = toggle(self.selected, self.cur)

    def render(self) -> str:
        """Return the text that redraws the menu from the top of the screen."""
        lines = build_options_strings(self.options, self.selected, self.cur, self.style)
        if len(lines) > self.max_rows - 1:
            lines = lines[self.offset:self.max_rows + self.offset - 1]
        return f"{CURSOR_HOME}{CLEAR_DOWN}{self.text}\n" + "\n".join(lines)

    def result(self) -> list[int]:
        """Return the chosen indices, or ``[-1]`` when cancelled."""
        if self.cancelled:
            return [-1]
        if self.selected is not None:
            return list(self.selected)
        return [self.cur]