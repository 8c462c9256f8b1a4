"""Text progress bars, determinate and indeterminate."""

from __future__ import annotations

import itertools
import threading
from typing import Callable, Iterator, Optional, Protocol, TextIO

PROGRESS_INTERVAL = 0.1

INDETERMINATE_CHARSET = [
    "[====                ]", "[ ====               ]", "[  ====              ]",
    "[   ====             ]", "[    ====            ]", "[     ====           ]",
    "[      ====          ]", "[       ====         ]", "[        ====        ]",
    "[         ====       ]", "[          ====      ]", "[           ====     ]",
    "[            ====    ]", "[             ====   ]", "[              ====  ]",
    "[               ==== ]", "[                ====]",
    "[               ==== ]", "[              ====  ]", "[             ====   ]",
    "[            ====    ]", "[           ====     ]", "[          ====      ]",
    "[         ====       ]", "[        ====        ]", "[       ====         ]",
    "[      ====          ]", "[     ====           ]", "[    ====            ]",
    "[   ====             ]", "[  ====              ]", "[ ====               ]",
]

DETERMINATE_CHARSET = [
    "[                    ]", "[>                   ]", "[=>                  ]",
    "[==>                 ]", "[===>                ]", "[====>               ]",
    "[=====>              ]", "[======>             ]", "[=======>            ]",
    "[========>           ]", "[=========>          ]", "[==========>         ]",
    "[===========>        ]", "[============>       ]", "[=============>      ]",
    "[==============>     ]", "[===============>    ]", "[================>   ]",
    "[=================>  ]", "[==================> ]", "[===================>]",
]


class ProgressDisplay(Protocol):
    """Supplies the strings a progress bar shows."""

    def determinate(self) -> list[str]:
        """Return the 101 strings for percents 0 to 100."""

    def indeterminate(self) -> list[str]:
        """Return the frames cycled through at each interval."""


class CharSetDisplay:
    """A display built from a list of frames."""

    def __init__(self, chars: list[str]) -> None:
        if not chars:
            raise ValueError("character set must not be empty")
        self.chars = list(chars)

    def determinate(self) -> list[str]:
        """Spread the frames evenly over percents 0 to 100."""
        step = 101 // len(self.chars)
        last = len(self.chars) - 1
        if step == 0:
            return [self.chars[last]] * 101
        return [self.chars[min(i // step, last)] for i in range(101)]

    def indeterminate(self) -> list[str]:
        """Return the frames unchanged."""
        return list(self.chars)


class FuncDisplay:
    """A display computed by a function of the percent (-1 for indeterminate)."""

    def __init__(self, func: Callable[[int], str]) -> None:
        self.func = func

    def determinate(self) -> list[str]:
        """Call the function for each percent from 0 to 100."""
        return [self.func(percent) for percent in range(101)]

    def indeterminate(self) -> list[str]:
        """Call the function with -1 until it repeats its first frame."""
        first = self.func(-1)
        frames = [first]
        while (frame := self.func(-1)) != first:
            frames.append(frame)
        return frames


class SimpleProgressDisplay:
    """The default bracketed bar."""

    def determinate(self) -> list[str]:
        return CharSetDisplay(DETERMINATE_CHARSET).determinate()

    def indeterminate(self) -> list[str]:
        return list(INDETERMINATE_CHARSET)


class ProgressBar:
    """A progress bar that redraws itself in place on ``writer``."""

    def __init__(
        self,
        writer: TextIO,
        display: Optional[ProgressDisplay] = None,
        *,
        indeterminate: bool = True,
        interval: float = PROGRESS_INTERVAL,
        prefix: str = "",
        suffix: str = "",
        final: str = "",
    ) -> None:
        self.writer = writer
        self.indeterminate = indeterminate
        self.interval = interval
        self.prefix = prefix
        self.suffix = suffix
        self.final = final
        self.percent = 0
        self.display = display if display is not None else SimpleProgressDisplay()
        self._written_len = 0
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._stopped: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def display(self) -> ProgressDisplay:
        return self._display

    @display.setter
    def display(self, display: ProgressDisplay) -> None:
        self._display = display
        self._frames: Iterator[str] = itertools.cycle(display.indeterminate())

    def progress(self, percent: int) -> None:
        """Switch to determinate mode at ``percent`` (clamped to 0..100) and redraw."""
        self.percent = max(0, min(100, percent))
        self.indeterminate = False
        self.refresh()

    def output(self) -> str:
        """Return the next text to draw."""
        with self._lock:
            if self.indeterminate:
                shown = next(self._frames)
            else:
                shown = self.display.determinate()[self.percent]
            return f"{self.prefix}{shown}{self.suffix} "

    def refresh(self) -> None:
        """Replace what was drawn with the current output."""
        with self._write_lock:
            self._write(self.output())

    def start(self) -> None:
        """Start redrawing in the background."""
        stopped = threading.Event()
        with self._lock:
            self._stopped = stopped
            self._thread = threading.Thread(
                target=self._run, args=(stopped,), daemon=True
            )
            thread = self._thread
        thread.start()

    def stop(self) -> None:
        """Stop the bar, print the final text and wait for it to finish."""
        with self._lock:
            stopped, thread = self._stopped, self._thread
        if stopped is None or thread is None:
            raise RuntimeError("progress bar was not started")
        stopped.set()
        thread.join()

    def copy(self, writer: TextIO) -> "ProgressBar":
        """Return a fresh bar with the same settings writing to ``writer``."""
        return ProgressBar(
            writer,
            self.display,
            indeterminate=self.indeterminate,
            interval=self.interval,
            prefix=self.prefix,
            suffix=self.suffix,
            final=self.final,
        )

    def _run(self, stopped: threading.Event) -> None:
        while not stopped.wait(self.interval):
            with self._lock:
                indeterminate = self.indeterminate
            if indeterminate:
                self.refresh()
        self._done()

    def _done(self) -> None:
        with self._write_lock:
            self._erase(self._written_len)
            self.writer.write(self.final + "\n")
            self._flush()

    def _write(self, text: str) -> None:
        self._erase(self._written_len)
        self._written_len = len(text)
        self.writer.write(text)
        self._flush()

    def _erase(self, count: int) -> None:
        if count:
            self.writer.write("\b" * count)

    def _flush(self) -> None:
        flush = getattr(self.writer, "flush", None)
        if flush is not None:
            flush()