"""Terminal capabilities and interactive prompting."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, TextIO, Tuple
import os
import shutil
import sys

from rich.console import Console
from rich.prompt import Prompt

from .errors import PromptError

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


class Prompter(Protocol):
    def input(self, prompt: str, default: str) -> str: ...


@dataclass
class Terminal:
    """The standard streams plus what is known about the output device.

    Attributes:
        stdin: Input stream.
        stdout: Output stream.
        stderr: Error stream.
        is_tty: Whether stdout is an interactive terminal.
        width: Forced display width, or None to probe the real terminal.
        color: Whether coloured output is allowed.
    """

    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    stderr: TextIO = field(default_factory=lambda: sys.stderr)
    is_tty: bool = False
    width: Optional[int] = None
    color: bool = True

    @classmethod
    def from_env(cls) -> "Terminal":
        """Probe the process streams and environment.

        ``GH_FORCE_TTY`` forces interactive output; a numeric value sets the
        display width and ``NN%`` a percentage of the real width.
        ``NO_COLOR`` turns colour off.
        """
        term = cls(is_tty=sys.stdout.isatty(), color=not os.getenv("NO_COLOR"))
        forced = os.getenv("GH_FORCE_TTY", "")
        if forced and forced.lower() not in ("0", "false", "no"):
            term.is_tty = True
            term.width = _forced_width(forced, lambda: shutil.get_terminal_size().columns)
        return term

    def is_terminal_output(self) -> bool:
        return self.is_tty

    def size(self) -> Tuple[int, int]:
        """Return (width, height) of the output device."""
        real = shutil.get_terminal_size((DEFAULT_WIDTH, DEFAULT_HEIGHT))
        return (self.width or real.columns, real.lines)


def _forced_width(value: str, real_width: Callable[[], int]) -> Optional[int]:
    if value.endswith("%"):
        try:
            pct = int(value[:-1])
        except ValueError:
            return None
        return max(1, real_width() * pct // 100)
    try:
        return int(value)
    except ValueError:
        return None


class _LineReader:
    """Wraps an input stream so that end of input raises EOFError."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def readline(self) -> str:
        line = self._stream.readline()
        if not line:
            raise EOFError("could not prompt: end of input")
        return line


class RichPrompter:
    """Prompter backed by `rich.prompt.Prompt`."""

    def __init__(self, terminal: Terminal):
        self._terminal = terminal
        self._console = Console(file=terminal.stderr, no_color=not terminal.color)

    def input(self, prompt: str, default: str) -> str:
        try:
            return Prompt.ask(
                prompt,
                console=self._console,
                default=default,
                show_default=bool(default),
                stream=_LineReader(self._terminal.stdin),
            )
        except (EOFError, KeyboardInterrupt) as e:
            raise PromptError(str(e) or "could not prompt: input interrupted") from e
