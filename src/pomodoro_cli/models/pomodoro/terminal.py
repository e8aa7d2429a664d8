"""Terminal control for the full-screen timer.

All drawing goes to the controlling terminal, never to stdout, so redirecting
the program's output captures only the session summary.
"""

from __future__ import annotations

import os
import termios
import tty
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO

from rich.console import Console
from rich.control import Control
from rich.text import Text

from pomodoro_cli.utils.logger import get_logger

TTY_DEVICE = "/dev/tty"

# Index of the control-character array in a termios attribute list.
_CC = 6


class TerminalController:
    """Owns terminal modes and full-screen rendering."""

    def __init__(self, console: Console, fd: int, stream: IO[str] | None = None):
        self.console = console
        self.fd = fd
        self._stream = stream
        self.snapshot: list | None = None

    @classmethod
    def open_tty(cls) -> TerminalController:
        """Open the controlling terminal for both drawing and key input."""
        stream = open(TTY_DEVICE, "r+", encoding="utf-8")  # noqa: SIM115
        console = Console(file=stream, force_terminal=True, highlight=False)
        return cls(console, stream.fileno(), stream)

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    @contextmanager
    def full_screen(self) -> Iterator[None]:
        """Alternate screen, hidden cursor and cbreak input for the session.

        The settings captured on entry are written back on every exit path.
        """
        self.snapshot = termios.tcgetattr(self.fd)
        get_logger(__name__).debug("terminal snapshot captured")
        try:
            tty.setcbreak(self.fd)
            self.console.set_alt_screen(True)
            self.console.show_cursor(False)
            yield
        finally:
            self.console.show_cursor(True)
            self.console.set_alt_screen(False)
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.snapshot)
            get_logger(__name__).debug("terminal restored")

    @contextmanager
    def suspend_key_disabled(self) -> Iterator[None]:
        """Disable the terminal's suspend character (usually Ctrl-Z)."""
        saved = termios.tcgetattr(self.fd)
        attrs = termios.tcgetattr(self.fd)
        attrs[_CC][termios.VSUSP] = bytes([os.fpathconf(self.fd, "PC_VDISABLE")])
        termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        try:
            yield
        finally:
            termios.tcsetattr(self.fd, termios.TCSANOW, saved)

    @property
    def size(self) -> os.terminal_size:
        """Size of the terminal behind *fd*, falling back to the console's guess."""
        try:
            return os.get_terminal_size(self.fd)
        except OSError:
            width, height = self.console.size
            return os.terminal_size((width, height))

    def render_frame(self, text: str) -> None:
        """Draw *text* over the whole screen without clearing it first.

        Every line is padded to the terminal width and blank lines are added
        down to the terminal height, so nothing from the previous frame
        survives. The size is read on every call.
        """
        width, height = self.size
        self.console.size = (width, height)
        lines = text.split("\n")[:height]
        lines.extend([""] * (height - len(lines)))

        frame = Text("\n").join(self._fit(line, width) for line in lines)
        self.console.control(Control.home())
        self.console.print(frame, end="", soft_wrap=True)

    @staticmethod
    def _fit(line: str, width: int) -> Text:
        text = Text.from_ansi(line) if "\x1b" in line else Text(line)
        text.truncate(width, overflow="crop", pad=True)
        return text

    def read_key(self) -> str:
        """Read one key press; call only after a wait reported a key."""
        return os.read(self.fd, 1).decode("utf-8", errors="ignore")

    def flush_input(self) -> None:
        """Discard keystrokes typed but not yet read."""
        termios.tcflush(self.fd, termios.TCIFLUSH)
