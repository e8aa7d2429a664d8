"""Frames shown by the full-screen timer."""

from __future__ import annotations

import random

from pomodoro_cli.services.presentation_service import (
    CowVariant,
    PresentationService,
    variants_for_level,
)

from .terminal import TerminalController

SUSPEND_MESSAGE = (
    "You can't pause a pomodoro! Keep going, or press Ctrl-C to abandon it."
)
BREAK_MESSAGE = "Pomodoro done! Take a short break. Press any key when you are back."
BREAK_REMINDER_MESSAGE = "Break's over! Press any key to start the next pomodoro."
BREAK_OVER_MESSAGE = "Welcome back! Let's go!"

# Columns taken by the bubble border and the cow's margin.
_BUBBLE_MARGIN = 4


def format_remaining(seconds: int) -> str:
    """Format seconds as ``M:SS``."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"


class PomodoroDisplay:
    """Builds each screen from the art services and hands it to the terminal."""

    def __init__(
        self,
        terminal: TerminalController,
        art: PresentationService,
        whimsy_level: int = 0,
        rng: random.Random | None = None,
    ):
        self.terminal = terminal
        self.art = art
        self.whimsy_level = whimsy_level
        self.rng = rng or random.Random()
        self.variant: CowVariant = variants_for_level(0)[0]

    @property
    def width(self) -> int:
        return self.terminal.size.columns

    def choose_variant(self) -> CowVariant:
        """Pick the cow for the next interval."""
        self.variant = self.rng.choice(variants_for_level(self.whimsy_level))
        return self.variant

    def _say(self, message: str) -> str:
        return self.art.speech_bubble(
            message, self.width - _BUBBLE_MARGIN, self.variant
        )

    def show_countdown(self, remaining_seconds: int) -> None:
        digits = self.art.big_digits(format_remaining(remaining_seconds), self.width)
        self.terminal.render_frame(
            self.art.speech_bubble(digits, self.width, self.variant, preformatted=True)
        )

    def show_suspend_prompt(self) -> None:
        self.terminal.render_frame(self._say(SUSPEND_MESSAGE))

    def show_retry_prompt(self, index: int) -> None:
        self.terminal.render_frame(
            self._say(
                f"Pomodoro {index} abandoned. Press any key to start it over."
            )
        )

    def show_break_prompt(self) -> None:
        self.terminal.render_frame(self._say(BREAK_MESSAGE))

    def show_break_reminder(self) -> None:
        self.terminal.render_frame(self._say(BREAK_REMINDER_MESSAGE))

    def show_break_over(self) -> None:
        self.terminal.render_frame(self.art.colorize(self._say(BREAK_OVER_MESSAGE)))
