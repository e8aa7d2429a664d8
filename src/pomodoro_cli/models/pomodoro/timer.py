"""Countdown for a single pomodoro."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pomodoro_cli.utils.logger import get_logger

from .signals import SignalChannel, WaitResult
from .terminal import TerminalController
from .ui import PomodoroDisplay

TICK_SECONDS = 1


class Outcome(str, Enum):
    """How a countdown ended."""

    COMPLETED = "completed"
    ABANDONED = "abandoned"


@dataclass
class Interval:
    """One run of a pomodoro. A retry gets a new Interval."""

    index: int
    duration_seconds: int
    started_at: datetime = field(default_factory=datetime.now)
    remaining_seconds: int = field(init=False)
    outcome: Outcome | None = None

    def __post_init__(self) -> None:
        self.remaining_seconds = self.duration_seconds


class CountdownTimer:
    """Ticks an :class:`Interval` down once per second."""

    def __init__(
        self,
        channel: SignalChannel,
        terminal: TerminalController,
        display: PomodoroDisplay,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.channel = channel
        self.terminal = terminal
        self.display = display
        self._clock = clock

    def run(self, interval: Interval) -> Outcome:
        """Count *interval* down to zero unless the user abandons it."""
        self.display.choose_variant()
        with self.terminal.suspend_key_disabled():
            self.channel.begin_wait()
            start = self._clock()
            while True:
                self.display.show_countdown(interval.remaining_seconds)

                ticks_done = interval.duration_seconds - interval.remaining_seconds
                next_tick = start + (ticks_done + 1) * TICK_SECONDS
                result = self.channel.wait(max(next_tick - self._clock(), 0))
                if result is WaitResult.INTERRUPTED:
                    interval.outcome = Outcome.ABANDONED
                    break

                # Time spent on the suspend prompt still counts.
                elapsed = int((self._clock() - start) // TICK_SECONDS)
                interval.remaining_seconds = max(
                    min(
                        interval.remaining_seconds - 1,
                        interval.duration_seconds - elapsed,
                    ),
                    0,
                )
                if interval.remaining_seconds == 0:
                    self.channel.end_wait()
                    interval.outcome = Outcome.COMPLETED
                    break

        get_logger(__name__).info(
            "pomodoro %d %s", interval.index, interval.outcome.value
        )
        return interval.outcome
