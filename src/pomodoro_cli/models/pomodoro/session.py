"""Runs a full session: pomodoros, breaks, retries and the summary."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from pomodoro_cli.config import SessionConfig
from pomodoro_cli.services.audio_service import AudioService
from pomodoro_cli.services.notification_service import NotificationService
from pomodoro_cli.utils.logger import get_logger

from .signals import SignalChannel, WaitResult
from .terminal import TerminalController
from .timer import CountdownTimer, Interval, Outcome
from .ui import PomodoroDisplay

BREAK_NOTIFICATION = "Pomodoro complete. Time for a short break!"
BREAK_OVERDUE_NOTIFICATION = "Your break is over, get back to work!"
ALL_DONE_NOTIFICATION = "All pomodoros completed. Well done!"


def _clock_time(moment: datetime) -> str:
    return moment.strftime("%H:%M")


@dataclass
class Session:
    """What a run did, kept as human-readable summary lines."""

    total_intervals: int
    interval_duration_seconds: int
    summary_log: list[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: SessionConfig) -> Session:
        return cls(
            total_intervals=config.total_intervals,
            interval_duration_seconds=config.duration_seconds,
        )

    def record(self, line: str) -> None:
        self.summary_log.append(line)
        get_logger(__name__).info(line)

    def summary(self) -> str:
        return "\n".join(self.summary_log)


class SessionOrchestrator:
    """Drives the countdown once per pomodoro with breaks in between."""

    def __init__(
        self,
        config: SessionConfig,
        session: Session,
        channel: SignalChannel,
        terminal: TerminalController,
        display: PomodoroDisplay,
        notifier: NotificationService,
        audio: AudioService,
        timer: CountdownTimer | None = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.session = session
        self.channel = channel
        self.terminal = terminal
        self.display = display
        self.notifier = notifier
        self.audio = audio
        self.timer = timer or CountdownTimer(channel, terminal, display)
        self._now = now

    def run(self) -> Session:
        index = 1
        while index <= self.session.total_intervals:
            interval = Interval(
                index=index,
                duration_seconds=self.session.interval_duration_seconds,
                started_at=self._now(),
            )
            outcome = self.timer.run(interval)
            span = f"{_clock_time(interval.started_at)}–{_clock_time(self._now())}"

            if outcome is Outcome.ABANDONED:
                self.session.record(f"Abandoned: {span}")
                self.display.show_retry_prompt(index)
                self.terminal.flush_input()
                self._wait_for_key(None)
                # Same index again, with a fresh full-length interval.
                continue

            self.session.record(f"Pomodoro {index}: {span}")
            if index < self.session.total_intervals:
                self._take_break()
            index += 1

        self.notifier.notify(ALL_DONE_NOTIFICATION)
        # Dispatch anything delivered since the last wait before handlers go.
        self.channel.wait(0)
        return self.session

    def _take_break(self) -> None:
        started = self._now()
        self.audio.play_cue()
        self.notifier.notify(BREAK_NOTIFICATION)
        self.display.show_break_prompt()
        self.terminal.flush_input()

        if not self._wait_for_key(self.config.first_break_timeout):
            self.display.show_break_reminder()
            if not self._wait_for_key(self.config.second_break_timeout):
                self.notifier.notify(BREAK_OVERDUE_NOTIFICATION, urgent=True)
                self._wait_for_key(None)

        minutes = round((self._now() - started).total_seconds() / 60)
        self.display.show_break_over()
        self.channel.wait(self.config.celebration_pause)
        unit = "minute" if minutes == 1 else "minutes"
        self.session.record(f"Break: about {minutes} {unit}")

    def _wait_for_key(self, timeout: float | None) -> bool:
        """Wait for a key press; ``False`` when *timeout* ran out first."""
        if self.channel.wait(timeout, keys=True) is WaitResult.KEY:
            self.terminal.read_key()
            return True
        return False
