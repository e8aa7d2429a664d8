"""Interrupt state machine shared by the countdown loop and signal dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pomodoro_cli.utils.logger import get_logger


class InterruptState(str, Enum):
    """Where the session is with respect to interruptible waits."""

    IDLE = "idle"
    ACTIVE = "active"
    SUSPENDED = "suspended"


class InterruptDecision(str, Enum):
    """What the waiting code must do with a delivered signal."""

    ABANDON = "abandon"
    SUSPEND = "suspend"
    IGNORE = "ignore"
    TERMINATE = "terminate"


@dataclass(slots=True)
class InterruptStateMachine:
    """Three-state machine driving abandon, suspend and termination.

    ``IDLE``
        No interval is running. A user interrupt terminates the process.
    ``ACTIVE``
        A countdown is waiting on its tick. A user interrupt abandons the
        interval; a suspend request shows the suspend prompt.
    ``SUSPENDED``
        The suspend prompt is on screen. Interrupts and further suspend
        requests are ignored until :meth:`resume`.

    The methods below are the only mutators of :attr:`state`.
    """

    state: InterruptState = InterruptState.IDLE

    def _move(self, new_state: InterruptState) -> None:
        if new_state is not self.state:
            get_logger(__name__).debug(
                "interrupt state %s -> %s", self.state.value, new_state.value
            )
        self.state = new_state

    def begin_wait(self) -> None:
        """Enter an interruptible wait."""
        if self.state is not InterruptState.IDLE:
            raise RuntimeError(f"Cannot begin a wait while {self.state.value}")
        self._move(InterruptState.ACTIVE)

    def end_wait(self) -> None:
        """Leave the current wait, whatever state it is in."""
        self._move(InterruptState.IDLE)

    def on_user_interrupt(
        self, delivered_in: InterruptState | None = None
    ) -> InterruptDecision:
        """Process a user interrupt (SIGINT).

        *delivered_in* is the state that held when the signal arrived; it
        defaults to the current state.
        """
        state = delivered_in or self.state
        if state is InterruptState.IDLE:
            return InterruptDecision.TERMINATE
        if state is InterruptState.SUSPENDED or self.state is not InterruptState.ACTIVE:
            return InterruptDecision.IGNORE
        self._move(InterruptState.IDLE)
        return InterruptDecision.ABANDON

    def on_suspend(self) -> InterruptDecision:
        """Process a suspend request (SIGTSTP)."""
        if self.state is InterruptState.ACTIVE:
            self._move(InterruptState.SUSPENDED)
            return InterruptDecision.SUSPEND
        return InterruptDecision.IGNORE

    def resume(self) -> None:
        """Return from the suspend prompt to the running countdown."""
        if self.state is InterruptState.SUSPENDED:
            self._move(InterruptState.ACTIVE)
