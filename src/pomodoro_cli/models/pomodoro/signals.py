"""Signal delivery for the session loop.

Handlers never act on the session directly. They queue a :class:`SignalEvent`
and the interpreter writes the wakeup pipe, which ends whatever ``select()``
the loop is blocked in. The waiting code then dispatches the queued events
through the :class:`InterruptStateMachine` one at a time.
"""

from __future__ import annotations

import contextlib
import os
import select
import signal
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from types import FrameType

from pomodoro_cli.utils.logger import get_logger

from .state import InterruptDecision, InterruptState, InterruptStateMachine

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTSTP, signal.SIGTERM)


class SessionTerminated(Exception):
    """The user asked for the whole session to end via *signum*."""

    def __init__(self, signum: int):
        self.signum = signum
        super().__init__(f"Session terminated by {signal.Signals(signum).name}")


class WaitResult(str, Enum):
    """How a wait on the channel ended."""

    TIMEOUT = "timeout"
    KEY = "key"
    INTERRUPTED = "interrupted"


@dataclass(frozen=True)
class SignalEvent:
    """A delivered signal and the interrupt state at delivery time."""

    signum: int
    delivered_in: InterruptState


class SignalChannel:
    """Queue of delivered signals plus the interruptible wait primitive.

    Every blocking point of a session (tick waits, key waits, fixed pauses)
    goes through :meth:`wait`, so a signal always takes effect before the
    wait's timeout would otherwise elapse.
    """

    def __init__(
        self,
        machine: InterruptStateMachine | None = None,
        *,
        key_fd: int | None = None,
        suspend_pause: float = 2.0,
        on_suspend: Callable[[], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.machine = machine or InterruptStateMachine()
        self.key_fd = key_fd
        self.suspend_pause = suspend_pause
        self.on_suspend = on_suspend
        self._clock = clock
        self._queue: deque[SignalEvent] = deque()
        self._read_fd, self._write_fd = os.pipe()
        os.set_blocking(self._read_fd, False)
        os.set_blocking(self._write_fd, False)
        self._previous_handlers: dict[int, object] = {}
        self._previous_wakeup_fd: int | None = None

    # -- installation -----------------------------------------------------

    def install(self) -> None:
        """Route the handled signals into this channel."""
        self._previous_wakeup_fd = signal.set_wakeup_fd(
            self._write_fd, warn_on_full_buffer=False
        )
        for signum in HANDLED_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, self.handle_signal)

    def uninstall(self) -> None:
        """Restore the handlers that were active before :meth:`install`."""
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()
        if self._previous_wakeup_fd is not None:
            signal.set_wakeup_fd(self._previous_wakeup_fd)
            self._previous_wakeup_fd = None

    def close(self) -> None:
        for fd in (self._read_fd, self._write_fd):
            with contextlib.suppress(OSError):
                os.close(fd)

    def __enter__(self) -> SignalChannel:
        self.install()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.uninstall()
        self.close()

    # -- delivery ---------------------------------------------------------

    def handle_signal(self, signum: int, frame: FrameType | None = None) -> None:
        """Signal handler: propagate SIGCONT on suspend, then queue the event."""
        if signum == signal.SIGTSTP:
            # Pomodoros never sit stopped: wake anything in our group the
            # terminal stopped, whatever state we are in.
            os.killpg(os.getpgrp(), signal.SIGCONT)
        self._queue.append(SignalEvent(signum, self.machine.state))

    @property
    def pending(self) -> int:
        return len(self._queue)

    # -- waiting ----------------------------------------------------------

    def begin_wait(self) -> None:
        """Dispatch anything delivered while idle, then enter ``ACTIVE``."""
        self.wait(0)
        self.machine.begin_wait()

    def end_wait(self) -> None:
        self.machine.end_wait()

    def wait(self, timeout: float | None, *, keys: bool = False) -> WaitResult:
        """Block until *timeout* elapses, a key arrives or an interval is abandoned.

        ``None`` waits forever. Key presses only end the wait when *keys* is
        set; they are left unread for the caller.

        Raises:
            SessionTerminated: if a dispatched signal ends the session.
        """
        deadline = None if timeout is None else self._clock() + timeout
        watch = [self._read_fd]
        if keys and self.key_fd is not None:
            watch.append(self.key_fd)

        while True:
            while self._queue:
                if self._dispatch(self._queue.popleft()) is InterruptDecision.ABANDON:
                    return WaitResult.INTERRUPTED

            remaining = None if deadline is None else deadline - self._clock()
            if remaining is not None and remaining <= 0:
                return WaitResult.TIMEOUT

            ready, _, _ = select.select(watch, [], [], remaining)
            if self._read_fd in ready:
                self._drain_wakeup_pipe()
            if self.key_fd in ready and keys and not self._queue:
                return WaitResult.KEY

    def _drain_wakeup_pipe(self) -> None:
        with contextlib.suppress(BlockingIOError):
            while os.read(self._read_fd, 512):
                pass

    def _dispatch(self, event: SignalEvent) -> InterruptDecision:
        if event.signum == signal.SIGTERM:
            decision = InterruptDecision.TERMINATE
        elif event.signum == signal.SIGTSTP:
            decision = self.machine.on_suspend()
        else:
            decision = self.machine.on_user_interrupt(event.delivered_in)

        get_logger(__name__).debug(
            "%s delivered while %s: %s",
            signal.Signals(event.signum).name,
            event.delivered_in.value,
            decision.value,
        )

        if decision is InterruptDecision.TERMINATE:
            raise SessionTerminated(event.signum)
        if decision is InterruptDecision.SUSPEND:
            self._show_suspend_prompt()
        return decision

    def _show_suspend_prompt(self) -> None:
        if self.on_suspend is not None:
            self.on_suspend()
        # Signals queued during the pause are tagged SUSPENDED and dropped.
        self.wait(self.suspend_pause)
        self.machine.resume()
