"""Pomodoro session system: interrupt handling, terminal, countdown, orchestration."""

from .session import Session, SessionOrchestrator
from .signals import SessionTerminated, SignalChannel, WaitResult
from .state import InterruptDecision, InterruptState, InterruptStateMachine
from .terminal import TerminalController
from .timer import CountdownTimer, Interval, Outcome
from .ui import PomodoroDisplay, format_remaining

__all__ = [
    "CountdownTimer",
    "InterruptDecision",
    "InterruptState",
    "InterruptStateMachine",
    "Interval",
    "Outcome",
    "PomodoroDisplay",
    "Session",
    "SessionOrchestrator",
    "SessionTerminated",
    "SignalChannel",
    "TerminalController",
    "WaitResult",
    "format_remaining",
]
