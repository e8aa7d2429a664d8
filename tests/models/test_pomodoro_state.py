"""Tests for the interrupt state machine."""

from __future__ import annotations

import pytest

from pomodoro_cli.models.pomodoro.state import (
    InterruptDecision,
    InterruptState,
    InterruptStateMachine,
)


def _active() -> InterruptStateMachine:
    machine = InterruptStateMachine()
    machine.begin_wait()
    return machine


class TestWaits:
    def test_starts_idle(self):
        assert InterruptStateMachine().state is InterruptState.IDLE

    def test_begin_wait_enters_active(self):
        assert _active().state is InterruptState.ACTIVE

    def test_begin_wait_twice_is_rejected(self):
        machine = _active()
        with pytest.raises(RuntimeError):
            machine.begin_wait()

    def test_end_wait_returns_to_idle_from_any_state(self):
        machine = _active()
        machine.on_suspend()
        machine.end_wait()
        assert machine.state is InterruptState.IDLE


class TestUserInterrupt:
    def test_idle_interrupt_terminates(self):
        machine = InterruptStateMachine()
        assert machine.on_user_interrupt() is InterruptDecision.TERMINATE
        assert machine.state is InterruptState.IDLE

    def test_active_interrupt_abandons_and_goes_idle(self):
        machine = _active()
        assert machine.on_user_interrupt() is InterruptDecision.ABANDON
        assert machine.state is InterruptState.IDLE

    def test_suspended_interrupt_is_ignored(self):
        machine = _active()
        machine.on_suspend()
        assert machine.on_user_interrupt() is InterruptDecision.IGNORE
        assert machine.state is InterruptState.SUSPENDED

    def test_interrupt_delivered_while_idle_terminates_even_if_now_active(self):
        machine = _active()
        decision = machine.on_user_interrupt(delivered_in=InterruptState.IDLE)
        assert decision is InterruptDecision.TERMINATE

    def test_interrupt_delivered_while_suspended_is_ignored_after_resume(self):
        machine = _active()
        decision = machine.on_user_interrupt(delivered_in=InterruptState.SUSPENDED)
        assert decision is InterruptDecision.IGNORE
        assert machine.state is InterruptState.ACTIVE

    def test_interrupt_from_finished_wait_is_ignored(self):
        machine = _active()
        machine.end_wait()
        decision = machine.on_user_interrupt(delivered_in=InterruptState.ACTIVE)
        assert decision is InterruptDecision.IGNORE


class TestSuspend:
    def test_active_suspend_enters_suspended(self):
        machine = _active()
        assert machine.on_suspend() is InterruptDecision.SUSPEND
        assert machine.state is InterruptState.SUSPENDED

    def test_repeated_suspend_is_ignored(self):
        machine = _active()
        machine.on_suspend()
        assert machine.on_suspend() is InterruptDecision.IGNORE
        assert machine.state is InterruptState.SUSPENDED

    def test_idle_suspend_is_ignored(self):
        machine = InterruptStateMachine()
        assert machine.on_suspend() is InterruptDecision.IGNORE
        assert machine.state is InterruptState.IDLE

    def test_resume_returns_to_active(self):
        machine = _active()
        machine.on_suspend()
        machine.resume()
        assert machine.state is InterruptState.ACTIVE

    def test_resume_outside_suspend_changes_nothing(self):
        machine = InterruptStateMachine()
        machine.resume()
        assert machine.state is InterruptState.IDLE
