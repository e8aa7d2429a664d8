"""Tests for PomodoroDisplay frames."""

from __future__ import annotations

import os
import random
from unittest.mock import MagicMock

import pytest

from pomodoro_cli.models.pomodoro.ui import (
    BREAK_MESSAGE,
    BREAK_OVER_MESSAGE,
    SUSPEND_MESSAGE,
    PomodoroDisplay,
    format_remaining,
)
from pomodoro_cli.services.presentation_service import COW_VARIANTS, variants_for_level


@pytest.fixture()
def terminal():
    term = MagicMock()
    term.size = os.terminal_size((60, 20))
    return term


@pytest.fixture()
def art():
    service = MagicMock()
    service.speech_bubble.side_effect = lambda message, width, variant, preformatted=False: (
        f"<{variant.name}:{message}>"
    )
    service.big_digits.side_effect = lambda text, width: f"[{text}]"
    service.colorize.side_effect = lambda text: f"~{text}~"
    return service


def _frame(terminal):
    return terminal.render_frame.call_args.args[0]


class TestFormatRemaining:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "0:00"), (5, "0:05"), (65, "1:05"), (1500, "25:00"), (6000, "100:00")],
    )
    def test_format(self, seconds, expected):
        assert format_remaining(seconds) == expected

    def test_negative_clamps_to_zero(self):
        assert format_remaining(-3) == "0:00"


class TestChooseVariant:
    def test_level_zero_uses_default_cow(self, terminal, art):
        display = PomodoroDisplay(terminal, art, whimsy_level=0, rng=random.Random(1))
        for _ in range(10):
            assert display.choose_variant() is COW_VARIANTS[0]

    @pytest.mark.parametrize("level", [1, 2, 3])
    def test_choice_is_within_level(self, terminal, art, level):
        display = PomodoroDisplay(terminal, art, whimsy_level=level, rng=random.Random(7))
        allowed = variants_for_level(level)
        picked = {display.choose_variant() for _ in range(50)}
        assert picked <= set(allowed)

    def test_higher_levels_offer_more_variants(self):
        counts = [len(variants_for_level(level)) for level in range(4)]
        assert counts == sorted(counts)
        assert counts[0] == 1
        assert counts[-1] == len(COW_VARIANTS)


class TestFrames:
    def test_countdown_uses_big_digits_in_preformatted_bubble(self, terminal, art):
        display = PomodoroDisplay(terminal, art)
        display.show_countdown(65)

        art.big_digits.assert_called_once_with("1:05", 60)
        assert art.speech_bubble.call_args.kwargs["preformatted"] is True
        assert _frame(terminal) == "<default:[1:05]>"

    def test_countdown_uses_chosen_variant(self, terminal, art):
        display = PomodoroDisplay(terminal, art, whimsy_level=3)
        display.variant = COW_VARIANTS[-1]
        display.show_countdown(10)
        assert _frame(terminal).startswith(f"<{COW_VARIANTS[-1].name}:")

    def test_messages_wrap_inside_terminal_width(self, terminal, art):
        display = PomodoroDisplay(terminal, art)
        display.show_break_prompt()

        message, width = art.speech_bubble.call_args.args[:2]
        assert message == BREAK_MESSAGE
        assert width < 60

    def test_suspend_prompt(self, terminal, art):
        PomodoroDisplay(terminal, art).show_suspend_prompt()
        assert SUSPEND_MESSAGE in _frame(terminal)

    def test_retry_prompt_names_the_pomodoro(self, terminal, art):
        PomodoroDisplay(terminal, art).show_retry_prompt(3)
        assert "Pomodoro 3 abandoned" in _frame(terminal)

    def test_break_reminder(self, terminal, art):
        PomodoroDisplay(terminal, art).show_break_reminder()
        terminal.render_frame.assert_called_once()

    def test_break_over_is_rainbow(self, terminal, art):
        PomodoroDisplay(terminal, art).show_break_over()
        assert _frame(terminal) == f"~<default:{BREAK_OVER_MESSAGE}>~"

    def test_width_read_on_every_frame(self, terminal, art):
        display = PomodoroDisplay(terminal, art)
        display.show_countdown(1)
        terminal.size = os.terminal_size((100, 20))
        display.show_countdown(1)
        assert art.big_digits.call_args.args == ("0:01", 100)
