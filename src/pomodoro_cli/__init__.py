"""Pomodoro CLI - a full-screen terminal pomodoro session manager."""

__version__ = "0.1.0"
