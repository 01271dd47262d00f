"""Pomodoro timer that clocks work against your tasks."""

__version__ = "0.1.0"
