"""Pomodoros CLI - a terminal Pomodoro timer dashboard."""

__version__ = "0.1.0"
