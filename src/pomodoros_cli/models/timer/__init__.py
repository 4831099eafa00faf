"""Pomodoro timer: state machine, keyboard input, dashboard and loop."""

from .config import TimerConfig
from .exceptions import InputError, PomodorosError, RenderError, TerminalError
from .keyboard import KeyboardHandler, KeyEvent, MouseEvent, get_keyboard_handler
from .loop import InteractiveLoop, resolve_action
from .state import PomodoroTimer, TimerSnapshot
from .ui import TimerDisplay

__all__ = [
    "TimerConfig",
    "PomodoroTimer",
    "TimerSnapshot",
    "KeyboardHandler",
    "KeyEvent",
    "MouseEvent",
    "get_keyboard_handler",
    "InteractiveLoop",
    "resolve_action",
    "TimerDisplay",
    "PomodorosError",
    "TerminalError",
    "InputError",
    "RenderError",
]
