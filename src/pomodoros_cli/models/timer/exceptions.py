"""Custom exceptions for the Pomodoro timer."""


class PomodorosError(Exception):
    """Base exception for all timer errors."""


class TerminalError(PomodorosError):
    """Raised when the terminal cannot be put into or restored from raw mode."""


class InputError(PomodorosError):
    """Raised when reading keyboard input fails."""


class RenderError(PomodorosError):
    """Raised when drawing the dashboard fails."""
