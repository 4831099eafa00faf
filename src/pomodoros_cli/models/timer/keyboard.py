"""Raw-mode keyboard input for the timer dashboard."""

from __future__ import annotations

import codecs
import os
import select
import sys
import time
from collections import deque
from dataclasses import dataclass
from typing import Literal, TextIO

from .exceptions import InputError, TerminalError

if sys.platform != "win32":
    import termios
    import tty

KeyKind = Literal["press", "release"]

# Basic button tracking plus SGR extended coordinates
MOUSE_CAPTURE_ON = "\x1b[?1000h\x1b[?1006h"
MOUSE_CAPTURE_OFF = "\x1b[?1006l\x1b[?1000l"

# How long to wait for the rest of an escape sequence split across reads
ESCAPE_TIMEOUT = 0.05

_CSI_FINAL_KEYS = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_WINDOWS_SCAN_KEYS = {
    "H": "up",
    "P": "down",
    "K": "left",
    "M": "right",
    "G": "home",
    "O": "end",
}


@dataclass(frozen=True)
class KeyEvent:
    """A key press.

    ``key`` is the character as typed (case preserved) or a named key such as
    ``"esc"`` or ``"right"``.
    """

    key: str
    ctrl: bool = False
    kind: KeyKind = "press"


@dataclass(frozen=True)
class MouseEvent:
    """A mouse report; captured so it never leaks into the shell."""

    raw: str


InputEvent = KeyEvent | MouseEvent


def split_sequences(data: str) -> list[str]:
    """Split one read of terminal input into individual key sequences."""
    tokens: list[str] = []
    i = 0
    while i < len(data):
        if data[i] != "\x1b":
            tokens.append(data[i])
            i += 1
            continue

        if data.startswith("\x1b[M", i):
            # X10 mouse report: three payload bytes follow
            end = min(i + 6, len(data))
        elif data.startswith(("\x1b[", "\x1bO"), i):
            j = i + 2
            while j < len(data) and not ("@" <= data[j] <= "~"):
                j += 1
            end = min(j + 1, len(data))
        else:
            end = i + 1
        tokens.append(data[i:end])
        i = end
    return tokens


def is_partial_sequence(sequence: str) -> bool:
    """Return True if *sequence* is the start of an unfinished escape sequence."""
    if sequence == "\x1b":
        return True
    if sequence.startswith("\x1b[M"):
        return len(sequence) < 6
    if sequence.startswith(("\x1b[", "\x1bO")):
        return len(sequence) == 2 or not ("@" <= sequence[-1] <= "~")
    return False


def decode_input(sequence: str) -> InputEvent | None:
    """Decode a single key sequence; unknown sequences give None."""
    if not sequence:
        return None

    if sequence.startswith(("\x1b[<", "\x1b[M")):
        return MouseEvent(sequence)
    if sequence == "\x1b":
        return KeyEvent("esc")
    if sequence.startswith(("\x1b[", "\x1bO")):
        name = _CSI_FINAL_KEYS.get(sequence[-1])
        return KeyEvent(name) if name else None
    if sequence.startswith("\x1b"):
        return None

    ch = sequence[0]
    if ch in ("\r", "\n"):
        return KeyEvent("enter")
    if ch == "\t":
        return KeyEvent("tab")
    if ch in ("\x7f", "\x08"):
        return KeyEvent("backspace")
    if 1 <= ord(ch) <= 26:
        return KeyEvent(chr(ord(ch) + 96), ctrl=True)
    return KeyEvent(ch)


class KeyboardHandler:
    """Raw-mode keyboard reader for POSIX terminals."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.fd: int | None = None
        self.old_settings = None
        self._pending: deque[str] = deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def start(self) -> None:
        """Enter raw mode and turn on mouse capture."""
        try:
            self.fd = self.stdin.fileno()
        except (OSError, ValueError) as e:
            raise TerminalError(f"standard input has no file descriptor: {e}") from e
        if not os.isatty(self.fd):
            raise TerminalError("standard input is not a terminal")
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setraw(self.fd)
            # Keep output processing so "\n" still returns the carriage
            attrs = termios.tcgetattr(self.fd)
            attrs[1] |= termios.OPOST
            termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
            self.stdout.write(MOUSE_CAPTURE_ON)
            self.stdout.flush()
        except (termios.error, OSError) as e:
            raise TerminalError(f"failed to enable raw mode: {e}") from e

    def poll(self, timeout: float) -> InputEvent | None:
        """
        Wait up to *timeout* seconds for one input event.

        Sequences left over from an earlier read are returned first, without
        waiting. Returns None on timeout or for unrecognised sequences.
        """
        if not self._pending:
            text = self._read_text(timeout)
            if text is None:
                return None
            tokens = split_sequences(text)
            while tokens and is_partial_sequence(tokens[-1]):
                more = self._read_text(ESCAPE_TIMEOUT)
                if more is None:
                    break
                text += more
                tokens = split_sequences(text)
            self._pending.extend(tokens)
            if not self._pending:
                return None

        return decode_input(self._pending.popleft())

    def _read_text(self, timeout: float) -> str | None:
        try:
            ready, _, _ = select.select([self.fd], [], [], timeout)
            if not ready:
                return None
            data = os.read(self.fd, 64)
        except (OSError, ValueError) as e:
            raise InputError(f"failed to read keyboard input: {e}") from e
        if not data:
            raise InputError("keyboard input closed")
        return self._decoder.decode(data)

    def stop(self) -> None:
        """Turn off mouse capture and restore the saved terminal mode."""
        if self.old_settings is None:
            return
        settings, self.old_settings = self.old_settings, None
        try:
            self.stdout.write(MOUSE_CAPTURE_OFF)
            self.stdout.flush()
            termios.tcsetattr(self.fd, termios.TCSADRAIN, settings)
        except (termios.error, OSError) as e:
            raise TerminalError(f"failed to restore terminal mode: {e}") from e

    def __enter__(self) -> KeyboardHandler:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()


class WindowsKeyboardHandler:
    """Keyboard handler for Windows using msvcrt."""

    def __init__(self):
        try:
            import msvcrt

            self.msvcrt = msvcrt
        except ImportError:
            self.msvcrt = None

    def start(self) -> None:
        """Check that console input is available."""
        if not self.msvcrt:
            raise TerminalError("console input is not available on this platform")

    def poll(self, timeout: float) -> InputEvent | None:
        """Wait up to *timeout* seconds for one key."""
        deadline = time.monotonic() + timeout
        try:
            while True:
                if self.msvcrt.kbhit():
                    ch = self.msvcrt.getwch()
                    if ch in ("\x00", "\xe0"):
                        name = _WINDOWS_SCAN_KEYS.get(self.msvcrt.getwch())
                        return KeyEvent(name) if name else None
                    return decode_input(ch)
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return None
                time.sleep(min(0.01, remaining))
        except OSError as e:
            raise InputError(f"failed to read keyboard input: {e}") from e

    def stop(self) -> None:
        """No cleanup needed on Windows."""

    def __enter__(self) -> WindowsKeyboardHandler:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()


def get_keyboard_handler() -> KeyboardHandler | WindowsKeyboardHandler:
    """Return the keyboard handler for the current platform."""
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()
