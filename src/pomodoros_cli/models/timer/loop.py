"""Input/update/render loop driving the timer dashboard."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Literal, Protocol

from .exceptions import PomodorosError
from .keyboard import InputEvent, KeyEvent
from .state import PomodoroTimer, TimerSnapshot

logger = logging.getLogger(__name__)

Action = Literal["quit", "toggle", "skip", "reset"]

KEY_BINDINGS: dict[str, Action] = {
    "q": "quit",
    "esc": "quit",
    " ": "toggle",
    "n": "skip",
    "right": "skip",
    "r": "reset",
}

CTRL_QUIT_KEYS = frozenset({"q", "c"})


class KeyboardSource(Protocol):
    def start(self) -> None: ...

    def poll(self, timeout: float) -> InputEvent | None: ...

    def stop(self) -> None: ...


class Renderer(Protocol):
    def start(self) -> None: ...

    def render(self, snapshot: TimerSnapshot) -> None: ...

    def stop(self) -> None: ...


def resolve_action(event: InputEvent | None) -> Action | None:
    """Map an input event to a timer action; None means ignore it."""
    if not isinstance(event, KeyEvent) or event.kind != "press":
        return None
    if event.ctrl:
        return "quit" if event.key in CTRL_QUIT_KEYS else None
    return KEY_BINDINGS.get(event.key)


class InteractiveLoop:
    """Polls the keyboard, ticks the timer and redraws at a capped rate.

    Each iteration waits at most ``tick_interval`` seconds for one input
    event, always ticks the timer with the current clock, and renders only
    when ``frame_interval`` seconds have passed since the previous frame.
    """

    def __init__(
        self,
        timer: PomodoroTimer,
        keyboard: KeyboardSource,
        display: Renderer,
        tick_interval: float,
        frame_interval: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.timer = timer
        self.keyboard = keyboard
        self.display = display
        self.tick_interval = tick_interval
        self.frame_interval = frame_interval
        self.clock = clock

    def dispatch(self, event: InputEvent | None) -> bool:
        """Apply the action bound to *event*. Returns True to quit."""
        action = resolve_action(event)
        if action is None:
            return False

        logger.debug("key %r -> %s", event, action)
        if action == "quit":
            return True
        elif action == "toggle":
            self.timer.toggle()
        elif action == "skip":
            self.timer.skip()
        elif action == "reset":
            self.timer.reset_current()
        return False

    def run(self) -> TimerSnapshot:
        """Run until quit; the terminal is always restored on the way out."""
        completed = False
        try:
            self.keyboard.start()
            self.display.start()
            last_render: float | None = None

            while True:
                event = self.keyboard.poll(self.tick_interval)
                if event is not None and self.dispatch(event):
                    break

                now = self.clock()
                self.timer.tick(now)

                if last_render is None or now - last_render >= self.frame_interval:
                    self.display.render(self.timer.snapshot())
                    last_render = now
            completed = True
        except KeyboardInterrupt:
            logger.info("interrupted")
            completed = True
        finally:
            # An error already on its way out takes precedence
            self._teardown(raise_errors=completed)

        return self.timer.snapshot()

    def _teardown(self, raise_errors: bool = True) -> None:
        errors: list[PomodorosError] = []
        for part in (self.display, self.keyboard):
            try:
                part.stop()
            except PomodorosError as e:
                logger.error("teardown failed: %s", e)
                errors.append(e)
        if errors and raise_errors:
            raise errors[0]
