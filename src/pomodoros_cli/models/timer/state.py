"""Pomodoro timer state machine."""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass

from .config import TimerConfig
from .phase import (
    PHASE_COLORS,
    PHASE_NAMES,
    Phase,
    next_phase_on_completion,
    next_phase_on_skip,
    phase_duration,
)

logger = logging.getLogger(__name__)


def ring_bell() -> None:
    """Emit the terminal bell."""
    sys.stdout.write("\a")
    sys.stdout.flush()


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of the timer handed to the renderer."""

    phase: Phase
    phase_name: str
    color: str
    total_duration: float
    remaining_duration: float
    is_running: bool
    completed_focus_count: int
    formatted_remaining: str
    progress_ratio: float


class PomodoroTimer:
    """Countdown for the current phase plus the focus/break cycle.

    Time only moves through :meth:`tick`, which takes a monotonic timestamp in
    seconds. While paused, ticks just move the reference instant forward so
    that resuming never consumes the paused interval.
    """

    def __init__(
        self,
        config: TimerConfig,
        alert: Callable[[], None] | None = None,
        now: float | None = None,
    ):
        self.config = config
        self.alert = alert or ring_bell
        self.phase: Phase = "focus"
        self.total_duration = phase_duration(self.phase, config)
        self.remaining_duration = self.total_duration
        self.is_running = False
        self.completed_focus_count = 0
        self.last_tick = time.monotonic() if now is None else now

    def toggle(self) -> None:
        """Start or pause the countdown."""
        self.is_running = not self.is_running
        logger.debug("timer %s", "running" if self.is_running else "paused")

    def skip(self) -> None:
        """Jump to the next phase without counting the current one as done."""
        previous = self.phase
        self._enter(next_phase_on_skip(self.phase))
        logger.info("skipped %s -> %s", previous, self.phase)

    def reset_current(self) -> None:
        """Restart the current phase from its full configured duration."""
        self.total_duration = phase_duration(self.phase, self.config)
        self.remaining_duration = self.total_duration

    def tick(self, now: float) -> None:
        """Advance the countdown to *now*."""
        if not self.is_running:
            self.last_tick = now
            return

        delta = max(0.0, now - self.last_tick)
        self.last_tick = now

        if delta >= self.remaining_duration:
            self.remaining_duration = 0.0
            self._complete()
        else:
            self.remaining_duration -= delta

    def _complete(self) -> None:
        if not self.config.mute:
            self.alert()

        finished = self.phase
        if finished == "focus":
            self.completed_focus_count += 1
        self._enter(
            next_phase_on_completion(
                finished, self.completed_focus_count, self.config.long_break_every
            )
        )
        # Next phase starts on its own
        self.is_running = True
        logger.info(
            "%s completed (%d focus sessions) -> %s",
            finished,
            self.completed_focus_count,
            self.phase,
        )

    def _enter(self, phase: Phase) -> None:
        self.phase = phase
        self.reset_current()

    def formatted_remaining(self) -> str:
        """Remaining time as MM:SS; minutes may exceed 59."""
        total_secs = int(self.remaining_duration)
        mins, secs = divmod(total_secs, 60)
        return f"{mins:02d}:{secs:02d}"

    def progress_ratio(self) -> float:
        """Elapsed fraction of the current phase in [0, 1]."""
        if self.total_duration <= 0:
            return 0.0
        elapsed = self.total_duration - self.remaining_duration
        return min(1.0, max(0.0, elapsed / self.total_duration))

    def snapshot(self) -> TimerSnapshot:
        """Capture the current state for rendering."""
        return TimerSnapshot(
            phase=self.phase,
            phase_name=PHASE_NAMES[self.phase],
            color=PHASE_COLORS[self.phase],
            total_duration=self.total_duration,
            remaining_duration=self.remaining_duration,
            is_running=self.is_running,
            completed_focus_count=self.completed_focus_count,
            formatted_remaining=self.formatted_remaining(),
            progress_ratio=self.progress_ratio(),
        )
