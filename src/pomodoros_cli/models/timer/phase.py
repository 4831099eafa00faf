"""Pomodoro phases and the transitions between them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from .config import TimerConfig

Phase = Literal["focus", "short_break", "long_break"]

PHASE_NAMES: dict[Phase, str] = {
    "focus": "Focus",
    "short_break": "Short Break",
    "long_break": "Long Break",
}

PHASE_COLORS: dict[Phase, str] = {
    "focus": "bright_green",
    "short_break": "cyan",
    "long_break": "magenta",
}


def next_phase_on_skip(phase: Phase) -> Phase:
    """Phase entered when the user skips *phase*.

    Skipping a focus session always leads to a short break; the long-break
    cadence only counts sessions that actually ran to zero.
    """
    if phase == "focus":
        return "short_break"
    return "focus"


def next_phase_on_completion(
    phase: Phase, completed_focus: int, long_break_every: int
) -> Phase:
    """Phase entered when *phase* counts down to zero.

    ``completed_focus`` must already include the session that just finished.
    """
    if phase == "focus":
        if completed_focus % long_break_every == 0:
            return "long_break"
        return "short_break"
    return "focus"


def phase_duration(phase: Phase, config: TimerConfig) -> float:
    """Configured duration in seconds for *phase*."""
    if phase == "focus":
        return config.focus_duration
    elif phase == "short_break":
        return config.short_break_duration
    else:  # long_break
        return config.long_break_duration
