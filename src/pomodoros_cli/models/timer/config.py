"""Timer configuration model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_FOCUS_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_LONG_BREAK_EVERY = 4
DEFAULT_TICK_MS = 200
DEFAULT_FRAME_MS = 16  # ~60 FPS


class TimerConfig(BaseModel):
    """Immutable settings for one run of the timer.

    Durations are in seconds. Zero durations are allowed: such a phase simply
    completes on the next tick.
    """

    model_config = ConfigDict(frozen=True)

    focus_duration: float = Field(default=DEFAULT_FOCUS_MINUTES * 60, ge=0)
    short_break_duration: float = Field(default=DEFAULT_SHORT_BREAK_MINUTES * 60, ge=0)
    long_break_duration: float = Field(default=DEFAULT_LONG_BREAK_MINUTES * 60, ge=0)
    long_break_every: int = Field(default=DEFAULT_LONG_BREAK_EVERY, ge=1)
    mute: bool = Field(default=False)
    tick_ms: int = Field(default=DEFAULT_TICK_MS, ge=1)
    frame_ms: int = Field(default=DEFAULT_FRAME_MS, ge=1)

    @classmethod
    def from_minutes(
        cls,
        focus: int = DEFAULT_FOCUS_MINUTES,
        short_break: int = DEFAULT_SHORT_BREAK_MINUTES,
        long_break: int = DEFAULT_LONG_BREAK_MINUTES,
        every: int = DEFAULT_LONG_BREAK_EVERY,
        mute: bool = False,
        tick_ms: int = DEFAULT_TICK_MS,
    ) -> TimerConfig:
        """Build a config from whole minutes, as given on the command line."""
        return cls(
            focus_duration=focus * 60,
            short_break_duration=short_break * 60,
            long_break_duration=long_break * 60,
            long_break_every=every,
            mute=mute,
            tick_ms=tick_ms,
        )

    @property
    def tick_interval(self) -> float:
        """Input poll timeout in seconds."""
        return self.tick_ms / 1000

    @property
    def frame_interval(self) -> float:
        """Minimum gap between two renders in seconds."""
        return self.frame_ms / 1000
