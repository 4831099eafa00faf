"""Unit tests for the interactive loop.

The keyboard is a scripted fake, the display records snapshots and the clock
is a list of timestamps, so every iteration is deterministic.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from pomodoros_cli.models.timer.config import TimerConfig
from pomodoros_cli.models.timer.exceptions import InputError, RenderError, TerminalError
from pomodoros_cli.models.timer.keyboard import KeyEvent, MouseEvent
from pomodoros_cli.models.timer.loop import InteractiveLoop, resolve_action
from pomodoros_cli.models.timer.state import PomodoroTimer


class FakeKeyboard:
    """Returns scripted events, one per poll; quits when the script runs out."""

    def __init__(self, events):
        self.events = list(events)
        self.timeouts: list[float] = []
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True

    def poll(self, timeout):
        self.timeouts.append(timeout)
        if not self.events:
            return KeyEvent("q")
        event = self.events.pop(0)
        if isinstance(event, BaseException):
            raise event
        return event

    def stop(self):
        self.stopped = True


class FakeDisplay:
    def __init__(self):
        self.frames = []
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True

    def render(self, snapshot):
        self.frames.append(snapshot)

    def stop(self):
        self.stopped = True


class FakeClock:
    def __init__(self, times):
        self.times = list(times)
        self.last = self.times[0] if self.times else 0.0

    def __call__(self):
        if self.times:
            self.last = self.times.pop(0)
        return self.last


def _make_loop(events, times, config=None, frame_interval=0.016, display=None):
    config = config or TimerConfig(mute=True)
    timer = PomodoroTimer(config, now=0.0)
    keyboard = FakeKeyboard(events)
    display = display or FakeDisplay()
    loop = InteractiveLoop(
        timer=timer,
        keyboard=keyboard,
        display=display,
        tick_interval=0.2,
        frame_interval=frame_interval,
        clock=FakeClock(times),
    )
    return loop, timer, keyboard, display


# ---------------------------------------------------------------------------
# resolve_action
# ---------------------------------------------------------------------------


class TestResolveAction:
    @pytest.mark.parametrize(
        ("event", "expected"),
        [
            (KeyEvent("q"), "quit"),
            (KeyEvent("esc"), "quit"),
            (KeyEvent("q", ctrl=True), "quit"),
            (KeyEvent("c", ctrl=True), "quit"),
            (KeyEvent(" "), "toggle"),
            (KeyEvent("n"), "skip"),
            (KeyEvent("right"), "skip"),
            (KeyEvent("r"), "reset"),
        ],
    )
    def test_bindings(self, event, expected):
        assert resolve_action(event) == expected

    @pytest.mark.parametrize(
        "event",
        [
            KeyEvent("N"),
            KeyEvent("R"),
            KeyEvent("Q"),
            KeyEvent("x"),
            KeyEvent("left"),
            KeyEvent("n", ctrl=True),
            KeyEvent("q", kind="release"),
            KeyEvent(" ", kind="release"),
            MouseEvent("\x1b[<0;1;1M"),
            None,
        ],
    )
    def test_ignored_events(self, event):
        assert resolve_action(event) is None


# ---------------------------------------------------------------------------
# dispatch
# ---------------------------------------------------------------------------


class TestDispatch:
    def test_toggle(self):
        loop, timer, _, _ = _make_loop([], [])
        assert loop.dispatch(KeyEvent(" ")) is False
        assert timer.is_running is True

    def test_skip(self):
        loop, timer, _, _ = _make_loop([], [])
        loop.dispatch(KeyEvent("n"))
        assert timer.phase == "short_break"

    def test_reset(self):
        loop, timer, _, _ = _make_loop([], [])
        timer.remaining_duration = 10
        loop.dispatch(KeyEvent("r"))
        assert timer.remaining_duration == timer.total_duration

    def test_quit_returns_true(self):
        loop, _, _, _ = _make_loop([], [])
        assert loop.dispatch(KeyEvent("esc")) is True

    def test_unbound_key_is_noop(self):
        loop, timer, _, _ = _make_loop([], [])
        before = timer.snapshot()
        assert loop.dispatch(KeyEvent("z")) is False
        assert timer.snapshot() == before


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


class TestRun:
    def test_quit_exits_and_tears_down(self):
        loop, _, keyboard, display = _make_loop([KeyEvent("q")], [])

        loop.run()

        assert keyboard.started and display.started
        assert keyboard.stopped and display.stopped
        assert display.frames == []

    def test_polls_with_tick_interval(self):
        loop, _, keyboard, _ = _make_loop([None, None], [0.2, 0.4])
        loop.run()
        assert keyboard.timeouts == [0.2, 0.2, 0.2]

    def test_ticks_even_without_input(self):
        config = TimerConfig(focus_duration=10, mute=True)
        loop, timer, _, _ = _make_loop([KeyEvent(" "), None, None], [0.0, 3.0, 5.5], config=config)

        loop.run()

        assert timer.remaining_duration == pytest.approx(4.5)

    def test_countdown_uses_measured_time_not_poll_timeout(self):
        config = TimerConfig(focus_duration=10, mute=True)
        loop, timer, _, _ = _make_loop([KeyEvent(" "), None], [0.0, 0.05], config=config)

        loop.run()

        assert timer.remaining_duration == pytest.approx(9.95)

    def test_first_frame_renders_immediately(self):
        loop, _, _, display = _make_loop([None], [0.0])
        loop.run()
        assert len(display.frames) == 1

    def test_frame_rate_is_capped(self):
        times = [0.0, 0.005, 0.010, 0.020, 0.030, 0.040]
        loop, _, _, display = _make_loop([None] * len(times), times, frame_interval=0.016)

        loop.run()

        # renders at 0.0, 0.020 and 0.040
        assert len(display.frames) == 3

    def test_renders_snapshots_of_current_state(self):
        loop, _, _, display = _make_loop([KeyEvent("n"), None], [0.0, 1.0])

        loop.run()

        assert [frame.phase for frame in display.frames] == ["short_break", "short_break"]

    def test_natural_completion_in_loop(self):
        config = TimerConfig(
            focus_duration=1,
            short_break_duration=1,
            long_break_duration=1,
            long_break_every=2,
            mute=True,
        )
        events = [KeyEvent(" "), None, None]
        loop, timer, _, _ = _make_loop(events, [0.0, 2.0, 4.0, 6.0], config=config)

        final = loop.run()

        assert final.completed_focus_count == 1
        assert final.phase == "focus"
        assert timer.is_running is True

    def test_returns_final_snapshot(self):
        loop, _, _, _ = _make_loop([KeyEvent("n")], [0.0])
        final = loop.run()
        assert final.phase == "short_break"


class TestRunFailures:
    def test_input_error_propagates_after_teardown(self):
        loop, _, keyboard, display = _make_loop([InputError("closed")], [])

        with pytest.raises(InputError):
            loop.run()

        assert keyboard.stopped and display.stopped

    def test_render_error_propagates_after_teardown(self):
        display = FakeDisplay()
        display.render = MagicMock(side_effect=RenderError("broken"))
        loop, _, keyboard, _ = _make_loop([None], [0.0], display=display)

        with pytest.raises(RenderError):
            loop.run()

        assert keyboard.stopped and display.stopped

    def test_setup_failure_still_tears_down(self):
        loop, _, keyboard, display = _make_loop([], [])
        keyboard.start = MagicMock(side_effect=TerminalError("not a tty"))

        with pytest.raises(TerminalError):
            loop.run()

        assert keyboard.stopped and display.stopped
        assert not display.started

    def test_teardown_error_still_restores_keyboard(self):
        loop, _, keyboard, display = _make_loop([KeyEvent("q")], [])
        display.stop = MagicMock(side_effect=TerminalError("cannot leave alt screen"))

        with pytest.raises(TerminalError):
            loop.run()

        assert keyboard.stopped

    def test_teardown_error_does_not_mask_loop_error(self):
        loop, _, keyboard, display = _make_loop([InputError("closed")], [])
        display.stop = MagicMock(side_effect=TerminalError("cannot leave alt screen"))

        with pytest.raises(InputError):
            loop.run()

        display.stop.assert_called_once()
        assert keyboard.stopped

    def test_keyboard_interrupt_is_a_clean_quit(self):
        loop, _, keyboard, display = _make_loop([KeyboardInterrupt()], [])

        loop.run()

        assert keyboard.stopped and display.stopped
