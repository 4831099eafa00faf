"""Full-screen dashboard for the Pomodoro timer."""

from __future__ import annotations

from rich import box
from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.text import Text

from .exceptions import RenderError, TerminalError
from .state import TimerSnapshot

SHORTCUTS = (
    ("␣ Space", "Start/Pause"),
    ("⏭ n", "Skip"),
    ("⟲ r", "Reset"),
    ("q", "Quit"),
)


def _panel(renderable, title: str) -> Panel:
    return Panel(renderable, title=title, title_align="center", box=box.ROUNDED)


class TimerDisplay:
    """Draws timer snapshots inside a rich Live alternate screen."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._live: Live | None = None

    def create_layout(self, snapshot: TimerSnapshot) -> Layout:
        """Create the dashboard layout for one frame."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=5),
            Layout(name="progress", size=4),
            Layout(name="timer", minimum_size=7),
            Layout(name="footer", size=3),
        )

        layout["header"].update(
            _panel(Align.center(self._create_header_text(snapshot), vertical="middle"), "Status")
        )
        layout["progress"].update(_panel(self._create_progress(snapshot), "Progress"))
        layout["timer"].update(
            _panel(Align.center(self._create_timer_content(snapshot), vertical="middle"), "Timer")
        )
        layout["footer"].update(_panel(self._create_footer_text(), "Shortcuts"))

        return layout

    def _create_header_text(self, snapshot: TimerSnapshot) -> Text:
        accent = snapshot.color
        text = Text(justify="center")
        text.append("● ", style=accent)
        text.append(snapshot.phase_name, style=f"bold {accent}")
        text.append("  ·  Completed ")
        text.append(str(snapshot.completed_focus_count), style="bold grey70")
        return text

    def _create_progress(self, snapshot: TimerSnapshot) -> Group:
        percent = int(snapshot.progress_ratio * 100)
        label = Text(
            f"{snapshot.formatted_remaining}  ·  {percent}%",
            style="white",
            justify="center",
        )
        bar = ProgressBar(
            total=100,
            completed=percent,
            style="grey23",
            complete_style=f"bold {snapshot.color}",
            finished_style=f"bold {snapshot.color}",
        )
        return Group(label, bar)

    def _create_timer_content(self, snapshot: TimerSnapshot) -> Group:
        status = "⏱ Running" if snapshot.is_running else "⏸ Paused"
        return Group(
            Text(snapshot.formatted_remaining, style="bold white", justify="center"),
            Text(status, style="grey62", justify="center"),
        )

    def _create_footer_text(self) -> Text:
        hints = "  ·  ".join(f"{key}: {action}" for key, action in SHORTCUTS)
        return Text(hints, justify="center")

    def start(self) -> None:
        """Switch to the alternate screen."""
        if self._live is not None:
            return
        # stdout stays unproxied so the completion bell reaches the terminal
        live = Live(
            console=self.console,
            screen=True,
            auto_refresh=False,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        try:
            live.start()
        except OSError as e:
            raise TerminalError(f"failed to enter alternate screen: {e}") from e
        self._live = live

    def render(self, snapshot: TimerSnapshot) -> None:
        """Draw *snapshot* immediately."""
        if self._live is None:
            raise RenderError("display has not been started")
        try:
            self._live.update(self.create_layout(snapshot), refresh=True)
        except OSError as e:
            raise RenderError(f"failed to draw dashboard: {e}") from e

    def stop(self) -> None:
        """Leave the alternate screen and show the cursor again."""
        if self._live is None:
            return
        live, self._live = self._live, None
        try:
            live.stop()
        except OSError as e:
            raise TerminalError(f"failed to leave alternate screen: {e}") from e
