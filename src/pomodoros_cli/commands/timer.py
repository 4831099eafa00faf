"""Start command - run the Pomodoro dashboard."""

import typer

from pomodoros_cli.models.timer import (
    InteractiveLoop,
    PomodoroTimer,
    TimerDisplay,
    get_keyboard_handler,
)
from pomodoros_cli.services.config_service import get_config_service
from pomodoros_cli.utils.ui.console import get_console

from .decorators import command_wrapper


@command_wrapper
def start_timer(
    focus_minutes: int | None = typer.Option(
        None, "--focus", "-f", min=0, help="Focus duration in minutes [default: 25]"
    ),
    short_break_minutes: int | None = typer.Option(
        None, "--short", "-s", min=0, help="Short break duration in minutes [default: 5]"
    ),
    long_break_minutes: int | None = typer.Option(
        None, "--long", "-l", min=0, help="Long break duration in minutes [default: 15]"
    ),
    long_break_every: int | None = typer.Option(
        None,
        "--every",
        "-e",
        min=1,
        help="Take a long break after every N focus sessions [default: 4]",
    ),
    mute: bool | None = typer.Option(
        None, "--mute/--no-mute", help="Mute the terminal bell"
    ),
    tick_ms: int | None = typer.Option(
        None, "--tick", min=1, help="Tick interval in milliseconds [default: 200]"
    ),
) -> None:
    """Start the Pomodoro timer dashboard."""
    config = get_config_service().build_timer_config(
        focus_minutes=focus_minutes,
        short_break_minutes=short_break_minutes,
        long_break_minutes=long_break_minutes,
        long_break_every=long_break_every,
        mute=mute,
        tick_ms=tick_ms,
    )

    console = get_console()
    loop = InteractiveLoop(
        timer=PomodoroTimer(config),
        keyboard=get_keyboard_handler(),
        display=TimerDisplay(console),
        tick_interval=config.tick_interval,
        frame_interval=config.frame_interval,
    )
    final = loop.run()

    console.print(
        f"[bold]Completed focus sessions:[/bold] [cyan]{final.completed_focus_count}[/cyan]"
    )
