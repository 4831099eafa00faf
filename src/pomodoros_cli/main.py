"""Main entry point for Pomodoros CLI."""

import typer

from pomodoros_cli import __version__
from pomodoros_cli.commands import config, timer
from pomodoros_cli.utils.typer_helpers import SuggestingGroup
from pomodoros_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pomodoros",
    cls=SuggestingGroup,
    help="A terminal Pomodoro timer with a live dashboard",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(config.app, name="config", help="Configuration management")
app.command("start")(timer.start_timer)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]Pomodoros CLI[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """A terminal Pomodoro timer with a live dashboard."""


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Pomodoros CLI[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
