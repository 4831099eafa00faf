"""Output formatters for Pomodoros CLI."""

from __future__ import annotations

from rich.table import Table

from .console import get_console, get_error_console


def format_error(message: str) -> None:
    """Format and display an error message on stderr."""
    get_error_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")


def format_settings_table(settings: dict[str, object], title: str) -> None:
    """Display a two-column table of setting names and values."""
    table = Table(title=title, show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")

    for key, value in settings.items():
        if isinstance(value, bool):
            shown = "[green]yes[/green]" if value else "[dim]no[/dim]"
        else:
            shown = str(value)
        table.add_row(key, shown)

    get_console().print(table)
