"""Configuration management commands."""

import typer

from pomodoros_cli.services.config_service import ConfigFile, get_config_service
from pomodoros_cli.utils.ui.console import get_console
from pomodoros_cli.utils.ui.formatters import format_info, format_settings_table, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")


@app.command("view")
@command_wrapper
def view_config() -> None:
    """View the stored timer defaults."""
    config = get_config_service().config
    format_settings_table(config.model_dump(), title="Timer defaults")


@app.command("path")
@command_wrapper
def config_path() -> None:
    """Show where the config file lives."""
    get_console().print(str(get_config_service().config_path), soft_wrap=True)


@app.command("init")
@command_wrapper
def init_config(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config file with the built-in defaults."""
    service = get_config_service()
    if service.config_path.exists() and not force:
        format_info(f"Config file already exists: {service.config_path}")
        return

    service.save_config(ConfigFile())
    format_success(f"Config written to {service.config_path}")


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Setting name (e.g. focus_minutes)"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a stored timer default."""
    updated = get_config_service().set_value(key, value)
    format_success(f"Configuration '{key}' set to '{getattr(updated, key)}'")
