"""Main CLI application for usbvolumes."""

import platform
from importlib.metadata import distribution
from typing import Annotated

import typer

from usbvolumes.cli.commands import list_command
from usbvolumes.cli.decorators import handle_errors
from usbvolumes.config import UsbVolumesSettings, load_settings
from usbvolumes.core.logging import setup_logging


__all__ = ["app", "main", "__version__"]


__version__ = distribution("usbvolumes").version


class AppContext:
    """Application context for storing shared state."""

    def __init__(self, settings: UsbVolumesSettings, system_name: str) -> None:
        self.settings = settings
        self.system_name = system_name


app = typer.Typer(
    name="usbvolumes",
    help="List USB storage devices and where they are mounted.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"usbvolumes {__version__}")
        raise typer.Exit()


@app.callback()
@handle_errors
def main_callback(
    ctx: typer.Context,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", "-l", help="Override the configured log level"),
    ] = None,
    json_logs: Annotated[
        bool, typer.Option("--json-logs", help="Write log lines as JSON")
    ] = False,
    config_file: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to a YAML config file")
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """List USB storage devices and where they are mounted."""
    # Logging has to be in place before the config file is read
    setup_logging(log_level_name=log_level or "WARNING", json_logs=json_logs)
    settings = load_settings(config_file)
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level.upper()})
    setup_logging(log_level_name=settings.log_level, json_logs=json_logs)
    ctx.obj = AppContext(settings=settings, system_name=platform.system())


app.command(name="list")(list_command)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
