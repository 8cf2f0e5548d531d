"""Device listing command implementation."""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from usbvolumes.cli.decorators import handle_errors
from usbvolumes.core.structlog_logger import get_struct_logger
from usbvolumes.models import USBDevice


logger = get_struct_logger(__name__)


class OutputFormat(str, Enum):
    """Output formats for the list command."""

    TEXT = "text"
    JSON = "json"


def render_table(devices: list[USBDevice]) -> Table:
    """Build a rich table of devices."""
    table = Table(title="USB Storage Devices")
    table.add_column("Serial Number", style="cyan")
    table.add_column("Mount Point", style="green")
    for device in devices:
        table.add_row(device.serial_number, device.mount_point)
    return table


@handle_errors
def list_command(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--output-format", "-o", help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """List attached USB storage devices and their mount points.

    Only devices with both a serial number and a mounted volume are shown.

    Examples:
        usbvolumes list

        usbvolumes list --output-format json
    """
    from usbvolumes.devices import select_device_lister

    app_ctx = ctx.obj
    lister = select_device_lister(app_ctx.system_name, app_ctx.settings)
    devices = lister.list_devices()
    logger.info("devices_listed", count=len(devices))

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps([d.to_dict() for d in devices], indent=2))
        return

    console = Console()
    if not devices:
        console.print("No USB storage devices found")
        return
    console.print(render_table(devices))
