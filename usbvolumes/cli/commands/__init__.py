"""CLI commands for usbvolumes."""

from .devices import list_command


__all__ = ["list_command"]
