"""Command-line interface for usbvolumes."""

from .app import app, main


__all__ = ["app", "main"]
