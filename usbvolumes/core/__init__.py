"""Core infrastructure for usbvolumes: errors and logging."""
