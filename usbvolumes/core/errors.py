"""Error types for usbvolumes.

Only infrastructure failures are raised. A device that cannot be matched to a
mounted volume is filtered from the result, never reported as an error.
"""

from typing import Any


class UsbVolumesError(Exception):
    """Base exception for all usbvolumes errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}


class EnumerationError(UsbVolumesError):
    """An OS data source could not be queried.

    Raised when an enumeration utility is missing, exits with a failure
    status, or returns output that cannot be read at all.
    """

    def __init__(
        self,
        source: str,
        operation: str,
        error: Exception | str,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.source = source
        self.operation = operation
        self.original_error = error if isinstance(error, Exception) else None
        super().__init__(
            f"{source} operation '{operation}' failed: {error}", context=context
        )


class ConfigError(UsbVolumesError):
    """Configuration could not be loaded or validated."""


__all__ = ["ConfigError", "EnumerationError", "UsbVolumesError"]
