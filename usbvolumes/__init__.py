"""usbvolumes - list USB storage devices and where they are mounted."""

from importlib.metadata import distribution

from .core.errors import ConfigError, EnumerationError, UsbVolumesError
from .core.logging import configure_default_logging
from .devices import get_device_lister, list_devices, select_device_lister
from .models import USBDevice


__version__ = distribution(__package__ or "usbvolumes").version

configure_default_logging()

__all__ = [
    "ConfigError",
    "EnumerationError",
    "USBDevice",
    "UsbVolumesError",
    "__version__",
    "get_device_lister",
    "list_devices",
    "select_device_lister",
]
