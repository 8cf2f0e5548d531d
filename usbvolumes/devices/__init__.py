"""Platform listers and the selector that binds one to this host."""

import platform
from functools import lru_cache

from usbvolumes.config.models import UsbVolumesSettings
from usbvolumes.config.user_config import load_settings
from usbvolumes.core.structlog_logger import get_struct_logger
from usbvolumes.models import USBDevice
from usbvolumes.protocols import DeviceListerProtocol

from .linux import LinuxDeviceLister
from .macos import MacOSDeviceLister
from .windows import WindowsDeviceLister


logger = get_struct_logger(__name__)

# platform.system() name -> lister; anything else is treated as Linux
LISTERS: dict[str, type[DeviceListerProtocol]] = {
    "Windows": WindowsDeviceLister,
    "Darwin": MacOSDeviceLister,
}
DEFAULT_LISTER: type[DeviceListerProtocol] = LinuxDeviceLister


def select_device_lister(
    system_name: str, settings: UsbVolumesSettings | None = None
) -> DeviceListerProtocol:
    """Create the lister for an operating system name."""
    lister_cls = LISTERS.get(system_name, DEFAULT_LISTER)
    logger.debug(
        "device_lister_selected", system=system_name, lister=lister_cls.__name__
    )
    return lister_cls(settings=settings)  # type: ignore[call-arg]


@lru_cache(maxsize=1)
def get_device_lister() -> DeviceListerProtocol:
    """Return the lister bound to this host, created once per process."""
    return select_device_lister(platform.system(), load_settings())


def list_devices() -> list[USBDevice]:
    """List currently attached USB storage devices and their mount points.

    Raises:
        EnumerationError: If the host's device inventory cannot be queried
    """
    return get_device_lister().list_devices()


__all__ = [
    "LinuxDeviceLister",
    "MacOSDeviceLister",
    "WindowsDeviceLister",
    "get_device_lister",
    "list_devices",
    "select_device_lister",
]
