"""Protocol definition for platform device listers."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from usbvolumes.models import USBDevice


@runtime_checkable
class DeviceListerProtocol(Protocol):
    """Protocol for listing USB storage devices and their mount points.

    Each platform provides one implementation. Implementations enumerate
    afresh on every call and never cache results.
    """

    def list_devices(self) -> list["USBDevice"]:
        """List currently attached USB storage devices.

        Returns:
            One entry per device that has both a serial number and a mounted
            volume, possibly empty

        Raises:
            EnumerationError: If the OS data source cannot be queried
        """
        ...
