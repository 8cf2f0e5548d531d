"""Protocol definitions for the raw OS data sources.

These are the seams between the listers and the operating system. Adapters in
``usbvolumes.adapters`` implement them; tests substitute in-memory fakes.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from usbvolumes.models import RawRecord


@runtime_checkable
class UdevSourceProtocol(Protocol):
    """Linux device registry."""

    def list_records(self, subsystem: str) -> list["RawRecord"]:
        """Return the property mapping of every device in a subsystem.

        Args:
            subsystem: udev subsystem name, e.g. "usb" or "block"

        Raises:
            EnumerationError: If the registry cannot be read
        """
        ...


@runtime_checkable
class MountLookupProtocol(Protocol):
    """Linux per-device filesystem target lookup."""

    def lookup(self, device_path: str) -> str:
        """Return the raw JSON document describing where a device is mounted.

        An unmounted device yields an empty string.

        Raises:
            EnumerationError: If the lookup tool cannot be run
        """
        ...


@runtime_checkable
class SystemProfilerSourceProtocol(Protocol):
    """macOS hardware inventory."""

    def query(self, data_types: list[str]) -> list[dict[str, Any]]:
        """Run one inventory query and return its top-level sections.

        Raises:
            EnumerationError: If the query fails or its output is unreadable
        """
        ...


@runtime_checkable
class WmicSourceProtocol(Protocol):
    """Windows hardware inventory queried through wmic."""

    def query(
        self,
        wmi_class: str,
        where: str,
        *,
        get: list[str] | None = None,
        result_class: str | None = None,
    ) -> str:
        """Run one filtered query and return its ``/FORMAT:list`` text.

        Args:
            wmi_class: Class to query, e.g. "Win32_DiskDrive"
            where: WQL condition without the surrounding parentheses
            get: Properties to return for a plain query
            result_class: Associated class to return for an ASSOC query

        Raises:
            EnumerationError: If wmic cannot be run or fails
        """
        ...
