"""Protocol definitions for usbvolumes listers and data sources.

This package provides standard Protocol classes that define the interfaces
between the platform listers and the OS data sources. These protocols use
Python's typing.Protocol system with the @runtime_checkable decorator to
enable both static type checking and runtime isinstance() checks.
"""

from .device_lister_protocol import DeviceListerProtocol
from .source_protocols import (
    MountLookupProtocol,
    SystemProfilerSourceProtocol,
    UdevSourceProtocol,
    WmicSourceProtocol,
)


__all__ = [
    "DeviceListerProtocol",
    "MountLookupProtocol",
    "SystemProfilerSourceProtocol",
    "UdevSourceProtocol",
    "WmicSourceProtocol",
]
