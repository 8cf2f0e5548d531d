"""Adapters for the OS data sources queried by the platform listers."""

from .system_profiler_adapter import SystemProfilerSource
from .udev_adapter import FindmntLookup, UdevSource
from .wmic_adapter import WmicSource


__all__ = [
    "FindmntLookup",
    "SystemProfilerSource",
    "UdevSource",
    "WmicSource",
]
