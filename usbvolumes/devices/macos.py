"""macOS lister: walks the system_profiler USB and storage trees.

system_profiler reports both data types as nested ``_items`` lists mixing
plain groupings (buses, hubs, volume groups) with device records. Both trees
are flattened with the same depth-first walk and then joined on the BSD name
of the USB device's first media entry.
"""

from collections.abc import Callable, Iterable
from typing import Any

from usbvolumes.config.models import UsbVolumesSettings
from usbvolumes.core.structlog_logger import StructlogMixin
from usbvolumes.models import ContainerNode, DeviceNode, RawRecord, TreeNode, USBDevice
from usbvolumes.protocols import SystemProfilerSourceProtocol


USB_DATA_TYPE = "SPUSBDataType"
STORAGE_DATA_TYPE = "SPStorageDataType"
DATA_TYPES = [USB_DATA_TYPE, STORAGE_DATA_TYPE]

ITEMS_KEY = "_items"
DATA_TYPE_KEY = "_dataType"

Classifier = Callable[[RawRecord], TreeNode | None]


def _classify(record: RawRecord, device_key: str) -> TreeNode | None:
    items = record.get(ITEMS_KEY)
    children = tuple(items) if isinstance(items, list) else None
    if device_key in record:
        return DeviceNode(record=record, children=children or ())
    if children is not None:
        return ContainerNode(children=children)
    return None


def classify_usb_node(record: RawRecord) -> TreeNode | None:
    """Classify a USB tree node: devices carry ``serial_num``."""
    return _classify(record, "serial_num")


def classify_storage_node(record: RawRecord) -> TreeNode | None:
    """Classify a storage tree node: volumes carry ``bsd_name``."""
    return _classify(record, "bsd_name")


def collect_devices(items: Iterable[Any], classify: Classifier) -> list[RawRecord]:
    """Flatten a system_profiler tree into its device records, depth first.

    Every node with children is descended into regardless of depth; nodes
    that are neither devices nor containers contribute nothing.
    """
    collected: list[RawRecord] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        node = classify(item)
        if isinstance(node, DeviceNode):
            collected.append(node.record)
            collected.extend(collect_devices(node.children, classify))
        elif isinstance(node, ContainerNode):
            collected.extend(collect_devices(node.children, classify))
    return collected


def select_section(sections: list[dict[str, Any]], data_type: str) -> list[Any]:
    """Return the top-level ``_items`` of the section tagged ``data_type``."""
    for section in sections:
        if isinstance(section, dict) and section.get(DATA_TYPE_KEY) == data_type:
            return list(section.get(ITEMS_KEY) or [])
    return []


def first_media_bsd_name(device: RawRecord) -> str | None:
    """Return the BSD name of the device's first media entry, if any.

    Further media entries on the same device are not consulted.
    """
    media = device.get("Media")
    if not isinstance(media, list) or not media:
        return None
    first = media[0]
    if not isinstance(first, dict):
        return None
    bsd_name = first.get("bsd_name")
    return str(bsd_name) if bsd_name else None


class MacOSDeviceLister(StructlogMixin):
    """List USB storage devices on macOS using system_profiler."""

    def __init__(
        self,
        settings: UsbVolumesSettings | None = None,
        profiler: SystemProfilerSourceProtocol | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or UsbVolumesSettings()
        if profiler is None:
            from usbvolumes.adapters.system_profiler_adapter import (
                SystemProfilerSource,
            )

            profiler = SystemProfilerSource(
                executable=self.settings.system_profiler_path,
                detail_level=self.settings.system_profiler_detail_level,
            )
        self.profiler = profiler

    def list_devices(self) -> list[USBDevice]:
        sections = self.profiler.query(DATA_TYPES)

        devices = collect_devices(
            select_section(sections, USB_DATA_TYPE), classify_usb_node
        )
        disks = collect_devices(
            select_section(sections, STORAGE_DATA_TYPE), classify_storage_node
        )
        self.logger.debug(
            "macos_records_collected", usb_count=len(devices), disk_count=len(disks)
        )

        results: list[USBDevice] = []
        for device in devices:
            serial = str(device.get("serial_num") or "")
            bsd_name = first_media_bsd_name(device)
            if not serial.strip() or bsd_name is None:
                continue

            mount_point = self._mount_point_for(bsd_name, disks)
            if not mount_point:
                self.logger.debug("volume_not_mounted", bsd_name=bsd_name)
                continue

            results.append(USBDevice(serial_number=serial, mount_point=mount_point))

        return results

    @staticmethod
    def _mount_point_for(bsd_name: str, disks: list[RawRecord]) -> str | None:
        disk = next((d for d in disks if d.get("bsd_name") == bsd_name), None)
        if disk is None:
            return None
        mount_point = disk.get("mount_point")
        return str(mount_point) if mount_point and str(mount_point).strip() else None
