"""Linux lister: joins udev USB and block records on their short serial."""

import json

from usbvolumes.config.models import LinuxMountStrategy, UsbVolumesSettings
from usbvolumes.core.structlog_logger import StructlogMixin
from usbvolumes.models import RawRecord, USBDevice
from usbvolumes.protocols import MountLookupProtocol, UdevSourceProtocol


SERIAL_KEY = "ID_SERIAL_SHORT"
LABEL_KEY = "ID_FS_LABEL"
DEVNAME_KEY = "DEVNAME"


def parse_findmnt_target(document: str) -> str | None:
    """Return the first filesystem target from ``findmnt --json`` output.

    Anything that is not a well formed document with at least one target
    yields None.
    """
    try:
        data = json.loads(document)
        target = data["filesystems"][0]["target"]
    except (ValueError, KeyError, IndexError, TypeError):
        return None
    return target if isinstance(target, str) and target.strip() else None


class LinuxDeviceLister(StructlogMixin):
    """List USB storage devices on Linux using the udev registry."""

    def __init__(
        self,
        settings: UsbVolumesSettings | None = None,
        udev: UdevSourceProtocol | None = None,
        mount_lookup: MountLookupProtocol | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or UsbVolumesSettings()
        if udev is None:
            from usbvolumes.adapters.udev_adapter import UdevSource

            udev = UdevSource()
        if mount_lookup is None:
            from usbvolumes.adapters.udev_adapter import FindmntLookup

            mount_lookup = FindmntLookup(self.settings.findmnt_path)
        self.udev = udev
        self.mount_lookup = mount_lookup

    def list_devices(self) -> list[USBDevice]:
        devices = self._with_serial(self.udev.list_records("usb"))
        drives = self._with_serial(self.udev.list_records("block"))
        self.logger.debug(
            "linux_records_listed", usb_count=len(devices), block_count=len(drives)
        )

        results: list[USBDevice] = []
        for device in devices:
            serial = str(device[SERIAL_KEY])
            drive = next((d for d in drives if d[SERIAL_KEY] == serial), None)
            if drive is None:
                self.logger.debug("no_block_device_for_serial", serial=serial)
                continue

            mount_point = self.resolve_mount_point(drive)
            if not mount_point:
                self.logger.debug("block_device_not_mounted", serial=serial)
                continue

            results.append(USBDevice(serial_number=serial, mount_point=mount_point))

        return results

    def resolve_mount_point(self, drive: RawRecord) -> str | None:
        """Resolve the mount point of a matched block record."""
        if self.settings.linux_mount_strategy == LinuxMountStrategy.FINDMNT:
            devname = drive.get(DEVNAME_KEY)
            if not devname:
                return None
            target = parse_findmnt_target(self.mount_lookup.lookup(str(devname)))
            if target is None:
                self.logger.debug("no_filesystem_target", devname=devname)
            return target

        label = drive.get(LABEL_KEY)
        return str(label) if label and str(label).strip() else None

    @staticmethod
    def _with_serial(records: list[RawRecord]) -> list[RawRecord]:
        return [r for r in records if str(r.get(SERIAL_KEY) or "").strip()]
