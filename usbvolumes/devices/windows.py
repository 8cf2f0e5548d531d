"""Windows lister: chains wmic queries from disk drive to logical disk."""

from usbvolumes.config.models import UsbVolumesSettings
from usbvolumes.core.structlog_logger import StructlogMixin
from usbvolumes.models import RawRecord, USBDevice
from usbvolumes.protocols import WmicSourceProtocol


DISK_DRIVE = "Win32_DiskDrive"
DISK_PARTITION = "Win32_DiskPartition"
LOGICAL_DISK = "Win32_LogicalDisk"


def wql_escape(value: str) -> str:
    """Escape a string for use inside a quoted WQL literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def parse_wmic_list(data: str) -> list[RawRecord]:
    """Parse wmic list-format output into one mapping per record.

    Records are separated by a blank line and hold one ``Key=Value`` pair per
    line. wmic ends lines with ``\\r\\r\\n``; all line endings are normalized
    first. Segments with fewer than two lines are not records and are
    dropped.
    """
    text = data.replace("\r\r\n", "\n").replace("\r\n", "\n")
    results: list[RawRecord] = []
    for block in text.split("\n\n"):
        lines = [line for line in block.split("\n") if line.strip()]
        if len(lines) < 2:
            continue
        record: RawRecord = {}
        for line in lines:
            key, _, value = line.partition("=")
            record[key.strip()] = value.strip()
        results.append(record)
    return results


class WindowsDeviceLister(StructlogMixin):
    """List USB storage devices on Windows using wmic.

    Each drive is resolved in three dependent steps, one drive after
    another: USB disk drive, its first partition, that partition's first
    logical disk. The logical disk's DeviceID (e.g. ``E:``) is the mount
    point.
    """

    def __init__(
        self,
        settings: UsbVolumesSettings | None = None,
        wmic: WmicSourceProtocol | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or UsbVolumesSettings()
        if wmic is None:
            from usbvolumes.adapters.wmic_adapter import WmicSource

            wmic = WmicSource(self.settings.wmic_path)
        self.wmic = wmic

    def list_devices(self) -> list[USBDevice]:
        drives = self.get_drives()
        self.logger.debug("windows_usb_drives_listed", count=len(drives))

        results: list[USBDevice] = []
        for drive in drives:
            device = self._resolve_drive(drive)
            if device is not None:
                results.append(device)
        return results

    def _resolve_drive(self, drive: RawRecord) -> USBDevice | None:
        device_id = drive.get("DeviceID")
        serial = drive.get("SerialNumber")
        if not device_id or not serial:
            return None

        partitions = self.get_partitions(device_id)
        if not partitions:
            self.logger.debug("no_partition_for_drive", device_id=device_id)
            return None

        partition_id = partitions[0].get("DeviceID")
        if not partition_id:
            return None

        disks = self.get_logical_disks(partition_id)
        if not disks:
            self.logger.debug("no_logical_disk_for_partition", partition_id=partition_id)
            return None

        mount_point = disks[0].get("DeviceID")
        if not mount_point:
            return None

        return USBDevice(serial_number=serial, mount_point=mount_point)

    def get_drives(self) -> list[RawRecord]:
        """Query all disk drives attached over USB."""
        data = self.wmic.query(
            DISK_DRIVE, "InterfaceType='USB'", get=["DeviceID", "SerialNumber"]
        )
        return parse_wmic_list(data)

    def get_partitions(self, device_id: str) -> list[RawRecord]:
        """Query the partitions associated with a disk drive."""
        data = self.wmic.query(
            DISK_DRIVE,
            f"DeviceID='{wql_escape(device_id)}'",
            result_class=DISK_PARTITION,
        )
        return parse_wmic_list(data)

    def get_logical_disks(self, partition_id: str) -> list[RawRecord]:
        """Query the logical disks associated with a partition."""
        data = self.wmic.query(
            DISK_PARTITION,
            f"DeviceID='{wql_escape(partition_id)}'",
            result_class=LOGICAL_DISK,
        )
        return parse_wmic_list(data)
