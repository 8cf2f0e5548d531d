"""Device models shared by all platform listers."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from usbvolumes.models.base import UsbVolumesBaseModel


# A raw record as reported by an OS data source: udev properties, a plist
# dictionary or one wmic key/value block.
RawRecord = dict[str, Any]


class USBDevice(UsbVolumesBaseModel):
    """A USB storage device together with the mount point of its volume.

    Values are kept exactly as the OS reports them; blank values are rejected.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=False)

    serial_number: str = Field(alias="serialNumber", min_length=1)
    mount_point: str = Field(alias="mountPoint", min_length=1)

    @field_validator("serial_number", "mount_point")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


@dataclass(frozen=True)
class DeviceNode:
    """A tree node that describes a device (USB device or storage volume).

    ``children`` is kept because a device such as a hub can itself carry
    nested items.
    """

    record: RawRecord
    children: tuple[Any, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ContainerNode:
    """A tree node that only groups further nodes."""

    children: tuple[Any, ...]


TreeNode = DeviceNode | ContainerNode
