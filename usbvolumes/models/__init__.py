"""Models for usbvolumes."""

from .base import UsbVolumesBaseModel
from .device import ContainerNode, DeviceNode, RawRecord, TreeNode, USBDevice


__all__ = [
    "ContainerNode",
    "DeviceNode",
    "RawRecord",
    "TreeNode",
    "USBDevice",
    "UsbVolumesBaseModel",
]
