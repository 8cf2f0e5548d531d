"""Configuration for usbvolumes."""

from .models import LinuxMountStrategy, UsbVolumesSettings
from .user_config import load_settings


__all__ = ["LinuxMountStrategy", "UsbVolumesSettings", "load_settings"]
