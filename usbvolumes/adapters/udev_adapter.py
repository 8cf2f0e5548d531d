"""Linux data sources: the udev device registry and findmnt."""

import logging
import subprocess
from typing import TYPE_CHECKING

from usbvolumes.core.errors import EnumerationError
from usbvolumes.core.structlog_logger import get_struct_logger


if TYPE_CHECKING:
    import pyudev

    from usbvolumes.models import RawRecord


logger = get_struct_logger(__name__)


class UdevSource:
    """Reads device properties from udev through pyudev."""

    def __init__(self, context: "pyudev.Context | None" = None) -> None:
        self._context = context

    @property
    def context(self) -> "pyudev.Context":
        """Get or create the pyudev context."""
        if self._context is None:
            try:
                # Import pyudev only on Linux
                import pyudev

                self._context = pyudev.Context()
            except Exception as e:
                raise EnumerationError("udev", "open_context", e) from e
        return self._context

    def list_records(self, subsystem: str) -> list["RawRecord"]:
        """Return the udev properties of every device in ``subsystem``."""
        try:
            records = [
                dict(device.properties.items())
                for device in self.context.list_devices(subsystem=subsystem)
            ]
        except EnumerationError:
            raise
        except Exception as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.error(
                "udev_listing_failed",
                subsystem=subsystem,
                error=str(e),
                exc_info=exc_info,
            )
            raise EnumerationError(
                "udev", "list_devices", e, {"subsystem": subsystem}
            ) from e

        logger.debug("udev_records_listed", subsystem=subsystem, count=len(records))
        return records


class FindmntLookup:
    """Looks up the filesystem target of a block device with findmnt."""

    def __init__(self, findmnt_path: str = "findmnt") -> None:
        self.findmnt_path = findmnt_path

    def lookup(self, device_path: str) -> str:
        """Return ``findmnt --json`` output for ``device_path``.

        findmnt exits with status 1 and prints nothing when the source is not
        mounted; that case is returned as an empty string.
        """
        try:
            result = subprocess.run(
                [self.findmnt_path, "--json", "--source", device_path],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise EnumerationError(
                "findmnt", "lookup", e, {"device_path": device_path}
            ) from e

        if result.returncode != 0:
            if result.returncode == 1 and not result.stdout.strip():
                logger.debug("device_not_mounted", device_path=device_path)
                return ""
            raise EnumerationError(
                "findmnt",
                "lookup",
                result.stderr.strip() or f"exit status {result.returncode}",
                {"device_path": device_path, "returncode": result.returncode},
            )

        return result.stdout
