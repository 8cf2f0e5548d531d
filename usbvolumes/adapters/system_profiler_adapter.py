"""macOS data source: system_profiler XML output."""

import logging
import plistlib
import subprocess
from typing import Any

from usbvolumes.core.errors import EnumerationError
from usbvolumes.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)


class SystemProfilerSource:
    """Runs system_profiler once for a set of data types."""

    def __init__(
        self,
        executable: str = "/usr/sbin/system_profiler",
        detail_level: str = "mini",
    ) -> None:
        self.executable = executable
        self.detail_level = detail_level

    def query(self, data_types: list[str]) -> list[dict[str, Any]]:
        """Return the parsed sections for ``data_types``, one per data type."""
        command = [
            self.executable,
            "-xml",
            "-detailLevel",
            self.detail_level,
            *data_types,
        ]
        logger.debug("running_system_profiler", command=" ".join(command))

        try:
            result = subprocess.run(command, capture_output=True, check=True)
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode(errors="replace").strip() if e.stderr else ""
            raise EnumerationError(
                "system_profiler",
                "query",
                stderr or f"exit status {e.returncode}",
                {"data_types": data_types, "returncode": e.returncode},
            ) from e
        except OSError as e:
            raise EnumerationError(
                "system_profiler", "query", e, {"data_types": data_types}
            ) from e

        try:
            sections = plistlib.loads(result.stdout)
        except (plistlib.InvalidFileException, ValueError) as e:
            exc_info = logging.getLogger().isEnabledFor(logging.DEBUG)
            logger.error("invalid_system_profiler_output", exc_info=exc_info)
            raise EnumerationError(
                "system_profiler", "parse", e, {"data_types": data_types}
            ) from e

        if not isinstance(sections, list):
            raise EnumerationError(
                "system_profiler",
                "parse",
                f"expected a list of sections, got {type(sections).__name__}",
                {"data_types": data_types},
            )

        return sections
