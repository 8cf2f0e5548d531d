"""Windows data source: the wmic command line tool."""

import subprocess

from usbvolumes.core.errors import EnumerationError
from usbvolumes.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

NAMESPACE = "\\\\root\\cimv2"
NODE = "127.0.0.1"


class WmicSource:
    """Runs filtered wmic queries and returns their list-format output."""

    def __init__(self, executable: str = "wmic") -> None:
        self.executable = executable

    def build_command(
        self,
        wmi_class: str,
        where: str,
        *,
        get: list[str] | None = None,
        result_class: str | None = None,
    ) -> list[str]:
        """Build the wmic argument list for one query."""
        command = [
            self.executable,
            f"/NAMESPACE:{NAMESPACE}",
            f"/NODE:{NODE}",
            "PATH",
            wmi_class,
            "WHERE",
            f"({where})",
        ]
        if result_class:
            command.extend(["ASSOC:list", f"/RESULTCLASS:{result_class}"])
        else:
            command.extend(["GET", ",".join(get or []), "/FORMAT:list"])
        return command

    def query(
        self,
        wmi_class: str,
        where: str,
        *,
        get: list[str] | None = None,
        result_class: str | None = None,
    ) -> str:
        """Run a query and return its raw output.

        Output is decoded without newline translation; wmic terminates lines
        with ``\\r\\r\\n`` and the record parser relies on that.
        """
        command = self.build_command(
            wmi_class, where, get=get, result_class=result_class
        )
        logger.debug("running_wmic", command=" ".join(command))

        try:
            result = subprocess.run(command, capture_output=True, check=True)
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode(errors="replace").strip() if e.stderr else ""
            raise EnumerationError(
                "wmic",
                "query",
                stderr or f"exit status {e.returncode}",
                {"wmi_class": wmi_class, "where": where, "returncode": e.returncode},
            ) from e
        except OSError as e:
            raise EnumerationError(
                "wmic", "query", e, {"wmi_class": wmi_class, "where": where}
            ) from e

        return result.stdout.decode(errors="replace")
