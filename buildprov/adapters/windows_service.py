"""
ServiceManager backed by the Windows service control manager.

Lookups and status polling go through psutil; stop and reconfigure requests
are issued with sc.exe.
"""
import subprocess
from typing import Mapping, Optional, Sequence

import psutil

from buildprov.internal.constants import SERVICE_CONTROL, SERVICE_CONTROL_TIMEOUT_SEC
from buildprov.internal.logging import get_logger
from buildprov.kernel.contracts import ServiceHandle, ServiceManager
from buildprov.kernel.errors import ServiceOperationError

logger = get_logger(__name__)

# sc.exe returns this when asked to stop a service that is not running
ERROR_SERVICE_NOT_ACTIVE = 1062

START_TYPES = {
    "auto": "auto",
    "automatic": "auto",
    "delayed-auto": "delayed-auto",
    "automaticdelayedstart": "delayed-auto",
    "manual": "demand",
    "demand": "demand",
    "disabled": "disabled",
    "boot": "boot",
    "system": "system",
}

STATUS_VERBS = {
    "running": "start",
    "stopped": "stop",
    "paused": "pause",
}


def _redact(command: Sequence[str]) -> list[str]:
    """Hide the value following `password=` so it never reaches logs or errors."""
    shown = list(command)
    for i, part in enumerate(shown[:-1]):
        if part == "password=":
            shown[i + 1] = "***"
    return shown


class WindowsServiceManager(ServiceManager):

    def __init__(self, timeout: float = SERVICE_CONTROL_TIMEOUT_SEC):
        self.timeout = timeout

    def _win_service(self, name: str):
        if not psutil.WINDOWS:
            raise ServiceOperationError("Windows services are only available on Windows")
        return psutil.win_service_get(name)

    def _sc(self, *args: str, allowed: Sequence[int] = (0,)) -> None:
        command = [SERVICE_CONTROL, *args]
        shown = " ".join(_redact(command))
        try:
            result = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise ServiceOperationError(f"'{shown}' did not finish within {self.timeout}s") from e
        except OSError as e:
            raise ServiceOperationError(f"Could not run {SERVICE_CONTROL}: {e}") from e

        if result.returncode not in allowed:
            output = (result.stdout or result.stderr or "").strip()
            raise ServiceOperationError(f"'{shown}' failed with exit code {result.returncode}: {output}")

    def get(self, name: str) -> Optional[ServiceHandle]:
        try:
            service = self._win_service(name)
            info = service.as_dict()
        except psutil.NoSuchProcess:
            return None
        except psutil.Error as e:
            raise ServiceOperationError(f"Could not look up service [{name}]: {e}") from e

        return ServiceHandle(
            name=info["name"],
            display_name=info["display_name"],
            status=info["status"],
            start_type=info.get("start_type"),
        )

    def status(self, name: str) -> str:
        try:
            return self._win_service(name).status()
        except psutil.Error as e:
            raise ServiceOperationError(f"Could not query service [{name}]: {e}") from e

    def stop(self, name: str) -> None:
        self._sc("stop", name, allowed=(0, ERROR_SERVICE_NOT_ACTIVE))

    def configure(self, name: str, arguments: Mapping[str, str]) -> None:
        unknown = set(arguments) - {"start_type", "display_name", "description", "username", "password", "status"}
        if unknown:
            raise ServiceOperationError(f"Unsupported service arguments: {', '.join(sorted(unknown))}")

        config: list[str] = []
        if "start_type" in arguments:
            start_type = START_TYPES.get(str(arguments["start_type"]).lower())
            if start_type is None:
                raise ServiceOperationError(f"Unknown start type: {arguments['start_type']}")
            config += ["start=", start_type]
        if "display_name" in arguments:
            config += ["displayname=", str(arguments["display_name"])]
        if "username" in arguments:
            config += ["obj=", str(arguments["username"])]
        if "password" in arguments:
            config += ["password=", str(arguments["password"])]

        verb = None
        if "status" in arguments:
            verb = STATUS_VERBS.get(str(arguments["status"]).lower())
            if verb is None:
                raise ServiceOperationError(f"Unknown service status: {arguments['status']}")

        if config:
            logger.debug("Reconfiguring service", service=name, options=config[::2])
            self._sc("config", name, *config)
        if "description" in arguments:
            self._sc("description", name, str(arguments["description"]))
        if verb:
            self._sc(verb, name)
