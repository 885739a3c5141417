"""
Idempotent control of OS services used by later provisioning steps.

A missing service is an expected condition. Only `stop_service` in strict
mode treats it as fatal; stop and reconfigure failures are logged and
reported through the returned ServiceOutcome.
"""
import time
from enum import Enum
from typing import Callable, Mapping

from buildprov.internal.constants import SERVICE_POLL_INTERVAL_SEC, SERVICE_STOP_TIMEOUT_SEC
from buildprov.internal.logging import get_logger
from buildprov.kernel.contracts import ServiceManager
from buildprov.kernel.errors import ServiceNotFoundError, ServiceOperationError

logger = get_logger(__name__)


class ServiceOutcome(str, Enum):
    ABSENT = "absent"
    STOPPED = "stopped"
    STOP_FAILED = "stop_failed"
    APPLIED = "applied"
    APPLY_FAILED = "apply_failed"


class ServiceController:

    def __init__(
        self,
        manager: ServiceManager,
        stop_timeout: float = SERVICE_STOP_TIMEOUT_SEC,
        poll_interval: float = SERVICE_POLL_INTERVAL_SEC,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.manager = manager
        self.stop_timeout = stop_timeout
        self.poll_interval = poll_interval
        self._sleep = sleep
        self._clock = clock

    def _wait_for_status(self, name: str, wanted: str) -> None:
        deadline = self._clock() + self.stop_timeout
        while True:
            current = self.manager.status(name)
            if current == wanted:
                return
            if self._clock() >= deadline:
                raise ServiceOperationError(
                    f"Service [{name}] did not reach '{wanted}' within {self.stop_timeout}s (last status: '{current}')"
                )
            self._sleep(self.poll_interval)

    def stop_service(self, name: str, stop_on_error: bool = False) -> ServiceOutcome:
        # Strict mode only concerns a service known to be missing, not one that cannot be queried
        try:
            service = self.manager.get(name)
        except Exception as e:
            logger.error("Failed to look up service", service=name, error=str(e))
            return ServiceOutcome.STOP_FAILED

        if service is None:
            logger.warning("Service is not found", service=name)
            if stop_on_error:
                raise ServiceNotFoundError(name)
            return ServiceOutcome.ABSENT

        logger.info("Try to stop service", service=name, status=service.status)
        try:
            self.manager.stop(name)
            self._wait_for_status(name, "stopped")
        except Exception as e:
            logger.error("Failed to stop service", service=name, error=str(e))
            return ServiceOutcome.STOP_FAILED

        logger.info("Service has been stopped successfully", service=name)
        return ServiceOutcome.STOPPED

    def set_service_arguments(self, name: str, arguments: Mapping[str, str]) -> ServiceOutcome:
        try:
            service = self.manager.get(name)
        except Exception as e:
            logger.error("Failed to look up service", service=name, error=str(e))
            return ServiceOutcome.APPLY_FAILED

        if service is None:
            logger.warning("Service is not found", service=name)
            return ServiceOutcome.ABSENT

        try:
            self.manager.configure(name, dict(arguments))
        except Exception as e:
            logger.error("Failed to set service arguments", service=name, arguments=sorted(arguments), error=str(e))
            return ServiceOutcome.APPLY_FAILED

        logger.info("Service arguments applied", service=name, arguments=sorted(arguments))
        return ServiceOutcome.APPLIED
