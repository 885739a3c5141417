"""
Typed failures raised by the provisioning kernel.

Every fatal failure carries the process exit status the CLI boundary should
report. The kernel itself never exits the process.
"""
from typing import Optional


class ProvisionError(Exception):
    """Base class for all fatal provisioning failures."""

    exit_code: int = 1

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class DownloadError(ProvisionError):
    """Raised when the retry budget for a download is exhausted."""

    def __init__(self, url: str, attempts: int):
        super().__init__(
            f"File can't be downloaded after {attempts} attempts. "
            f"Please try later or check that file exists by url: {url}"
        )
        self.url = url
        self.attempts = attempts


class LaunchError(ProvisionError):
    """Raised when an installer process could not be started at all."""


class InstallerExitError(ProvisionError):
    """
    Raised when an installer finished with a code outside its success set.

    `return_code` is what the installer returned; `exit_code` is what the
    provisioning process should exit with, which differs per installer kind.
    """

    def __init__(self, name: str, return_code: int, exit_code: Optional[int] = None):
        super().__init__(
            f"Unsuccessful exit code returned by the installation process of {name}: {return_code}",
            exit_code=return_code if exit_code is None else exit_code,
        )
        self.name = name
        self.return_code = return_code


class ServiceNotFoundError(ProvisionError):
    """Raised in strict mode when a required service does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Service [{name}] is not found")
        self.name = name


class ServiceOperationError(ProvisionError):
    """Raised by service adapters when a stop or reconfigure request fails."""


class CatalogError(ProvisionError):
    """Raised when the package catalog is missing or has no matching entry."""
