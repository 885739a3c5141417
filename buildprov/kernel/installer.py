"""
Runs downloaded installers and classifies their exit codes.
"""
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from buildprov.internal.constants import (
    EXIT_REBOOT_REQUIRED,
    EXIT_SUCCESS,
    MSI_ENGINE,
    MSI_EXTENSION,
)
from buildprov.internal.logging import get_logger
from buildprov.kernel.artifacts import Artifact, InstallOutcome
from buildprov.kernel.contracts import ProcessRunner
from buildprov.kernel.errors import InstallerExitError, LaunchError
from buildprov.kernel.fetcher import Fetcher

logger = get_logger(__name__)


def msi_arguments(file_path: Path) -> list[str]:
    """MSI packages always install silently and never restart on their own."""
    return ["/i", str(file_path), "/QN", "/norestart"]


class InstallerDispatcher:
    """
    Downloads a binary installer and runs it, either directly or through the
    Windows Installer engine for .msi packages.
    """

    SUCCESS_CODES = {
        EXIT_SUCCESS: InstallOutcome.SUCCESS,
        EXIT_REBOOT_REQUIRED: InstallOutcome.SUCCESS_REBOOT_REQUIRED,
    }

    def __init__(self, fetcher: Fetcher, runner: ProcessRunner):
        self.fetcher = fetcher
        self.runner = runner

    def install_binary(
        self,
        url: str,
        name: str,
        argument_list: Optional[Sequence[str]] = None,
    ) -> InstallOutcome:
        artifact = Artifact(url=url, name=name, path=self.fetcher.fetch(url, name))

        if artifact.extension == MSI_EXTENSION:
            if argument_list:
                logger.debug("Ignoring caller arguments for msi package", name=name, ignored=list(argument_list))
            executable = MSI_ENGINE
            arguments = msi_arguments(artifact.path)
        else:
            executable = str(artifact.path)
            arguments = list(argument_list or [])

        logger.info("Starting install", name=name, executable=executable, arguments=arguments)
        try:
            exit_code = self.runner.run(executable, arguments)
        except (OSError, subprocess.SubprocessError) as e:
            logger.error("Failed to install", name=name, kind=artifact.extension, error=str(e))
            raise LaunchError(f"Failed to install the {artifact.extension} {name}: {e}") from e

        outcome = self.SUCCESS_CODES.get(exit_code)
        if outcome is None:
            logger.error("Non zero exit code returned by the installation process", name=name, exit_code=exit_code)
            raise InstallerExitError(name, exit_code)

        logger.info("Installation successful", name=name, exit_code=exit_code, outcome=outcome.value)
        return outcome
