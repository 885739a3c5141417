"""
Installs IDE extension packages through Visual Studio's VSIXInstaller.
"""
import subprocess
from pathlib import Path
from typing import Callable, Optional

from buildprov.internal import paths
from buildprov.internal.constants import EXIT_ALREADY_INSTALLED, EXIT_SUCCESS
from buildprov.internal.logging import get_logger
from buildprov.kernel.artifacts import ArtifactKind, InstallOutcome
from buildprov.kernel.contracts import ProcessRunner
from buildprov.kernel.errors import InstallerExitError, LaunchError
from buildprov.kernel.fetcher import Fetcher

logger = get_logger(__name__)


class ExtensionInstaller:
    """
    Runs an extension package silently and removes the downloaded file
    afterwards.

    Unlike InstallerDispatcher, any unsuccessful exit code is reported as a
    generic failure (exit status 1) rather than propagated as-is.
    """

    SUCCESS_CODES = {
        EXIT_SUCCESS: InstallOutcome.SUCCESS,
        EXIT_ALREADY_INSTALLED: InstallOutcome.ALREADY_INSTALLED,
    }

    def __init__(
        self,
        fetcher: Fetcher,
        runner: ProcessRunner,
        installer_path: Callable[[str], Path] = paths.get_vsix_installer_path,
    ):
        self.fetcher = fetcher
        self.runner = runner
        self._installer_path = installer_path

    def _command(self, kind: ArtifactKind, file_path: Path, vs_version: str) -> tuple[str, list[str]]:
        if kind is ArtifactKind.VSIX:
            return str(self._installer_path(vs_version)), ["/quiet", f'"{file_path}"']
        return str(file_path), ["/Q"]

    def install_vsix_extension(
        self,
        name: str,
        vs_version: str,
        url: Optional[str] = None,
        file_path: Optional[Path] = None,
        install_only: bool = False,
        kind: Optional[ArtifactKind] = None,
    ) -> InstallOutcome:
        if install_only:
            if file_path is None:
                raise ValueError("file_path is required when install_only is set")
            file_path = Path(file_path)
        else:
            if not url:
                raise ValueError("url is required unless install_only is set")
            file_path = self.fetcher.fetch(url, name)

        kind = ArtifactKind(kind) if kind is not None else ArtifactKind.from_name(name)
        executable, arguments = self._command(kind, file_path, vs_version)

        logger.info("Starting install", name=name, executable=executable, vs_version=vs_version)
        try:
            exit_code = self.runner.run(executable, arguments)
        except (OSError, subprocess.SubprocessError) as e:
            logger.error("Failed to install the extension", name=name, error=str(e))
            raise LaunchError(f"Failed to install the extension {name}: {e}") from e

        outcome = self.SUCCESS_CODES.get(exit_code)
        if outcome is None:
            logger.error("Unsuccessful exit code returned by the installation process", name=name, exit_code=exit_code)
            raise InstallerExitError(name, exit_code, exit_code=1)

        logger.info("Extension installed successfully", name=name, outcome=outcome.value)

        if not install_only:
            # Deletion errors propagate to the caller
            file_path.unlink()
            logger.debug("Removed downloaded artifact", path=str(file_path))

        return outcome
