"""
Core, reusable wiring for CLI commands.
Builds kernel services with their default adapters and turns kernel
failures into process exit codes.
"""
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from buildprov.adapters.catalog_fs import FileSystemCatalog
from buildprov.adapters.http_download import RequestsDownloader
from buildprov.adapters.process import SubprocessRunner
from buildprov.adapters.windows_service import WindowsServiceManager
from buildprov.internal import paths
from buildprov.internal.logging import get_logger
from buildprov.kernel.errors import ProvisionError
from buildprov.kernel.extensions import ExtensionInstaller
from buildprov.kernel.fetcher import Fetcher
from buildprov.kernel.installer import InstallerDispatcher
from buildprov.kernel.services import ServiceController

logger = get_logger(__name__)

# ---------------------------------------------------------------------
# Service wiring
# ---------------------------------------------------------------------

def build_fetcher(work_dir: Optional[Path] = None) -> Fetcher:
    return Fetcher(RequestsDownloader(), work_dir=work_dir)


def build_dispatcher(work_dir: Optional[Path] = None) -> InstallerDispatcher:
    return InstallerDispatcher(build_fetcher(work_dir), SubprocessRunner())


def build_extension_installer(work_dir: Optional[Path] = None) -> ExtensionInstaller:
    return ExtensionInstaller(build_fetcher(work_dir), SubprocessRunner())


def build_service_controller() -> ServiceController:
    return ServiceController(WindowsServiceManager())


def build_catalog(catalog_path: Optional[Path] = None) -> FileSystemCatalog:
    return FileSystemCatalog(catalog_path or paths.get_catalog_path())

# ---------------------------------------------------------------------
# Failure boundary
# ---------------------------------------------------------------------

@contextmanager
def exit_on_failure() -> Iterator[None]:
    """
    Convert a kernel failure into a process exit with its exit code.
    This is the only place provisioning failures end the process.
    """
    try:
        yield
    except ProvisionError as e:
        logger.error("Provisioning step failed", error=str(e), exit_code=e.exit_code)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(e.exit_code)
