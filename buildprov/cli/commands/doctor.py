import os
from typing import Optional
import shutil
import sys
import tempfile

import typer

from buildprov.adapters.catalog_fs import FileSystemCatalog
from buildprov.internal import paths
from buildprov.internal.constants import MSI_ENGINE, SERVICE_CONTROL
from buildprov.internal.logging import get_logger
from buildprov.kernel.errors import CatalogError
from buildprov.runtime import system

logger = get_logger(__name__)

def doctor(
    vs_version: Optional[str] = typer.Option(None, "--vs-version", help="Also check VSIXInstaller for this Visual Studio release."),
):
    """
    Check that this host can run provisioning steps.
    """
    typer.echo("Running buildprov doctor checks...\n")
    all_passed = True

    def check(description: str, func):
        nonlocal all_passed
        typer.echo(f"- {description}...", nl=False)
        result, message = func()
        if result:
            typer.echo(f" {typer.style('PASSED', fg=typer.colors.GREEN)}")
        else:
            typer.echo(f" {typer.style('FAILED', fg=typer.colors.RED)}")
            typer.echo(f"  Reason: {message}")
            all_passed = False

    # --- System Checks ---
    typer.echo(typer.style("System Information:", fg=typer.colors.BLUE, bold=True))
    typer.echo(f"  Python Version: {sys.version.split()[0]}")
    typer.echo(f"  OS: {system.get_os_info()} ({system.get_cpu_arch()})")
    typer.echo(f"  Release: {system.get_windows_release()}")
    typer.echo(f"  Total RAM: {system.get_total_ram_gb()} GB")
    typer.echo("")

    # --- Local Filesystem Checks ---
    typer.echo(typer.style("Local Filesystem Checks:", fg=typer.colors.BLUE, bold=True))

    def check_download_dir():
        download_dir = paths.get_download_dir()
        try:
            download_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.TemporaryFile(dir=download_dir):
                pass
        except OSError as e:
            return False, f"Directory '{download_dir}' is not writable: {e}"
        return True, ""
    check("Download directory is writable", check_download_dir)

    def check_catalog():
        try:
            packages = FileSystemCatalog(paths.get_catalog_path()).list_packages()
        except CatalogError as e:
            return False, str(e)
        return True, f"{len(packages)} package(s)"
    check("Package catalog", check_catalog)

    # --- Installer Tooling ---
    typer.echo(typer.style("\nInstaller Tooling:", fg=typer.colors.BLUE, bold=True))

    def check_tool(tool):
        def _check():
            return shutil.which(tool) is not None, f"'{tool}' was not found on PATH."
        return _check
    check(f"{MSI_ENGINE} available", check_tool(MSI_ENGINE))
    check(f"{SERVICE_CONTROL} available", check_tool(SERVICE_CONTROL))

    if vs_version:
        def check_vsix_installer():
            installer = paths.get_vsix_installer_path(vs_version)
            return os.path.isfile(installer), f"VSIXInstaller not found at '{installer}'."
        check(f"VSIXInstaller for Visual Studio {vs_version}", check_vsix_installer)

    typer.echo("\n--- Doctor Check Summary ---")
    if all_passed:
        typer.echo(typer.style("All checks PASSED!", fg=typer.colors.GREEN, bold=True))
    else:
        logger.warning("Doctor checks failed")
        typer.echo(typer.style("Some checks FAILED. Please review the output above.", fg=typer.colors.RED, bold=True))
        raise typer.Exit(1)
